from __future__ import annotations

import uuid

from jobboard_chat.application.exceptions import ValidationError
from jobboard_chat.application.policies.permissions import assert_participant
from jobboard_chat.application.uow import UnitOfWork
from jobboard_chat.infrastructure.auth.join_tokens import JoinTokenSigner


async def issue_join_token(
    conversation_id: uuid.UUID,
    participant_id: uuid.UUID,
    signer: JoinTokenSigner | None,
    uow: UnitOfWork,
) -> str:
    """Sign a relay join credential for a participant of the conversation."""
    if signer is None:
        raise ValidationError("Relay join tokens are not enabled")
    conversation = await uow.conversations.get_by_id(conversation_id)
    user = await uow.users.get_by_id(participant_id)
    assert_participant(user, conversation)
    return signer.issue(str(conversation_id), str(participant_id))
