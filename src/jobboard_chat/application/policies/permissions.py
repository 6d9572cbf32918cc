from __future__ import annotations

from jobboard_chat.application.exceptions import ForbiddenError, NotFoundError
from jobboard_chat.domain.entities.conversation import Conversation
from jobboard_chat.domain.entities.user import User
from jobboard_chat.domain.value_objects.enums import UserRole


def is_participant(user: User, conversation: Conversation) -> bool:
    """The seeker of the conversation, or any user acting for its company."""
    if user.id == conversation.user_id:
        return True
    return user.role == UserRole.COMPANY and user.company_id == conversation.company_id


def assert_participant(user: User | None, conversation: Conversation | None) -> User:
    """Raise if conversation or user doesn't exist or user is not a participant."""
    if conversation is None:
        raise NotFoundError("Conversation not found")
    if user is None:
        raise NotFoundError("User not found")
    if not is_participant(user, conversation):
        raise ForbiddenError("Not a participant of this conversation")
    return user
