"""Import all models so Base.metadata sees the full schema."""
from jobboard_chat.infrastructure.db.models.conversation import ConversationModel
from jobboard_chat.infrastructure.db.models.message import MessageModel
from jobboard_chat.infrastructure.db.models.notification import NotificationModel
from jobboard_chat.infrastructure.db.models.user import (
    ApplicationModel,
    CompanyModel,
    JobModel,
    UserModel,
)

__all__ = [
    "ApplicationModel",
    "CompanyModel",
    "ConversationModel",
    "JobModel",
    "MessageModel",
    "NotificationModel",
    "UserModel",
]
