"""Domain value objects for the forum."""

from ask.domain.value.identifiers import (
    AnswerId,
    CommentId,
    NotificationId,
    QuestionId,
    TagId,
    UserId,
)
from ask.domain.value.types import (
    Actor,
    NotificationType,
    QuestionStatus,
    TagName,
    UserRole,
    VotableType,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "AnswerId",
    "CommentId",
    "NotificationId",
    "TagId",
    # Types
    "Actor",
    "NotificationType",
    "QuestionStatus",
    "TagName",
    "UserRole",
    "VotableType",
    "VoteType",
]
