"""Notification entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ask.domain.model.common import DomainModel
from ask.domain.value import (
    AnswerId,
    CommentId,
    NotificationId,
    NotificationType,
    QuestionId,
    UserId,
)


class Notification(DomainModel):
    """Message delivered to a single recipient.

    The optional question/answer/comment references let cascading deletes
    find and remove notifications about content that no longer exists.
    """

    id: NotificationId
    recipient_id: UserId
    sender_id: Optional[UserId] = None
    type: NotificationType
    title: str = Field(min_length=1, max_length=100)
    message: str = Field(min_length=1, max_length=500)
    question_id: Optional[QuestionId] = None
    answer_id: Optional[AnswerId] = None
    comment_id: Optional[CommentId] = None
    link: Optional[str] = None
    is_read: bool = False
    read_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)

    def mark_read(self) -> "Notification":
        return self.evolve(is_read=True, read_at=datetime.now())

    def mark_unread(self) -> "Notification":
        return self.evolve(is_read=False, read_at=None)
