"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ask.domain.model.notification import Notification
from ask.domain.value import AnswerId, CommentId, NotificationId, QuestionId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entities.

    Notifications are not versioned: each one has a single owner and only
    flips between read and unread.
    """

    @abstractmethod
    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        pass

    @abstractmethod
    async def find_by_recipient(
        self,
        recipient_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first.

        Args:
            recipient_id: The recipient
            unread_only: Only return unread notifications
            limit: Maximum number of notifications to return
            offset: Number of notifications to skip

        Returns:
            List of notifications
        """
        pass

    @abstractmethod
    async def count_by_recipient(self, recipient_id: UserId, unread_only: bool = False) -> int:
        """Count a user's notifications."""
        pass

    @abstractmethod
    async def add(self, notification: Notification) -> Notification:
        """Insert a new notification."""
        pass

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Overwrite an existing notification."""
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every unread notification of a user as read.

        Returns:
            Number of notifications that changed
        """
        pass

    @abstractmethod
    async def delete(self, notification_id: NotificationId) -> None:
        """Delete a single notification."""
        pass

    @abstractmethod
    async def delete_referencing(
        self,
        question_ids: Iterable[QuestionId] = (),
        answer_ids: Iterable[AnswerId] = (),
        comment_ids: Iterable[CommentId] = (),
    ) -> int:
        """Delete every notification that references any of the given ids.

        Returns:
            Number of notifications deleted
        """
        pass
