"""In-memory notification repository for testing."""

from typing import Iterable, Optional

from ask.domain.model.notification import Notification
from ask.domain.repository.notification import NotificationRepository
from ask.domain.value import AnswerId, CommentId, NotificationId, QuestionId, UserId
from ask.persistence.repository.inmemory.database import InMemoryDatabase

TABLE = "notifications"


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _for_recipient(self, recipient_id: UserId, unread_only: bool) -> list[Notification]:
        notifications = [
            n for n in self.database.scan(TABLE) if n.recipient_id == recipient_id
        ]
        if unread_only:
            notifications = [n for n in notifications if not n.is_read]
        return notifications

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        return self.database.get(TABLE, notification_id)

    async def find_by_recipient(
        self,
        recipient_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Notification]:
        """Find a user's notifications, newest first."""
        notifications = self._for_recipient(recipient_id, unread_only)
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications[offset : offset + limit]

    async def count_by_recipient(self, recipient_id: UserId, unread_only: bool = False) -> int:
        """Count a user's notifications."""
        return len(self._for_recipient(recipient_id, unread_only))

    async def add(self, notification: Notification) -> Notification:
        """Insert a new notification."""
        return self.database.insert(TABLE, notification.id, notification)

    async def save(self, notification: Notification) -> Notification:
        """Overwrite an existing notification."""
        return self.database.put(TABLE, notification.id, notification)

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every unread notification of a user as read."""
        unread = self._for_recipient(recipient_id, unread_only=True)
        for notification in unread:
            self.database.put(TABLE, notification.id, notification.mark_read())
        return len(unread)

    async def delete(self, notification_id: NotificationId) -> None:
        """Delete a single notification."""
        self.database.remove(TABLE, notification_id)

    async def delete_referencing(
        self,
        question_ids: Iterable[QuestionId] = (),
        answer_ids: Iterable[AnswerId] = (),
        comment_ids: Iterable[CommentId] = (),
    ) -> int:
        """Delete every notification referencing any of the given ids."""
        questions, answers, comments = set(question_ids), set(answer_ids), set(comment_ids)
        doomed = [
            n
            for n in self.database.scan(TABLE)
            if n.question_id in questions
            or n.answer_id in answers
            or n.comment_id in comments
        ]
        for notification in doomed:
            self.database.remove(TABLE, notification.id)
        return len(doomed)
