"""PostgreSQL implementation of Notification repository."""

from datetime import datetime
from typing import Iterable, List, Optional

import logfire
from sqlalchemy import delete, desc, func, or_, select, update

from ask.domain.model import Notification
from ask.domain.repository.notification import NotificationRepository
from ask.domain.value import AnswerId, CommentId, NotificationId, QuestionId, UserId
from ask.persistence.database import PostgresDatabase
from ask.persistence.mappers import notification_to_dict, row_to_notification
from ask.persistence.repository.versioned import insert_row
from ask.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, database: PostgresDatabase) -> None:
        self.database = database

    def _recipient_clause(self, recipient_id: UserId, unread_only: bool) -> list:
        clauses = [notifications_table.c.recipient_id == recipient_id]
        if unread_only:
            clauses.append(notifications_table.c.is_read.is_(False))
        return clauses

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(notifications_table.c.id == notification_id)
        async with self.database.session() as session:
            result = await session.execute(stmt)
            row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def find_by_recipient(
        self,
        recipient_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first."""
        stmt = (
            select(notifications_table)
            .where(*self._recipient_clause(recipient_id, unread_only))
            .order_by(desc(notifications_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return [row_to_notification(row._asdict()) for row in result.fetchall()]

    async def count_by_recipient(self, recipient_id: UserId, unread_only: bool = False) -> int:
        """Count a user's notifications."""
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(*self._recipient_clause(recipient_id, unread_only))
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    async def add(self, notification: Notification) -> Notification:
        """Insert a new notification."""
        async with self.database.session() as session:
            await insert_row(
                session,
                notifications_table,
                notification_to_dict(notification),
                "Notification",
            )
        return notification

    async def save(self, notification: Notification) -> Notification:
        """Overwrite an existing notification."""
        values = notification_to_dict(notification)
        values.pop("id")
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.id == notification.id)
            .values(**values)
        )
        async with self.database.session() as session:
            await session.execute(stmt)
        return notification

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every unread notification of a user as read."""
        stmt = (
            update(notifications_table)
            .where(*self._recipient_clause(recipient_id, unread_only=True))
            .values(is_read=True, read_at=datetime.now())
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    async def delete(self, notification_id: NotificationId) -> None:
        """Delete a single notification."""
        stmt = delete(notifications_table).where(notifications_table.c.id == notification_id)
        async with self.database.session() as session:
            await session.execute(stmt)

    async def delete_referencing(
        self,
        question_ids: Iterable[QuestionId] = (),
        answer_ids: Iterable[AnswerId] = (),
        comment_ids: Iterable[CommentId] = (),
    ) -> int:
        """Delete every notification referencing any of the given ids."""
        clauses = []
        for column, ids in (
            (notifications_table.c.question_id, list(question_ids)),
            (notifications_table.c.answer_id, list(answer_ids)),
            (notifications_table.c.comment_id, list(comment_ids)),
        ):
            if ids:
                clauses.append(column.in_(ids))
        if not clauses:
            return 0

        stmt = delete(notifications_table).where(or_(*clauses))
        async with self.database.session() as session:
            result = await session.execute(stmt)
        deleted = result.rowcount  # type: ignore[attr-defined]
        logfire.info("Deleted notifications", count=deleted)
        return deleted
