"""Notification domain service."""

from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

import logfire

from ask.config import Settings
from ask.domain.error import NotAuthorizedError, NotFoundError
from ask.domain.model import Notification
from ask.domain.repository import NotificationRepository, TransactionManager
from ask.domain.value import (
    Actor,
    AnswerId,
    CommentId,
    NotificationId,
    NotificationType,
    QuestionId,
    UserId,
)

from .base import TransactionalService


@dataclass
class NotificationPage:
    """One page of a user's notifications."""

    notifications: list[Notification]
    total: int
    unread_count: int
    page: int
    total_pages: int


def question_link(question_id: QuestionId) -> str:
    """Presentation link to a question page."""
    return f"/questions/{question_id}"


class NotificationService(TransactionalService):
    """Domain service for notifications.

    ``notify`` only writes; it is meant to be called from inside another
    service's atomic operation so the notification commits (or not) together
    with the change it reports.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            transaction_manager: Transaction boundary
            settings: Application settings
        """
        super().__init__(transaction_manager, settings)
        self.notification_repository = notification_repository

    async def notify(
        self,
        recipient_id: UserId,
        type: NotificationType,
        title: str,
        message: str,
        sender_id: Optional[UserId] = None,
        question_id: Optional[QuestionId] = None,
        answer_id: Optional[AnswerId] = None,
        comment_id: Optional[CommentId] = None,
        link: Optional[str] = None,
    ) -> Notification:
        """Create a notification for one recipient.

        Returns:
            The stored notification
        """
        notification = Notification(
            id=NotificationId(uuid4()),
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=type,
            title=title,
            message=message[:500],
            question_id=question_id,
            answer_id=answer_id,
            comment_id=comment_id,
            link=link,
        )
        saved = await self.notification_repository.add(notification)
        logfire.info(
            "Notification created",
            notification_id=str(saved.id),
            recipient_id=str(recipient_id),
            type=type.value,
        )
        return saved

    async def list_notifications(
        self,
        recipient_id: UserId,
        page: int = 1,
        limit: int = 20,
        unread_only: bool = False,
    ) -> NotificationPage:
        """Get a page of a user's notifications, newest first.

        Args:
            recipient_id: The recipient
            page: 1-based page number
            limit: Page size
            unread_only: Only include unread notifications

        Returns:
            The page, with overall and unread totals
        """
        with logfire.span(
            "notification_service.list_notifications",
            recipient_id=str(recipient_id),
            page=page,
            unread_only=unread_only,
        ):
            notifications = await self.notification_repository.find_by_recipient(
                recipient_id,
                unread_only=unread_only,
                limit=limit,
                offset=(page - 1) * limit,
            )
            total = await self.notification_repository.count_by_recipient(
                recipient_id, unread_only=unread_only
            )
            unread = await self.notification_repository.count_by_recipient(
                recipient_id, unread_only=True
            )
            return NotificationPage(
                notifications=notifications,
                total=total,
                unread_count=unread,
                page=page,
                total_pages=-(-total // limit),
            )

    async def get_unread_count(self, recipient_id: UserId) -> int:
        """Count a user's unread notifications."""
        return await self.notification_repository.count_by_recipient(
            recipient_id, unread_only=True
        )

    async def _get_own(self, notification_id: NotificationId, actor: Actor, action: str) -> Notification:
        self._require_active(actor, action, "notification", notification_id)
        notification = await self.notification_repository.find_by_id(notification_id)
        if not notification:
            raise NotFoundError("Notification", str(notification_id))
        if notification.recipient_id != actor.user_id:
            logfire.warn(
                "Notification access by non-recipient",
                notification_id=str(notification_id),
                user_id=str(actor.user_id),
            )
            raise NotAuthorizedError(
                action, "notification", str(notification_id), str(actor.user_id)
            )
        return notification

    async def mark_as_read(self, notification_id: NotificationId, actor: Actor) -> Notification:
        """Mark one of the actor's notifications as read.

        Raises:
            NotFoundError: If the notification does not exist
            NotAuthorizedError: If the actor is not the recipient
        """

        async def attempt() -> Notification:
            notification = await self._get_own(notification_id, actor, "mark as read")
            if notification.is_read:
                return notification
            return await self.notification_repository.save(notification.mark_read())

        return await self._run_atomic(
            "notification_service.mark_as_read",
            attempt,
            notification_id=str(notification_id),
            user_id=str(actor.user_id),
        )

    async def mark_as_unread(self, notification_id: NotificationId, actor: Actor) -> Notification:
        """Mark one of the actor's notifications as unread."""

        async def attempt() -> Notification:
            notification = await self._get_own(notification_id, actor, "mark as unread")
            if not notification.is_read:
                return notification
            return await self.notification_repository.save(notification.mark_unread())

        return await self._run_atomic(
            "notification_service.mark_as_unread",
            attempt,
            notification_id=str(notification_id),
            user_id=str(actor.user_id),
        )

    async def mark_all_as_read(self, actor: Actor) -> int:
        """Mark all of the actor's notifications as read.

        Returns:
            Number of notifications that changed
        """

        async def attempt() -> int:
            self._require_active(actor, "mark all as read", "notification", actor.user_id)
            return await self.notification_repository.mark_all_read(actor.user_id)

        return await self._run_atomic(
            "notification_service.mark_all_as_read",
            attempt,
            user_id=str(actor.user_id),
        )

    async def delete_notification(self, notification_id: NotificationId, actor: Actor) -> None:
        """Delete one of the actor's notifications."""

        async def attempt() -> None:
            await self._get_own(notification_id, actor, "delete")
            await self.notification_repository.delete(notification_id)

        await self._run_atomic(
            "notification_service.delete_notification",
            attempt,
            notification_id=str(notification_id),
            user_id=str(actor.user_id),
        )
