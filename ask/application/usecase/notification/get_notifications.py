"""Get notifications use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ask.application.usecase.base import BaseUseCase
from ask.domain.model import Notification
from ask.domain.service import NotificationService
from ask.domain.value import NotificationType, UserId


class NotificationItem(BaseModel):
    """Notification in responses."""

    notification_id: str
    type: NotificationType
    title: str
    message: str
    link: str | None
    sender_id: str | None
    is_read: bool
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationItem":
        return cls(
            notification_id=str(notification.id),
            type=notification.type,
            title=notification.title,
            message=notification.message,
            link=notification.link,
            sender_id=str(notification.sender_id) if notification.sender_id else None,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )


class GetNotificationsRequest(BaseModel):
    """Get notifications request."""

    user_id: str  # User ID from authenticated user
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    unread_only: bool = False


class GetNotificationsResponse(BaseModel):
    """Get notifications response."""

    notifications: list[NotificationItem]
    total: int
    unread_count: int
    page: int
    total_pages: int


class GetNotificationsUseCase(BaseUseCase):
    """Use case for reading the caller's notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize get notifications use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: GetNotificationsRequest) -> GetNotificationsResponse:
        """Execute get notifications flow."""
        result = await self.notification_service.list_notifications(
            UserId(UUID(request.user_id)),
            page=request.page,
            limit=request.limit,
            unread_only=request.unread_only,
        )
        return GetNotificationsResponse(
            notifications=[NotificationItem.from_notification(n) for n in result.notifications],
            total=result.total,
            unread_count=result.unread_count,
            page=result.page,
            total_pages=result.total_pages,
        )
