"""Mark notification read use case."""

from uuid import UUID

from pydantic import BaseModel

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.domain.service import NotificationService
from ask.domain.value import NotificationId


class MarkNotificationReadRequest(ActorRequest):
    """Mark one notification, or all of them when ``notification_id`` is unset."""

    notification_id: str | None = None
    read: bool = True  # False marks a single notification unread again


class MarkNotificationReadResponse(BaseModel):
    """Mark notification read response."""

    updated: int
    unread_count: int


class MarkNotificationReadUseCase(BaseUseCase):
    """Use case for toggling read state of the caller's notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark notification read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: MarkNotificationReadRequest) -> MarkNotificationReadResponse:
        """Execute mark read flow.

        Raises:
            NotFoundError: If the notification does not exist
            NotAuthorizedError: If the caller is not the recipient
        """
        actor = request.actor()
        if request.notification_id is None:
            updated = await self.notification_service.mark_all_as_read(actor)
        else:
            notification_id = NotificationId(UUID(request.notification_id))
            if request.read:
                await self.notification_service.mark_as_read(notification_id, actor)
            else:
                await self.notification_service.mark_as_unread(notification_id, actor)
            updated = 1

        unread = await self.notification_service.get_unread_count(actor.user_id)
        return MarkNotificationReadResponse(updated=updated, unread_count=unread)
