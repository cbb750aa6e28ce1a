"""Send alert use case."""

from pydantic import BaseModel, Field

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.domain.service import ModerationService


class SendAlertRequest(ActorRequest):
    """Broadcast alert request."""

    title: str = Field(min_length=5, max_length=100)
    message: str = Field(min_length=10, max_length=500)


class SendAlertResponse(BaseModel):
    """Broadcast alert response."""

    recipients: int


class SendAlertUseCase(BaseUseCase):
    """Use case for admins alerting every active user."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize send alert use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: SendAlertRequest) -> SendAlertResponse:
        """Execute send alert flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
        """
        sent = await self.moderation_service.send_alert(
            request.title, request.message, request.actor()
        )
        return SendAlertResponse(recipients=sent)
