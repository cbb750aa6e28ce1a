"""Toggle user ban use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.domain.service import ModerationService
from ask.domain.value import UserId


class ToggleUserBanRequest(ActorRequest):
    """Ban or unban a user."""

    user_id: str
    reason: str | None = Field(default=None, max_length=200)


class ToggleUserBanResponse(BaseModel):
    """Ban state after the toggle."""

    user_id: str
    is_banned: bool
    banned_at: datetime | None
    ban_reason: str | None


class ToggleUserBanUseCase(BaseUseCase):
    """Use case for admins banning or unbanning users."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize toggle user ban use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: ToggleUserBanRequest) -> ToggleUserBanResponse:
        """Execute ban toggle flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If the user does not exist
            BusinessRuleViolationError: If the target is an admin
        """
        user = await self.moderation_service.toggle_user_ban(
            UserId(UUID(request.user_id)), request.reason, request.actor()
        )
        return ToggleUserBanResponse(
            user_id=str(user.id),
            is_banned=user.is_banned,
            banned_at=user.banned_at,
            ban_reason=user.ban_reason,
        )
