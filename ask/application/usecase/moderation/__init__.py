"""Moderation use cases."""

from .moderate_content import (
    ModerateContentRequest,
    ModerateContentResponse,
    ModerateContentUseCase,
    ModerationTarget,
)
from .send_alert import SendAlertRequest, SendAlertResponse, SendAlertUseCase
from .toggle_user_ban import (
    ToggleUserBanRequest,
    ToggleUserBanResponse,
    ToggleUserBanUseCase,
)

__all__ = [
    "ModerateContentRequest",
    "ModerateContentResponse",
    "ModerateContentUseCase",
    "ModerationTarget",
    "SendAlertRequest",
    "SendAlertResponse",
    "SendAlertUseCase",
    "ToggleUserBanRequest",
    "ToggleUserBanResponse",
    "ToggleUserBanUseCase",
]
