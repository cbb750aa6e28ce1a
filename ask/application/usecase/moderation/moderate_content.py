"""Moderate content use case."""

from datetime import datetime
from enum import Enum
from uuid import UUID

import logfire
from pydantic import BaseModel, Field, model_validator

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.domain.service import ModerationService
from ask.domain.value import AnswerId, QuestionId, QuestionStatus, TagName


class ModerationTarget(str, Enum):
    """Kind of content being moderated."""

    QUESTION = "question"
    ANSWER = "answer"
    TAG = "tag"


class ModerateContentRequest(ActorRequest):
    """Moderate content request.

    ``target_id`` is a UUID for questions and answers and the tag name for
    tags. ``status`` applies to questions only.
    """

    target: ModerationTarget
    target_id: str
    reason: str = Field(min_length=10, max_length=200)
    status: QuestionStatus | None = None

    @model_validator(mode="after")
    def validate_status(self) -> "ModerateContentRequest":
        """Questions need a status to move to."""
        if self.target == ModerationTarget.QUESTION and self.status is None:
            raise ValueError("Question moderation requires a status")
        return self


class ModerateContentResponse(BaseModel):
    """Moderate content response."""

    target: ModerationTarget
    target_id: str
    moderated_by: str
    moderated_at: datetime
    status: QuestionStatus | None = None


class ModerateContentUseCase(BaseUseCase):
    """Use case for admin moderation of questions, answers and tags."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize moderate content use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: ModerateContentRequest) -> ModerateContentResponse:
        """Execute moderation flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If the content does not exist
        """
        with logfire.span(
            "moderate_content.execute",
            target=request.target.value,
            target_id=request.target_id,
        ):
            actor = request.actor()
            status = None
            if request.target == ModerationTarget.QUESTION:
                entity = await self.moderation_service.moderate_question(
                    QuestionId(UUID(request.target_id)), request.status, request.reason, actor
                )
                status = entity.status
            elif request.target == ModerationTarget.ANSWER:
                entity = await self.moderation_service.moderate_answer(
                    AnswerId(UUID(request.target_id)), request.reason, actor
                )
            else:
                entity = await self.moderation_service.moderate_tag(
                    TagName(request.target_id), request.reason, actor
                )

            return ModerateContentResponse(
                target=request.target,
                target_id=request.target_id,
                moderated_by=str(entity.moderated_by or actor.user_id),
                moderated_at=entity.moderated_at or datetime.now(),
                status=status,
            )
