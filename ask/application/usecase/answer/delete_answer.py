"""Delete answer use case."""

from uuid import UUID

from pydantic import BaseModel

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.domain.service import CascadeService
from ask.domain.value import AnswerId


class DeleteAnswerRequest(ActorRequest):
    """Delete answer request."""

    answer_id: str


class DeleteAnswerResponse(BaseModel):
    """Delete answer response."""

    answer_id: str
    deleted: bool = True


class DeleteAnswerUseCase(BaseUseCase):
    """Use case for deleting an answer with everything hanging off it."""

    def __init__(self, cascade_service: CascadeService) -> None:
        """Initialize delete answer use case.

        Args:
            cascade_service: Cascade domain service
        """
        self.cascade_service = cascade_service

    async def execute(self, request: DeleteAnswerRequest) -> DeleteAnswerResponse:
        """Execute delete answer flow.

        Raises:
            NotFoundError: If the answer does not exist
            NotAuthorizedError: If the caller is neither the author nor an admin
        """
        await self.cascade_service.delete_answer(AnswerId(UUID(request.answer_id)), request.actor())
        return DeleteAnswerResponse(answer_id=request.answer_id)
