"""Delete question use case."""

from uuid import UUID

from pydantic import BaseModel

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.domain.service import CascadeService
from ask.domain.value import QuestionId


class DeleteQuestionRequest(ActorRequest):
    """Delete question request."""

    question_id: str


class DeleteQuestionResponse(BaseModel):
    """Delete question response."""

    question_id: str
    deleted: bool = True


class DeleteQuestionUseCase(BaseUseCase):
    """Use case for deleting a question with its answers and comments."""

    def __init__(self, cascade_service: CascadeService) -> None:
        """Initialize delete question use case.

        Args:
            cascade_service: Cascade domain service
        """
        self.cascade_service = cascade_service

    async def execute(self, request: DeleteQuestionRequest) -> DeleteQuestionResponse:
        """Execute delete question flow.

        Raises:
            NotFoundError: If the question does not exist
            NotAuthorizedError: If the caller is neither the author nor an admin
        """
        await self.cascade_service.delete_question(
            QuestionId(UUID(request.question_id)), request.actor()
        )
        return DeleteQuestionResponse(question_id=request.question_id)
