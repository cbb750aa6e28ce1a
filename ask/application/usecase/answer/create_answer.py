"""Create answer use case."""

from uuid import UUID

from pydantic import Field

from ask.application.usecase.answer.list_answers import AnswerItem
from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.domain.service import AnswerService
from ask.domain.value import QuestionId


class CreateAnswerRequest(ActorRequest):
    """Create answer request."""

    question_id: str
    content: str = Field(min_length=20)


class CreateAnswerUseCase(BaseUseCase):
    """Use case for answering a question."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize create answer use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: CreateAnswerRequest) -> AnswerItem:
        """Execute create answer flow.

        Returns:
            The created answer

        Raises:
            NotFoundError: If the question does not exist
            DuplicateAnswerError: If the caller already answered it
        """
        answer = await self.answer_service.create_answer(
            QuestionId(UUID(request.question_id)),
            request.actor(),
            request.content,
        )
        return AnswerItem.from_answer(answer)
