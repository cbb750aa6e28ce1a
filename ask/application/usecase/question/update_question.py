"""Update question use case."""

from uuid import UUID

from pydantic import Field

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.application.usecase.question.list_questions import QuestionListItem
from ask.domain.service import QuestionService
from ask.domain.value import QuestionId


class UpdateQuestionRequest(ActorRequest):
    """Update question request. Omitted fields stay unchanged."""

    question_id: str
    title: str | None = Field(default=None, min_length=10, max_length=300)
    description: str | None = Field(default=None, min_length=20)
    tags: list[str] | None = Field(default=None, min_length=1, max_length=5)


class UpdateQuestionUseCase(BaseUseCase):
    """Use case for editing a question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize update question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: UpdateQuestionRequest) -> QuestionListItem:
        """Execute update question flow.

        Raises:
            NotFoundError: If the question does not exist
            NotAuthorizedError: If the caller is neither the author nor an admin
        """
        question = await self.question_service.update_question(
            QuestionId(UUID(request.question_id)),
            request.actor(),
            title=request.title,
            description=request.description,
            tags=request.tags,
        )
        return QuestionListItem.from_question(question)
