"""Create question use case."""

from pydantic import Field

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.application.usecase.question.list_questions import QuestionListItem
from ask.domain.service import QuestionService


class CreateQuestionRequest(ActorRequest):
    """Create question request."""

    title: str = Field(min_length=10, max_length=300)
    description: str = Field(min_length=20)
    tags: list[str] = Field(min_length=1, max_length=5)


class CreateQuestionUseCase(BaseUseCase):
    """Use case for asking a question."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: CreateQuestionRequest) -> QuestionListItem:
        """Execute create question flow.

        Returns:
            The created question

        Raises:
            ValidationError: If the tags are invalid
            NotAuthorizedError: If the caller is banned
        """
        question = await self.question_service.create_question(
            actor=request.actor(),
            title=request.title.strip(),
            description=request.description,
            tags=request.tags,
        )
        return QuestionListItem.from_question(question)
