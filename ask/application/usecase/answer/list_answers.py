"""List answers use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ask.application.usecase.base import BaseUseCase
from ask.domain.model import Answer
from ask.domain.repository import AnswerSortOrder
from ask.domain.service import AnswerService
from ask.domain.value import QuestionId


class AnswerItem(BaseModel):
    """Answer in responses."""

    answer_id: str
    question_id: str
    author_id: str
    content: str
    score: int
    is_accepted: bool
    accepted_at: datetime | None
    comment_count: int
    is_moderated: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_answer(cls, answer: Answer) -> "AnswerItem":
        return cls(
            answer_id=str(answer.id),
            question_id=str(answer.question_id),
            author_id=str(answer.author_id),
            content=answer.content,
            score=answer.score,
            is_accepted=answer.is_accepted,
            accepted_at=answer.accepted_at,
            comment_count=len(answer.comment_ids),
            is_moderated=answer.is_moderated,
            created_at=answer.created_at,
            updated_at=answer.updated_at,
        )


class ListAnswersRequest(BaseModel):
    """List answers request."""

    question_id: str
    sort: AnswerSortOrder = AnswerSortOrder.VOTES


class ListAnswersResponse(BaseModel):
    """List answers response."""

    answers: list[AnswerItem]


class ListAnswersUseCase(BaseUseCase):
    """Use case for listing the answers of a question."""

    def __init__(self, answer_service: AnswerService) -> None:
        """Initialize list answers use case.

        Args:
            answer_service: Answer domain service
        """
        self.answer_service = answer_service

    async def execute(self, request: ListAnswersRequest) -> ListAnswersResponse:
        """Execute list answers flow.

        Raises:
            NotFoundError: If the question does not exist
        """
        answers = await self.answer_service.list_answers(
            QuestionId(UUID(request.question_id)), request.sort
        )
        return ListAnswersResponse(answers=[AnswerItem.from_answer(a) for a in answers])
