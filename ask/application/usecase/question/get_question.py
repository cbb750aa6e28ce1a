"""Get question use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from ask.application.usecase.answer.list_answers import AnswerItem
from ask.application.usecase.base import BaseUseCase
from ask.application.usecase.question.list_questions import QuestionListItem
from ask.domain.service import QuestionService, VoteService
from ask.domain.value import QuestionId, UserId, VotableType


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: str
    user_id: str | None = None  # Current user ID (if authenticated)


class GetQuestionResponse(BaseModel):
    """Question page: the question, its answers and the viewer's vote."""

    question: QuestionListItem
    answers: list[AnswerItem]
    has_upvoted: bool = False
    has_downvoted: bool = False


class GetQuestionUseCase(BaseUseCase):
    """Use case for viewing a question (counts one view)."""

    def __init__(self, question_service: QuestionService, vote_service: VoteService) -> None:
        """Initialize get question use case.

        Args:
            question_service: Question domain service
            vote_service: Vote domain service
        """
        self.question_service = question_service
        self.vote_service = vote_service

    async def execute(self, request: GetQuestionRequest) -> GetQuestionResponse:
        """Execute get question flow.

        Raises:
            NotFoundError: If the question does not exist
        """
        with logfire.span("get_question.execute", question_id=request.question_id):
            question_id = QuestionId(UUID(request.question_id))
            detail = await self.question_service.get_question(question_id)

            has_upvoted = has_downvoted = False
            if request.user_id:
                has_upvoted, has_downvoted = await self.vote_service.get_vote_state(
                    VotableType.QUESTION, question_id, UserId(UUID(request.user_id))
                )

            return GetQuestionResponse(
                question=QuestionListItem.from_question(detail.question),
                answers=[AnswerItem.from_answer(a) for a in detail.answers],
                has_upvoted=has_upvoted,
                has_downvoted=has_downvoted,
            )
