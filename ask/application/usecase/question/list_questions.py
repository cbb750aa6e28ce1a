"""List questions use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from ask.application.usecase.base import BaseUseCase
from ask.domain.model import Question
from ask.domain.repository import QuestionFilter, QuestionSortOrder
from ask.domain.service import QuestionService
from ask.domain.value import QuestionStatus, TagName, UserId


class QuestionListItem(BaseModel):
    """Question summary in listings."""

    question_id: str
    title: str
    description: str
    tags: list[str]
    author_id: str
    status: QuestionStatus
    score: int
    views: int
    answer_count: int
    accepted_answer_id: str | None
    is_moderated: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_question(cls, question: Question) -> "QuestionListItem":
        return cls(
            question_id=str(question.id),
            title=question.title,
            description=question.description,
            tags=question.tag_names,
            author_id=str(question.author_id),
            status=question.status,
            score=question.score,
            views=question.views,
            answer_count=question.answer_count,
            accepted_answer_id=(
                str(question.accepted_answer_id) if question.accepted_answer_id else None
            ),
            is_moderated=question.is_moderated,
            created_at=question.created_at,
            updated_at=question.updated_at,
        )


class ListQuestionsRequest(BaseModel):
    """List questions request."""

    sort: QuestionSortOrder = QuestionSortOrder.NEWEST
    status: Optional[QuestionStatus] = QuestionStatus.ACTIVE  # None lists every status
    tag: str | None = None
    search: str | None = None
    author_id: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class ListQuestionsResponse(BaseModel):
    """List questions response."""

    questions: list[QuestionListItem]
    total: int
    page: int
    total_pages: int


class ListQuestionsUseCase(BaseUseCase):
    """Use case for listing questions with filtering, sorting and pagination."""

    def __init__(self, question_service: QuestionService) -> None:
        """Initialize list questions use case.

        Args:
            question_service: Question domain service
        """
        self.question_service = question_service

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Args:
            request: Filters, sort order and page

        Returns:
            The requested page of questions
        """
        with logfire.span(
            "list_questions.execute",
            sort=request.sort.value,
            tag=request.tag,
            page=request.page,
        ):
            filter = QuestionFilter(
                status=request.status,
                tag=TagName(request.tag) if request.tag else None,
                search=request.search or None,
                author_id=UserId(UUID(request.author_id)) if request.author_id else None,
            )
            result = await self.question_service.list_questions(
                filter=filter,
                sort=request.sort,
                page=request.page,
                limit=request.limit,
            )
            return ListQuestionsResponse(
                questions=[QuestionListItem.from_question(q) for q in result.questions],
                total=result.total,
                page=result.page,
                total_pages=result.total_pages,
            )
