"""In-memory question repository for testing."""

from typing import Optional

from ask.domain.model.question import Question
from ask.domain.repository.question import (
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
)
from ask.domain.value import QuestionId
from ask.persistence.repository.inmemory.database import InMemoryDatabase

TABLE = "questions"


def _matches(question: Question, filter: QuestionFilter) -> bool:
    if filter.status is not None and question.status != filter.status:
        return False
    if filter.tag is not None and filter.tag not in question.tags:
        return False
    if filter.author_id is not None and question.author_id != filter.author_id:
        return False
    if filter.search:
        needle = filter.search.lower()
        if needle not in question.title.lower() and needle not in question.description.lower():
            return False
    return True


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        return self.database.get(TABLE, question_id)

    def _select(self, filter: QuestionFilter, unanswered_only: bool) -> list[Question]:
        questions = [q for q in self.database.scan(TABLE) if _matches(q, filter)]
        if unanswered_only:
            questions = [q for q in questions if not q.answer_ids]
        return questions

    async def find_all(
        self,
        filter: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Question]:
        """Find questions with filtering and pagination."""
        questions = self._select(filter, unanswered_only=sort == QuestionSortOrder.UNANSWERED)

        # Sort (stable sorts: secondary key first)
        questions.sort(key=lambda q: q.created_at, reverse=sort != QuestionSortOrder.OLDEST)
        if sort == QuestionSortOrder.VOTES:
            questions.sort(key=lambda q: q.score, reverse=True)
        elif sort == QuestionSortOrder.VIEWS:
            questions.sort(key=lambda q: q.views, reverse=True)

        # Paginate
        return questions[offset : offset + limit]

    async def count(self, filter: QuestionFilter, unanswered_only: bool = False) -> int:
        """Count questions matching the filter."""
        return len(self._select(filter, unanswered_only))

    async def add(self, question: Question) -> Question:
        """Insert a new question."""
        return self.database.insert(TABLE, question.id, question)

    async def update(self, question: Question) -> Question:
        """Replace a question if its version matches."""
        return self.database.replace(TABLE, question.id, question)

    async def delete(self, question: Question) -> None:
        """Delete a question if its version matches."""
        self.database.remove(TABLE, question.id, question.version)

    async def increment_views(self, question_id: QuestionId) -> None:
        """Atomically increment the view counter."""

        def increment(tables: dict) -> None:
            rows = tables.setdefault(TABLE, {})
            question = rows.get(question_id)
            if question is not None:
                rows[question_id] = question.model_copy(update={"views": question.views + 1})

        self.database.atomic(increment)
