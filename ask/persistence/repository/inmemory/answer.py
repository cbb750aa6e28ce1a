"""In-memory answer repository for testing."""

from typing import Optional

from ask.domain.model.answer import Answer
from ask.domain.repository.answer import AnswerRepository, AnswerSortOrder
from ask.domain.value import AnswerId, QuestionId, UserId
from ask.persistence.repository.inmemory.database import InMemoryDatabase

TABLE = "answers"


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        return self.database.get(TABLE, answer_id)

    async def find_by_question(
        self,
        question_id: QuestionId,
        sort: AnswerSortOrder = AnswerSortOrder.VOTES,
    ) -> list[Answer]:
        """Find every answer of a question."""
        answers = [a for a in self.database.scan(TABLE) if a.question_id == question_id]
        answers.sort(key=lambda a: a.created_at, reverse=sort != AnswerSortOrder.OLDEST)
        if sort == AnswerSortOrder.VOTES:
            answers.sort(key=lambda a: a.score, reverse=True)
        return answers

    async def find_by_question_and_author(
        self, question_id: QuestionId, author_id: UserId
    ) -> Optional[Answer]:
        """Find the answer an author wrote for a question."""
        for answer in self.database.scan(TABLE):
            if answer.question_id == question_id and answer.author_id == author_id:
                return answer
        return None

    async def find_unmoderated(self, limit: int = 20, offset: int = 0) -> list[Answer]:
        """Find unmoderated answers, newest first."""
        answers = [a for a in self.database.scan(TABLE) if not a.is_moderated]
        answers.sort(key=lambda a: a.created_at, reverse=True)
        return answers[offset : offset + limit]

    async def count(self, accepted_only: bool = False, unmoderated_only: bool = False) -> int:
        """Count answers."""
        answers = self.database.scan(TABLE)
        if accepted_only:
            answers = [a for a in answers if a.is_accepted]
        if unmoderated_only:
            answers = [a for a in answers if not a.is_moderated]
        return len(answers)

    async def add(self, answer: Answer) -> Answer:
        """Insert a new answer."""
        return self.database.insert(TABLE, answer.id, answer)

    async def update(self, answer: Answer) -> Answer:
        """Replace an answer if its version matches."""
        return self.database.replace(TABLE, answer.id, answer)

    async def delete(self, answer: Answer) -> None:
        """Delete an answer if its version matches."""
        self.database.remove(TABLE, answer.id, answer.version)
