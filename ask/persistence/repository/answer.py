"""PostgreSQL implementation of Answer repository."""

from typing import List, Optional

import logfire
from sqlalchemy import asc, desc, func, select

from ask.domain.model import Answer
from ask.domain.repository.answer import AnswerRepository, AnswerSortOrder
from ask.domain.value import AnswerId, QuestionId, UserId
from ask.persistence.database import PostgresDatabase
from ask.persistence.mappers import answer_to_dict, row_to_answer
from ask.persistence.repository.versioned import (
    delete_versioned,
    insert_row,
    update_versioned,
)
from ask.persistence.tables import answers_table

RESOURCE = "Answer"


class PostgresAnswerRepository(AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    def __init__(self, database: PostgresDatabase) -> None:
        self.database = database

    async def _fetch(self, stmt) -> List[Answer]:
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        answers = await self._fetch(select(answers_table).where(answers_table.c.id == answer_id))
        return answers[0] if answers else None

    async def find_by_question(
        self,
        question_id: QuestionId,
        sort: AnswerSortOrder = AnswerSortOrder.VOTES,
    ) -> List[Answer]:
        """Find every answer of a question."""
        with logfire.span(
            "answer_repository.find_by_question",
            question_id=str(question_id),
            sort=sort.value,
        ):
            stmt = select(answers_table).where(answers_table.c.question_id == question_id)
            if sort == AnswerSortOrder.OLDEST:
                stmt = stmt.order_by(asc(answers_table.c.created_at))
            elif sort == AnswerSortOrder.NEWEST:
                stmt = stmt.order_by(desc(answers_table.c.created_at))
            else:
                stmt = stmt.order_by(desc(answers_table.c.score), desc(answers_table.c.created_at))
            return await self._fetch(stmt)

    async def find_by_question_and_author(
        self, question_id: QuestionId, author_id: UserId
    ) -> Optional[Answer]:
        """Find the answer ``author_id`` wrote for ``question_id``."""
        stmt = select(answers_table).where(
            answers_table.c.question_id == question_id,
            answers_table.c.author_id == author_id,
        )
        answers = await self._fetch(stmt)
        return answers[0] if answers else None

    async def find_unmoderated(self, limit: int = 20, offset: int = 0) -> List[Answer]:
        """Find answers not yet moderated, newest first."""
        stmt = (
            select(answers_table)
            .where(answers_table.c.is_moderated.is_(False))
            .order_by(desc(answers_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch(stmt)

    async def count(self, accepted_only: bool = False, unmoderated_only: bool = False) -> int:
        """Count answers."""
        stmt = select(func.count()).select_from(answers_table)
        if accepted_only:
            stmt = stmt.where(answers_table.c.is_accepted.is_(True))
        if unmoderated_only:
            stmt = stmt.where(answers_table.c.is_moderated.is_(False))
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    async def add(self, answer: Answer) -> Answer:
        """Insert a new answer.

        The (question, author) unique index turns a concurrent duplicate into
        a ConflictError.
        """
        with logfire.span("answer_repository.add", answer_id=str(answer.id)):
            async with self.database.session() as session:
                await insert_row(session, answers_table, answer_to_dict(answer), RESOURCE)
            return answer

    async def update(self, answer: Answer) -> Answer:
        """Replace an answer if its version matches."""
        with logfire.span("answer_repository.update", answer_id=str(answer.id)):
            async with self.database.session() as session:
                await update_versioned(
                    session,
                    answers_table,
                    answer.id,
                    answer.version,
                    answer_to_dict(answer),
                    RESOURCE,
                )
            return answer.evolve(version=answer.version + 1)

    async def delete(self, answer: Answer) -> None:
        """Delete an answer if its version matches."""
        with logfire.span("answer_repository.delete", answer_id=str(answer.id)):
            async with self.database.session() as session:
                await delete_versioned(session, answers_table, answer.id, answer.version, RESOURCE)
