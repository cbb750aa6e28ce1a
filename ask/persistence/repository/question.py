"""PostgreSQL implementation of Question repository."""

from typing import List, Optional

import logfire
from sqlalchemy import asc, desc, func, or_, select, update
from sqlalchemy.sql import Select

from ask.domain.model import Question
from ask.domain.repository.question import (
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
)
from ask.domain.value import QuestionId
from ask.persistence.database import PostgresDatabase
from ask.persistence.mappers import (
    QUESTION_COUNTER_FIELDS,
    question_to_dict,
    row_to_question,
)
from ask.persistence.repository.versioned import (
    delete_versioned,
    escape_like,
    insert_row,
    update_versioned,
)
from ask.persistence.tables import questions_table

RESOURCE = "Question"


def _apply_filter(stmt: Select, filter: QuestionFilter, unanswered_only: bool) -> Select:
    if filter.status is not None:
        stmt = stmt.where(questions_table.c.status == filter.status.value)
    if filter.tag is not None:
        stmt = stmt.where(questions_table.c.tags.contains([filter.tag.root]))
    if filter.author_id is not None:
        stmt = stmt.where(questions_table.c.author_id == filter.author_id)
    if filter.search:
        pattern = f"%{escape_like(filter.search)}%"
        stmt = stmt.where(
            or_(
                questions_table.c.title.ilike(pattern, escape="\\"),
                questions_table.c.description.ilike(pattern, escape="\\"),
            )
        )
    if unanswered_only:
        stmt = stmt.where(func.cardinality(questions_table.c.answer_ids) == 0)
    return stmt


class PostgresQuestionRepository(QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def __init__(self, database: PostgresDatabase) -> None:
        """Initialize repository.

        Args:
            database: Transaction manager providing sessions
        """
        self.database = database

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        with logfire.span("question_repository.find_by_id", question_id=str(question_id)):
            async with self.database.session() as session:
                stmt = select(questions_table).where(questions_table.c.id == question_id)
                result = await session.execute(stmt)
                row = result.fetchone()

            if not row:
                logfire.debug("Question not found", question_id=str(question_id))
                return None
            return row_to_question(row._asdict())

    async def find_all(
        self,
        filter: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination."""
        with logfire.span(
            "question_repository.find_all",
            sort=sort.value,
            status=filter.status.value if filter.status else None,
            tag=filter.tag.root if filter.tag else None,
            limit=limit,
            offset=offset,
        ):
            stmt = _apply_filter(
                select(questions_table),
                filter,
                unanswered_only=sort == QuestionSortOrder.UNANSWERED,
            )

            # Sort order (newest breaks ties)
            if sort == QuestionSortOrder.OLDEST:
                stmt = stmt.order_by(asc(questions_table.c.created_at))
            elif sort == QuestionSortOrder.VOTES:
                stmt = stmt.order_by(
                    desc(questions_table.c.score), desc(questions_table.c.created_at)
                )
            elif sort == QuestionSortOrder.VIEWS:
                stmt = stmt.order_by(
                    desc(questions_table.c.views), desc(questions_table.c.created_at)
                )
            else:
                stmt = stmt.order_by(desc(questions_table.c.created_at))

            stmt = stmt.limit(limit).offset(offset)

            async with self.database.session() as session:
                result = await session.execute(stmt)
                rows = result.fetchall()

            questions = [row_to_question(row._asdict()) for row in rows]
            logfire.info("Found questions", count=len(questions))
            return questions

    async def count(self, filter: QuestionFilter, unanswered_only: bool = False) -> int:
        """Count questions matching the filter."""
        stmt = _apply_filter(
            select(func.count()).select_from(questions_table), filter, unanswered_only
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    async def add(self, question: Question) -> Question:
        """Insert a new question."""
        with logfire.span("question_repository.add", question_id=str(question.id)):
            async with self.database.session() as session:
                await insert_row(session, questions_table, question_to_dict(question), RESOURCE)
            return question

    async def update(self, question: Question) -> Question:
        """Replace a question if its version matches."""
        with logfire.span(
            "question_repository.update",
            question_id=str(question.id),
            version=question.version,
        ):
            async with self.database.session() as session:
                await update_versioned(
                    session,
                    questions_table,
                    question.id,
                    question.version,
                    question_to_dict(question),
                    RESOURCE,
                    exclude=QUESTION_COUNTER_FIELDS,
                )
            return question.evolve(version=question.version + 1)

    async def delete(self, question: Question) -> None:
        """Delete a question if its version matches."""
        with logfire.span("question_repository.delete", question_id=str(question.id)):
            async with self.database.session() as session:
                await delete_versioned(
                    session, questions_table, question.id, question.version, RESOURCE
                )

    async def increment_views(self, question_id: QuestionId) -> None:
        """Atomically increment the view counter."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(views=questions_table.c.views + 1)
        )
        async with self.database.session() as session:
            await session.execute(stmt)
