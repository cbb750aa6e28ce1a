"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import asc, select

from ask.domain.model import Comment
from ask.domain.repository.comment import CommentRepository
from ask.domain.value import AnswerId, CommentId
from ask.persistence.database import PostgresDatabase
from ask.persistence.mappers import comment_to_dict, row_to_comment
from ask.persistence.repository.versioned import (
    delete_versioned,
    insert_row,
    update_versioned,
)
from ask.persistence.tables import comments_table

RESOURCE = "Comment"


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, database: PostgresDatabase) -> None:
        self.database = database

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        async with self.database.session() as session:
            result = await session.execute(stmt)
            row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_answer(self, answer_id: AnswerId) -> List[Comment]:
        """Find all comments on an answer, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.answer_id == answer_id)
            .order_by(asc(comments_table.c.created_at))
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        async with self.database.session() as session:
            await insert_row(session, comments_table, comment_to_dict(comment), RESOURCE)
        return comment

    async def update(self, comment: Comment) -> Comment:
        """Replace a comment if its version matches."""
        async with self.database.session() as session:
            await update_versioned(
                session,
                comments_table,
                comment.id,
                comment.version,
                comment_to_dict(comment),
                RESOURCE,
            )
        return comment.evolve(version=comment.version + 1)

    async def delete(self, comment: Comment) -> None:
        """Delete a comment if its version matches."""
        async with self.database.session() as session:
            await delete_versioned(session, comments_table, comment.id, comment.version, RESOURCE)
