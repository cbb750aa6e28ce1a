"""In-memory comment repository for testing."""

from typing import Optional

from ask.domain.model.comment import Comment
from ask.domain.repository.comment import CommentRepository
from ask.domain.value import AnswerId, CommentId
from ask.persistence.repository.inmemory.database import InMemoryDatabase

TABLE = "comments"


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self.database.get(TABLE, comment_id)

    async def find_by_answer(self, answer_id: AnswerId) -> list[Comment]:
        """Find every comment on an answer, oldest first."""
        comments = [c for c in self.database.scan(TABLE) if c.answer_id == answer_id]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        return self.database.insert(TABLE, comment.id, comment)

    async def update(self, comment: Comment) -> Comment:
        """Replace a comment if its version matches."""
        return self.database.replace(TABLE, comment.id, comment)

    async def delete(self, comment: Comment) -> None:
        """Delete a comment if its version matches."""
        self.database.remove(TABLE, comment.id, comment.version)
