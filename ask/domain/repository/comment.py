"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ask.domain.model.comment import Comment
from ask.domain.value import AnswerId, CommentId


class CommentRepository(ABC):
    """Repository for Comment entities.

    ``update`` and ``delete`` are conditional on ``comment.version``.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        pass

    @abstractmethod
    async def find_by_answer(self, answer_id: AnswerId) -> List[Comment]:
        """Find every comment on an answer, replies included, oldest first.

        Args:
            answer_id: The parent answer

        Returns:
            All comments whose ``answer_id`` matches
        """
        pass

    @abstractmethod
    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        pass

    @abstractmethod
    async def update(self, comment: Comment) -> Comment:
        """Replace a comment if its stored version still matches.

        Raises:
            ConflictError: If the comment changed or vanished since it was read
        """
        pass

    @abstractmethod
    async def delete(self, comment: Comment) -> None:
        """Delete a comment if its stored version still matches.

        Raises:
            ConflictError: If the comment changed or vanished since it was read
        """
        pass
