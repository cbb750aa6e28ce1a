"""Question repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from ask.domain.model.question import Question
from ask.domain.value import QuestionId, QuestionStatus, TagName, UserId
from ask.domain.value.common import ValueObject


class QuestionSortOrder(str, Enum):
    """Sort order for question listings."""

    NEWEST = "newest"  # created_at DESC
    OLDEST = "oldest"  # created_at ASC
    VOTES = "votes"  # score DESC, then newest
    VIEWS = "views"  # views DESC, then newest
    UNANSWERED = "unanswered"  # only questions without answers, newest first


class QuestionFilter(ValueObject):
    """Criteria for question listings.

    ``None`` fields do not filter. ``search`` matches title or description
    case-insensitively.
    """

    status: Optional[QuestionStatus] = None
    tag: Optional[TagName] = None
    search: Optional[str] = None
    author_id: Optional[UserId] = None


class QuestionRepository(ABC):
    """Repository for Question aggregate.

    ``update`` and ``delete`` are conditional on ``question.version``.
    ``views`` is owned by ``increment_views`` and is never written by
    ``update``.
    """

    @abstractmethod
    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        filter: QuestionFilter,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination.

        Args:
            filter: Listing criteria
            sort: Sort order
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            List of questions matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        filter: QuestionFilter,
        unanswered_only: bool = False,
    ) -> int:
        """Count questions matching ``filter``.

        Args:
            filter: Listing criteria
            unanswered_only: Only count questions without answers

        Returns:
            Number of matching questions
        """
        pass

    @abstractmethod
    async def add(self, question: Question) -> Question:
        """Insert a new question.

        Args:
            question: The question to insert

        Returns:
            The stored question
        """
        pass

    @abstractmethod
    async def update(self, question: Question) -> Question:
        """Replace a question if its stored version still matches.

        Args:
            question: The modified question, carrying the version it was read at

        Returns:
            The stored question with its version bumped

        Raises:
            ConflictError: If the question changed or vanished since it was read
        """
        pass

    @abstractmethod
    async def delete(self, question: Question) -> None:
        """Delete a question if its stored version still matches.

        Raises:
            ConflictError: If the question changed or vanished since it was read
        """
        pass

    @abstractmethod
    async def increment_views(self, question_id: QuestionId) -> None:
        """Atomically increment the view counter by 1.

        Args:
            question_id: The question ID
        """
        pass
