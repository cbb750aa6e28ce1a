"""Answer repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from ask.domain.model.answer import Answer
from ask.domain.value import AnswerId, QuestionId, UserId


class AnswerSortOrder(str, Enum):
    """Sort order for the answers of a question."""

    VOTES = "votes"  # score DESC, then created_at DESC
    NEWEST = "newest"
    OLDEST = "oldest"


class AnswerRepository(ABC):
    """Repository for Answer entities.

    ``update`` and ``delete`` are conditional on ``answer.version``.
    """

    @abstractmethod
    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        pass

    @abstractmethod
    async def find_by_question(
        self,
        question_id: QuestionId,
        sort: AnswerSortOrder = AnswerSortOrder.VOTES,
    ) -> List[Answer]:
        """Find every answer of a question.

        Args:
            question_id: The parent question
            sort: Sort order

        Returns:
            The question's answers, sorted
        """
        pass

    @abstractmethod
    async def find_by_question_and_author(
        self, question_id: QuestionId, author_id: UserId
    ) -> Optional[Answer]:
        """Find the answer ``author_id`` wrote for ``question_id``, if any."""
        pass

    @abstractmethod
    async def find_unmoderated(self, limit: int = 20, offset: int = 0) -> List[Answer]:
        """Find answers not yet moderated, newest first."""
        pass

    @abstractmethod
    async def count(
        self,
        accepted_only: bool = False,
        unmoderated_only: bool = False,
    ) -> int:
        """Count answers.

        Args:
            accepted_only: Only count accepted answers
            unmoderated_only: Only count answers that are not moderated

        Returns:
            Number of matching answers
        """
        pass

    @abstractmethod
    async def add(self, answer: Answer) -> Answer:
        """Insert a new answer."""
        pass

    @abstractmethod
    async def update(self, answer: Answer) -> Answer:
        """Replace an answer if its stored version still matches.

        Returns:
            The stored answer with its version bumped

        Raises:
            ConflictError: If the answer changed or vanished since it was read
        """
        pass

    @abstractmethod
    async def delete(self, answer: Answer) -> None:
        """Delete an answer if its stored version still matches.

        Raises:
            ConflictError: If the answer changed or vanished since it was read
        """
        pass
