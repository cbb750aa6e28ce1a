"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from ask.domain.repository.answer import AnswerRepository, AnswerSortOrder
from ask.domain.repository.comment import CommentRepository
from ask.domain.repository.notification import NotificationRepository
from ask.domain.repository.question import (
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
)
from ask.domain.repository.tag import TagRepository
from ask.domain.repository.transaction import TransactionManager
from ask.domain.repository.user import UserFilter, UserRepository

__all__ = [
    "TransactionManager",
    "UserRepository",
    "UserFilter",
    "QuestionRepository",
    "QuestionFilter",
    "QuestionSortOrder",
    "AnswerRepository",
    "AnswerSortOrder",
    "CommentRepository",
    "NotificationRepository",
    "TagRepository",
]
