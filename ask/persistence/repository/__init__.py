"""PostgreSQL repository implementations."""

from ask.persistence.repository.answer import PostgresAnswerRepository
from ask.persistence.repository.comment import PostgresCommentRepository
from ask.persistence.repository.notification import PostgresNotificationRepository
from ask.persistence.repository.question import PostgresQuestionRepository
from ask.persistence.repository.tag import PostgresTagRepository
from ask.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresQuestionRepository",
    "PostgresAnswerRepository",
    "PostgresCommentRepository",
    "PostgresNotificationRepository",
    "PostgresTagRepository",
]
