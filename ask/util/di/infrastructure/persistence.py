"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator
from typing import Type, TypeVar

from dishka import Scope, provide
import logfire

from ask.config import Settings
from ask.domain.repository import (
    AnswerRepository,
    CommentRepository,
    NotificationRepository,
    QuestionRepository,
    TagRepository,
    TransactionManager,
    UserRepository,
)
from ask.persistence.database import (
    PostgresDatabase,
    create_engine,
    create_session_factory,
)
from ask.persistence.repository import (
    PostgresAnswerRepository,
    PostgresCommentRepository,
    PostgresNotificationRepository,
    PostgresQuestionRepository,
    PostgresTagRepository,
    PostgresUserRepository,
)
from ask.persistence.repository.inmemory import (
    InMemoryAnswerRepository,
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryNotificationRepository,
    InMemoryQuestionRepository,
    InMemoryTagRepository,
    InMemoryUserRepository,
)
from ask.util.di.base import ProviderBase
from ask.util.error import ConfigurationError
from ask.util.observability import instrument_sqlalchemy

R = TypeVar("R")


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


def _repository(
    transaction_manager: TransactionManager,
    postgres: Type[R],
    memory: Type[R],
) -> R:
    """Build the repository matching the backend of ``transaction_manager``."""
    if isinstance(transaction_manager, PostgresDatabase):
        return postgres(transaction_manager)  # type: ignore[call-arg]
    if isinstance(transaction_manager, InMemoryDatabase):
        return memory(transaction_manager)  # type: ignore[call-arg]
    raise ConfigurationError(
        f"Unsupported transaction manager: {type(transaction_manager).__name__}"
    )


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider.

    Uses PostgreSQL unless ``STORAGE__BACKEND=memory`` selects the in-memory
    store (single process, lost on exit).
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_transaction_manager(self, settings: Settings) -> AsyncIterator[TransactionManager]:
        """Provide the store shared by every repository."""
        backend = settings.storage.backend
        if backend == "memory":
            logfire.warn("Using in-memory storage; data is not persisted")
            yield InMemoryDatabase()
            return
        if backend != "postgres":
            raise ConfigurationError(f"Unknown storage backend: {backend}")

        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        try:
            yield PostgresDatabase(create_session_factory(engine))
        finally:
            await engine.dispose()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, transaction_manager: TransactionManager) -> UserRepository:
        """Provide User repository."""
        return _repository(transaction_manager, PostgresUserRepository, InMemoryUserRepository)

    @provide(scope=Scope.REQUEST)
    def get_question_repository(
        self, transaction_manager: TransactionManager
    ) -> QuestionRepository:
        """Provide Question repository."""
        return _repository(
            transaction_manager, PostgresQuestionRepository, InMemoryQuestionRepository
        )

    @provide(scope=Scope.REQUEST)
    def get_answer_repository(self, transaction_manager: TransactionManager) -> AnswerRepository:
        """Provide Answer repository."""
        return _repository(transaction_manager, PostgresAnswerRepository, InMemoryAnswerRepository)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(
        self, transaction_manager: TransactionManager
    ) -> CommentRepository:
        """Provide Comment repository."""
        return _repository(
            transaction_manager, PostgresCommentRepository, InMemoryCommentRepository
        )

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, transaction_manager: TransactionManager
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return _repository(
            transaction_manager, PostgresNotificationRepository, InMemoryNotificationRepository
        )

    @provide(scope=Scope.REQUEST)
    def get_tag_repository(self, transaction_manager: TransactionManager) -> TagRepository:
        """Provide Tag repository."""
        return _repository(transaction_manager, PostgresTagRepository, InMemoryTagRepository)
