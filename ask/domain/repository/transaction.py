"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Unit-of-work boundary shared by all repositories of one backend.

    Every repository call made inside ``transaction()`` by the same task
    belongs to that transaction: it commits when the block exits normally and
    is discarded when the block raises. Entering ``transaction()`` while one
    is already open joins the open transaction.

    Commit raises ``ConflictError`` when a versioned write lost a race and
    ``TransientStoreError`` when the backend could not be reached.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open (or join) a transaction for the current task."""
        pass

    @abstractmethod
    def in_transaction(self) -> bool:
        """Whether the current task is inside ``transaction()``."""
        pass
