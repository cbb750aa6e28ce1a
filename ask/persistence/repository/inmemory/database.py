"""In-memory storage with task-local optimistic transactions.

All in-memory repositories of one container share an ``InMemoryDatabase``.
Inside ``transaction()`` writes are staged per task and validated against
committed state on commit; outside a transaction each write commits on its
own. Commit never awaits, so the version check and the apply step cannot
interleave with another task.
"""

from collections.abc import AsyncIterator, Callable, Hashable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any, Optional

import logfire

from ask.domain.error import ConflictError
from ask.domain.repository.transaction import TransactionManager

Table = dict[Hashable, Any]
AtomicOp = Callable[[dict[str, Table]], None]

# Sentinels for the expected committed state of a staged write.
MUST_NOT_EXIST = object()
UNCHECKED = object()


class _Transaction:
    """Writes staged by one task."""

    def __init__(self) -> None:
        # (table, key) -> (new value or None for delete, expected committed state)
        self.writes: dict[tuple[str, Hashable], tuple[Optional[Any], object]] = {}
        self.ops: list[AtomicOp] = []


class InMemoryDatabase(TransactionManager):
    """Shared in-memory tables for the in-memory repositories."""

    # Counter fields owned by atomic operations; replacing a row keeps the
    # committed value of these.
    PRESERVED_FIELDS: dict[str, tuple[str, ...]] = {
        "questions": ("views",),
        "tags": ("usage_count",),
    }

    def __init__(self) -> None:
        self._tables: dict[str, Table] = {}
        self._current: ContextVar[Optional[_Transaction]] = ContextVar(
            f"inmemory_transaction_{id(self)}", default=None
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Open a transaction for the current task, or join the open one."""
        if self._current.get() is not None:
            yield
            return

        tx = _Transaction()
        token = self._current.set(tx)
        try:
            yield
            self._commit(tx)
        finally:
            self._current.reset(token)

    def in_transaction(self) -> bool:
        return self._current.get() is not None

    def table(self, name: str) -> Table:
        """Committed rows of a table."""
        return self._tables.setdefault(name, {})

    def get(self, table: str, key: Hashable) -> Optional[Any]:
        """Read a row as the current task sees it."""
        tx = self._current.get()
        if tx is not None and (table, key) in tx.writes:
            return tx.writes[(table, key)][0]
        return self.table(table).get(key)

    def scan(self, table: str) -> list[Any]:
        """Read every row of a table as the current task sees it."""
        rows = dict(self.table(table))
        tx = self._current.get()
        if tx is not None:
            for (name, key), (value, _) in tx.writes.items():
                if name != table:
                    continue
                if value is None:
                    rows.pop(key, None)
                else:
                    rows[key] = value
        return list(rows.values())

    def insert(self, table: str, key: Hashable, value: Any) -> Any:
        """Stage a new row; commit fails if the key exists by then."""
        if self.get(table, key) is not None:
            raise ConflictError(table, str(key))
        self._stage(table, key, value, MUST_NOT_EXIST)
        return value

    def replace(self, table: str, key: Hashable, value: Any) -> Any:
        """Stage a versioned replacement of an existing row.

        ``value.version`` is the version the caller read; the stored row gets
        ``version + 1``.
        """
        current = self.get(table, key)
        if current is None or current.version != value.version:
            raise ConflictError(table, str(key))
        stored = value.model_copy(update={"version": value.version + 1})
        self._stage(table, key, stored, value.version)
        return stored

    def put(self, table: str, key: Hashable, value: Any) -> Any:
        """Stage an unversioned write (last writer wins)."""
        self._stage(table, key, value, UNCHECKED)
        return value

    def remove(self, table: str, key: Hashable, version: Optional[int] = None) -> None:
        """Stage a delete, conditional on ``version`` when one is given."""
        current = self.get(table, key)
        if version is not None and (current is None or current.version != version):
            raise ConflictError(table, str(key))
        self._stage(table, key, None, UNCHECKED if version is None else version)

    def atomic(self, op: AtomicOp) -> None:
        """Run ``op`` against committed tables at commit time."""
        tx = self._current.get()
        if tx is None:
            op(self._tables)
        else:
            tx.ops.append(op)

    def _stage(self, table: str, key: Hashable, value: Optional[Any], expected: object) -> None:
        tx = self._current.get()
        if tx is None:
            autocommit = _Transaction()
            autocommit.writes[(table, key)] = (value, expected)
            self._commit(autocommit)
            return
        previous = tx.writes.get((table, key))
        # A row written twice in one transaction is still checked against
        # what was committed when it was first written.
        if previous is not None:
            expected = previous[1]
        tx.writes[(table, key)] = (value, expected)

    def _commit(self, tx: _Transaction) -> None:
        for (table, key), (_, expected) in tx.writes.items():
            current = self.table(table).get(key)
            if expected is UNCHECKED:
                continue
            if expected is MUST_NOT_EXIST:
                if current is not None:
                    logfire.warn("In-memory commit conflict", table=table, key=str(key))
                    raise ConflictError(table, str(key))
            elif current is None or current.version != expected:
                logfire.warn("In-memory commit conflict", table=table, key=str(key))
                raise ConflictError(table, str(key))

        for (table, key), (value, _) in tx.writes.items():
            rows = self.table(table)
            if value is None:
                rows.pop(key, None)
                continue
            current = rows.get(key)
            preserved = self.PRESERVED_FIELDS.get(table, ())
            if current is not None and preserved:
                value = value.model_copy(
                    update={field: getattr(current, field) for field in preserved}
                )
            rows[key] = value

        for op in tx.ops:
            op(self._tables)
