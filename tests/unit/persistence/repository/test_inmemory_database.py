"""Unit tests for InMemoryDatabase transactions."""

import pytest
from pydantic import BaseModel

from ask.domain.error import ConflictError
from ask.persistence.repository.inmemory import InMemoryDatabase


class Row(BaseModel):
    """Minimal versioned row."""

    id: int
    title: str = "untitled"
    views: int = 0
    version: int = 1


class TestTransactions:
    """Staging, commit and rollback."""

    @pytest.mark.asyncio
    async def test_writes_outside_transaction_commit_immediately(self):
        """Autocommit applies each write on its own."""
        # Arrange
        database = InMemoryDatabase()

        # Act
        database.insert("rows", 1, Row(id=1))

        # Assert
        assert database.table("rows")[1].id == 1

    @pytest.mark.asyncio
    async def test_exception_discards_staged_writes(self):
        """Nothing staged survives a failed transaction."""
        # Arrange
        database = InMemoryDatabase()

        # Act
        with pytest.raises(RuntimeError):
            async with database.transaction():
                database.insert("rows", 1, Row(id=1))
                assert database.get("rows", 1) is not None
                raise RuntimeError("boom")

        # Assert
        assert database.table("rows") == {}

    @pytest.mark.asyncio
    async def test_staged_writes_are_invisible_until_commit(self):
        """Other readers only see committed rows."""
        # Arrange
        database = InMemoryDatabase()

        # Act & Assert
        async with database.transaction():
            database.insert("rows", 1, Row(id=1))
            assert 1 not in database.table("rows")
        assert 1 in database.table("rows")

    @pytest.mark.asyncio
    async def test_nested_transaction_joins_outer(self):
        """An inner block commits with the outer one."""
        # Arrange
        database = InMemoryDatabase()

        # Act & Assert
        async with database.transaction():
            async with database.transaction():
                database.insert("rows", 1, Row(id=1))
            assert database.in_transaction()
            assert database.table("rows") == {}
        assert not database.in_transaction()
        assert 1 in database.table("rows")


class TestOptimisticChecks:
    """Version checks on replace and commit."""

    @pytest.mark.asyncio
    async def test_replace_bumps_version(self):
        """A successful replace stores version + 1."""
        # Arrange
        database = InMemoryDatabase()
        database.insert("rows", 1, Row(id=1))

        # Act
        stored = database.replace("rows", 1, Row(id=1, title="edited"))

        # Assert
        assert stored.version == 2
        assert database.table("rows")[1].title == "edited"

    @pytest.mark.asyncio
    async def test_stale_replace_is_rejected(self):
        """Replacing from an old read raises a conflict."""
        # Arrange
        database = InMemoryDatabase()
        database.insert("rows", 1, Row(id=1))
        database.replace("rows", 1, Row(id=1, title="first"))

        # Act & Assert
        with pytest.raises(ConflictError):
            database.replace("rows", 1, Row(id=1, title="second"))

    @pytest.mark.asyncio
    async def test_commit_detects_concurrent_writer(self):
        """A row changed after staging fails the whole commit."""
        # Arrange
        database = InMemoryDatabase()
        database.insert("rows", 1, Row(id=1))
        database.insert("rows", 2, Row(id=2))

        # Act
        with pytest.raises(ConflictError):
            async with database.transaction():
                database.replace("rows", 1, Row(id=1, title="mine"))
                database.replace("rows", 2, Row(id=2, title="mine"))
                # Someone else commits row 2 first.
                database.table("rows")[2] = Row(id=2, title="theirs", version=2)

        # Assert
        assert database.table("rows")[1].title == "untitled"
        assert database.table("rows")[2].title == "theirs"

    @pytest.mark.asyncio
    async def test_duplicate_insert_conflicts(self):
        """Keys are unique."""
        # Arrange
        database = InMemoryDatabase()
        database.insert("rows", 1, Row(id=1))

        # Act & Assert
        with pytest.raises(ConflictError):
            database.insert("rows", 1, Row(id=1))


class TestCounters:
    """Atomic operations and preserved counter fields."""

    @pytest.mark.asyncio
    async def test_replace_keeps_committed_counter(self):
        """A versioned replace never rolls back a counter bumped meanwhile."""
        # Arrange
        database = InMemoryDatabase()
        database.insert("questions", 1, Row(id=1))

        # Act
        async with database.transaction():
            database.replace("questions", 1, Row(id=1, title="edited"))
            committed = database.table("questions")[1]
            database.table("questions")[1] = committed.model_copy(update={"views": 7})

        # Assert
        stored = database.table("questions")[1]
        assert stored.title == "edited"
        assert stored.views == 7

    @pytest.mark.asyncio
    async def test_atomic_ops_run_at_commit(self):
        """Atomic operations see committed state when the transaction ends."""
        # Arrange
        database = InMemoryDatabase()
        database.insert("questions", 1, Row(id=1))

        def increment(tables):
            row = tables["questions"][1]
            tables["questions"][1] = row.model_copy(update={"views": row.views + 1})

        # Act & Assert
        async with database.transaction():
            database.atomic(increment)
            database.atomic(increment)
            assert database.table("questions")[1].views == 0
        assert database.table("questions")[1].views == 2
