"""Unit tests for TransactionalService retry behaviour."""

import pytest

from ask.config import Settings
from ask.domain.error import ConflictError, TransientStoreError
from ask.domain.repository import QuestionRepository, TransactionManager
from ask.domain.service import TransactionalService, VoteService
from ask.domain.value import VotableType, VoteType
from ask.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import make_actor, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class FlakyService(TransactionalService):
    """Fails a fixed number of attempts before succeeding."""

    def __init__(self, transaction_manager, settings, error, failures):
        super().__init__(transaction_manager, settings)
        self.error = error
        self.failures = failures
        self.attempts = 0

    async def run(self):
        async def attempt():
            self.attempts += 1
            if self.attempts <= self.failures:
                raise self.error
            return "done"

        return await self._run_atomic("flaky_service.run", attempt)


async def _flaky(env, error, failures):
    return FlakyService(
        await env.get(TransactionManager), await env.get(Settings), error, failures
    )


class TestConflictRetry:
    """Version conflicts re-run the attempt."""

    @pytest.mark.asyncio
    async def test_conflicts_are_retried_until_success(self, unit_env):
        """A few lost races still end in success."""
        # Arrange
        service = await _flaky(unit_env, ConflictError("question", "q1"), failures=2)

        # Act
        result = await service.run()

        # Assert
        assert result == "done"
        assert service.attempts == 3

    @pytest.mark.asyncio
    async def test_exhausted_retries_surface_the_conflict(self, unit_env):
        """After the configured retries the conflict propagates."""
        # Arrange
        settings = await unit_env.get(Settings)
        service = await _flaky(unit_env, ConflictError("question", "q1"), failures=100)

        # Act & Assert
        with pytest.raises(ConflictError):
            await service.run()
        assert service.attempts == settings.consistency.conflict_retries + 1

    @pytest.mark.asyncio
    async def test_nested_call_joins_outer_transaction(self, unit_env):
        """Inside an open transaction errors go straight to the outer caller."""
        # Arrange
        transaction_manager = await unit_env.get(TransactionManager)
        service = await _flaky(unit_env, ConflictError("question", "q1"), failures=1)

        # Act & Assert
        with pytest.raises(ConflictError):
            async with transaction_manager.transaction():
                await service.run()
        assert service.attempts == 1

    @pytest.mark.asyncio
    async def test_vote_retries_after_concurrent_commit(self, unit_env):
        """A vote that loses a race re-reads and still lands."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        database = await unit_env.get(InMemoryDatabase)
        author = await make_actor(unit_env)
        rival = await make_actor(unit_env)
        voter = await make_actor(unit_env)
        question = await make_question(unit_env, author)

        original_update = question_repo.update
        raced = False

        async def racing_update(entity):
            # Another writer commits a vote between our read and our write.
            nonlocal raced
            if not raced:
                raced = True
                committed = database.table("questions")[question.id]
                database.table("questions")[question.id] = committed.model_copy(
                    update={
                        "upvoters": committed.upvoters | {rival.user_id},
                        "version": committed.version + 1,
                    }
                )
            return await original_update(entity)

        vote_service.question_repository.update = racing_update

        # Act
        score = await vote_service.cast_vote(
            VotableType.QUESTION, question.id, voter, VoteType.UP
        )

        # Assert
        stored = await question_repo.find_by_id(question.id)
        assert score == 2
        assert stored.upvoters == frozenset({rival.user_id, voter.user_id})


class TestTransientRetry:
    """Transient store failures back off exponentially."""

    @pytest.mark.asyncio
    async def test_backoff_doubles_between_attempts(self, unit_env, monkeypatch):
        """Delays follow base * 2**n."""
        # Arrange
        delays = []

        async def fake_sleep(delay):
            delays.append(delay)

        monkeypatch.setattr("ask.domain.service.base.asyncio.sleep", fake_sleep)
        settings = await unit_env.get(Settings)
        service = await _flaky(unit_env, TransientStoreError(), failures=3)

        # Act
        result = await service.run()

        # Assert
        base = settings.consistency.backoff_base_seconds
        assert result == "done"
        assert delays == [base, base * 2, base * 4]

    @pytest.mark.asyncio
    async def test_exhausted_transient_retries_propagate(self, unit_env, monkeypatch):
        """The store error surfaces once retries are spent."""
        # Arrange
        async def fake_sleep(delay):
            return None

        monkeypatch.setattr("ask.domain.service.base.asyncio.sleep", fake_sleep)
        settings = await unit_env.get(Settings)
        service = await _flaky(unit_env, TransientStoreError(), failures=100)

        # Act & Assert
        with pytest.raises(TransientStoreError):
            await service.run()
        assert service.attempts == settings.consistency.transient_retries + 1
