"""Integration tests for the PostgreSQL question repository."""

import os

import pytest

from ask.domain.error import ConflictError
from ask.domain.repository import QuestionRepository
from tests.conftest import make_actor, make_question
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="needs a migrated PostgreSQL database"
)

integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresQuestionRepository:
    """Versioned writes against a real database."""

    @pytest.mark.asyncio
    async def test_stale_update_conflicts(self, integration_env):
        """The second writer of the same version loses."""
        # Arrange
        repo = await integration_env.get(QuestionRepository)
        question = await make_question(integration_env, await make_actor(integration_env))
        first = await repo.find_by_id(question.id)
        second = await repo.find_by_id(question.id)

        # Act
        saved = await repo.update(first.evolve(title="Profiling asyncio under load"))

        # Assert
        assert saved.version == first.version + 1
        with pytest.raises(ConflictError):
            await repo.update(second.evolve(title="A stale edit"))

    @pytest.mark.asyncio
    async def test_update_keeps_view_counter(self, integration_env):
        """Views counted between read and write survive the update."""
        # Arrange
        repo = await integration_env.get(QuestionRepository)
        question = await make_question(integration_env, await make_actor(integration_env))
        loaded = await repo.find_by_id(question.id)

        # Act
        await repo.increment_views(question.id)
        await repo.increment_views(question.id)
        await repo.update(loaded.evolve(title="Profiling asyncio under load"))

        # Assert
        reloaded = await repo.find_by_id(question.id)
        assert reloaded.views == 2
        assert reloaded.title == "Profiling asyncio under load"
