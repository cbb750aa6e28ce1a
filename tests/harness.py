"""Test harness building DI environments for tests.

Unit tests run entirely in memory. Integration tests that unmock
``persistence`` assume PostgreSQL is reachable at ``DATABASE__URL`` with
migrations applied.
"""

import pytest_asyncio

from ask.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    The fixture builds a test container with the given components unmocked
    and yields a request-scoped container. Everything resolved from one
    request container shares the same store.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_cast_vote(unit_env):
            vote_service = await unit_env.get(VoteService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
