"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from ask.domain.error import NotFoundError
from ask.domain.service import ModerationService, UserService
from ask.domain.value import UserRole
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestResolveActor:
    """Tests for UserService.resolve_actor()."""

    @pytest.mark.asyncio
    async def test_actor_carries_role(self, unit_env):
        """Admins resolve to admin actors."""
        # Arrange
        user_service = await unit_env.get(UserService)
        admin = await make_user(unit_env, role=UserRole.ADMIN, username="moderator")

        # Act
        actor = await user_service.resolve_actor(admin.id)

        # Assert
        assert actor.user_id == admin.id
        assert actor.is_admin
        assert not actor.is_banned

    @pytest.mark.asyncio
    async def test_actor_reflects_current_ban(self, unit_env):
        """A ban applied after sign-up shows up on the next resolve."""
        # Arrange
        user_service = await unit_env.get(UserService)
        moderation = await unit_env.get(ModerationService)
        admin = await make_user(unit_env, role=UserRole.ADMIN)
        user = await make_user(unit_env)
        await moderation.toggle_user_ban(user.id, "Spam links", admin.as_actor())

        # Act
        actor = await user_service.resolve_actor(user.id)

        # Assert
        assert actor.is_banned

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, unit_env):
        """Should raise NotFoundError for unknown ids."""
        # Arrange
        user_service = await unit_env.get(UserService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await user_service.resolve_actor(uuid4())
