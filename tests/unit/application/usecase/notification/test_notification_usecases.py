"""Unit tests for notification use cases."""

import pytest

from ask.application.usecase.notification import (
    GetNotificationsRequest,
    GetNotificationsUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
)
from ask.domain.value import NotificationType
from tests.conftest import make_actor, make_answer, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestNotificationUseCases:
    """Tests for GetNotificationsUseCase and MarkNotificationReadUseCase."""

    @pytest.mark.asyncio
    async def test_read_flow(self, unit_env):
        """List, mark one read, mark it unread, then mark all read."""
        # Arrange
        get_notifications = await unit_env.get(GetNotificationsUseCase)
        mark = await unit_env.get(MarkNotificationReadUseCase)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        await make_answer(unit_env, question, await make_actor(unit_env))
        await make_answer(unit_env, question, await make_actor(unit_env))
        listing = await get_notifications.execute(
            GetNotificationsRequest(user_id=str(asker.user_id))
        )
        target = listing.notifications[0]

        # Act
        one_read = await mark.execute(
            MarkNotificationReadRequest(
                actor_id=str(asker.user_id), notification_id=target.notification_id
            )
        )
        unread_again = await mark.execute(
            MarkNotificationReadRequest(
                actor_id=str(asker.user_id),
                notification_id=target.notification_id,
                read=False,
            )
        )
        all_read = await mark.execute(MarkNotificationReadRequest(actor_id=str(asker.user_id)))

        # Assert
        assert listing.total == 2
        assert all(n.type == NotificationType.ANSWER for n in listing.notifications)
        assert one_read.unread_count == 1
        assert unread_again.unread_count == 2
        assert all_read.updated == 2
        assert all_read.unread_count == 0

    @pytest.mark.asyncio
    async def test_unread_only_listing(self, unit_env):
        """unread_only hides what the user has read."""
        # Arrange
        get_notifications = await unit_env.get(GetNotificationsUseCase)
        mark = await unit_env.get(MarkNotificationReadUseCase)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        await make_answer(unit_env, question, await make_actor(unit_env))
        await mark.execute(MarkNotificationReadRequest(actor_id=str(asker.user_id)))

        # Act
        response = await get_notifications.execute(
            GetNotificationsRequest(user_id=str(asker.user_id), unread_only=True)
        )

        # Assert
        assert response.notifications == []
        assert response.total == 0
        assert response.total_pages == 0
