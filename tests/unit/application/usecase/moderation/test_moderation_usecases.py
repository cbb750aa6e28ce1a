"""Unit tests for moderation use cases."""

import pytest
from pydantic import ValidationError

from ask.application.usecase.moderation import (
    ModerateContentRequest,
    ModerateContentUseCase,
    ModerationTarget,
    SendAlertRequest,
    SendAlertUseCase,
    ToggleUserBanRequest,
    ToggleUserBanUseCase,
)
from ask.domain.error import NotAuthorizedError
from ask.domain.value import QuestionStatus, UserRole
from tests.conftest import make_actor, make_answer, make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ADMIN_ID = "00000000-0000-0000-0000-000000000001"


class TestModerateContentUseCase:
    """Tests for ModerateContentUseCase."""

    @pytest.mark.asyncio
    async def test_moderate_question(self, unit_env):
        """Question moderation reports the new status."""
        # Arrange
        use_case = await unit_env.get(ModerateContentUseCase)
        admin = await make_actor(unit_env, role=UserRole.ADMIN)
        question = await make_question(unit_env, await make_actor(unit_env))

        # Act
        response = await use_case.execute(
            ModerateContentRequest(
                actor_id=str(admin.user_id),
                actor_role=UserRole.ADMIN,
                target=ModerationTarget.QUESTION,
                target_id=str(question.id),
                status=QuestionStatus.DUPLICATE,
                reason="Asked and answered last week",
            )
        )

        # Assert
        assert response.status == QuestionStatus.DUPLICATE
        assert response.moderated_by == str(admin.user_id)

    @pytest.mark.asyncio
    async def test_moderate_answer_and_tag(self, unit_env):
        """Answers and tags are addressed by id and by name."""
        # Arrange
        use_case = await unit_env.get(ModerateContentUseCase)
        admin = await make_actor(unit_env, role=UserRole.ADMIN)
        question = await make_question(unit_env, await make_actor(unit_env))
        answer = await make_answer(unit_env, question, await make_actor(unit_env))

        # Act
        on_answer = await use_case.execute(
            ModerateContentRequest(
                actor_id=str(admin.user_id),
                actor_role=UserRole.ADMIN,
                target=ModerationTarget.ANSWER,
                target_id=str(answer.id),
                reason="Links to a phishing site",
            )
        )
        on_tag = await use_case.execute(
            ModerateContentRequest(
                actor_id=str(admin.user_id),
                actor_role=UserRole.ADMIN,
                target=ModerationTarget.TAG,
                target_id="asyncio",
                reason="Synonym of python-asyncio",
            )
        )

        # Assert
        assert on_answer.status is None
        assert on_tag.target_id == "asyncio"

    @pytest.mark.asyncio
    async def test_members_cannot_moderate(self, unit_env):
        """The caller's role is checked in the domain."""
        # Arrange
        use_case = await unit_env.get(ModerateContentUseCase)
        member = await make_actor(unit_env)
        question = await make_question(unit_env, await make_actor(unit_env))

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                ModerateContentRequest(
                    actor_id=str(member.user_id),
                    target=ModerationTarget.QUESTION,
                    target_id=str(question.id),
                    status=QuestionStatus.CLOSED,
                    reason="I do not like this question",
                )
            )

    def test_request_validation(self):
        """Questions need a status and every moderation needs a real reason."""
        with pytest.raises(ValidationError):
            ModerateContentRequest(
                actor_id=ADMIN_ID,
                target=ModerationTarget.QUESTION,
                target_id=ADMIN_ID,
                reason="Missing a status entirely",
            )
        with pytest.raises(ValidationError):
            ModerateContentRequest(
                actor_id=ADMIN_ID,
                target=ModerationTarget.ANSWER,
                target_id=ADMIN_ID,
                reason="Spam",
            )


class TestToggleUserBanUseCase:
    """Tests for ToggleUserBanUseCase."""

    @pytest.mark.asyncio
    async def test_toggle_twice(self, unit_env):
        """The first call bans, the second lifts the ban."""
        # Arrange
        use_case = await unit_env.get(ToggleUserBanUseCase)
        admin = await make_actor(unit_env, role=UserRole.ADMIN)
        user = await make_user(unit_env)
        request = ToggleUserBanRequest(
            actor_id=str(admin.user_id),
            actor_role=UserRole.ADMIN,
            user_id=str(user.id),
            reason="Repeated spam",
        )

        # Act
        banned = await use_case.execute(request)
        unbanned = await use_case.execute(request)

        # Assert
        assert banned.is_banned and banned.ban_reason == "Repeated spam"
        assert banned.banned_at is not None
        assert not unbanned.is_banned and unbanned.banned_at is None


class TestSendAlertUseCase:
    """Tests for SendAlertUseCase."""

    @pytest.mark.asyncio
    async def test_alert_counts_recipients(self, unit_env):
        """Every user that is not banned receives the alert."""
        # Arrange
        use_case = await unit_env.get(SendAlertUseCase)
        admin = await make_actor(unit_env, role=UserRole.ADMIN)
        for _ in range(2):
            await make_user(unit_env)

        # Act
        response = await use_case.execute(
            SendAlertRequest(
                actor_id=str(admin.user_id),
                actor_role=UserRole.ADMIN,
                title="Scheduled downtime",
                message="We are upgrading the database on Sunday.",
            )
        )

        # Assert
        assert response.recipients == 3
