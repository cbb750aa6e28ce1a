"""Unit tests for CascadeService."""

import pytest

from ask.domain.error import NotAuthorizedError, NotFoundError, TransientStoreError
from ask.domain.repository import (
    AnswerRepository,
    CommentRepository,
    NotificationRepository,
    QuestionRepository,
    TagRepository,
)
from ask.domain.service import AcceptanceService, CascadeService
from ask.domain.value import TagName, UserRole
from tests.conftest import make_actor, make_answer, make_comment, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestDeleteQuestion:
    """Tests for delete_question."""

    @pytest.mark.asyncio
    async def test_delete_removes_every_dependent(self, unit_env):
        """Answers, comments and notifications go with the question."""
        # Arrange
        cascade = await unit_env.get(CascadeService)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        comment_repo = await unit_env.get(CommentRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        asker = await make_actor(unit_env)
        answerer = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, answerer)
        comment = await make_comment(unit_env, answer, asker)
        reply = await make_comment(unit_env, answer, answerer, parent=comment)

        # Act
        await cascade.delete_question(question.id, asker)

        # Assert
        assert await question_repo.find_by_id(question.id) is None
        assert await answer_repo.find_by_id(answer.id) is None
        assert await comment_repo.find_by_id(comment.id) is None
        assert await comment_repo.find_by_id(reply.id) is None
        assert await notification_repo.count_by_recipient(asker.user_id) == 0
        assert await notification_repo.count_by_recipient(answerer.user_id) == 0

    @pytest.mark.asyncio
    async def test_delete_releases_tag_usage(self, unit_env):
        """Each tag loses one use and never drops below zero."""
        # Arrange
        cascade = await unit_env.get(CascadeService)
        tag_repo = await unit_env.get(TagRepository)
        asker = await make_actor(unit_env)
        first = await make_question(unit_env, asker, tags=["python", "asyncio"])
        await make_question(unit_env, asker, title="Another python question", tags=["python"])

        # Act
        await cascade.delete_question(first.id, asker)

        # Assert
        assert (await tag_repo.find_by_name(TagName("python"))).usage_count == 1
        assert (await tag_repo.find_by_name(TagName("asyncio"))).usage_count == 0

    @pytest.mark.asyncio
    async def test_admin_may_delete_any_question(self, unit_env):
        """Admins delete questions they did not write."""
        # Arrange
        cascade = await unit_env.get(CascadeService)
        question_repo = await unit_env.get(QuestionRepository)
        admin = await make_actor(unit_env, role=UserRole.ADMIN)
        question = await make_question(unit_env, await make_actor(unit_env))

        # Act
        await cascade.delete_question(question.id, admin)

        # Assert
        assert await question_repo.find_by_id(question.id) is None

    @pytest.mark.asyncio
    async def test_other_members_cannot_delete(self, unit_env):
        """A member cannot delete someone else's question."""
        # Arrange
        cascade = await unit_env.get(CascadeService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await make_question(unit_env, await make_actor(unit_env))
        stranger = await make_actor(unit_env)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await cascade.delete_question(question.id, stranger)
        assert await question_repo.find_by_id(question.id) is not None

    @pytest.mark.asyncio
    async def test_missing_question_raises_not_found(self, unit_env):
        """Deleting twice fails the second time."""
        # Arrange
        cascade = await unit_env.get(CascadeService)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        await cascade.delete_question(question.id, asker)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await cascade.delete_question(question.id, asker)


class TestDeleteAnswer:
    """Tests for delete_answer."""

    @pytest.mark.asyncio
    async def test_delete_unlinks_answer_and_clears_acceptance(self, unit_env):
        """The question forgets a deleted answer, accepted or not."""
        # Arrange
        cascade = await unit_env.get(CascadeService)
        acceptance = await unit_env.get(AcceptanceService)
        question_repo = await unit_env.get(QuestionRepository)
        comment_repo = await unit_env.get(CommentRepository)
        asker = await make_actor(unit_env)
        answerer = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, answerer)
        comment = await make_comment(unit_env, answer, asker)
        await acceptance.accept_answer(question.id, answer.id, asker)

        # Act
        await cascade.delete_answer(answer.id, answerer)

        # Assert
        stored = await question_repo.find_by_id(question.id)
        assert stored.answer_ids == ()
        assert stored.accepted_answer_id is None
        assert await comment_repo.find_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_delete_removes_answer_notifications(self, unit_env):
        """Notifications about the answer and its comments are removed."""
        # Arrange
        cascade = await unit_env.get(CascadeService)
        notification_repo = await unit_env.get(NotificationRepository)
        asker = await make_actor(unit_env)
        answerer = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, answerer)
        await make_comment(unit_env, answer, asker)

        # Act
        await cascade.delete_answer(answer.id, answerer)

        # Assert
        assert await notification_repo.count_by_recipient(asker.user_id) == 0
        assert await notification_repo.count_by_recipient(answerer.user_id) == 0

    @pytest.mark.asyncio
    async def test_question_author_cannot_delete_answer(self, unit_env):
        """Asking the question does not grant rights over its answers."""
        # Arrange
        cascade = await unit_env.get(CascadeService)
        answer_repo = await unit_env.get(AnswerRepository)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, await make_actor(unit_env))

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await cascade.delete_answer(answer.id, asker)
        assert await answer_repo.find_by_id(answer.id) is not None


class TestFailedCascadeRollsBack:
    """A failure late in a cascade leaves every entity as it was."""

    @pytest.mark.asyncio
    async def test_store_outage_during_delete_question(self, unit_env, monkeypatch):
        """Answers and comments deleted before the failing step come back."""
        # Arrange
        cascade = await unit_env.get(CascadeService)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        comment_repo = await unit_env.get(CommentRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        tag_repo = await unit_env.get(TagRepository)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, await make_actor(unit_env))
        comment = await make_comment(unit_env, answer, asker)

        async def no_sleep(delay):
            pass

        async def outage(**references):
            raise TransientStoreError()

        monkeypatch.setattr("ask.domain.service.base.asyncio.sleep", no_sleep)
        monkeypatch.setattr(cascade.notification_repository, "delete_referencing", outage)

        # Act
        with pytest.raises(TransientStoreError):
            await cascade.delete_question(question.id, asker)

        # Assert
        kept = await question_repo.find_by_id(question.id)
        assert kept is not None and kept.answer_ids == (answer.id,)
        kept_answer = await answer_repo.find_by_id(answer.id)
        assert kept_answer is not None and kept_answer.comment_ids == (comment.id,)
        assert await comment_repo.find_by_id(comment.id) is not None
        assert await notification_repo.count_by_recipient(asker.user_id) == 1
        assert (await tag_repo.find_by_name(TagName("python"))).usage_count == 1
        assert (await tag_repo.find_by_name(TagName("asyncio"))).usage_count == 1
