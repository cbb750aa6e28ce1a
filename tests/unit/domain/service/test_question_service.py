"""Unit tests for QuestionService."""

import pytest

from ask.domain.error import ValidationError
from ask.domain.repository import QuestionFilter, QuestionRepository, QuestionSortOrder, TagRepository
from ask.domain.service import ModerationService, QuestionService, VoteService
from ask.domain.value import QuestionStatus, TagName, UserRole, VotableType, VoteType
from tests.conftest import make_actor, make_answer, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateAndUpdateQuestion:
    """Tests for create_question and update_question."""

    @pytest.mark.asyncio
    async def test_tags_are_normalised_and_counted(self, unit_env):
        """Tag input is trimmed, lowercased and de-duplicated."""
        # Arrange
        tag_repo = await unit_env.get(TagRepository)
        asker = await make_actor(unit_env)

        # Act
        question = await make_question(unit_env, asker, tags=[" Python ", "python", "SQL"])

        # Assert
        assert question.tag_names == ["python", "sql"]
        python = await tag_repo.find_by_name(TagName("python"))
        assert python.usage_count == 1
        assert python.created_by == asker.user_id

    @pytest.mark.asyncio
    async def test_too_many_tags_is_rejected(self, unit_env):
        """At most five distinct tags."""
        # Arrange
        asker = await make_actor(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError):
            await make_question(unit_env, asker, tags=["aa", "bb", "cc", "dd", "ee", "ff"])

    @pytest.mark.asyncio
    async def test_bad_title_is_a_domain_error(self, unit_env):
        """Out-of-range text surfaces as ValidationError and nothing is stored."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        tag_repo = await unit_env.get(TagRepository)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)

        # Act & Assert
        with pytest.raises(ValidationError, match="title"):
            await make_question(unit_env, asker, title="", tags=["rust"])
        with pytest.raises(ValidationError, match="title"):
            await question_service.update_question(question.id, asker, title="x" * 301)
        assert await tag_repo.find_by_name(TagName("rust")) is None
        assert (await question_repo.find_by_id(question.id)).title == question.title

    @pytest.mark.asyncio
    async def test_retagging_moves_usage(self, unit_env):
        """Only added and removed tags change their counters."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        tag_repo = await unit_env.get(TagRepository)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker, tags=["python", "asyncio"])

        # Act
        updated = await question_service.update_question(
            question.id, asker, tags=["python", "trio"]
        )

        # Assert
        assert updated.tag_names == ["python", "trio"]
        assert (await tag_repo.find_by_name(TagName("python"))).usage_count == 1
        assert (await tag_repo.find_by_name(TagName("asyncio"))).usage_count == 0
        assert (await tag_repo.find_by_name(TagName("trio"))).usage_count == 1


class TestGetQuestion:
    """Tests for get_question."""

    @pytest.mark.asyncio
    async def test_each_read_counts_one_view(self, unit_env):
        """Views grow by one per read."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, await make_actor(unit_env))

        # Act
        await question_service.get_question(question.id)
        detail = await question_service.get_question(question.id)

        # Assert
        assert detail.question.views == 2
        assert [a.id for a in detail.answers] == [answer.id]
        assert (await question_repo.find_by_id(question.id)).views == 2

    @pytest.mark.asyncio
    async def test_edit_keeps_view_count(self, unit_env):
        """A versioned update never overwrites the view counter."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        await question_service.get_question(question.id)

        # Act
        await question_service.update_question(
            question.id, asker, title="How do I profile asyncio code properly?"
        )

        # Assert
        assert (await question_repo.find_by_id(question.id)).views == 1


class TestListQuestions:
    """Tests for list_questions."""

    @pytest.mark.asyncio
    async def test_default_listing_hides_moderated_questions(self, unit_env):
        """Only active questions are listed unless asked otherwise."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        moderation = await unit_env.get(ModerationService)
        admin = await make_actor(unit_env, role=UserRole.ADMIN)
        asker = await make_actor(unit_env)
        kept = await make_question(unit_env, asker)
        closed = await make_question(unit_env, asker, title="Off-topic rant about editors")
        await moderation.moderate_question(
            closed.id, QuestionStatus.OFF_TOPIC, "Not a question", admin
        )

        # Act
        active = await question_service.list_questions()
        off_topic = await question_service.list_questions(
            QuestionFilter(status=QuestionStatus.OFF_TOPIC)
        )

        # Assert
        assert [q.id for q in active.questions] == [kept.id]
        assert [q.id for q in off_topic.questions] == [closed.id]

    @pytest.mark.asyncio
    async def test_filters_by_tag_and_search(self, unit_env):
        """Tag and text filters narrow the listing."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        asker = await make_actor(unit_env)
        rust = await make_question(
            unit_env, asker, title="Borrow checker complaints", tags=["rust"]
        )
        await make_question(unit_env, asker)

        # Act
        by_tag = await question_service.list_questions(
            QuestionFilter(status=QuestionStatus.ACTIVE, tag=TagName("rust"))
        )
        by_search = await question_service.list_questions(
            QuestionFilter(status=QuestionStatus.ACTIVE, search="BORROW")
        )

        # Assert
        assert [q.id for q in by_tag.questions] == [rust.id]
        assert [q.id for q in by_search.questions] == [rust.id]

    @pytest.mark.asyncio
    async def test_sort_by_votes_and_unanswered(self, unit_env):
        """Sorting by votes puts the best first; unanswered hides answered ones."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        vote_service = await unit_env.get(VoteService)
        asker = await make_actor(unit_env)
        voter = await make_actor(unit_env)
        popular = await make_question(unit_env, asker, title="Popular question about pytest")
        quiet = await make_question(unit_env, asker, title="Quiet question about pytest")
        await vote_service.cast_vote(VotableType.QUESTION, popular.id, voter, VoteType.UP)
        await make_answer(unit_env, popular, voter)

        # Act
        by_votes = await question_service.list_questions(sort=QuestionSortOrder.VOTES)
        unanswered = await question_service.list_questions(sort=QuestionSortOrder.UNANSWERED)

        # Assert
        assert [q.id for q in by_votes.questions] == [popular.id, quiet.id]
        assert [q.id for q in unanswered.questions] == [quiet.id]
        assert unanswered.total == 1

    @pytest.mark.asyncio
    async def test_pagination_reports_totals(self, unit_env):
        """Pages are sized by the limit and totals cover every match."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        asker = await make_actor(unit_env)
        for i in range(5):
            await make_question(unit_env, asker, title=f"Numbered question {i}")

        # Act
        page = await question_service.list_questions(page=2, limit=2)

        # Assert
        assert len(page.questions) == 2
        assert page.total == 5
        assert page.total_pages == 3
        assert page.page == 2
