"""Unit tests for VoteService."""

import asyncio
from uuid import uuid4

import pytest

from ask.domain.error import NotAuthorizedError, NotFoundError, SelfVoteError
from ask.domain.repository import AnswerRepository, CommentRepository, QuestionRepository
from ask.domain.service import VoteService
from ask.domain.value import Actor, UserId, VotableType, VoteType
from tests.conftest import make_actor, make_answer, make_comment, make_question
from tests.harness import create_env_fixture

# Unit test fixture - everything in memory
unit_env = create_env_fixture()


class TestCastVote:
    """Tests for cast_vote."""

    @pytest.mark.asyncio
    async def test_upvote_adds_voter_and_raises_score(self, unit_env):
        """Upvoting puts the voter in the upvoter set."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        author = await make_actor(unit_env)
        voter = await make_actor(unit_env)
        question = await make_question(unit_env, author)

        # Act
        score = await vote_service.cast_vote(
            VotableType.QUESTION, question.id, voter, VoteType.UP
        )

        # Assert
        assert score == 1
        stored = await question_repo.find_by_id(question.id)
        assert voter.user_id in stored.upvoters
        assert voter.user_id not in stored.downvoters
        assert stored.score == 1

    @pytest.mark.asyncio
    async def test_switching_vote_moves_voter_between_sets(self, unit_env):
        """Casting the opposite vote switches, never double counts."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        answer_repo = await unit_env.get(AnswerRepository)
        asker = await make_actor(unit_env)
        answerer = await make_actor(unit_env)
        voter = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, answerer)

        await vote_service.cast_vote(VotableType.ANSWER, answer.id, voter, VoteType.UP)

        # Act
        score = await vote_service.cast_vote(
            VotableType.ANSWER, answer.id, voter, VoteType.DOWN
        )

        # Assert
        assert score == -1
        stored = await answer_repo.find_by_id(answer.id)
        assert stored.upvoters == frozenset()
        assert stored.downvoters == frozenset({voter.user_id})

    @pytest.mark.asyncio
    async def test_repeating_same_vote_is_idempotent(self, unit_env):
        """Casting the held vote again changes nothing."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        author = await make_actor(unit_env)
        voter = await make_actor(unit_env)
        question = await make_question(unit_env, author)
        await vote_service.cast_vote(VotableType.QUESTION, question.id, voter, VoteType.UP)
        version = (await question_repo.find_by_id(question.id)).version

        # Act
        score = await vote_service.cast_vote(
            VotableType.QUESTION, question.id, voter, VoteType.UP
        )

        # Assert
        assert score == 1
        assert (await question_repo.find_by_id(question.id)).version == version

    @pytest.mark.asyncio
    async def test_self_vote_is_rejected(self, unit_env):
        """Authors cannot vote on their own content."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        author = await make_actor(unit_env)
        question = await make_question(unit_env, author)

        # Act & Assert
        with pytest.raises(SelfVoteError):
            await vote_service.cast_vote(
                VotableType.QUESTION, question.id, author, VoteType.DOWN
            )

    @pytest.mark.asyncio
    async def test_vote_on_missing_entity_raises_not_found(self, unit_env):
        """Voting on something that does not exist fails."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        voter = await make_actor(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(VotableType.COMMENT, uuid4(), voter, VoteType.UP)

    @pytest.mark.asyncio
    async def test_banned_voter_is_rejected(self, unit_env):
        """Banned users cannot vote."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        author = await make_actor(unit_env)
        question = await make_question(unit_env, author)
        banned = Actor(user_id=UserId(uuid4()), is_banned=True)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await vote_service.cast_vote(
                VotableType.QUESTION, question.id, banned, VoteType.UP
            )

    @pytest.mark.asyncio
    async def test_votes_on_comments(self, unit_env):
        """Comments carry their own vote sets."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        asker = await make_actor(unit_env)
        answerer = await make_actor(unit_env)
        voter = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, answerer)
        comment = await make_comment(unit_env, answer, asker)

        # Act
        score = await vote_service.cast_vote(
            VotableType.COMMENT, comment.id, voter, VoteType.DOWN
        )

        # Assert
        assert score == -1
        assert (await comment_repo.find_by_id(comment.id)).downvoters == {voter.user_id}

    @pytest.mark.asyncio
    async def test_concurrent_voters_are_all_counted(self, unit_env):
        """Racing voters on one question never lose each other's vote."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        author = await make_actor(unit_env)
        question = await make_question(unit_env, author)
        voters = [await make_actor(unit_env) for _ in range(5)]

        # Act
        await asyncio.gather(
            *(
                vote_service.cast_vote(VotableType.QUESTION, question.id, v, VoteType.UP)
                for v in voters
            )
        )

        # Assert
        stored = await question_repo.find_by_id(question.id)
        assert stored.upvoters == frozenset(v.user_id for v in voters)
        assert stored.score == 5


class TestRetractVote:
    """Tests for retract_vote."""

    @pytest.mark.asyncio
    async def test_retract_removes_vote(self, unit_env):
        """Retracting removes the voter from whichever set held them."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        author = await make_actor(unit_env)
        voter = await make_actor(unit_env)
        question = await make_question(unit_env, author)
        await vote_service.cast_vote(VotableType.QUESTION, question.id, voter, VoteType.DOWN)

        # Act
        score = await vote_service.retract_vote(VotableType.QUESTION, question.id, voter)

        # Assert
        assert score == 0
        state = await vote_service.get_vote_state(
            VotableType.QUESTION, question.id, voter.user_id
        )
        assert state == (False, False)

    @pytest.mark.asyncio
    async def test_retract_without_vote_is_noop(self, unit_env):
        """Retracting a vote that was never cast leaves the score alone."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        author = await make_actor(unit_env)
        other = await make_actor(unit_env)
        voter = await make_actor(unit_env)
        question = await make_question(unit_env, author)
        await vote_service.cast_vote(VotableType.QUESTION, question.id, other, VoteType.UP)

        # Act
        score = await vote_service.retract_vote(VotableType.QUESTION, question.id, voter)

        # Assert
        assert score == 1
