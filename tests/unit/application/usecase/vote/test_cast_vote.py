"""Unit tests for CastVoteUseCase and RetractVoteUseCase."""

import pytest

from ask.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    RetractVoteRequest,
    RetractVoteUseCase,
)
from ask.domain.error import SelfVoteError
from ask.domain.value import VotableType, VoteType
from tests.conftest import make_actor, make_answer, make_question
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_downvote_answer_reports_state(self, unit_env):
        """The response carries the new score and the caller's vote."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        answer = await make_answer(unit_env, question, await make_actor(unit_env))
        request = CastVoteRequest(
            actor_id=str(asker.user_id),
            votable_type=VotableType.ANSWER,
            votable_id=str(answer.id),
            vote_type=VoteType.DOWN,
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.score == -1
        assert response.has_downvoted
        assert not response.has_upvoted
        assert response.votable_id == str(answer.id)

    @pytest.mark.asyncio
    async def test_self_vote_propagates(self, unit_env):
        """Domain errors reach the caller unchanged."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        asker = await make_actor(unit_env)
        question = await make_question(unit_env, asker)

        # Act & Assert
        with pytest.raises(SelfVoteError):
            await use_case.execute(
                CastVoteRequest(
                    actor_id=str(asker.user_id),
                    votable_type=VotableType.QUESTION,
                    votable_id=str(question.id),
                    vote_type=VoteType.UP,
                )
            )


class TestRetractVoteUseCase:
    """Tests for RetractVoteUseCase."""

    @pytest.mark.asyncio
    async def test_retract_clears_vote(self, unit_env):
        """After retracting, the caller holds no vote."""
        # Arrange
        cast = await unit_env.get(CastVoteUseCase)
        retract = await unit_env.get(RetractVoteUseCase)
        asker = await make_actor(unit_env)
        voter = await make_actor(unit_env)
        question = await make_question(unit_env, asker)
        await cast.execute(
            CastVoteRequest(
                actor_id=str(voter.user_id),
                votable_type=VotableType.QUESTION,
                votable_id=str(question.id),
                vote_type=VoteType.UP,
            )
        )

        # Act
        response = await retract.execute(
            RetractVoteRequest(
                actor_id=str(voter.user_id),
                votable_type=VotableType.QUESTION,
                votable_id=str(question.id),
            )
        )

        # Assert
        assert response.score == 0
        assert not response.has_upvoted and not response.has_downvoted
