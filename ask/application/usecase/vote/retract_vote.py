"""Retract vote use case."""

from uuid import UUID

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.application.usecase.vote.cast_vote import VoteResponse
from ask.domain.service import VoteService
from ask.domain.value import VotableType


class RetractVoteRequest(ActorRequest):
    """Retract vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string


class RetractVoteUseCase(BaseUseCase):
    """Use case for removing the caller's vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize retract vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RetractVoteRequest) -> VoteResponse:
        """Execute retract vote flow.

        Retracting without a vote is not an error; the score is unchanged.

        Raises:
            NotFoundError: If the entity does not exist
        """
        score = await self.vote_service.retract_vote(
            request.votable_type, UUID(request.votable_id), request.actor()
        )
        return VoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            score=score,
            has_upvoted=False,
            has_downvoted=False,
        )
