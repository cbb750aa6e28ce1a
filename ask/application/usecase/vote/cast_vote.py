"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.domain.service import VoteService
from ask.domain.value import VotableType, VoteType


class CastVoteRequest(ActorRequest):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    vote_type: VoteType


class VoteResponse(BaseModel):
    """Vote state of an entity after a vote change."""

    votable_type: VotableType
    votable_id: str
    score: int
    has_upvoted: bool
    has_downvoted: bool


class CastVoteUseCase(BaseUseCase):
    """Use case for upvoting or downvoting a question, answer or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> VoteResponse:
        """Execute cast vote flow.

        Raises:
            NotFoundError: If the entity does not exist
            SelfVoteError: If the caller authored the entity
        """
        score = await self.vote_service.cast_vote(
            request.votable_type,
            UUID(request.votable_id),
            request.actor(),
            request.vote_type,
        )
        return VoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            score=score,
            has_upvoted=request.vote_type == VoteType.UP,
            has_downvoted=request.vote_type == VoteType.DOWN,
        )
