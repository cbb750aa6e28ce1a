"""Base model for content users can vote on.

Votes live on the entity itself as two disjoint sets of voter ids. The score
is derived from the sets, so it cannot drift from them.
"""

from datetime import datetime
from typing import Optional, TypeVar

from pydantic import Field, computed_field, model_validator

from ask.domain.model.common import Moderatable, Versioned
from ask.domain.value import UserId, VoteType

V = TypeVar("V", bound="Votable")


class Votable(Versioned, Moderatable):
    """Shared shape of Question, Answer and Comment."""

    author_id: UserId
    upvoters: frozenset[UserId] = Field(default_factory=frozenset)
    downvoters: frozenset[UserId] = Field(default_factory=frozenset)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def score(self) -> int:
        """Net score: upvotes minus downvotes."""
        return len(self.upvoters) - len(self.downvoters)

    @model_validator(mode="after")
    def validate_vote_sets(self) -> "Votable":
        """A user votes at most once, and never on their own content."""
        if self.upvoters & self.downvoters:
            raise ValueError("A user cannot both upvote and downvote the same entity")
        if self.author_id in self.upvoters or self.author_id in self.downvoters:
            raise ValueError("Authors cannot vote on their own content")
        return self

    def vote_of(self, user_id: UserId) -> Optional[VoteType]:
        """Return the vote ``user_id`` currently holds, if any."""
        if user_id in self.upvoters:
            return VoteType.UP
        if user_id in self.downvoters:
            return VoteType.DOWN
        return None

    def with_vote(self: V, user_id: UserId, vote_type: VoteType) -> V:
        """Return a copy where ``user_id`` holds exactly ``vote_type``."""
        if vote_type == VoteType.UP:
            return self.evolve(
                upvoters=self.upvoters | {user_id},
                downvoters=self.downvoters - {user_id},
            )
        return self.evolve(
            upvoters=self.upvoters - {user_id},
            downvoters=self.downvoters | {user_id},
        )

    def without_vote(self: V, user_id: UserId) -> V:
        """Return a copy where ``user_id`` holds no vote."""
        return self.evolve(
            upvoters=self.upvoters - {user_id},
            downvoters=self.downvoters - {user_id},
        )
