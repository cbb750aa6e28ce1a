"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from ask.domain.value import Actor, UserId, UserRole


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class ActorRequest(BaseModel):
    """Request made on behalf of an authenticated caller.

    The authentication boundary resolves the caller and fills these fields.
    """

    actor_id: str  # User ID from authenticated user
    actor_role: UserRole = UserRole.MEMBER
    actor_banned: bool = False

    def actor(self) -> Actor:
        """Caller identity for domain services."""
        return Actor(
            user_id=UserId(UUID(self.actor_id)),
            role=self.actor_role,
            is_banned=self.actor_banned,
        )
