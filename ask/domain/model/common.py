"""Base models shared by all domain entities."""

from datetime import datetime
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ask.domain.value import UserId

M = TypeVar("M", bound="DomainModel")


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )

    def evolve(self: M, **changes: Any) -> M:
        """Return a validated copy with ``changes`` applied.

        Unlike ``model_copy(update=...)`` this re-runs validation, so a copy
        can never break the model's invariants.
        """
        return type(self)(**{**dict(self), **changes})


class Versioned(DomainModel):
    """Entity guarded by optimistic concurrency.

    Repositories only accept an update or delete when the stored version
    matches ``version``; a successful update stores ``version + 1``.
    """

    version: int = Field(default=1, ge=1)


class Moderatable(DomainModel):
    """Entity carrying administrative moderation fields."""

    is_moderated: bool = False
    moderated_by: Optional[UserId] = None
    moderated_at: Optional[datetime] = None
    moderation_reason: Optional[str] = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def validate_moderation_fields(self) -> "Moderatable":
        """A moderated entity records who moderated it and when."""
        if self.is_moderated and (self.moderated_by is None or self.moderated_at is None):
            raise ValueError("Moderated entities require moderated_by and moderated_at")
        return self

    def moderate(self: M, moderator: UserId, reason: str) -> M:
        """Return a copy marked as moderated by ``moderator``."""
        return self.evolve(
            is_moderated=True,
            moderated_by=moderator,
            moderated_at=datetime.now(),
            moderation_reason=reason,
        )
