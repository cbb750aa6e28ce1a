"""User aggregate root.

Accounts are created by the authentication boundary; the core only reads
them for roles and maintains the ban fields.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ask.domain.model.common import Versioned
from ask.domain.value import Actor, UserId, UserRole


class User(Versioned):
    """User aggregate root."""

    id: UserId
    username: str = Field(min_length=3, max_length=30)
    role: UserRole = UserRole.MEMBER
    is_banned: bool = False
    banned_by: Optional[UserId] = None
    banned_at: Optional[datetime] = None
    ban_reason: Optional[str] = Field(default=None, max_length=200)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_ban(self) -> "User":
        """Admins cannot carry a ban."""
        if self.is_banned and self.role == UserRole.ADMIN:
            raise ValueError("Admin users cannot be banned")
        return self

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def as_actor(self) -> Actor:
        """Identity of this user as a caller."""
        return Actor(user_id=self.id, role=self.role, is_banned=self.is_banned)
