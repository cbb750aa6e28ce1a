"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from ask.domain.value.common import RootValueObject, ValueObject
from ask.domain.value.identifiers import UserId


class VoteType(str, Enum):
    """Direction of a vote."""

    UP = "up"
    DOWN = "down"

    @property
    def opposite(self) -> "VoteType":
        """The vote a user gives up by casting this one."""
        return VoteType.DOWN if self is VoteType.UP else VoteType.UP


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    QUESTION = "question"
    ANSWER = "answer"
    COMMENT = "comment"


class QuestionStatus(str, Enum):
    """Moderation status of a question."""

    ACTIVE = "active"
    CLOSED = "closed"
    DUPLICATE = "duplicate"
    OFF_TOPIC = "off-topic"


class NotificationType(str, Enum):
    """What a notification is about."""

    ANSWER = "answer"
    COMMENT = "comment"
    MENTION = "mention"
    VOTE = "vote"
    ACCEPT = "accept"
    MODERATION = "moderation"
    ALERT = "alert"


class UserRole(str, Enum):
    """Role resolved by the authentication boundary."""

    ADMIN = "admin"
    MEMBER = "member"


class TagName(RootValueObject[str]):
    """Tag name for categorizing questions.

    Input is trimmed and lowercased; the result must be 2-20 characters of
    letters, digits and hyphens.
    Examples: 'python', 'asyncio', 'machine-learning'
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_tag_name(cls, v: object) -> object:
        """Trim and lowercase raw input."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name format."""
        if not re.match(r"^[a-z0-9-]{2,20}$", v):
            raise ValueError(
                "Tag name must be 2-20 characters, lowercase, alphanumeric with hyphens"
            )
        return v


class Actor(ValueObject):
    """Caller identity resolved by the authentication boundary.

    Every mutating operation receives one explicitly, so authorization is
    checked inside the operation rather than assumed from the caller.
    """

    user_id: UserId
    role: UserRole = UserRole.MEMBER
    is_banned: bool = False

    @property
    def is_admin(self) -> bool:
        """Whether the actor holds moderator privileges."""
        return self.role == UserRole.ADMIN
