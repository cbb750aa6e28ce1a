"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ask.domain.model.user import User
from ask.domain.value import UserId, UserRole
from ask.domain.value.common import ValueObject


class UserFilter(ValueObject):
    """Criteria for the admin user listing.

    ``None`` fields do not filter. ``search`` matches the username
    case-insensitively.
    """

    search: Optional[str] = None
    role: Optional[UserRole] = None
    is_banned: Optional[bool] = None


class UserRepository(ABC):
    """Repository for User aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self, filter: UserFilter, limit: int = 20, offset: int = 0
    ) -> List[User]:
        """Find users matching the filter, newest first."""
        pass

    @abstractmethod
    async def find_active(self) -> List[User]:
        """Find every user that is not banned."""
        pass

    @abstractmethod
    async def count(self, filter: Optional[UserFilter] = None) -> int:
        """Count users matching the filter (all users when omitted)."""
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        """Insert a new user."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Replace a user if its stored version still matches.

        Raises:
            ConflictError: If the user changed or vanished since it was read
        """
        pass
