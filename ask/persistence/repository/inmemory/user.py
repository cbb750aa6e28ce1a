"""In-memory user repository for testing."""

from typing import Optional

from ask.domain.model.user import User
from ask.domain.repository.user import UserFilter, UserRepository
from ask.domain.value import UserId
from ask.persistence.repository.inmemory.database import InMemoryDatabase

TABLE = "users"


def _matches(user: User, filter: UserFilter) -> bool:
    if filter.search and filter.search.lower() not in user.username.lower():
        return False
    if filter.role is not None and user.role != filter.role:
        return False
    if filter.is_banned is not None and user.is_banned != filter.is_banned:
        return False
    return True


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.database.get(TABLE, user_id)

    async def find_all(
        self, filter: UserFilter, limit: int = 20, offset: int = 0
    ) -> list[User]:
        """Find users matching the filter, newest first."""
        users = [u for u in self.database.scan(TABLE) if _matches(u, filter)]
        users.sort(key=lambda u: u.created_at, reverse=True)
        return users[offset : offset + limit]

    async def find_active(self) -> list[User]:
        """Find every user that is not banned."""
        users = [u for u in self.database.scan(TABLE) if not u.is_banned]
        users.sort(key=lambda u: u.created_at)
        return users

    async def count(self, filter: Optional[UserFilter] = None) -> int:
        """Count users."""
        users = self.database.scan(TABLE)
        if filter is not None:
            users = [u for u in users if _matches(u, filter)]
        return len(users)

    async def add(self, user: User) -> User:
        """Insert a new user."""
        return self.database.insert(TABLE, user.id, user)

    async def update(self, user: User) -> User:
        """Replace a user if its version matches."""
        return self.database.replace(TABLE, user.id, user)
