"""PostgreSQL implementation of User repository."""

from typing import List, Optional

import logfire
from sqlalchemy import asc, desc, func, select
from sqlalchemy.sql import Select

from ask.domain.model import User
from ask.domain.repository.user import UserFilter, UserRepository
from ask.domain.value import UserId
from ask.persistence.database import PostgresDatabase
from ask.persistence.mappers import row_to_user, user_to_dict
from ask.persistence.repository.versioned import escape_like, insert_row, update_versioned
from ask.persistence.tables import users_table

RESOURCE = "User"


def _apply_filter(stmt: Select, filter: UserFilter) -> Select:
    if filter.search:
        pattern = f"%{escape_like(filter.search)}%"
        stmt = stmt.where(users_table.c.username.ilike(pattern, escape="\\"))
    if filter.role is not None:
        stmt = stmt.where(users_table.c.role == filter.role.value)
    if filter.is_banned is not None:
        stmt = stmt.where(users_table.c.is_banned.is_(filter.is_banned))
    return stmt
class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, database: PostgresDatabase) -> None:
        """Initialize repository.

        Args:
            database: Transaction manager providing sessions
        """
        self.database = database

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        with logfire.span("user_repository.find_by_id", user_id=str(user_id)):
            stmt = select(users_table).where(users_table.c.id == user_id)
            async with self.database.session() as session:
                result = await session.execute(stmt)
                row = result.fetchone()
            return row_to_user(row._asdict()) if row else None

    async def find_all(
        self, filter: UserFilter, limit: int = 20, offset: int = 0
    ) -> List[User]:
        """Find users matching the filter, newest first."""
        with logfire.span(
            "user_repository.find_all",
            search=filter.search,
            role=filter.role.value if filter.role else None,
            is_banned=filter.is_banned,
            limit=limit,
            offset=offset,
        ):
            stmt = (
                _apply_filter(select(users_table), filter)
                .order_by(desc(users_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            async with self.database.session() as session:
                result = await session.execute(stmt)
                rows = result.fetchall()
            return [row_to_user(row._asdict()) for row in rows]

    async def find_active(self) -> List[User]:
        """Find every user that is not banned."""
        stmt = (
            select(users_table)
            .where(users_table.c.is_banned.is_(False))
            .order_by(asc(users_table.c.created_at))
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def count(self, filter: Optional[UserFilter] = None) -> int:
        """Count users."""
        stmt = select(func.count()).select_from(users_table)
        if filter is not None:
            stmt = _apply_filter(stmt, filter)
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    async def add(self, user: User) -> User:
        """Insert a new user."""
        with logfire.span("user_repository.add", username=user.username):
            async with self.database.session() as session:
                await insert_row(session, users_table, user_to_dict(user), RESOURCE)
            return user

    async def update(self, user: User) -> User:
        """Replace a user if its version matches."""
        async with self.database.session() as session:
            await update_versioned(
                session, users_table, user.id, user.version, user_to_dict(user), RESOURCE
            )
        return user.evolve(version=user.version + 1)
