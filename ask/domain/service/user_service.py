"""User domain service."""

from uuid import uuid4

import logfire

from ask.domain.error import NotFoundError
from ask.domain.model import User
from ask.domain.repository import UserRepository
from ask.domain.value import Actor, UserId, UserRole

from .base import Service


class UserService(Service):
    """Domain service for user operations.

    Account creation and credentials belong to the authentication boundary;
    this service registers the resulting identities and resolves them into
    actors.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def register_user(self, username: str, role: UserRole = UserRole.MEMBER) -> User:
        """Record a user created by the authentication boundary.

        Args:
            username: Display name
            role: Role granted at sign-up

        Returns:
            The stored user
        """
        with logfire.span("user_service.register_user", username=username, role=role.value):
            user = await self.user_repository.add(
                User(id=UserId(uuid4()), username=username, role=role)
            )
            logfire.info("User registered", user_id=str(user.id), role=role.value)
            return user

    async def get_user(self, user_id: UserId) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        with logfire.span("user_service.get_user", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def resolve_actor(self, user_id: UserId) -> Actor:
        """Build the caller identity for a stored user."""
        user = await self.get_user(user_id)
        return user.as_actor()
