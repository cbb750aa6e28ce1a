"""Base service classes for domain services."""

import asyncio
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

import logfire
from pydantic import ValidationError as PydanticValidationError

from ask.config import Settings
from ask.domain.error import (
    ConflictError,
    NotAuthorizedError,
    TransientStoreError,
    ValidationError,
)
from ask.domain.repository import TransactionManager
from ask.domain.value import Actor, UserId

T = TypeVar("T")


@contextmanager
def domain_validation(resource: str) -> Iterator[None]:
    """Re-raise model validation failures as the domain's ValidationError."""
    try:
        yield
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or resource
        logfire.warn("Invalid input", resource=resource, field=field, error=error["msg"])
        raise ValidationError(f"Invalid {resource} {field}: {error['msg']}") from e


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


class TransactionalService(Service):
    """Service whose mutations run as retried atomic units.

    ``_run_atomic`` wraps one attempt of an operation in a transaction. A
    ``ConflictError`` re-runs the attempt from scratch (fresh reads); a
    ``TransientStoreError`` re-runs it after an exponential backoff. Once the
    configured retries are spent the error propagates unchanged.
    """

    def __init__(self, transaction_manager: TransactionManager, settings: Settings) -> None:
        self.transaction_manager = transaction_manager
        self.consistency = settings.consistency

    async def _run_atomic(
        self,
        span_name: str,
        operation: Callable[[], Awaitable[T]],
        **attributes: Any,
    ) -> T:
        """Run ``operation`` atomically, retrying conflicts and transient failures.

        When called inside an open transaction the operation joins it and any
        error goes to the outermost caller, which owns the retry.

        Args:
            span_name: Logfire span name, ``service.operation``
            operation: Zero-argument coroutine function performing one attempt
            **attributes: Span attributes

        Returns:
            The operation's result
        """
        with logfire.span(span_name, **attributes):
            if self.transaction_manager.in_transaction():
                return await operation()

            conflicts = 0
            transients = 0
            while True:
                try:
                    async with self.transaction_manager.transaction():
                        return await operation()
                except ConflictError as e:
                    if conflicts >= self.consistency.conflict_retries:
                        logfire.error(
                            "Conflict retries exhausted",
                            operation=span_name,
                            resource=e.resource,
                            resource_id=e.resource_id,
                            attempts=conflicts + 1,
                        )
                        raise
                    conflicts += 1
                    logfire.info(
                        "Concurrent modification, retrying",
                        operation=span_name,
                        resource=e.resource,
                        resource_id=e.resource_id,
                        attempt=conflicts,
                    )
                except TransientStoreError as e:
                    if transients >= self.consistency.transient_retries:
                        logfire.error(
                            "Transient store retries exhausted",
                            operation=span_name,
                            error=str(e),
                            attempts=transients + 1,
                        )
                        raise
                    delay = min(
                        self.consistency.backoff_base_seconds * 2**transients,
                        self.consistency.backoff_max_seconds,
                    )
                    transients += 1
                    logfire.warn(
                        "Transient store failure, backing off",
                        operation=span_name,
                        error=str(e),
                        attempt=transients,
                        delay_seconds=delay,
                    )
                    await asyncio.sleep(delay)

    @staticmethod
    def _require_active(actor: Actor, action: str, resource: str, resource_id: object) -> None:
        """Reject banned actors."""
        if actor.is_banned:
            logfire.warn(
                "Banned user attempted mutation",
                user_id=str(actor.user_id),
                action=action,
                resource=resource,
            )
            raise NotAuthorizedError(action, resource, str(resource_id), str(actor.user_id))

    @classmethod
    def _require_owner_or_admin(
        cls,
        actor: Actor,
        owner_id: UserId,
        action: str,
        resource: str,
        resource_id: object,
    ) -> None:
        """Allow the owner of a resource or an admin."""
        cls._require_active(actor, action, resource, resource_id)
        if actor.user_id != owner_id and not actor.is_admin:
            logfire.warn(
                "Unauthorized mutation attempt",
                user_id=str(actor.user_id),
                owner_id=str(owner_id),
                action=action,
                resource=resource,
                resource_id=str(resource_id),
            )
            raise NotAuthorizedError(action, resource, str(resource_id), str(actor.user_id))

    @classmethod
    def _require_admin(cls, actor: Actor, action: str, resource: str, resource_id: object) -> None:
        """Allow admins only."""
        cls._require_active(actor, action, resource, resource_id)
        if not actor.is_admin:
            logfire.warn(
                "Non-admin attempted moderation",
                user_id=str(actor.user_id),
                action=action,
                resource=resource,
                resource_id=str(resource_id),
            )
            raise NotAuthorizedError(action, resource, str(resource_id), str(actor.user_id))
