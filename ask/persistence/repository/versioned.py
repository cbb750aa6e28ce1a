"""Statement helpers shared by the PostgreSQL repositories: conditional writes and LIKE escaping."""

from typing import Any, Dict, Iterable
from uuid import UUID

import logfire
from sqlalchemy import Table, delete, insert, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ask.domain.error import ConflictError


async def insert_row(
    session: AsyncSession, table: Table, values: Dict[str, Any], resource: str
) -> None:
    """Insert a row; a unique violation means a concurrent writer got there first."""
    try:
        await session.execute(insert(table).values(**values))
    except IntegrityError as e:
        logfire.warn("Insert conflict", resource=resource, error=str(e.orig))
        raise ConflictError(resource, str(values.get("id"))) from e


async def update_versioned(
    session: AsyncSession,
    table: Table,
    entity_id: UUID,
    version: int,
    values: Dict[str, Any],
    resource: str,
    exclude: Iterable[str] = (),
) -> None:
    """UPDATE ... WHERE id = :id AND version = :version, bumping the version.

    Raises:
        ConflictError: If no row matched
    """
    skipped = {"id", "version", "created_at", *exclude}
    changes = {k: v for k, v in values.items() if k not in skipped}
    stmt = (
        update(table)
        .where(table.c.id == entity_id, table.c.version == version)
        .values(**changes, version=version + 1)
    )
    result = await session.execute(stmt)
    if result.rowcount == 0:  # type: ignore[attr-defined]
        logfire.warn("Versioned update conflict", resource=resource, id=str(entity_id))
        raise ConflictError(resource, str(entity_id))


async def delete_versioned(
    session: AsyncSession, table: Table, entity_id: UUID, version: int, resource: str
) -> None:
    """DELETE ... WHERE id = :id AND version = :version.

    Raises:
        ConflictError: If no row matched
    """
    stmt = delete(table).where(table.c.id == entity_id, table.c.version == version)
    result = await session.execute(stmt)
    if result.rowcount == 0:  # type: ignore[attr-defined]
        logfire.warn("Versioned delete conflict", resource=resource, id=str(entity_id))
        raise ConflictError(resource, str(entity_id))


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally (escape char ``\\``)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
