"""PostgreSQL implementation of Tag repository."""

from typing import List, Optional
from uuid import uuid4

import logfire
from sqlalchemy import asc, desc, func, select, update
from sqlalchemy.dialects.postgresql import insert

from ask.domain.model import Tag
from ask.domain.repository.tag import TagRepository
from ask.domain.value import TagName, UserId
from ask.persistence.database import PostgresDatabase
from ask.persistence.mappers import TAG_COUNTER_FIELDS, row_to_tag, tag_to_dict
from ask.persistence.repository.versioned import update_versioned
from ask.persistence.tables import tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, database: PostgresDatabase) -> None:
        self.database = database

    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        """Find tag by name."""
        stmt = select(tags_table).where(tags_table.c.name == name.root)
        async with self.database.session() as session:
            result = await session.execute(stmt)
            row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        """Find multiple tags by names."""
        if not names:
            return []
        stmt = select(tags_table).where(tags_table.c.name.in_([n.root for n in names]))
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_all(self, limit: int = 100, offset: int = 0) -> List[Tag]:
        """Find tags, most used first."""
        stmt = (
            select(tags_table)
            .order_by(desc(tags_table.c.usage_count), asc(tags_table.c.name))
            .limit(limit)
            .offset(offset)
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def count(self) -> int:
        """Count all tags."""
        async with self.database.session() as session:
            result = await session.execute(select(func.count()).select_from(tags_table))
            return result.scalar() or 0

    async def adjust_usage(
        self, name: TagName, delta: int, created_by: Optional[UserId] = None
    ) -> None:
        """Atomically adjust usage, creating the tag on first use."""
        with logfire.span("tag_repository.adjust_usage", tag=name.root, delta=delta):
            async with self.database.session() as session:
                if delta <= 0:
                    stmt = (
                        update(tags_table)
                        .where(tags_table.c.name == name.root)
                        .values(usage_count=func.greatest(tags_table.c.usage_count + delta, 0))
                    )
                    await session.execute(stmt)
                    return

                stmt = insert(tags_table).values(
                    id=uuid4(),
                    name=name.root,
                    usage_count=delta,
                    created_by=created_by,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[tags_table.c.name],
                    set_={"usage_count": tags_table.c.usage_count + delta},
                )
                await session.execute(stmt)

    async def update(self, tag: Tag) -> Tag:
        """Replace a tag's fields if its version matches."""
        async with self.database.session() as session:
            await update_versioned(
                session,
                tags_table,
                tag.id,
                tag.version,
                tag_to_dict(tag),
                "Tag",
                exclude=("name", *TAG_COUNTER_FIELDS),
            )
        return tag.evolve(version=tag.version + 1)
