"""In-memory implementation of Tag repository for testing."""

from typing import Optional
from uuid import uuid4

from ask.domain.model.tag import Tag
from ask.domain.repository.tag import TagRepository
from ask.domain.value import TagId, TagName, UserId
from ask.persistence.repository.inmemory.database import InMemoryDatabase

TABLE = "tags"


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing.

    Rows are keyed by tag name, which is unique.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        """Find tag by name."""
        return self.database.get(TABLE, name.root)

    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        """Find multiple tags by names."""
        tags = []
        for name in names:
            tag = await self.find_by_name(name)
            if tag:
                tags.append(tag)
        return tags

    async def find_all(self, limit: int = 100, offset: int = 0) -> list[Tag]:
        """Find tags, most used first."""
        tags = sorted(self.database.scan(TABLE), key=lambda t: t.name.root)
        tags.sort(key=lambda t: t.usage_count, reverse=True)
        return tags[offset : offset + limit]

    async def count(self) -> int:
        """Count all tags."""
        return len(self.database.scan(TABLE))

    async def adjust_usage(
        self, name: TagName, delta: int, created_by: Optional[UserId] = None
    ) -> None:
        """Atomically adjust usage, creating the tag on first use."""

        def adjust(tables: dict) -> None:
            rows = tables.setdefault(TABLE, {})
            tag = rows.get(name.root)
            if tag is None:
                if delta > 0:
                    rows[name.root] = Tag(
                        id=TagId(uuid4()),
                        name=name,
                        usage_count=delta,
                        created_by=created_by,
                    )
                return
            rows[name.root] = tag.model_copy(
                update={"usage_count": max(tag.usage_count + delta, 0)}
            )

        self.database.atomic(adjust)

    async def update(self, tag: Tag) -> Tag:
        """Replace a tag if its version matches."""
        return self.database.replace(TABLE, tag.name.root, tag)
