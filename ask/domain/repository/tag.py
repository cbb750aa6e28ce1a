"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ask.domain.model.tag import Tag
from ask.domain.value import TagName, UserId


class TagRepository(ABC):
    """Repository interface for Tag entities.

    ``usage_count`` is only changed through ``adjust_usage``, an atomic
    storage-level increment that never conflicts. ``update`` covers the
    remaining fields and is conditional on ``tag.version``.
    """

    @abstractmethod
    async def find_by_name(self, name: TagName) -> Optional[Tag]:
        """Find tag by name.

        Args:
            name: Tag name

        Returns:
            Tag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        """Find multiple tags by names in a single query.

        Args:
            names: List of tag names

        Returns:
            List of found tags (may be fewer than requested if some don't exist)
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100, offset: int = 0) -> List[Tag]:
        """Find tags, most used first."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all tags."""
        pass

    @abstractmethod
    async def adjust_usage(
        self, name: TagName, delta: int, created_by: Optional[UserId] = None
    ) -> None:
        """Atomically add ``delta`` to a tag's usage count, floored at 0.

        A missing tag is created (owned by ``created_by``) when ``delta`` is
        positive; a negative delta on a missing tag does nothing.

        Args:
            name: Tag name
            delta: Change to apply
            created_by: Owner recorded if the tag has to be created
        """
        pass

    @abstractmethod
    async def update(self, tag: Tag) -> Tag:
        """Replace a tag's fields (except usage_count) if its version matches.

        Raises:
            ConflictError: If the tag changed or vanished since it was read
        """
        pass
