"""Tag domain service."""

from typing import Iterable, Optional

import logfire
from pydantic import ValidationError as PydanticValidationError

from ask.domain.error import NotFoundError, ValidationError
from ask.domain.model import Tag
from ask.domain.repository import TagRepository
from ask.domain.value import TagName, UserId

from .base import Service

MAX_TAGS_PER_QUESTION = 5


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(self, tag_repository: TagRepository) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
        """
        self.tag_repository = tag_repository

    @staticmethod
    def normalize_tags(raw_tags: Iterable[str]) -> tuple[TagName, ...]:
        """Turn user input into the tag tuple of a question.

        Names are trimmed and lowercased, duplicates collapse in first-seen
        order, and the result must hold 1-5 tags.

        Raises:
            ValidationError: If a name is malformed or the count is out of range
        """
        names: list[TagName] = []
        for raw in raw_tags:
            try:
                name = TagName(raw)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid tag {raw!r}: {e.errors()[0]['msg']}") from e
            if name not in names:
                names.append(name)

        if not 1 <= len(names) <= MAX_TAGS_PER_QUESTION:
            raise ValidationError(
                f"Questions need between 1 and {MAX_TAGS_PER_QUESTION} tags, got {len(names)}"
            )
        return tuple(names)

    async def get_tag(self, name: TagName) -> Tag:
        """Get a tag by name.

        Raises:
            NotFoundError: If the tag does not exist
        """
        with logfire.span("tag_service.get_tag", tag=name.root):
            tag = await self.tag_repository.find_by_name(name)
            if not tag:
                logfire.warn("Tag not found", tag=name.root)
                raise NotFoundError("Tag", name.root)
            return tag

    async def get_all_tags(self, limit: int = 100, offset: int = 0) -> list[Tag]:
        """Get tags, most used first.

        Args:
            limit: Maximum number of tags to return
            offset: Number of tags to skip

        Returns:
            List of tags
        """
        with logfire.span("tag_service.get_all_tags", limit=limit, offset=offset):
            tags = await self.tag_repository.find_all(limit=limit, offset=offset)
            logfire.info("Tags retrieved", count=len(tags))
            return tags

    async def record_usage(
        self,
        added: Iterable[TagName],
        removed: Iterable[TagName] = (),
        created_by: Optional[UserId] = None,
    ) -> None:
        """Adjust usage counters for tags a question gained or lost.

        Must run inside the caller's atomic operation.
        """
        for name in added:
            await self.tag_repository.adjust_usage(name, 1, created_by=created_by)
        for name in removed:
            await self.tag_repository.adjust_usage(name, -1)
