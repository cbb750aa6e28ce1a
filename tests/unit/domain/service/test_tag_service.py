"""Unit tests for TagService."""

import pytest

from ask.domain.error import NotFoundError, ValidationError
from ask.domain.service import TagService
from ask.domain.value import TagName
from tests.conftest import make_actor, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestTagLookup:
    """Tests for get_tag and get_all_tags."""

    @pytest.mark.asyncio
    async def test_most_used_first(self, unit_env):
        # Arrange
        tag_service = await unit_env.get(TagService)
        asker = await make_actor(unit_env)
        await make_question(unit_env, asker, tags=["python", "asyncio"])
        await make_question(unit_env, asker, tags=["python"])

        # Act
        tags = await tag_service.get_all_tags()

        # Assert
        assert [(t.name.root, t.usage_count) for t in tags] == [
            ("python", 2),
            ("asyncio", 1),
        ]

    @pytest.mark.asyncio
    async def test_get_tag(self, unit_env):
        """Lookups are by normalised name."""
        # Arrange
        tag_service = await unit_env.get(TagService)
        asker = await make_actor(unit_env)
        await make_question(unit_env, asker, tags=["Rust"])

        # Act
        tag = await tag_service.get_tag(TagName("RUST"))

        # Assert
        assert tag.usage_count == 1
        assert tag.created_by == asker.user_id
        with pytest.raises(NotFoundError):
            await tag_service.get_tag(TagName("haskell"))


class TestNormalizeTags:
    """Tests for normalize_tags."""

    def test_duplicates_collapse_in_order(self):
        names = TagService.normalize_tags(["SQL", " python ", "sql"])

        assert [n.root for n in names] == ["sql", "python"]

    def test_bad_name_is_a_domain_error(self):
        with pytest.raises(ValidationError, match="Invalid tag"):
            TagService.normalize_tags(["python", "no spaces allowed"])

    def test_empty_list_is_rejected(self):
        with pytest.raises(ValidationError):
            TagService.normalize_tags([])
