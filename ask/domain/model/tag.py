"""Tag entity for categorizing questions."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ask.domain.model.common import Moderatable, Versioned
from ask.domain.value import TagId, TagName, UserId


class Tag(Versioned, Moderatable):
    """Tag entity for categorizing questions.

    Questions carry 1-5 tags. ``usage_count`` tracks how many questions use
    the tag and is only changed through atomic repository increments.
    """

    id: TagId
    name: TagName  # Unique, lowercase, alphanumeric + hyphens
    description: Optional[str] = Field(default=None, max_length=200)
    usage_count: int = Field(default=0, ge=0)
    created_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
