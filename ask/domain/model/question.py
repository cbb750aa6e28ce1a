"""Question aggregate root.

Questions own the ordered list of their answer ids and point at the accepted
answer, if any.
"""

from typing import Optional

from pydantic import Field, field_validator, model_validator

from ask.domain.model.votable import Votable
from ask.domain.value import AnswerId, QuestionId, QuestionStatus, TagName


class Question(Votable):
    """Question aggregate root.

    ``accepted_answer_id`` always refers to one of ``answer_ids``; the answer
    side of the link is kept in step by the acceptance service.
    """

    id: QuestionId
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    tags: tuple[TagName, ...] = Field(min_length=1, max_length=5)
    answer_ids: tuple[AnswerId, ...] = ()
    accepted_answer_id: Optional[AnswerId] = None
    status: QuestionStatus = QuestionStatus.ACTIVE
    views: int = Field(default=0, ge=0)

    @field_validator("tags")
    @classmethod
    def validate_unique_tags(cls, v: tuple[TagName, ...]) -> tuple[TagName, ...]:
        """Tag names must not repeat."""
        if len(set(v)) != len(v):
            raise ValueError("Question tags must be unique")
        return v

    @model_validator(mode="after")
    def validate_accepted_answer(self) -> "Question":
        """The accepted answer must be one of this question's answers."""
        if self.accepted_answer_id is not None and self.accepted_answer_id not in self.answer_ids:
            raise ValueError("Accepted answer must belong to the question")
        return self

    @property
    def answer_count(self) -> int:
        return len(self.answer_ids)

    @property
    def tag_names(self) -> list[str]:
        return [tag.root for tag in self.tags]
