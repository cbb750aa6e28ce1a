"""Answer entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ask.domain.model.votable import Votable
from ask.domain.value import AnswerId, CommentId, QuestionId, UserId


class Answer(Votable):
    """Answer to a question.

    Acceptance metadata is all-or-nothing: an accepted answer records when
    and by whom it was accepted, and an unaccepted answer records neither.
    """

    id: AnswerId
    question_id: QuestionId
    content: str = Field(min_length=1)
    comment_ids: tuple[CommentId, ...] = ()
    is_accepted: bool = False
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[UserId] = None

    @model_validator(mode="after")
    def validate_acceptance(self) -> "Answer":
        """Validate that acceptance metadata matches is_accepted."""
        has_metadata = self.accepted_at is not None or self.accepted_by is not None
        if self.is_accepted and (self.accepted_at is None or self.accepted_by is None):
            raise ValueError("Accepted answers require accepted_at and accepted_by")
        if not self.is_accepted and has_metadata:
            raise ValueError("Unaccepted answers cannot carry acceptance metadata")
        return self

    def accept(self, accepted_by: UserId) -> "Answer":
        """Return an accepted copy stamped with fresh metadata."""
        return self.evolve(
            is_accepted=True,
            accepted_at=datetime.now(),
            accepted_by=accepted_by,
        )

    def unaccept(self) -> "Answer":
        """Return a copy with acceptance cleared."""
        return self.evolve(is_accepted=False, accepted_at=None, accepted_by=None)
