"""Comment entity.

Comments hang off an answer and may reply to another comment on the same
answer. Each comment owns the ids of its direct replies.
"""

from typing import Optional

from pydantic import Field

from ask.domain.model.votable import Votable
from ask.domain.value import AnswerId, CommentId


class Comment(Votable):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - reply_ids: Direct replies, in creation order
    """

    id: CommentId
    answer_id: AnswerId
    content: str = Field(min_length=1, max_length=500)
    parent_id: Optional[CommentId] = None
    reply_ids: tuple[CommentId, ...] = ()
