"""Domain model entities for the forum."""

from ask.domain.model.answer import Answer
from ask.domain.model.comment import Comment
from ask.domain.model.notification import Notification
from ask.domain.model.question import Question
from ask.domain.model.tag import Tag
from ask.domain.model.user import User
from ask.domain.model.votable import Votable

__all__ = [
    "User",
    "Question",
    "Answer",
    "Comment",
    "Notification",
    "Tag",
    "Votable",
]
