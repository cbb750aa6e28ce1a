"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from ask.domain.model import Answer, Comment, Notification, Question, Tag, User
from ask.domain.model.votable import Votable
from ask.domain.value import TagName

# Fields owned by atomic counters; never part of a versioned UPDATE.
QUESTION_COUNTER_FIELDS = ("views",)
TAG_COUNTER_FIELDS = ("usage_count",)


def _votes_to_dict(entity: Votable) -> Dict[str, Any]:
    return {
        "upvoters": sorted(entity.upvoters),
        "downvoters": sorted(entity.downvoters),
        "score": entity.score,
    }


def _votes_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "upvoters": frozenset(row.get("upvoters") or ()),
        "downvoters": frozenset(row.get("downvoters") or ()),
    }


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(**row)


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump(mode="python")
    data["role"] = user.role.value
    return data


def row_to_question(row: Dict[str, Any]) -> Question:
    """Convert database row to Question domain model.

    Args:
        row: Database row as dict

    Returns:
        Question domain model
    """
    data = {k: v for k, v in row.items() if k != "score"}
    data.update(_votes_from_row(row))
    data["tags"] = tuple(TagName(name) for name in row["tags"])
    data["answer_ids"] = tuple(row.get("answer_ids") or ())
    return Question(**data)


def question_to_dict(question: Question) -> Dict[str, Any]:
    """Convert Question domain model to database dict.

    Args:
        question: Question domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = question.model_dump(mode="python", exclude={"upvoters", "downvoters", "score"})
    data["tags"] = question.tag_names
    data["answer_ids"] = list(question.answer_ids)
    data["status"] = question.status.value
    data.update(_votes_to_dict(question))
    return data


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer domain model."""
    data = {k: v for k, v in row.items() if k != "score"}
    data.update(_votes_from_row(row))
    data["comment_ids"] = tuple(row.get("comment_ids") or ())
    return Answer(**data)


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert Answer domain model to database dict."""
    data = answer.model_dump(mode="python", exclude={"upvoters", "downvoters", "score"})
    data["comment_ids"] = list(answer.comment_ids)
    data.update(_votes_to_dict(answer))
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    data = {k: v for k, v in row.items() if k != "score"}
    data.update(_votes_from_row(row))
    data["reply_ids"] = tuple(row.get("reply_ids") or ())
    return Comment(**data)


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    data = comment.model_dump(mode="python", exclude={"upvoters", "downvoters", "score"})
    data["reply_ids"] = list(comment.reply_ids)
    data.update(_votes_to_dict(comment))
    return data


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(**row)


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump(mode="python")
    data["type"] = notification.type.value
    return data


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    return Tag(**{**row, "name": TagName(row["name"])})


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    data = tag.model_dump(mode="python")
    data["name"] = tag.name.root
    return data
