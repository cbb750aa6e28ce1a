"""Strongly typed identifiers for forum entities.

NewType wrappers keep a QuestionId from being passed where an AnswerId is
expected, at no runtime cost.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
QuestionId = NewType("QuestionId", UUID)
AnswerId = NewType("AnswerId", UUID)
CommentId = NewType("CommentId", UUID)
NotificationId = NewType("NotificationId", UUID)
TagId = NewType("TagId", UUID)
