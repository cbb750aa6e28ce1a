"""Domain services."""

from .acceptance_service import AcceptanceService
from .answer_service import AnswerService
from .base import Service, TransactionalService
from .cascade_service import CascadeService
from .comment_service import CommentService
from .moderation_service import (
    DashboardStats,
    ModerationQueue,
    ModerationQueueKind,
    ModerationService,
    UserPage,
)
from .notification_service import NotificationPage, NotificationService
from .question_service import QuestionDetail, QuestionPage, QuestionService
from .tag_service import TagService
from .user_service import UserService
from .vote_service import VoteService

__all__ = [
    "AcceptanceService",
    "AnswerService",
    "CascadeService",
    "CommentService",
    "DashboardStats",
    "ModerationQueue",
    "ModerationQueueKind",
    "ModerationService",
    "NotificationPage",
    "NotificationService",
    "QuestionDetail",
    "QuestionPage",
    "QuestionService",
    "Service",
    "TagService",
    "TransactionalService",
    "UserPage",
    "UserService",
    "VoteService",
]
