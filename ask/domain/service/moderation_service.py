"""Moderation domain service.

Admin-only operations: moderating content, banning users, broadcasting
alerts, and the read models behind the admin dashboard.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union

import logfire

from ask.config import Settings
from ask.domain.error import BusinessRuleViolationError, NotFoundError
from ask.domain.model import Answer, Question, Tag, User
from ask.domain.repository import (
    AnswerRepository,
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
    TagRepository,
    TransactionManager,
    UserFilter,
    UserRepository,
)
from ask.domain.value import (
    Actor,
    AnswerId,
    NotificationType,
    QuestionId,
    QuestionStatus,
    TagName,
    UserId,
)

from .base import TransactionalService, domain_validation
from .notification_service import NotificationService, question_link


class ModerationQueueKind(str, Enum):
    """Which content the moderation queue lists."""

    QUESTIONS = "questions"  # active questions
    ANSWERS = "answers"  # answers not yet moderated


@dataclass
class ModerationQueue:
    """One page of content awaiting moderation."""

    items: list[Union[Question, Answer]]
    total: int
    page: int
    total_pages: int


@dataclass
class UserPage:
    """One page of the admin user listing."""

    users: list[User]
    total: int
    page: int
    total_pages: int


@dataclass
class DashboardStats:
    """Site-wide totals for the admin dashboard."""

    total_users: int
    total_questions: int
    total_answers: int
    total_tags: int
    banned_users: int
    active_questions: int
    accepted_answers: int


class ModerationService(TransactionalService):
    """Domain service for administrative moderation.

    Every mutation requires an admin actor and emits exactly one
    notification to the affected user.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        tag_repository: TagRepository,
        user_repository: UserRepository,
        notification_service: NotificationService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> None:
        """Initialize moderation service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            tag_repository: Tag repository
            user_repository: User repository
            notification_service: Notification sink
            transaction_manager: Transaction boundary
            settings: Application settings
        """
        super().__init__(transaction_manager, settings)
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.tag_repository = tag_repository
        self.user_repository = user_repository
        self.notification_service = notification_service
        self.pagination = settings.pagination

    async def moderate_question(
        self,
        question_id: QuestionId,
        status: QuestionStatus,
        reason: str,
        actor: Actor,
    ) -> Question:
        """Set a question's status and record the moderation.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            NotFoundError: If the question does not exist
        """

        async def attempt() -> Question:
            self._require_admin(actor, "moderate", "question", question_id)
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                raise NotFoundError("Question", str(question_id))

            with domain_validation("question"):
                moderated = question.moderate(actor.user_id, reason).evolve(
                    status=status, updated_at=datetime.now()
                )
            saved = await self.question_repository.update(moderated)
            await self.notification_service.notify(
                recipient_id=question.author_id,
                sender_id=actor.user_id,
                type=NotificationType.MODERATION,
                title="Question Moderated",
                message=(
                    f'Your question "{question.title}" has been {status.value}. '
                    f"Reason: {reason}"
                ),
                question_id=question.id,
                link=question_link(question.id),
            )
            logfire.info(
                "Question moderated",
                question_id=str(question_id),
                status=status.value,
                moderator_id=str(actor.user_id),
            )
            return saved

        return await self._run_atomic(
            "moderation_service.moderate_question",
            attempt,
            question_id=str(question_id),
            status=status.value,
            moderator_id=str(actor.user_id),
        )

    async def moderate_answer(self, answer_id: AnswerId, reason: str, actor: Actor) -> Answer:
        """Record a moderation on an answer.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            NotFoundError: If the answer does not exist
        """

        async def attempt() -> Answer:
            self._require_admin(actor, "moderate", "answer", answer_id)
            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer:
                raise NotFoundError("Answer", str(answer_id))

            with domain_validation("answer"):
                moderated = answer.moderate(actor.user_id, reason).evolve(
                    updated_at=datetime.now()
                )
            saved = await self.answer_repository.update(moderated)
            await self.notification_service.notify(
                recipient_id=answer.author_id,
                sender_id=actor.user_id,
                type=NotificationType.MODERATION,
                title="Answer Moderated",
                message=f"Your answer has been moderated. Reason: {reason}",
                question_id=answer.question_id,
                answer_id=answer.id,
                link=question_link(answer.question_id),
            )
            logfire.info(
                "Answer moderated",
                answer_id=str(answer_id),
                moderator_id=str(actor.user_id),
            )
            return saved

        return await self._run_atomic(
            "moderation_service.moderate_answer",
            attempt,
            answer_id=str(answer_id),
            moderator_id=str(actor.user_id),
        )

    async def moderate_tag(self, tag_name: TagName, reason: str, actor: Actor) -> Tag:
        """Record a moderation on a tag.

        The tag's creator, when known, is notified.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            NotFoundError: If the tag does not exist
        """

        async def attempt() -> Tag:
            self._require_admin(actor, "moderate", "tag", tag_name)
            tag = await self.tag_repository.find_by_name(tag_name)
            if not tag:
                raise NotFoundError("Tag", tag_name.root)

            with domain_validation("tag"):
                moderated = tag.moderate(actor.user_id, reason).evolve(updated_at=datetime.now())
            saved = await self.tag_repository.update(moderated)
            if tag.created_by is not None:
                await self.notification_service.notify(
                    recipient_id=tag.created_by,
                    sender_id=actor.user_id,
                    type=NotificationType.MODERATION,
                    title="Tag Moderated",
                    message=f'Your tag "{tag.name}" has been moderated. Reason: {reason}',
                )
            logfire.info(
                "Tag moderated",
                tag=tag_name.root,
                moderator_id=str(actor.user_id),
            )
            return saved

        return await self._run_atomic(
            "moderation_service.moderate_tag",
            attempt,
            tag=tag_name.root,
            moderator_id=str(actor.user_id),
        )

    async def toggle_user_ban(
        self, user_id: UserId, reason: Optional[str], actor: Actor
    ) -> User:
        """Ban an active user or lift an existing ban.

        Banning notifies the user with an alert; unbanning is silent.

        Raises:
            NotAuthorizedError: If the actor is not an admin
            NotFoundError: If the user does not exist
            BusinessRuleViolationError: If the target is an admin
        """

        async def attempt() -> User:
            self._require_admin(actor, "ban", "user", user_id)
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                raise NotFoundError("User", str(user_id))
            if user.is_admin:
                logfire.warn(
                    "Attempt to ban admin",
                    user_id=str(user_id),
                    moderator_id=str(actor.user_id),
                )
                raise BusinessRuleViolationError("Cannot ban admin users")

            if user.is_banned:
                saved = await self.user_repository.update(
                    user.evolve(
                        is_banned=False,
                        banned_by=None,
                        banned_at=None,
                        ban_reason=None,
                        updated_at=datetime.now(),
                    )
                )
                logfire.info("User unbanned", user_id=str(user_id), moderator_id=str(actor.user_id))
                return saved

            with domain_validation("user"):
                banned = user.evolve(
                    is_banned=True,
                    banned_by=actor.user_id,
                    banned_at=datetime.now(),
                    ban_reason=reason,
                    updated_at=datetime.now(),
                )
            saved = await self.user_repository.update(banned)
            await self.notification_service.notify(
                recipient_id=user.id,
                sender_id=actor.user_id,
                type=NotificationType.ALERT,
                title="Account Banned",
                message=f"Your account has been banned. Reason: {reason or 'No reason provided'}",
            )
            logfire.info("User banned", user_id=str(user_id), moderator_id=str(actor.user_id))
            return saved

        return await self._run_atomic(
            "moderation_service.toggle_user_ban",
            attempt,
            user_id=str(user_id),
            moderator_id=str(actor.user_id),
        )

    async def send_alert(self, title: str, message: str, actor: Actor) -> int:
        """Broadcast an alert to every user that is not banned.

        Returns:
            Number of notifications sent
        """

        async def attempt() -> int:
            self._require_admin(actor, "send", "alert", "broadcast")
            users = await self.user_repository.find_active()
            for user in users:
                await self.notification_service.notify(
                    recipient_id=user.id,
                    sender_id=actor.user_id,
                    type=NotificationType.ALERT,
                    title=title,
                    message=message,
                )
            logfire.info("Alert sent", recipients=len(users), sender_id=str(actor.user_id))
            return len(users)

        return await self._run_atomic(
            "moderation_service.send_alert",
            attempt,
            sender_id=str(actor.user_id),
        )

    def _page_bounds(self, page: int, limit: Optional[int]) -> tuple[int, int]:
        limit = min(limit or self.pagination.default_limit, self.pagination.max_limit)
        return max(page, 1), max(limit, 1)

    async def get_moderation_queue(
        self,
        kind: ModerationQueueKind = ModerationQueueKind.QUESTIONS,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> ModerationQueue:
        """List content awaiting moderation, newest first."""
        page, limit = self._page_bounds(page, limit)
        with logfire.span(
            "moderation_service.get_moderation_queue", kind=kind.value, page=page, limit=limit
        ):
            offset = (page - 1) * limit
            items: list[Union[Question, Answer]]
            if kind == ModerationQueueKind.QUESTIONS:
                active = QuestionFilter(status=QuestionStatus.ACTIVE)
                items = list(
                    await self.question_repository.find_all(
                        active, QuestionSortOrder.NEWEST, limit=limit, offset=offset
                    )
                )
                total = await self.question_repository.count(active)
            else:
                items = list(
                    await self.answer_repository.find_unmoderated(limit=limit, offset=offset)
                )
                total = await self.answer_repository.count(unmoderated_only=True)

            return ModerationQueue(
                items=items,
                total=total,
                page=page,
                total_pages=-(-total // limit),
            )

    async def list_users(
        self,
        actor: Actor,
        filter: Optional[UserFilter] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> UserPage:
        """List users for administration, newest first.

        Args:
            actor: The caller; must be an admin
            filter: Username search, role and ban state; all users when omitted
            page: 1-based page number
            limit: Page size, capped at the configured maximum

        Raises:
            NotAuthorizedError: If the actor is not an admin
        """
        self._require_admin(actor, "list", "users", "all")
        filter = filter or UserFilter()
        page, limit = self._page_bounds(page, limit)

        with logfire.span(
            "moderation_service.list_users",
            admin_id=str(actor.user_id),
            search=filter.search,
            page=page,
            limit=limit,
        ):
            users = await self.user_repository.find_all(
                filter, limit=limit, offset=(page - 1) * limit
            )
            total = await self.user_repository.count(filter)
            logfire.info("Users listed", count=len(users), total=total)
            return UserPage(
                users=users,
                total=total,
                page=page,
                total_pages=-(-total // limit),
            )

    async def get_dashboard_stats(self) -> DashboardStats:
        """Collect site-wide totals."""
        with logfire.span("moderation_service.get_dashboard_stats"):
            stats = DashboardStats(
                total_users=await self.user_repository.count(),
                total_questions=await self.question_repository.count(QuestionFilter()),
                total_answers=await self.answer_repository.count(),
                total_tags=await self.tag_repository.count(),
                banned_users=await self.user_repository.count(UserFilter(is_banned=True)),
                active_questions=await self.question_repository.count(
                    QuestionFilter(status=QuestionStatus.ACTIVE)
                ),
                accepted_answers=await self.answer_repository.count(accepted_only=True),
            )
            logfire.info("Dashboard stats collected", **vars(stats))
            return stats
