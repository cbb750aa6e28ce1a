"""Question domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional
from uuid import uuid4

import logfire

from ask.config import Settings
from ask.domain.error import NotFoundError
from ask.domain.model import Answer, Question
from ask.domain.repository import (
    AnswerRepository,
    AnswerSortOrder,
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
    TransactionManager,
)
from ask.domain.value import Actor, QuestionId, QuestionStatus

from .base import TransactionalService, domain_validation
from .tag_service import TagService


@dataclass
class QuestionDetail:
    """A question with its answers expanded, best answers first."""

    question: Question
    answers: list[Answer]


@dataclass
class QuestionPage:
    """One page of a question listing."""

    questions: list[Question]
    total: int
    page: int
    total_pages: int


class QuestionService(TransactionalService):
    """Domain service for question lifecycle and listings."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        tag_service: TagService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            tag_service: Tag domain service
            transaction_manager: Transaction boundary
            settings: Application settings
        """
        super().__init__(transaction_manager, settings)
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.tag_service = tag_service
        self.pagination = settings.pagination

    async def create_question(
        self,
        actor: Actor,
        title: str,
        description: str,
        tags: Iterable[str],
    ) -> Question:
        """Ask a new question.

        Every tag gains one use; tags seen for the first time are created
        and owned by the asker.

        Args:
            actor: The asker
            title: Question title
            description: Question body
            tags: Raw tag names (normalised, 1-5 after de-duplication)

        Returns:
            The created question

        Raises:
            ValidationError: If the tags are invalid
            NotAuthorizedError: If the actor is banned
        """
        tag_names = self.tag_service.normalize_tags(tags)

        async def attempt() -> Question:
            self._require_active(actor, "create", "question", "new")
            with domain_validation("question"):
                question = Question(
                    id=QuestionId(uuid4()),
                    author_id=actor.user_id,
                    title=title,
                    description=description,
                    tags=tag_names,
                )
            saved = await self.question_repository.add(question)
            await self.tag_service.record_usage(tag_names, created_by=actor.user_id)
            logfire.info(
                "Question created",
                question_id=str(saved.id),
                author_id=str(actor.user_id),
                tags=saved.tag_names,
            )
            return saved

        return await self._run_atomic(
            "question_service.create_question",
            attempt,
            author_id=str(actor.user_id),
            tags=[t.root for t in tag_names],
        )

    async def update_question(
        self,
        question_id: QuestionId,
        actor: Actor,
        title: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Question:
        """Edit a question's title, description or tags.

        Tag usage counters change only for tags actually added or removed.

        Raises:
            NotFoundError: If the question does not exist
            NotAuthorizedError: If the actor is neither the author nor an admin
            ValidationError: If the new tags are invalid
        """
        tag_names = self.tag_service.normalize_tags(tags) if tags is not None else None

        async def attempt() -> Question:
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                raise NotFoundError("Question", str(question_id))
            self._require_owner_or_admin(
                actor, question.author_id, "update", "question", question_id
            )

            changes: dict[str, object] = {"updated_at": datetime.now()}
            if title is not None:
                changes["title"] = title
            if description is not None:
                changes["description"] = description
            if tag_names is not None:
                changes["tags"] = tag_names

            with domain_validation("question"):
                edited = question.evolve(**changes)
            saved = await self.question_repository.update(edited)

            if tag_names is not None:
                added = [t for t in tag_names if t not in question.tags]
                removed = [t for t in question.tags if t not in tag_names]
                await self.tag_service.record_usage(added, removed, created_by=actor.user_id)

            logfire.info(
                "Question updated",
                question_id=str(question_id),
                fields=sorted(k for k in changes if k != "updated_at"),
            )
            return saved

        return await self._run_atomic(
            "question_service.update_question",
            attempt,
            question_id=str(question_id),
            user_id=str(actor.user_id),
        )

    async def get_question(self, question_id: QuestionId) -> QuestionDetail:
        """Get a question with its answers, counting one view.

        Raises:
            NotFoundError: If the question does not exist
        """

        async def attempt() -> QuestionDetail:
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                logfire.warn("Question not found", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))

            await self.question_repository.increment_views(question_id)
            answers = await self.answer_repository.find_by_question(
                question_id, AnswerSortOrder.VOTES
            )
            # The increment lands on commit; report the count it produces.
            viewed = question.model_copy(update={"views": question.views + 1})
            return QuestionDetail(question=viewed, answers=answers)

        return await self._run_atomic(
            "question_service.get_question",
            attempt,
            question_id=str(question_id),
        )

    async def list_questions(
        self,
        filter: Optional[QuestionFilter] = None,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> QuestionPage:
        """List questions.

        Args:
            filter: Listing criteria; defaults to active questions
            sort: Sort order
            page: 1-based page number
            limit: Page size, capped at the configured maximum

        Returns:
            The requested page with totals
        """
        if filter is None:
            filter = QuestionFilter(status=QuestionStatus.ACTIVE)
        limit = min(limit or self.pagination.default_limit, self.pagination.max_limit)
        page = max(page, 1)

        with logfire.span(
            "question_service.list_questions",
            sort=sort.value,
            page=page,
            limit=limit,
            status=filter.status.value if filter.status else None,
            tag=filter.tag.root if filter.tag else None,
            search=filter.search,
        ):
            questions = await self.question_repository.find_all(
                filter, sort, limit=limit, offset=(page - 1) * limit
            )
            total = await self.question_repository.count(
                filter, unanswered_only=sort == QuestionSortOrder.UNANSWERED
            )
            logfire.info("Questions listed", count=len(questions), total=total)
            return QuestionPage(
                questions=questions,
                total=total,
                page=page,
                total_pages=-(-total // limit),
            )
