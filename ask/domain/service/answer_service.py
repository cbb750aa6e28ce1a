"""Answer domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from ask.config import Settings
from ask.domain.error import DuplicateAnswerError, NotFoundError
from ask.domain.model import Answer
from ask.domain.repository import (
    AnswerRepository,
    AnswerSortOrder,
    QuestionRepository,
    TransactionManager,
)
from ask.domain.value import Actor, AnswerId, NotificationType, QuestionId

from .base import TransactionalService, domain_validation
from .notification_service import NotificationService, question_link


class AnswerService(TransactionalService):
    """Domain service for answer operations."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        notification_service: NotificationService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> None:
        """Initialize answer service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            notification_service: Notification sink
            transaction_manager: Transaction boundary
            settings: Application settings
        """
        super().__init__(transaction_manager, settings)
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.notification_service = notification_service

    async def create_answer(self, question_id: QuestionId, actor: Actor, content: str) -> Answer:
        """Answer a question.

        A user answers a given question at most once. The answer is appended
        to the question's answer list in the same atomic unit, so two racing
        answers from one user cannot both land.

        Args:
            question_id: The question
            actor: The answerer
            content: Answer body

        Returns:
            The created answer

        Raises:
            NotFoundError: If the question does not exist
            DuplicateAnswerError: If the actor already answered the question
            NotAuthorizedError: If the actor is banned
        """

        async def attempt() -> Answer:
            self._require_active(actor, "answer", "question", question_id)
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                raise NotFoundError("Question", str(question_id))

            existing = await self.answer_repository.find_by_question_and_author(
                question_id, actor.user_id
            )
            if existing:
                logfire.warn(
                    "Duplicate answer attempt",
                    question_id=str(question_id),
                    user_id=str(actor.user_id),
                )
                raise DuplicateAnswerError(str(question_id), str(actor.user_id), str(existing.id))

            with domain_validation("answer"):
                draft = Answer(
                    id=AnswerId(uuid4()),
                    question_id=question_id,
                    author_id=actor.user_id,
                    content=content,
                )
            answer = await self.answer_repository.add(draft)
            # Bumping the question's version makes a concurrent delete or
            # duplicate answer conflict and retry.
            await self.question_repository.update(
                question.evolve(
                    answer_ids=question.answer_ids + (answer.id,),
                    updated_at=datetime.now(),
                )
            )

            if question.author_id != actor.user_id:
                await self.notification_service.notify(
                    recipient_id=question.author_id,
                    sender_id=actor.user_id,
                    type=NotificationType.ANSWER,
                    title="New Answer",
                    message=f'Someone answered your question "{question.title}"',
                    question_id=question.id,
                    answer_id=answer.id,
                    link=question_link(question.id),
                )

            logfire.info(
                "Answer created",
                answer_id=str(answer.id),
                question_id=str(question_id),
                author_id=str(actor.user_id),
            )
            return answer

        return await self._run_atomic(
            "answer_service.create_answer",
            attempt,
            question_id=str(question_id),
            author_id=str(actor.user_id),
        )

    async def update_answer(self, answer_id: AnswerId, actor: Actor, content: str) -> Answer:
        """Edit an answer's content.

        Raises:
            NotFoundError: If the answer does not exist
            NotAuthorizedError: If the actor is neither the author nor an admin
        """

        async def attempt() -> Answer:
            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer:
                raise NotFoundError("Answer", str(answer_id))
            self._require_owner_or_admin(actor, answer.author_id, "update", "answer", answer_id)

            with domain_validation("answer"):
                edited = answer.evolve(content=content, updated_at=datetime.now())
            saved = await self.answer_repository.update(edited)
            logfire.info("Answer updated", answer_id=str(answer_id))
            return saved

        return await self._run_atomic(
            "answer_service.update_answer",
            attempt,
            answer_id=str(answer_id),
            user_id=str(actor.user_id),
        )

    async def get_answer(self, answer_id: AnswerId) -> Answer:
        """Get an answer by ID.

        Raises:
            NotFoundError: If the answer does not exist
        """
        with logfire.span("answer_service.get_answer", answer_id=str(answer_id)):
            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer:
                logfire.warn("Answer not found", answer_id=str(answer_id))
                raise NotFoundError("Answer", str(answer_id))
            return answer

    async def list_answers(
        self,
        question_id: QuestionId,
        sort: AnswerSortOrder = AnswerSortOrder.VOTES,
    ) -> list[Answer]:
        """List the answers of a question.

        Raises:
            NotFoundError: If the question does not exist
        """
        with logfire.span(
            "answer_service.list_answers", question_id=str(question_id), sort=sort.value
        ):
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                raise NotFoundError("Question", str(question_id))
            answers = await self.answer_repository.find_by_question(question_id, sort)
            logfire.info("Answers listed", question_id=str(question_id), count=len(answers))
            return answers
