"""Acceptance domain service."""

from datetime import datetime

import logfire

from ask.config import Settings
from ask.domain.error import MismatchError, NotAuthorizedError, NotFoundError
from ask.domain.model import Answer, Question
from ask.domain.repository import AnswerRepository, QuestionRepository, TransactionManager
from ask.domain.value import Actor, AnswerId, NotificationType, QuestionId

from .base import TransactionalService
from .notification_service import NotificationService, question_link


class AcceptanceService(TransactionalService):
    """Keeps a question's accepted answer and its answers' flags in step.

    At most one answer of a question is accepted, and it is the one
    ``question.accepted_answer_id`` names. Both sides change in one atomic
    unit.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        notification_service: NotificationService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> None:
        """Initialize acceptance service.

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

    async def _get_question_as_author(
        self, question_id: QuestionId, actor: Actor, action: str
    ) -> Question:
        self._require_active(actor, action, "question", question_id)
        question = await self.question_repository.find_by_id(question_id)
        if not question:
            raise NotFoundError("Question", str(question_id))
        if question.author_id != actor.user_id:
            logfire.warn(
                "Acceptance change by non-author",
                question_id=str(question_id),
                user_id=str(actor.user_id),
            )
            raise NotAuthorizedError(action, "question", str(question_id), str(actor.user_id))
        return question

    async def _clear_previous(self, question: Question, keep: AnswerId | None = None) -> None:
        """Unaccept every answer of ``question`` except ``keep``."""
        stale = set()
        if question.accepted_answer_id is not None:
            stale.add(question.accepted_answer_id)
        for answer in await self.answer_repository.find_by_question(question.id):
            if answer.is_accepted:
                stale.add(answer.id)
        stale.discard(keep)

        for answer_id in stale:
            previous = await self.answer_repository.find_by_id(answer_id)
            if previous is not None and previous.is_accepted:
                await self.answer_repository.update(
                    previous.unaccept().evolve(updated_at=datetime.now())
                )
                logfire.info(
                    "Previous answer unaccepted",
                    question_id=str(question.id),
                    answer_id=str(answer_id),
                )

    async def accept_answer(
        self, question_id: QuestionId, answer_id: AnswerId, actor: Actor
    ) -> Answer:
        """Accept an answer, replacing any previously accepted one.

        Accepting the currently accepted answer again refreshes its
        acceptance metadata. The answer's author is notified every time,
        including when they asked the question themselves.

        Args:
            question_id: The question
            answer_id: The answer to accept
            actor: Must be the question's author

        Returns:
            The accepted answer

        Raises:
            NotFoundError: If the question or answer does not exist
            NotAuthorizedError: If the actor is not the question's author
            MismatchError: If the answer belongs to another question
        """

        async def attempt() -> Answer:
            question = await self._get_question_as_author(question_id, actor, "accept an answer on")
            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer:
                raise NotFoundError("Answer", str(answer_id))
            if answer.question_id != question.id:
                logfire.warn(
                    "Accepting answer of another question",
                    question_id=str(question_id),
                    answer_id=str(answer_id),
                    answer_question_id=str(answer.question_id),
                )
                raise MismatchError("Answer", str(answer_id), f"question {question_id}")

            await self._clear_previous(question, keep=answer.id)

            accepted = await self.answer_repository.update(
                answer.accept(actor.user_id).evolve(updated_at=datetime.now())
            )
            answer_ids = question.answer_ids
            if answer.id not in answer_ids:
                answer_ids = answer_ids + (answer.id,)
            await self.question_repository.update(
                question.evolve(
                    answer_ids=answer_ids,
                    accepted_answer_id=answer.id,
                    updated_at=datetime.now(),
                )
            )

            await self.notification_service.notify(
                recipient_id=accepted.author_id,
                sender_id=actor.user_id,
                type=NotificationType.ACCEPT,
                title="Answer Accepted",
                message=f'Your answer to "{question.title}" has been accepted!',
                question_id=question.id,
                answer_id=accepted.id,
                link=question_link(question.id),
            )
            logfire.info(
                "Answer accepted",
                question_id=str(question_id),
                answer_id=str(answer_id),
            )
            return accepted

        return await self._run_atomic(
            "acceptance_service.accept_answer",
            attempt,
            question_id=str(question_id),
            answer_id=str(answer_id),
            user_id=str(actor.user_id),
        )

    async def unaccept_answer(self, question_id: QuestionId, actor: Actor) -> Question:
        """Clear the accepted answer of a question.

        Returns:
            The question with no accepted answer

        Raises:
            NotFoundError: If the question does not exist
            NotAuthorizedError: If the actor is not the question's author
        """

        async def attempt() -> Question:
            question = await self._get_question_as_author(
                question_id, actor, "unaccept an answer on"
            )
            if question.accepted_answer_id is None:
                return question

            await self._clear_previous(question)
            saved = await self.question_repository.update(
                question.evolve(accepted_answer_id=None, updated_at=datetime.now())
            )
            logfire.info("Answer unaccepted", question_id=str(question_id))
            return saved

        return await self._run_atomic(
            "acceptance_service.unaccept_answer",
            attempt,
            question_id=str(question_id),
            user_id=str(actor.user_id),
        )
