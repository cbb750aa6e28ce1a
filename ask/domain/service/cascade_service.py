"""Cascade domain service.

Deletes content together with everything that depends on it, so no answer,
comment or notification is ever left pointing at something that is gone.
"""

from datetime import datetime

import logfire

from ask.config import Settings
from ask.domain.error import NotFoundError
from ask.domain.model import Answer, Question
from ask.domain.repository import (
    AnswerRepository,
    CommentRepository,
    NotificationRepository,
    QuestionRepository,
    TagRepository,
    TransactionManager,
)
from ask.domain.value import Actor, AnswerId, CommentId, QuestionId

from .base import TransactionalService


class CascadeService(TransactionalService):
    """Domain service for cascading deletes.

    Each delete is a single atomic unit: dependents, back-references,
    notifications and tag counters change together or not at all.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
        notification_repository: NotificationRepository,
        tag_repository: TagRepository,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> None:
        """Initialize cascade service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            comment_repository: Comment repository
            notification_repository: Notification repository
            tag_repository: Tag repository
            transaction_manager: Transaction boundary
            settings: Application settings
        """
        super().__init__(transaction_manager, settings)
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.comment_repository = comment_repository
        self.notification_repository = notification_repository
        self.tag_repository = tag_repository

    async def _delete_answer_tree(self, answer: Answer) -> list[CommentId]:
        """Delete an answer and all of its comments.

        Returns:
            IDs of the deleted comments
        """
        comments = await self.comment_repository.find_by_answer(answer.id)
        for comment in comments:
            await self.comment_repository.delete(comment)
        await self.answer_repository.delete(answer)
        return [comment.id for comment in comments]

    async def delete_question(self, question_id: QuestionId, actor: Actor) -> None:
        """Delete a question with its answers, comments and notifications.

        Each of the question's tags loses one use.

        Args:
            question_id: The question
            actor: Must be the question's author or an admin

        Raises:
            NotFoundError: If the question does not exist
            NotAuthorizedError: If the actor may not delete the question
        """

        async def attempt() -> None:
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                raise NotFoundError("Question", str(question_id))
            self._require_owner_or_admin(
                actor, question.author_id, "delete", "question", question_id
            )

            answers = await self.answer_repository.find_by_question(question.id)
            answer_ids: list[AnswerId] = []
            comment_ids: list[CommentId] = []
            for answer in answers:
                comment_ids.extend(await self._delete_answer_tree(answer))
                answer_ids.append(answer.id)

            removed = await self.notification_repository.delete_referencing(
                question_ids=[question.id],
                answer_ids=answer_ids,
                comment_ids=comment_ids,
            )
            await self.question_repository.delete(question)

            for tag in question.tags:
                await self.tag_repository.adjust_usage(tag, -1)

            logfire.info(
                "Question deleted",
                question_id=str(question_id),
                answers=len(answer_ids),
                comments=len(comment_ids),
                notifications=removed,
                tags=question.tag_names,
            )

        await self._run_atomic(
            "cascade_service.delete_question",
            attempt,
            question_id=str(question_id),
            user_id=str(actor.user_id),
        )

    async def delete_answer(self, answer_id: AnswerId, actor: Actor) -> None:
        """Delete an answer with its comments and notifications.

        The answer is unlinked from its question, and the question's accepted
        answer is cleared if it was this one.

        Args:
            answer_id: The answer
            actor: Must be the answer's author or an admin

        Raises:
            NotFoundError: If the answer does not exist
            NotAuthorizedError: If the actor may not delete the answer
        """

        async def attempt() -> None:
            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer:
                raise NotFoundError("Answer", str(answer_id))
            self._require_owner_or_admin(actor, answer.author_id, "delete", "answer", answer_id)

            question = await self.question_repository.find_by_id(answer.question_id)
            if question is not None:
                await self.question_repository.update(self._unlink(question, answer.id))
            else:
                logfire.warn(
                    "Deleting answer of missing question",
                    answer_id=str(answer_id),
                    question_id=str(answer.question_id),
                )

            comment_ids = await self._delete_answer_tree(answer)
            removed = await self.notification_repository.delete_referencing(
                answer_ids=[answer.id], comment_ids=comment_ids
            )
            logfire.info(
                "Answer deleted",
                answer_id=str(answer_id),
                question_id=str(answer.question_id),
                comments=len(comment_ids),
                notifications=removed,
            )

        await self._run_atomic(
            "cascade_service.delete_answer",
            attempt,
            answer_id=str(answer_id),
            user_id=str(actor.user_id),
        )

    @staticmethod
    def _unlink(question: Question, answer_id: AnswerId) -> Question:
        accepted = question.accepted_answer_id
        return question.evolve(
            answer_ids=tuple(a for a in question.answer_ids if a != answer_id),
            accepted_answer_id=None if accepted == answer_id else accepted,
            updated_at=datetime.now(),
        )

