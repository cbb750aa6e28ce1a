"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from ask.config import Settings
from ask.domain.error import MismatchError, NotFoundError
from ask.domain.model import Comment
from ask.domain.repository import (
    AnswerRepository,
    CommentRepository,
    NotificationRepository,
    TransactionManager,
)
from ask.domain.value import Actor, AnswerId, CommentId, NotificationType

from .base import TransactionalService, domain_validation
from .notification_service import NotificationService, question_link


def collect_subtree(root: Comment, comments: list[Comment]) -> list[Comment]:
    """Return ``root`` and every comment replying to it, directly or not."""
    children: dict[CommentId, list[Comment]] = {}
    for comment in comments:
        if comment.parent_id is not None:
            children.setdefault(comment.parent_id, []).append(comment)

    subtree = []
    pending = [root]
    while pending:
        comment = pending.pop()
        subtree.append(comment)
        pending.extend(children.get(comment.id, []))
    return subtree


class CommentService(TransactionalService):
    """Domain service for comment operations."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
        notification_repository: NotificationRepository,
        notification_service: NotificationService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> None:
        """Initialize comment service.

        Args:
            answer_repository: Answer repository
            comment_repository: Comment repository
            notification_repository: Notification repository
            notification_service: Notification sink
            transaction_manager: Transaction boundary
            settings: Application settings
        """
        super().__init__(transaction_manager, settings)
        self.answer_repository = answer_repository
        self.comment_repository = comment_repository
        self.notification_repository = notification_repository
        self.notification_service = notification_service

    async def create_comment(
        self,
        answer_id: AnswerId,
        actor: Actor,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Comment on an answer or reply to another comment.

        Args:
            answer_id: The answer commented on
            actor: The commenter
            content: Comment text (1-500 characters)
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            The created comment

        Raises:
            NotFoundError: If the answer or parent comment does not exist
            MismatchError: If the parent comment belongs to another answer
            NotAuthorizedError: If the actor is banned
        """

        async def attempt() -> Comment:
            self._require_active(actor, "comment on", "answer", answer_id)
            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer:
                raise NotFoundError("Answer", str(answer_id))

            parent = None
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        answer_id=str(answer_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.answer_id != answer_id:
                    logfire.error(
                        "Parent comment does not belong to answer",
                        parent_id=str(parent_id),
                        parent_answer_id=str(parent.answer_id),
                        target_answer_id=str(answer_id),
                    )
                    raise MismatchError("Comment", str(parent_id), f"answer {answer_id}")

            with domain_validation("comment"):
                draft = Comment(
                    id=CommentId(uuid4()),
                    answer_id=answer_id,
                    author_id=actor.user_id,
                    content=content,
                    parent_id=parent_id,
                )
            comment = await self.comment_repository.add(draft)

            if parent is not None:
                await self.comment_repository.update(
                    parent.evolve(
                        reply_ids=parent.reply_ids + (comment.id,),
                        updated_at=datetime.now(),
                    )
                )
                recipient = parent.author_id
            else:
                await self.answer_repository.update(
                    answer.evolve(
                        comment_ids=answer.comment_ids + (comment.id,),
                        updated_at=datetime.now(),
                    )
                )
                recipient = answer.author_id

            if recipient != actor.user_id:
                await self.notification_service.notify(
                    recipient_id=recipient,
                    sender_id=actor.user_id,
                    type=NotificationType.COMMENT,
                    title="New Comment",
                    message="Someone commented on your answer"
                    if parent is None
                    else "Someone replied to your comment",
                    question_id=answer.question_id,
                    answer_id=answer.id,
                    comment_id=comment.id,
                    link=question_link(answer.question_id),
                )

            logfire.info(
                "Comment created",
                comment_id=str(comment.id),
                answer_id=str(answer_id),
                parent_id=str(parent_id) if parent_id else None,
            )
            return comment

        return await self._run_atomic(
            "comment_service.create_comment",
            attempt,
            answer_id=str(answer_id),
            author_id=str(actor.user_id),
            parent_id=str(parent_id) if parent_id else None,
        )

    async def list_comments(self, answer_id: AnswerId) -> list[Comment]:
        """Get every comment on an answer, oldest first.

        Raises:
            NotFoundError: If the answer does not exist
        """
        with logfire.span("comment_service.list_comments", answer_id=str(answer_id)):
            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer:
                raise NotFoundError("Answer", str(answer_id))
            comments = await self.comment_repository.find_by_answer(answer_id)
            logfire.info("Comments retrieved", answer_id=str(answer_id), count=len(comments))
            return comments

    async def delete_comment(self, comment_id: CommentId, actor: Actor) -> None:
        """Delete a comment and all replies beneath it.

        The comment is unlinked from its answer or parent comment, and
        notifications about any deleted comment go with it.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the actor is neither the author nor an admin
        """

        async def attempt() -> None:
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                raise NotFoundError("Comment", str(comment_id))
            self._require_owner_or_admin(
                actor, comment.author_id, "delete", "comment", comment_id
            )

            siblings = await self.comment_repository.find_by_answer(comment.answer_id)
            subtree = collect_subtree(comment, siblings)
            doomed = {c.id for c in subtree}

            if comment.parent_id is not None and comment.parent_id not in doomed:
                parent = await self.comment_repository.find_by_id(comment.parent_id)
                if parent is not None:
                    await self.comment_repository.update(
                        parent.evolve(
                            reply_ids=tuple(r for r in parent.reply_ids if r != comment.id),
                            updated_at=datetime.now(),
                        )
                    )

            answer = await self.answer_repository.find_by_id(comment.answer_id)
            if answer is not None and comment.id in answer.comment_ids:
                await self.answer_repository.update(
                    answer.evolve(
                        comment_ids=tuple(c for c in answer.comment_ids if c not in doomed),
                        updated_at=datetime.now(),
                    )
                )

            for doomed_comment in subtree:
                await self.comment_repository.delete(doomed_comment)
            removed = await self.notification_repository.delete_referencing(
                comment_ids=doomed
            )
            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                replies=len(subtree) - 1,
                notifications=removed,
            )

        await self._run_atomic(
            "comment_service.delete_comment",
            attempt,
            comment_id=str(comment_id),
            user_id=str(actor.user_id),
        )
