"""Vote domain service."""

from datetime import datetime
from typing import Optional, Union
from uuid import UUID

import logfire

from ask.config import Settings
from ask.domain.error import NotFoundError, SelfVoteError
from ask.domain.model import Answer, Comment, Question
from ask.domain.repository import (
    AnswerRepository,
    CommentRepository,
    QuestionRepository,
    TransactionManager,
)
from ask.domain.value import (
    Actor,
    AnswerId,
    CommentId,
    QuestionId,
    UserId,
    VotableType,
    VoteType,
)

from .base import TransactionalService

VotableEntity = Union[Question, Answer, Comment]


class VoteService(TransactionalService):
    """Domain service for the vote ledger.

    Votes are stored on the voted entity as two disjoint voter sets; each
    change is a versioned replace of that entity, so concurrent voters on
    the same entity are serialised by retry and never lose each other's
    vote.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> None:
        """Initialize vote service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            comment_repository: Comment repository
            transaction_manager: Transaction boundary
            settings: Application settings
        """
        super().__init__(transaction_manager, settings)
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.comment_repository = comment_repository

    async def _load(self, votable_type: VotableType, votable_id: UUID) -> VotableEntity:
        entity: Optional[VotableEntity]
        if votable_type == VotableType.QUESTION:
            entity = await self.question_repository.find_by_id(QuestionId(votable_id))
        elif votable_type == VotableType.ANSWER:
            entity = await self.answer_repository.find_by_id(AnswerId(votable_id))
        else:
            entity = await self.comment_repository.find_by_id(CommentId(votable_id))

        if entity is None:
            logfire.warn(
                "Vote on non-existent entity",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
            )
            raise NotFoundError(votable_type.value.capitalize(), str(votable_id))
        return entity

    async def _store(self, entity: VotableEntity) -> VotableEntity:
        if isinstance(entity, Question):
            return await self.question_repository.update(entity)
        if isinstance(entity, Answer):
            return await self.answer_repository.update(entity)
        return await self.comment_repository.update(entity)

    async def cast_vote(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        actor: Actor,
        vote_type: VoteType,
    ) -> int:
        """Cast (or switch) a vote.

        The voter ends up in exactly the requested set. Casting the vote the
        voter already holds changes nothing.

        Args:
            votable_type: Kind of entity voted on
            votable_id: Entity ID
            actor: The voter
            vote_type: Up or down

        Returns:
            The entity's score after the vote

        Raises:
            NotFoundError: If the entity does not exist
            SelfVoteError: If the voter authored the entity
            NotAuthorizedError: If the voter is banned
        """

        async def attempt() -> int:
            self._require_active(actor, "vote on", votable_type.value, votable_id)
            entity = await self._load(votable_type, votable_id)

            if entity.author_id == actor.user_id:
                logfire.warn(
                    "Self-vote attempt",
                    votable_type=votable_type.value,
                    votable_id=str(votable_id),
                    user_id=str(actor.user_id),
                )
                raise SelfVoteError(votable_type.value, str(votable_id), str(actor.user_id))

            if entity.vote_of(actor.user_id) == vote_type:
                logfire.info(
                    "Vote already cast",
                    votable_id=str(votable_id),
                    user_id=str(actor.user_id),
                )
                return entity.score

            updated = entity.with_vote(actor.user_id, vote_type).evolve(
                updated_at=datetime.now()
            )
            saved = await self._store(updated)
            logfire.info(
                "Vote cast",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                user_id=str(actor.user_id),
                vote_type=vote_type.value,
                score=saved.score,
            )
            return saved.score

        return await self._run_atomic(
            "vote_service.cast_vote",
            attempt,
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            user_id=str(actor.user_id),
            vote_type=vote_type.value,
        )

    async def retract_vote(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        actor: Actor,
    ) -> int:
        """Remove the actor's vote, whichever direction it was.

        Returns:
            The entity's score after the retraction

        Raises:
            NotFoundError: If the entity does not exist
            NotAuthorizedError: If the voter is banned
        """

        async def attempt() -> int:
            self._require_active(actor, "retract vote on", votable_type.value, votable_id)
            entity = await self._load(votable_type, votable_id)

            if entity.vote_of(actor.user_id) is None:
                logfire.info(
                    "No vote to retract",
                    votable_id=str(votable_id),
                    user_id=str(actor.user_id),
                )
                return entity.score

            saved = await self._store(
                entity.without_vote(actor.user_id).evolve(updated_at=datetime.now())
            )
            logfire.info(
                "Vote retracted",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                user_id=str(actor.user_id),
                score=saved.score,
            )
            return saved.score

        return await self._run_atomic(
            "vote_service.retract_vote",
            attempt,
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            user_id=str(actor.user_id),
        )

    async def get_vote_state(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        user_id: UserId,
    ) -> tuple[bool, bool]:
        """Check how a user has voted on an entity.

        Returns:
            ``(has_upvoted, has_downvoted)``
        """
        with logfire.span(
            "vote_service.get_vote_state",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            user_id=str(user_id),
        ):
            entity = await self._load(votable_type, votable_id)
            return user_id in entity.upvoters, user_id in entity.downvoters
