"""Domain layer DI providers."""

from dishka import Scope, provide

from ask.config import Settings
from ask.domain.repository import (
    AnswerRepository,
    CommentRepository,
    NotificationRepository,
    QuestionRepository,
    TagRepository,
    TransactionManager,
    UserRepository,
)
from ask.domain.service import (
    AcceptanceService,
    AnswerService,
    CascadeService,
    CommentService,
    ModerationService,
    NotificationService,
    QuestionService,
    TagService,
    UserService,
    VoteService,
)
from ask.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository lifecycle.
    Transactions are opened per operation by the services themselves.
    """

    scope = Scope.REQUEST

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_tag_service(self, tag_repository: TagRepository) -> TagService:
        """Provide tag domain service."""
        return TagService(tag_repository=tag_repository)

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository,
            transaction_manager=transaction_manager,
            settings=settings,
        )

    @provide
    def get_vote_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            comment_repository=comment_repository,
            transaction_manager=transaction_manager,
            settings=settings,
        )

    @provide
    def get_acceptance_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        notification_service: NotificationService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> AcceptanceService:
        """Provide acceptance domain service."""
        return AcceptanceService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            notification_service=notification_service,
            transaction_manager=transaction_manager,
            settings=settings,
        )

    @provide
    def get_moderation_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        tag_repository: TagRepository,
        user_repository: UserRepository,
        notification_service: NotificationService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            tag_repository=tag_repository,
            user_repository=user_repository,
            notification_service=notification_service,
            transaction_manager=transaction_manager,
            settings=settings,
        )

    @provide
    def get_cascade_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
        notification_repository: NotificationRepository,
        tag_repository: TagRepository,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> CascadeService:
        """Provide cascade domain service."""
        return CascadeService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            comment_repository=comment_repository,
            notification_repository=notification_repository,
            tag_repository=tag_repository,
            transaction_manager=transaction_manager,
            settings=settings,
        )

    @provide
    def get_question_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        tag_service: TagService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> QuestionService:
        """Provide question domain service."""
        return QuestionService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            tag_service=tag_service,
            transaction_manager=transaction_manager,
            settings=settings,
        )

    @provide
    def get_answer_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        notification_service: NotificationService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> AnswerService:
        """Provide answer domain service."""
        return AnswerService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            notification_service=notification_service,
            transaction_manager=transaction_manager,
            settings=settings,
        )

    @provide
    def get_comment_service(
        self,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
        notification_repository: NotificationRepository,
        notification_service: NotificationService,
        transaction_manager: TransactionManager,
        settings: Settings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            answer_repository=answer_repository,
            comment_repository=comment_repository,
            notification_repository=notification_repository,
            notification_service=notification_service,
            transaction_manager=transaction_manager,
            settings=settings,
        )
