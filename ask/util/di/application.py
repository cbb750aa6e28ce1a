"""Application layer DI providers."""

from dishka import Scope, provide

from ask.application.usecase.answer import (
    CreateAnswerUseCase,
    DeleteAnswerUseCase,
    ListAnswersUseCase,
)
from ask.application.usecase.moderation import (
    ModerateContentUseCase,
    SendAlertUseCase,
    ToggleUserBanUseCase,
)
from ask.application.usecase.notification import (
    GetNotificationsUseCase,
    MarkNotificationReadUseCase,
)
from ask.application.usecase.question import (
    AcceptAnswerUseCase,
    CreateQuestionUseCase,
    DeleteQuestionUseCase,
    GetQuestionUseCase,
    ListQuestionsUseCase,
    UpdateQuestionUseCase,
)
from ask.application.usecase.vote import CastVoteUseCase, RetractVoteUseCase
from ask.domain.service import (
    AcceptanceService,
    AnswerService,
    CascadeService,
    ModerationService,
    NotificationService,
    QuestionService,
    VoteService,
)
from ask.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Question use cases
    @provide
    def get_list_questions_use_case(
        self, question_service: QuestionService
    ) -> ListQuestionsUseCase:
        """Provide list questions use case."""
        return ListQuestionsUseCase(question_service=question_service)

    @provide
    def get_get_question_use_case(
        self, question_service: QuestionService, vote_service: VoteService
    ) -> GetQuestionUseCase:
        """Provide get question use case."""
        return GetQuestionUseCase(question_service=question_service, vote_service=vote_service)

    @provide
    def get_create_question_use_case(
        self, question_service: QuestionService
    ) -> CreateQuestionUseCase:
        """Provide create question use case."""
        return CreateQuestionUseCase(question_service=question_service)

    @provide
    def get_update_question_use_case(
        self, question_service: QuestionService
    ) -> UpdateQuestionUseCase:
        """Provide update question use case."""
        return UpdateQuestionUseCase(question_service=question_service)

    @provide
    def get_delete_question_use_case(
        self, cascade_service: CascadeService
    ) -> DeleteQuestionUseCase:
        """Provide delete question use case."""
        return DeleteQuestionUseCase(cascade_service=cascade_service)

    @provide
    def get_accept_answer_use_case(
        self, acceptance_service: AcceptanceService
    ) -> AcceptAnswerUseCase:
        """Provide accept answer use case."""
        return AcceptAnswerUseCase(acceptance_service=acceptance_service)

    # Answer use cases
    @provide
    def get_list_answers_use_case(self, answer_service: AnswerService) -> ListAnswersUseCase:
        """Provide list answers use case."""
        return ListAnswersUseCase(answer_service=answer_service)

    @provide
    def get_create_answer_use_case(self, answer_service: AnswerService) -> CreateAnswerUseCase:
        """Provide create answer use case."""
        return CreateAnswerUseCase(answer_service=answer_service)

    @provide
    def get_delete_answer_use_case(self, cascade_service: CascadeService) -> DeleteAnswerUseCase:
        """Provide delete answer use case."""
        return DeleteAnswerUseCase(cascade_service=cascade_service)

    # Vote use cases
    @provide
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide
    def get_retract_vote_use_case(self, vote_service: VoteService) -> RetractVoteUseCase:
        """Provide retract vote use case."""
        return RetractVoteUseCase(vote_service=vote_service)

    # Moderation use cases
    @provide
    def get_moderate_content_use_case(
        self, moderation_service: ModerationService
    ) -> ModerateContentUseCase:
        """Provide moderate content use case."""
        return ModerateContentUseCase(moderation_service=moderation_service)

    @provide
    def get_toggle_user_ban_use_case(
        self, moderation_service: ModerationService
    ) -> ToggleUserBanUseCase:
        """Provide toggle user ban use case."""
        return ToggleUserBanUseCase(moderation_service=moderation_service)

    @provide
    def get_send_alert_use_case(self, moderation_service: ModerationService) -> SendAlertUseCase:
        """Provide send alert use case."""
        return SendAlertUseCase(moderation_service=moderation_service)

    # Notification use cases
    @provide
    def get_get_notifications_use_case(
        self, notification_service: NotificationService
    ) -> GetNotificationsUseCase:
        """Provide get notifications use case."""
        return GetNotificationsUseCase(notification_service=notification_service)

    @provide
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        """Provide mark notification read use case."""
        return MarkNotificationReadUseCase(notification_service=notification_service)
