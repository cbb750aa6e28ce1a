"""Accept answer use case."""

from uuid import UUID

from ask.application.usecase.answer.list_answers import AnswerItem
from ask.application.usecase.base import ActorRequest, BaseUseCase
from ask.domain.service import AcceptanceService
from ask.domain.value import AnswerId, QuestionId


class AcceptAnswerRequest(ActorRequest):
    """Accept answer request.

    Leave ``answer_id`` unset to clear the accepted answer instead.
    """

    question_id: str
    answer_id: str | None = None


class AcceptAnswerUseCase(BaseUseCase):
    """Use case for accepting (or unaccepting) an answer."""

    def __init__(self, acceptance_service: AcceptanceService) -> None:
        """Initialize accept answer use case.

        Args:
            acceptance_service: Acceptance domain service
        """
        self.acceptance_service = acceptance_service

    async def execute(self, request: AcceptAnswerRequest) -> AnswerItem | None:
        """Execute accept answer flow.

        Returns:
            The accepted answer, or None when acceptance was cleared

        Raises:
            NotFoundError: If the question or answer does not exist
            NotAuthorizedError: If the caller did not ask the question
            MismatchError: If the answer belongs to another question
        """
        question_id = QuestionId(UUID(request.question_id))
        if request.answer_id is None:
            await self.acceptance_service.unaccept_answer(question_id, request.actor())
            return None

        answer = await self.acceptance_service.accept_answer(
            question_id, AnswerId(UUID(request.answer_id)), request.actor()
        )
        return AnswerItem.from_answer(answer)
