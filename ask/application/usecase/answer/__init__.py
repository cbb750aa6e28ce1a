"""Answer use cases."""

from .create_answer import CreateAnswerRequest, CreateAnswerUseCase
from .delete_answer import DeleteAnswerRequest, DeleteAnswerResponse, DeleteAnswerUseCase
from .list_answers import (
    AnswerItem,
    ListAnswersRequest,
    ListAnswersResponse,
    ListAnswersUseCase,
)

__all__ = [
    "AnswerItem",
    "CreateAnswerRequest",
    "CreateAnswerUseCase",
    "DeleteAnswerRequest",
    "DeleteAnswerResponse",
    "DeleteAnswerUseCase",
    "ListAnswersRequest",
    "ListAnswersResponse",
    "ListAnswersUseCase",
]
