"""Test configuration and shared helpers."""

from typing import Sequence
from uuid import uuid4

from dishka import AsyncContainer

from ask.domain.model import Answer, Comment, Question, User
from ask.domain.service import (
    AnswerService,
    CommentService,
    QuestionService,
    UserService,
)
from ask.domain.value import Actor, UserRole


async def make_user(
    env: AsyncContainer,
    role: UserRole = UserRole.MEMBER,
    username: str | None = None,
) -> User:
    """Register a user through the user service.

    Usernames default to a random, valid handle so tests can create as many
    users as they need.
    """
    user_service = await env.get(UserService)
    return await user_service.register_user(
        username or f"user-{uuid4().hex[:8]}", role=role
    )


async def make_actor(env: AsyncContainer, role: UserRole = UserRole.MEMBER) -> Actor:
    """Register a user and return it as a caller."""
    user = await make_user(env, role=role)
    return user.as_actor()


async def make_question(
    env: AsyncContainer,
    author: Actor,
    title: str = "How do I profile asyncio code?",
    description: str = "My event loop stalls under load and I want to find out why.",
    tags: Sequence[str] = ("python", "asyncio"),
) -> Question:
    """Create a question through the question service."""
    question_service = await env.get(QuestionService)
    return await question_service.create_question(author, title, description, tags)


async def make_answer(
    env: AsyncContainer,
    question: Question,
    author: Actor,
    content: str = "Use the asyncio debug mode and look at slow callbacks.",
) -> Answer:
    """Create an answer through the answer service."""
    answer_service = await env.get(AnswerService)
    return await answer_service.create_answer(question.id, author, content)


async def make_comment(
    env: AsyncContainer,
    answer: Answer,
    author: Actor,
    content: str = "Thanks, that helped.",
    parent: Comment | None = None,
) -> Comment:
    """Create a comment (or a reply to ``parent``) through the comment service."""
    comment_service = await env.get(CommentService)
    return await comment_service.create_comment(
        answer.id, author, content, parent_id=parent.id if parent else None
    )
