"""SQLAlchemy table definitions for the forum.

Rows are document-shaped: vote sets and owned id lists live in UUID array
columns on the owning row, so one conditional UPDATE changes an entity and
its back-references together. They match the schema defined in Alembic
migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()


def _uuid_array(name: str) -> Column:
    return Column(name, ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}")


def _moderation_columns() -> list[Column]:
    return [
        Column("is_moderated", Boolean, nullable=False, server_default="false"),
        Column("moderated_by", UUID(as_uuid=True), nullable=True),
        Column("moderated_at", TIMESTAMP(timezone=True), nullable=True),
        Column("moderation_reason", Text, nullable=True),
    ]


def _vote_columns() -> list[Column]:
    return [
        _uuid_array("upvoters"),
        _uuid_array("downvoters"),
        # Sortable copy of len(upvoters) - len(downvoters), written with them
        Column("score", Integer, nullable=False, server_default="0"),
    ]


def _timestamps() -> list[Column]:
    return [
        Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"),
        Column("updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"),
    ]


def _version() -> Column:
    return Column("version", Integer, nullable=False, server_default="1")


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("username", String(30), nullable=False, unique=True),
    Column("role", String(20), nullable=False, server_default="member"),
    Column("is_banned", Boolean, nullable=False, server_default="false"),
    Column("banned_by", UUID(as_uuid=True), nullable=True),
    Column("banned_at", TIMESTAMP(timezone=True), nullable=True),
    Column("ban_reason", Text, nullable=True),
    _version(),
    *_timestamps(),
    CheckConstraint("role IN ('admin', 'member')", name="ck_users_role"),
)

# ============================================================================
# QUESTIONS TABLE
# ============================================================================
questions_table = Table(
    "questions",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("author_id", UUID(as_uuid=True), nullable=False),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=False),
    Column("tags", ARRAY(String(20)), nullable=False),
    _uuid_array("answer_ids"),
    Column("accepted_answer_id", UUID(as_uuid=True), nullable=True),
    Column("status", String(20), nullable=False, server_default="active"),
    Column("views", Integer, nullable=False, server_default="0"),
    *_vote_columns(),
    *_moderation_columns(),
    _version(),
    *_timestamps(),
    CheckConstraint(
        "status IN ('active', 'closed', 'duplicate', 'off-topic')",
        name="ck_questions_status",
    ),
    CheckConstraint("views >= 0", name="ck_questions_views_non_negative"),
)

Index("idx_questions_status_created_at", questions_table.c.status, questions_table.c.created_at)
Index("idx_questions_author_id", questions_table.c.author_id)
Index("idx_questions_tags", questions_table.c.tags, postgresql_using="gin")

# ============================================================================
# ANSWERS TABLE
# ============================================================================
answers_table = Table(
    "answers",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("question_id", UUID(as_uuid=True), nullable=False),
    Column("author_id", UUID(as_uuid=True), nullable=False),
    Column("content", Text, nullable=False),
    _uuid_array("comment_ids"),
    Column("is_accepted", Boolean, nullable=False, server_default="false"),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("accepted_by", UUID(as_uuid=True), nullable=True),
    *_vote_columns(),
    *_moderation_columns(),
    _version(),
    *_timestamps(),
)

Index("idx_answers_question_id", answers_table.c.question_id)
Index(
    "idx_answers_question_author",
    answers_table.c.question_id,
    answers_table.c.author_id,
    unique=True,
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("answer_id", UUID(as_uuid=True), nullable=False),
    Column("author_id", UUID(as_uuid=True), nullable=False),
    Column("content", String(500), nullable=False),
    Column("parent_id", UUID(as_uuid=True), nullable=True),
    _uuid_array("reply_ids"),
    *_vote_columns(),
    *_moderation_columns(),
    _version(),
    *_timestamps(),
)

Index("idx_comments_answer_id", comments_table.c.answer_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("recipient_id", UUID(as_uuid=True), nullable=False),
    Column("sender_id", UUID(as_uuid=True), nullable=True),
    Column("type", String(20), nullable=False),
    Column("title", String(100), nullable=False),
    Column("message", String(500), nullable=False),
    Column("question_id", UUID(as_uuid=True), nullable=True),
    Column("answer_id", UUID(as_uuid=True), nullable=True),
    Column("comment_id", UUID(as_uuid=True), nullable=True),
    Column("link", Text, nullable=True),
    Column("is_read", Boolean, nullable=False, server_default="false"),
    Column("read_at", TIMESTAMP(timezone=True), nullable=True),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"),
)

Index(
    "idx_notifications_recipient_created_at",
    notifications_table.c.recipient_id,
    notifications_table.c.created_at,
)
Index("idx_notifications_question_id", notifications_table.c.question_id)
Index("idx_notifications_answer_id", notifications_table.c.answer_id)
Index("idx_notifications_comment_id", notifications_table.c.comment_id)

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("name", String(20), nullable=False, unique=True),
    Column("description", String(200), nullable=True),
    Column("usage_count", Integer, nullable=False, server_default="0"),
    Column("created_by", UUID(as_uuid=True), nullable=True),
    *_moderation_columns(),
    _version(),
    *_timestamps(),
    CheckConstraint("name ~ '^[a-z0-9-]{2,20}$'", name="ck_tags_name_format"),
    CheckConstraint("usage_count >= 0", name="ck_tags_usage_count_non_negative"),
)
