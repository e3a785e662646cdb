# backend/alembic/versions/001_initial_schema.py
"""Initial schema - users, profiles, availability, requests, messaging, lessons, reviews

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00.000000

All tables are created in their final form. Primary keys are 26-character
ULID strings. Roles and statuses are VARCHAR columns guarded by CHECK
constraints rather than native ENUM types.
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(26), primary_key=True)


def _user_fk(name: str) -> sa.Column:
    return sa.Column(
        name, sa.String(26), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    """Create all tables."""
    print("Creating initial schema...")

    op.create_table(
        "users",
        _id(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("surname", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("role IN ('STUDENT', 'TEACHER', 'ADMIN')", name="ck_users_role"),
        comment="Authentication identities; role is fixed at registration",
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "subjects",
        _id(),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        "teacher_profiles",
        _id(),
        sa.Column(
            "user_id",
            sa.String(26),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("rating_avg", sa.Numeric(3, 2), nullable=True),
        sa.Column("reviews_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("idx_teacher_profiles_city", "teacher_profiles", ["city"])

    op.create_table(
        "teacher_subjects",
        sa.Column(
            "teacher_profile_id",
            sa.String(26),
            sa.ForeignKey("teacher_profiles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "subject_id",
            sa.String(26),
            sa.ForeignKey("subjects.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_index("idx_teacher_subjects_subject", "teacher_subjects", ["subject_id"])

    op.create_table(
        "student_profiles",
        _id(),
        sa.Column(
            "user_id",
            sa.String(26),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("city", sa.String(255), nullable=True),
        sa.Column("level", sa.String(20), nullable=True),
        sa.Column("track", sa.String(255), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "availability_slots",
        _id(),
        _user_fk("teacher_id"),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_availability_day"),
        sa.CheckConstraint("start_time < end_time", name="ck_availability_time_order"),
    )
    op.create_index(
        "idx_availability_teacher_day",
        "availability_slots",
        ["teacher_id", "day_of_week", "start_time"],
    )

    op.create_table(
        "contact_requests",
        _id(),
        _user_fk("student_id"),
        _user_fk("teacher_id"),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('PENDING', 'ACCEPTED', 'REJECTED')", name="ck_contact_requests_status"
        ),
        sa.CheckConstraint("student_id <> teacher_id", name="ck_contact_requests_distinct_users"),
    )
    # At most one PENDING request per pair
    op.create_index(
        "uq_contact_requests_pending_pair",
        "contact_requests",
        ["student_id", "teacher_id"],
        unique=True,
        postgresql_where=sa.text("status = 'PENDING'"),
        sqlite_where=sa.text("status = 'PENDING'"),
    )
    op.create_index(
        "idx_contact_requests_teacher_created", "contact_requests", ["teacher_id", "created_at"]
    )
    op.create_index(
        "idx_contact_requests_student_created", "contact_requests", ["student_id", "created_at"]
    )

    op.create_table(
        "conversations",
        _id(),
        _user_fk("student_id"),
        _user_fk("teacher_id"),
        sa.Column(
            "request_id",
            sa.String(26),
            sa.ForeignKey("contact_requests.id", ondelete="SET NULL"),
            nullable=True,
            unique=True,
        ),
        *_timestamps(),
    )
    op.create_index(
        "idx_conversations_student_updated", "conversations", ["student_id", "updated_at"]
    )
    op.create_index(
        "idx_conversations_teacher_updated", "conversations", ["teacher_id", "updated_at"]
    )

    op.create_table(
        "messages",
        _id(),
        sa.Column(
            "conversation_id",
            sa.String(26),
            sa.ForeignKey("conversations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_fk("sender_id"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )
    op.create_index(
        "idx_messages_conversation_created", "messages", ["conversation_id", "created_at"]
    )

    op.create_table(
        "lessons",
        _id(),
        _user_fk("teacher_id"),
        _user_fk("student_id"),
        sa.Column(
            "subject_id",
            sa.String(26),
            sa.ForeignKey("subjects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_min", sa.Integer(), nullable=False),
        sa.Column("status_for_teacher", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("status_for_student", sa.String(20), nullable=False, server_default="PENDING"),
        *_timestamps(),
        sa.CheckConstraint("duration_min > 0", name="ck_lessons_duration_positive"),
        sa.CheckConstraint("teacher_id <> student_id", name="ck_lessons_distinct_users"),
    )
    op.create_index("idx_lessons_teacher_start", "lessons", ["teacher_id", "start_at"])
    op.create_index("idx_lessons_student_start", "lessons", ["student_id", "start_at"])

    op.create_table(
        "reviews",
        _id(),
        _user_fk("teacher_id"),
        _user_fk("student_id"),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("teacher_id", "student_id", name="uq_reviews_teacher_student"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        sa.CheckConstraint(
            "(comment IS NULL) OR (length(comment) <= 1000)", name="ck_reviews_comment_length"
        ),
    )
    op.create_index("idx_reviews_teacher_created", "reviews", ["teacher_id", "created_at"])
    op.create_index("idx_reviews_student_created", "reviews", ["student_id", "created_at"])

    print("Initial schema created")


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    print("Dropping initial schema...")

    for table in (
        "reviews",
        "lessons",
        "messages",
        "conversations",
        "contact_requests",
        "availability_slots",
        "student_profiles",
        "teacher_subjects",
        "teacher_profiles",
        "subjects",
        "users",
    ):
        op.drop_table(table)
