"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the TimeMaster relational backend:
users, categories, tasks, time_blocks, pomodoro_sessions,
user_settings, record_counters.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _owner_columns():
    return [
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
    ]


def _timestamps():
    return [
        sa.Column("created_at", sa.String(32), nullable=True),
        sa.Column("updated_at", sa.String(32), nullable=True),
    ]


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.String(32), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # --- categories ---
    op.create_table(
        "categories",
        *_owner_columns(),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("color", sa.String(20), nullable=True),
        sa.Column("icon", sa.String(100), nullable=True),
        *_timestamps(),
    )

    # --- tasks (category_id intentionally not a foreign key) ---
    op.create_table(
        "tasks",
        *_owner_columns(),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category_id", sa.Integer, nullable=True),
        sa.Column("priority", sa.Integer, nullable=True),
        sa.Column("due_date", sa.String(10), nullable=True),
        sa.Column("due_time", sa.String(8), nullable=True),
        sa.Column("status", sa.String(20), nullable=True),
        sa.Column("reminder_minutes_before", sa.Integer, nullable=True),
        sa.Column("voice_reminder", sa.Boolean, nullable=True),
        *_timestamps(),
    )

    # --- time_blocks ---
    op.create_table(
        "time_blocks",
        *_owner_columns(),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("start_datetime", sa.String(32), nullable=True),
        sa.Column("end_datetime", sa.String(32), nullable=True),
        sa.Column("category_id", sa.Integer, nullable=True),
        sa.Column("color", sa.String(20), nullable=True),
        *_timestamps(),
    )

    # --- pomodoro_sessions ---
    op.create_table(
        "pomodoro_sessions",
        *_owner_columns(),
        sa.Column("task_id", sa.Integer, nullable=True),
        sa.Column("duration_minutes", sa.Integer, nullable=True),
        sa.Column("session_type", sa.String(20), nullable=True),
        sa.Column("completed", sa.Boolean, nullable=True),
        sa.Column("started_at", sa.String(32), nullable=True),
        sa.Column("completed_at", sa.String(32), nullable=True),
        sa.Column("session_date", sa.String(10), nullable=True),
        *_timestamps(),
    )

    # --- user_settings ---
    op.create_table(
        "user_settings",
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("key", sa.String(100), primary_key=True),
        sa.Column("value", sa.Text, nullable=True),
    )

    # --- record_counters ---
    op.create_table(
        "record_counters",
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), primary_key=True),
        sa.Column("collection", sa.String(50), primary_key=True),
        sa.Column("next_id", sa.Integer, nullable=False, server_default="1"),
    )


def downgrade() -> None:
    op.drop_table("record_counters")
    op.drop_table("user_settings")
    op.drop_table("pomodoro_sessions")
    op.drop_table("time_blocks")
    op.drop_table("tasks")
    op.drop_table("categories")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
