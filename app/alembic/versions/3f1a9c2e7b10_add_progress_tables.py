"""add_progress_tables

Revision ID: 3f1a9c2e7b10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1a9c2e7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATEGORY_KEYS = ("health", "mind", "career", "life", "fun")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("token_identifier", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("goal", sa.String(), nullable=True),
        sa.Column("experience", sa.String(), nullable=True),
        sa.Column("is_onboarded", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("is_agreed_terms", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("current_streak", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("best_streak", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("last_completed_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f("ix_users_token_identifier"), "users", ["token_identifier"], unique=True)

    op.create_table(
        "categories",
        sa.Column("key", sa.Enum(*CATEGORY_KEYS, name="categorykey"), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("icon", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("character_name", sa.String(), nullable=True),
        sa.Column("character_theme", sa.String(), nullable=True),
    )

    op.create_table(
        "habits",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "category_key",
            sa.Enum(*CATEGORY_KEYS, name="categorykey", create_type=False),
            nullable=False,
        ),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("tracking_mode", sa.Enum("binary", "duration", "count", name="trackingmode"), nullable=False),
        sa.Column("target_value", sa.Integer(), nullable=True),
        sa.Column("count_unit", sa.String(), nullable=True),
        sa.Column(
            "frequency_type",
            sa.Enum("daily", "weekdays", "weekends", "custom", "x_per_week", name="frequencytype"),
            nullable=False,
        ),
        sa.Column("custom_days", sa.JSON(), nullable=True),
        sa.Column("days_per_week", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("current_streak", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("best_streak", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("last_completed_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f("ix_habits_user_id"), "habits", ["user_id"], unique=False)
    op.create_index("ix_habits_user_category", "habits", ["user_id", "category_key"], unique=False)

    op.create_table(
        "daily_logs",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("habit_id", sa.String(), sa.ForeignKey("habits.id"), nullable=False),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("current_value", sa.Float(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), server_default=sa.text("FALSE"), nullable=False),
        sa.UniqueConstraint("habit_id", "date", name="uq_daily_logs_habit_date"),
    )
    op.create_index("ix_daily_logs_user_date", "daily_logs", ["user_id", "date"], unique=False)

    op.create_table(
        "daily_category_stats",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("category_key", sa.String(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("xp_earned", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("total_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("completed_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.UniqueConstraint("user_id", "category_key", "date", name="uq_daily_category_stats_key"),
    )
    op.create_index(op.f("ix_daily_category_stats_user_id"), "daily_category_stats", ["user_id"], unique=False)

    op.create_table(
        "user_category_stats",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("category_key", sa.String(), nullable=False),
        sa.Column("total_xp", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("current_streak", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.UniqueConstraint("user_id", "category_key", name="uq_user_category_stats_key"),
    )
    op.create_index(op.f("ix_user_category_stats_user_id"), "user_category_stats", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_user_category_stats_user_id"), table_name="user_category_stats")
    op.drop_table("user_category_stats")
    op.drop_index(op.f("ix_daily_category_stats_user_id"), table_name="daily_category_stats")
    op.drop_table("daily_category_stats")
    op.drop_index("ix_daily_logs_user_date", table_name="daily_logs")
    op.drop_table("daily_logs")
    op.drop_index("ix_habits_user_category", table_name="habits")
    op.drop_index(op.f("ix_habits_user_id"), table_name="habits")
    op.drop_table("habits")
    op.drop_table("categories")
    op.drop_index(op.f("ix_users_token_identifier"), table_name="users")
    op.drop_table("users")
    sa.Enum(name="frequencytype").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="trackingmode").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="categorykey").drop(op.get_bind(), checkfirst=True)
