"""add_templates_and_app_config

Revision ID: 7c4d2e9a5b31
Revises: 3f1a9c2e7b10
Create Date: 2026-10-19 12:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "7c4d2e9a5b31"
down_revision: Union[str, Sequence[str], None] = "3f1a9c2e7b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATEGORY_KEYS = ("health", "mind", "career", "life", "fun")


def upgrade() -> None:
    op.create_table(
        "resolution_templates",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "category_key",
            sa.Enum(*CATEGORY_KEYS, name="categorykey", create_type=False),
            nullable=False,
        ),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column(
            "tracking_mode",
            sa.Enum("binary", "duration", "count", name="trackingmode", create_type=False),
            nullable=False,
        ),
        sa.Column("suggested_target_value", sa.Integer(), nullable=True),
        sa.Column("suggested_count_unit", sa.String(), nullable=True),
        sa.Column(
            "suggested_frequency",
            sa.Enum("daily", "weekdays", "weekends", "custom", "x_per_week", name="frequencytype", create_type=False),
            nullable=False,
        ),
        sa.Column("suggested_days_per_week", sa.Integer(), nullable=True),
        sa.Column("is_popular", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("order", sa.Integer(), server_default=sa.text("0"), nullable=False),
    )
    op.create_index(
        op.f("ix_resolution_templates_category_key"), "resolution_templates", ["category_key"], unique=False
    )
    op.create_index(
        "ix_resolution_templates_category_popular",
        "resolution_templates",
        ["category_key", "is_popular"],
        unique=False,
    )

    with op.batch_alter_table("habits") as batch_op:
        batch_op.add_column(sa.Column("template_id", sa.String(), nullable=True))
        batch_op.create_foreign_key(
            "fk_habits_template_id", "resolution_templates", ["template_id"], ["id"]
        )

    op.create_table(
        "app_config",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("min_supported_app_version", sa.String(), nullable=False),
        sa.Column("latest_app_version", sa.String(), nullable=False),
        sa.Column("is_maintenance_mode", sa.Boolean(), nullable=True),
        sa.Column("store_url", sa.String(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("app_config")
    with op.batch_alter_table("habits") as batch_op:
        batch_op.drop_constraint("fk_habits_template_id", type_="foreignkey")
        batch_op.drop_column("template_id")
    op.drop_index("ix_resolution_templates_category_popular", table_name="resolution_templates")
    op.drop_index(op.f("ix_resolution_templates_category_key"), table_name="resolution_templates")
    op.drop_table("resolution_templates")
