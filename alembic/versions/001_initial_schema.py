"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

FREQUENCIES = (
    "daily",
    "weekdays",
    "weekends",
    "three_times_week",
    "twice_week",
    "weekly",
    "biweekly",
    "monthly",
    "once",
)


def upgrade() -> None:
    # Visions table (singleton row)
    op.create_table(
        "visions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("three_year_vision", sa.Text(), nullable=True),
        sa.Column("twelve_week_goals", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # Twelve-week plans table
    op.create_table(
        "twelve_week_plans",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("goals", sa.JSON(), nullable=False),
        sa.Column("vision_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["vision_id"], ["visions.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    # Weekly plans table
    op.create_table(
        "weekly_plans",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("twelve_week_plan_id", sa.Integer(), nullable=True),
        sa.Column("week_number", sa.SmallInteger(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("completion_percentage", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_successful", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["twelve_week_plan_id"], ["twelve_week_plans.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_weekly_plans_window", "weekly_plans", ["start_date", "end_date"])

    # Tasks table
    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column(
            "priority",
            sa.Enum("low", "medium", "high", name="taskpriority"),
            nullable=False,
            server_default="medium",
        ),
        sa.Column(
            "frequency",
            sa.Enum(*FREQUENCIES, name="taskfrequency"),
            nullable=False,
            server_default="weekly",
        ),
        sa.Column(
            "task_type",
            sa.Enum("recurring", "week_specific", name="tasktype"),
            nullable=False,
            server_default="week_specific",
        ),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("completion_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completion_target", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("last_completed", sa.DateTime(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("weekly_plan_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["weekly_plan_id"], ["weekly_plans.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tasks_weekly_plan_id", "tasks", ["weekly_plan_id"])
    op.create_index("ix_tasks_task_type", "tasks", ["task_type"])


def downgrade() -> None:
    op.drop_index("ix_tasks_task_type", table_name="tasks")
    op.drop_index("ix_tasks_weekly_plan_id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("ix_weekly_plans_window", table_name="weekly_plans")
    op.drop_table("weekly_plans")
    op.drop_table("twelve_week_plans")
    op.drop_table("visions")
