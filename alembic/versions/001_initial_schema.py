"""Initial schema: movements, wods, templates, logged workouts and performances.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "movements",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=True),
        sa.Column("type", sa.String(length=13), nullable=False),
        sa.Column("is_standard", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_movements_name"), "movements", ["name"], unique=True)
    op.create_index(op.f("ix_movements_created_by"), "movements", ["created_by"], unique=False)

    op.create_table(
        "wods",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("source", sa.String(length=50), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("regime", sa.String(length=50), nullable=True),
        sa.Column("score_type", sa.String(length=50), nullable=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("url", sa.String(length=500), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_standard", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_wods_name"), "wods", ["name"], unique=True)
    op.create_index(op.f("ix_wods_created_by"), "wods", ["created_by"], unique=False)

    op.create_table(
        "workout_templates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workout_templates_name"), "workout_templates", ["name"], unique=False)
    op.create_index(op.f("ix_workout_templates_created_by"), "workout_templates", ["created_by"], unique=False)

    op.create_table(
        "template_movements",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=False),
        sa.Column("movement_id", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("time_seconds", sa.Integer(), nullable=True),
        sa.Column("distance", sa.Float(), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["template_id"], ["workout_templates.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["movement_id"], ["movements.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_template_movements_template_id"), "template_movements", ["template_id"], unique=False)

    op.create_table(
        "template_wods",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=False),
        sa.Column("wod_id", sa.Integer(), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["template_id"], ["workout_templates.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["wod_id"], ["wods.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_template_wods_template_id"), "template_wods", ["template_id"], unique=False)

    op.create_table(
        "logged_workouts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("template_id", sa.Integer(), nullable=True),
        sa.Column("workout_name", sa.String(length=255), nullable=True),
        sa.Column("workout_date", sa.Date(), nullable=False),
        sa.Column("workout_type", sa.String(length=20), nullable=True),
        sa.Column("total_time", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["template_id"], ["workout_templates.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "template_id", "workout_date", name="uq_logged_workouts_user_template_date"
        ),
    )
    op.create_index("ix_logged_workouts_user_date", "logged_workouts", ["user_id", "workout_date"], unique=False)

    op.create_table(
        "movement_performances",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("logged_workout_id", sa.Integer(), nullable=False),
        sa.Column("movement_id", sa.Integer(), nullable=False),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("time_seconds", sa.Integer(), nullable=True),
        sa.Column("distance", sa.Float(), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("is_pr", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("order_index", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["logged_workout_id"], ["logged_workouts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["movement_id"], ["movements.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_movement_performances_logged_workout_id", "movement_performances", ["logged_workout_id"], unique=False
    )
    op.create_index("ix_movement_performances_movement_id", "movement_performances", ["movement_id"], unique=False)

    op.create_table(
        "wod_performances",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("logged_workout_id", sa.Integer(), nullable=False),
        sa.Column("wod_id", sa.Integer(), nullable=False),
        sa.Column("time_seconds", sa.Integer(), nullable=True),
        sa.Column("rounds", sa.Integer(), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("is_pr", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("order_index", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["logged_workout_id"], ["logged_workouts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["wod_id"], ["wods.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_wod_performances_logged_workout_id", "wod_performances", ["logged_workout_id"], unique=False)
    op.create_index("ix_wod_performances_wod_id", "wod_performances", ["wod_id"], unique=False)


def downgrade() -> None:
    op.drop_table("wod_performances")
    op.drop_table("movement_performances")
    op.drop_table("logged_workouts")
    op.drop_table("template_wods")
    op.drop_table("template_movements")
    op.drop_table("workout_templates")
    op.drop_table("wods")
    op.drop_table("movements")
