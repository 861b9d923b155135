"""create relief tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "stored_collections",
        sa.Column("name", sa.String(length=50), primary_key=True, nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "relief_assignments",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("leave_request_id", sa.String(length=36), nullable=False),
        sa.Column("leave_date", sa.String(length=50), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("period", sa.Integer(), nullable=False),
        sa.Column("class_name", sa.String(length=200), nullable=False),
        sa.Column("subject", sa.String(length=200), nullable=False),
        sa.Column("substitute_teacher_id", sa.String(length=36), nullable=True),
        sa.Column("substitute_teacher_name", sa.String(length=200), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(
        "ix_relief_assignments_leave_request_id",
        "relief_assignments",
        ["leave_request_id"],
        unique=False,
    )
    op.create_index("ix_relief_assignments_leave_date", "relief_assignments", ["leave_date"], unique=False)
    op.create_index(
        "ix_relief_assignments_substitute_teacher_id",
        "relief_assignments",
        ["substitute_teacher_id"],
        unique=False,
    )

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("action", sa.String(length=100), nullable=False),
        sa.Column("entity_type", sa.String(length=100), nullable=True),
        sa.Column("entity_id", sa.String(length=100), nullable=True),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        sa.Column("details", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("activity_logs")
    op.drop_index("ix_relief_assignments_substitute_teacher_id", table_name="relief_assignments")
    op.drop_index("ix_relief_assignments_leave_date", table_name="relief_assignments")
    op.drop_index("ix_relief_assignments_leave_request_id", table_name="relief_assignments")
    op.drop_table("relief_assignments")
    op.drop_table("stored_collections")
