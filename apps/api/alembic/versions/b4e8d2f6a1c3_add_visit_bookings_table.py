"""Add visit_bookings table

Revision ID: b4e8d2f6a1c3
Revises: a7c1e9d2b4f0
Create Date: 2026-10-19

Visit bookings take one family per date and time slot, enforced by a unique
constraint on (visit_date, visit_time).
"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "b4e8d2f6a1c3"
down_revision = "a7c1e9d2b4f0"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "visit_bookings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("reference", sa.String(40), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_agent", sa.String(500), nullable=False, server_default="unknown"),
        sa.Column("priority", sa.String(16), nullable=False, server_default="normal"),
        sa.Column("source", sa.String(50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("parent_name", sa.String(200), nullable=False),
        sa.Column("child_name", sa.String(200), nullable=False),
        sa.Column("child_age", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(30), nullable=False),
        sa.Column("visit_date", sa.Date(), nullable=False),
        sa.Column("visit_time", sa.String(10), nullable=False),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        sa.Column("reminder_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("visit_date", "visit_time", name="uq_visit_bookings_slot"),
    )
    op.create_index("ix_visit_bookings_reference", "visit_bookings", ["reference"], unique=True)
    op.create_index("ix_visit_bookings_status", "visit_bookings", ["status"])
    op.create_index("ix_visit_bookings_created_at", "visit_bookings", ["created_at"])
    op.create_index("ix_visit_bookings_email", "visit_bookings", ["email"])


def downgrade() -> None:
    op.drop_table("visit_bookings")
