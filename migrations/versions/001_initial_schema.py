"""Initial schema: service_bookings, slot_blocks.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "service_bookings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("service_name", sa.String(), nullable=False),
        sa.Column("flow", sa.String(), nullable=False, server_default="walk_in"),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("customer_email", sa.String(), nullable=False),
        sa.Column("customer_phone", sa.String(), nullable=True),
        sa.Column("guest_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("event_time", sa.Time(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_service_bookings_event_date"), "service_bookings", ["event_date"], unique=False)
    op.create_index(op.f("ix_service_bookings_status"), "service_bookings", ["status"], unique=False)
    # One live booking per slot start; cancelled rows are kept for reporting
    op.create_index(
        "uq_service_bookings_active_slot",
        "service_bookings",
        ["event_date", "event_time"],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'"),
        sqlite_where=sa.text("status <> 'cancelled'"),
    )

    op.create_table(
        "slot_blocks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("block_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("reason", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("start_time < end_time", name="ck_slot_blocks_start_before_end"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_slot_blocks_block_date"), "slot_blocks", ["block_date"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_slot_blocks_block_date"), table_name="slot_blocks")
    op.drop_table("slot_blocks")
    op.drop_index("uq_service_bookings_active_slot", table_name="service_bookings")
    op.drop_index(op.f("ix_service_bookings_status"), table_name="service_bookings")
    op.drop_index(op.f("ix_service_bookings_event_date"), table_name="service_bookings")
    op.drop_table("service_bookings")
