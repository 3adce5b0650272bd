"""Initial database schema.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Creates the tables for the Slotbook booking service:
- Users and authentication
- Venues with weekly opening hours
- Bookings with overlap protection per venue
"""

from typing import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

BLOCKING_STATUS_SQL = "status IN ('CONFIRMED', 'PENDING')"


def upgrade() -> None:
    """Create all database tables."""
    bind = op.get_bind()
    is_postgres = bind.dialect.name == "postgresql"

    # ==================== USERS ====================
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("name", sa.String(60), nullable=False),
        sa.Column("phone", sa.String(20)),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(10), nullable=False, server_default="USER"),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("role IN ('USER', 'OWNER', 'ADMIN')", name="ck_users_role"),
    )

    # ==================== VENUES ====================
    op.create_table(
        "venues",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "owner_id",
            sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("slug", sa.String(80), unique=True, nullable=False, index=True),
        sa.Column("description", sa.Text),
        sa.Column("city", sa.String(80)),
        sa.Column("area", sa.String(80)),
        sa.Column("address", sa.String(180)),
        sa.Column("thumbnail_url", sa.Text),
        sa.Column(
            "images",
            postgresql.ARRAY(sa.String) if is_postgres else sa.String(4096),
        ),
        sa.Column("slot_duration_minutes", sa.Integer, nullable=False, server_default="60"),
        sa.Column(
            "opening_hours",
            postgresql.JSONB if is_postgres else sa.JSON,
            nullable=False,
        ),
        sa.Column("timezone", sa.String(64)),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE", index=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("type IN ('TURF', 'EVENT_SPACE')", name="ck_venues_type"),
        sa.CheckConstraint("status IN ('ACTIVE', 'SUSPENDED')", name="ck_venues_status"),
        sa.CheckConstraint("slot_duration_minutes > 0", name="ck_venues_slot_duration"),
    )
    op.create_index("ix_venues_owner_created", "venues", ["owner_id", "created_at"])

    # ==================== BOOKINGS ====================
    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("booking_number", sa.String(20), unique=True, nullable=False, index=True),
        sa.Column("venue_id", sa.Uuid, sa.ForeignKey("venues.id"), nullable=False, index=True),
        sa.Column("owner_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id")),
        sa.Column("guest_name", sa.String(100)),
        sa.Column("guest_phone", sa.String(20)),
        sa.Column("user_snapshot", postgresql.JSONB if is_postgres else sa.JSON),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("note", sa.Text),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING", index=True),
        sa.Column("owner_decision", sa.String(20)),
        sa.Column("owner_note", sa.Text),
        sa.Column("admin_note", sa.Text),
        sa.Column("decided_by_id", sa.Uuid, sa.ForeignKey("users.id")),
        sa.Column("decided_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("end_at > start_at", name="ck_bookings_time_order"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'CONFIRMED', 'REJECTED', 'CANCELLED')",
            name="ck_bookings_status",
        ),
        sa.CheckConstraint(
            "user_id IS NOT NULL OR guest_name IS NOT NULL",
            name="ck_bookings_requester",
        ),
    )
    op.create_index(
        "ix_bookings_venue_span_status",
        "bookings",
        ["venue_id", "start_at", "end_at", "status"],
    )
    op.create_index("ix_bookings_user_created", "bookings", ["user_id", "created_at"])
    op.create_index(
        "uq_bookings_venue_blocking_start",
        "bookings",
        ["venue_id", "start_at"],
        unique=True,
        postgresql_where=sa.text(BLOCKING_STATUS_SQL),
        sqlite_where=sa.text(BLOCKING_STATUS_SQL),
    )

    if is_postgres:
        op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
        op.execute(
            f"""
            ALTER TABLE bookings
              ADD CONSTRAINT bookings_no_overlap_per_venue
              EXCLUDE USING gist (
                venue_id WITH =,
                tstzrange(start_at, end_at, '[)') WITH &&
              )
              WHERE ({BLOCKING_STATUS_SQL})
            """
        )


def downgrade() -> None:
    """Drop all database tables in reverse order."""
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute("ALTER TABLE bookings DROP CONSTRAINT IF EXISTS bookings_no_overlap_per_venue")

    op.drop_index("uq_bookings_venue_blocking_start", table_name="bookings")
    op.drop_index("ix_bookings_user_created", table_name="bookings")
    op.drop_index("ix_bookings_venue_span_status", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_venues_owner_created", table_name="venues")
    op.drop_table("venues")
    op.drop_table("users")
