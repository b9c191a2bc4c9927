"""Initial schema: user_profiles, pairings, messages.

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

pairing_status = sa.Enum("pending", "accepted", "declined", name="pairing_status")
active_pair = sa.text("status IN ('pending', 'accepted')")


def upgrade() -> None:
    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("display_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("fitness_goal", sa.String(length=255), nullable=True),
        sa.Column("workout_type", sa.String(length=255), nullable=True),
        sa.Column("availability", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_profiles_email"), "user_profiles", ["email"], unique=True)

    op.create_table(
        "pairings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("requester_id", sa.Uuid(), nullable=False),
        sa.Column("recipient_id", sa.Uuid(), nullable=False),
        sa.Column("user_low_id", sa.Uuid(), nullable=False),
        sa.Column("user_high_id", sa.Uuid(), nullable=False),
        sa.Column("status", pairing_status, nullable=False),
        sa.Column("compatibility_score", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("requester_id <> recipient_id", name="ck_pairings_distinct_users"),
        sa.CheckConstraint(
            "compatibility_score >= 0 AND compatibility_score <= 100",
            name="ck_pairings_score_range",
        ),
        sa.ForeignKeyConstraint(["requester_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipient_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_pairings_active_pair",
        "pairings",
        ["user_low_id", "user_high_id"],
        unique=True,
        postgresql_where=active_pair,
        sqlite_where=active_pair,
    )
    op.create_index("ix_pairings_requester_updated", "pairings", ["requester_id", "updated_at"])
    op.create_index("ix_pairings_recipient_updated", "pairings", ["recipient_id", "updated_at"])

    op.create_table(
        "messages",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("pairing_id", sa.Uuid(), nullable=False),
        sa.Column("sender_id", sa.Uuid(), nullable=False),
        sa.Column("seq", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("client_token", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["pairing_id"], ["pairings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sender_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pairing_id", "seq", name="uq_messages_pairing_seq"),
        sa.UniqueConstraint("pairing_id", "sender_id", "client_token", name="uq_messages_client_token"),
    )


def downgrade() -> None:
    op.drop_table("messages")
    op.drop_index("ix_pairings_recipient_updated", table_name="pairings")
    op.drop_index("ix_pairings_requester_updated", table_name="pairings")
    op.drop_index("uq_pairings_active_pair", table_name="pairings")
    op.drop_table("pairings")
    pairing_status.drop(op.get_bind(), checkfirst=True)
    op.drop_index(op.f("ix_user_profiles_email"), table_name="user_profiles")
    op.drop_table("user_profiles")
