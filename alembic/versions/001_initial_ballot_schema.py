"""Initial schema: zones, elections, voters, candidates, votes, ballot_receipts.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "zones",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("name_local", sa.String(200), nullable=True),
        sa.Column("election_type", sa.String(30), nullable=False),
        sa.Column("seats", sa.Integer, nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_open_for_voting", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("code", "election_type", name="uq_zone_code_election_type"),
        sa.CheckConstraint("seats >= 1", name="ck_zone_seats_positive"),
    )
    op.create_index("idx_zones_election_type", "zones", ["election_type"])

    op.create_table(
        "elections",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("election_type", sa.String(30), nullable=False, unique=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="UPCOMING"),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("voter_min_age", sa.Integer, nullable=True),
        sa.Column("voter_max_age", sa.Integer, nullable=True),
        sa.Column("candidate_min_age", sa.Integer, nullable=True),
        sa.Column("candidate_max_age", sa.Integer, nullable=True),
        sa.Column("voter_jurisdiction", sa.String(10), nullable=False, server_default="ALL"),
        sa.Column("candidate_jurisdiction", sa.String(10), nullable=False, server_default="ALL"),
        *_timestamps(),
        sa.CheckConstraint("status IN ('UPCOMING', 'ACTIVE', 'COMPLETED')", name="ck_election_status"),
        sa.CheckConstraint(
            "election_type IN ('YUVA_PANK', 'KAROBARI_MEMBERS', 'TRUSTEES')",
            name="ck_election_type",
        ),
        sa.CheckConstraint("voter_jurisdiction IN ('LOCAL', 'ALL')", name="ck_election_voter_jurisdiction"),
        sa.CheckConstraint(
            "candidate_jurisdiction IN ('LOCAL', 'ALL')",
            name="ck_election_candidate_jurisdiction",
        ),
    )

    zone_fk = {"ondelete": "SET NULL"}
    op.create_table(
        "voters",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("voter_roll_id", sa.String(50), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("age", sa.Integer, nullable=True),
        sa.Column("date_of_birth", sa.Date, nullable=True),
        sa.Column("region", sa.String(100), nullable=True),
        sa.Column("jurisdiction", sa.String(10), nullable=False, server_default="LOCAL"),
        sa.Column("zone_id", UUID(as_uuid=True), sa.ForeignKey("zones.id", **zone_fk), nullable=True),
        sa.Column("karobari_zone_id", UUID(as_uuid=True), sa.ForeignKey("zones.id", **zone_fk), nullable=True),
        sa.Column("trustee_zone_id", UUID(as_uuid=True), sa.ForeignKey("zones.id", **zone_fk), nullable=True),
        sa.Column("yuva_pankh_zone_id", UUID(as_uuid=True), sa.ForeignKey("zones.id", **zone_fk), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("has_voted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_voters_voter_roll_id", "voters", ["voter_roll_id"], unique=True)
    op.create_index("ix_voters_phone", "voters", ["phone"], unique=True)
    op.create_index("ix_voters_karobari_zone_id", "voters", ["karobari_zone_id"])
    op.create_index("ix_voters_trustee_zone_id", "voters", ["trustee_zone_id"])
    op.create_index("ix_voters_yuva_pankh_zone_id", "voters", ["yuva_pankh_zone_id"])

    op.create_table(
        "candidates",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("election_type", sa.String(30), nullable=False),
        sa.Column(
            "zone_id",
            UUID(as_uuid=True),
            sa.ForeignKey("zones.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("name_local", sa.String(200), nullable=True),
        sa.Column("party", sa.String(200), nullable=True),
        sa.Column("manifesto", sa.Text, nullable=True),
        sa.Column("position", sa.String(100), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("rejection_reason", sa.Text, nullable=True),
        sa.Column("is_nota", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('PENDING', 'SUBMITTED', 'APPROVED', 'REJECTED')",
            name="ck_candidate_status",
        ),
    )
    op.create_index("idx_candidates_zone_status", "candidates", ["zone_id", "status"])
    op.create_index("idx_candidates_election_type", "candidates", ["election_type"])
    # One NOTA per (zone, seat tag); concurrent provisioning relies on this
    op.create_index(
        "uq_candidates_nota_zone_position",
        "candidates",
        ["zone_id", "position"],
        unique=True,
        postgresql_where=sa.text("is_nota"),
        sqlite_where=sa.text("is_nota = 1"),
    )

    op.create_table(
        "votes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "voter_id",
            UUID(as_uuid=True),
            sa.ForeignKey("voters.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "election_id",
            UUID(as_uuid=True),
            sa.ForeignKey("elections.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("election_type", sa.String(30), nullable=False),
        sa.Column(
            "candidate_id",
            UUID(as_uuid=True),
            sa.ForeignKey("candidates.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "zone_id",
            UUID(as_uuid=True),
            sa.ForeignKey("zones.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("position_id", sa.String(120), nullable=False),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.String(512), nullable=True),
        sa.Column("cast_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("voter_id", "election_id", "position_id", name="uq_vote_voter_election_position"),
    )
    op.create_index("idx_votes_election_candidate", "votes", ["election_id", "candidate_id"])
    op.create_index("idx_votes_voter_id", "votes", ["voter_id"])

    op.create_table(
        "ballot_receipts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "voter_id",
            UUID(as_uuid=True),
            sa.ForeignKey("voters.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "election_id",
            UUID(as_uuid=True),
            sa.ForeignKey("elections.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("election_type", sa.String(30), nullable=False),
        sa.Column("votes_count", sa.Integer, nullable=False),
        sa.Column("nota_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("submitted_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("voter_id", "election_id", name="uq_ballot_receipt_voter_election"),
    )
    op.create_index("idx_ballot_receipts_election_type", "ballot_receipts", ["election_type"])


def downgrade() -> None:
    op.drop_table("ballot_receipts")
    op.drop_table("votes")
    op.drop_index("uq_candidates_nota_zone_position", table_name="candidates")
    op.drop_table("candidates")
    op.drop_table("voters")
    op.drop_table("elections")
    op.drop_table("zones")
