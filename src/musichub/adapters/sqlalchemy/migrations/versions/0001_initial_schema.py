"""Initial producer and artist schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "producer",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("producer_code", sa.String(length=5), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_producer"),
        sa.UniqueConstraint("producer_code", name="uq_producer_producer_code"),
    )
    op.create_table(
        "producer_track",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("producer_id", sa.Uuid(), nullable=False),
        sa.Column("isrc", sa.String(length=12), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("status", sa.String(length=11), nullable=False),
        sa.Column("credits", sa.String(), nullable=False),
        sa.Column("sources", sa.String(), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["producer_id"],
            ["producer.id"],
            name="fk_producer_track_producer_id_producer",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_producer_track"),
        sa.UniqueConstraint("producer_id", "isrc", name="uq_producer_track_producer_id"),
    )
    op.create_index("ix_producer_track_submitted_at", "producer_track", ["submitted_at"])
    op.create_table(
        "artist",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=11), nullable=False),
        sa.Column("sources", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_artist"),
        sa.UniqueConstraint("name", name="uq_artist_name"),
    )
    op.create_table(
        "artist_track_reference",
        sa.Column("artist_id", sa.Uuid(), nullable=False),
        sa.Column("isrc", sa.String(length=12), nullable=False),
        sa.ForeignKeyConstraint(
            ["artist_id"],
            ["artist.id"],
            name="fk_artist_track_reference_artist_id_artist",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("artist_id", "isrc", name="pk_artist_track_reference"),
    )
    op.create_table(
        "artist_contribution",
        sa.Column("artist_id", sa.Uuid(), nullable=False),
        sa.Column("track_id", sa.Uuid(), nullable=False),
        sa.Column("isrc", sa.String(length=12), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(
            ["artist_id"],
            ["artist.id"],
            name="fk_artist_contribution_artist_id_artist",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("artist_id", "track_id", name="pk_artist_contribution"),
    )


def downgrade() -> None:
    op.drop_table("artist_contribution")
    op.drop_table("artist_track_reference")
    op.drop_table("artist")
    op.drop_index("ix_producer_track_submitted_at", table_name="producer_track")
    op.drop_table("producer_track")
    op.drop_table("producer")
