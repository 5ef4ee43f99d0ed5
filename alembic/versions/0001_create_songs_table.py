"""create songs table

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:00:00.000000

Hey future me - THE song catalog table!

KEY DESIGN DECISIONS:
1. Integer identity id - clients address songs by number (/songs/42)
2. Composite unique constraint on (group_name, song_name) - a group can't have
   two songs with the same name, and concurrent creates can't sneak a dupe in
3. Index on created_at - every listing is ordered newest first
4. text/link default to "" instead of NULL, the domain never sees None there
"""

import logging

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create songs table (idempotent - skips if exists)."""
    # Tables created by the app's create_tables=True startup path already exist
    conn = op.get_bind()
    inspector = sa.inspect(conn)

    if "songs" in inspector.get_table_names():
        logging.info("Table songs already exists - skipping creation")
        return

    op.create_table(
        "songs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("group_name", sa.String(255), nullable=False),
        sa.Column("song_name", sa.String(255), nullable=False),
        sa.Column("release_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("text", sa.Text(), nullable=False, server_default=""),
        sa.Column("link", sa.String(1024), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        # SQLite can't ALTER TABLE ADD CONSTRAINT, so the constraint goes inline
        sa.UniqueConstraint("group_name", "song_name", name="uq_songs_group_song"),
    )

    op.create_index("ix_songs_created_at", "songs", ["created_at"])


def downgrade() -> None:
    """Drop songs table."""
    op.drop_index("ix_songs_created_at", table_name="songs")
    op.drop_table("songs")
