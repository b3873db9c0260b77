"""create_videos_table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 09:31:02.540917+00:00

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, Sequence[str], None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS videos (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            owner_id TEXT NOT NULL REFERENCES accounts(id),
            external_media_id TEXT NOT NULL UNIQUE
        );

        -- Listing is always newest first
        CREATE INDEX IF NOT EXISTS idx_videos_created_at ON videos(created_at DESC);
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("""
        DROP INDEX IF EXISTS idx_videos_created_at;
        DROP TABLE IF EXISTS videos CASCADE;
    """)
