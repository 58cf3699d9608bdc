"""create_surprises

Revision ID: 5b2e7c1a9d40
Revises:
Create Date: 2026-10-19 10:12:41.204518

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b2e7c1a9d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "surprises",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("slug", sa.String(64), nullable=False),
        sa.Column("filename", sa.Text(), nullable=False),
        sa.Column("original_name", sa.Text(), nullable=False),
        sa.Column("mime_type", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("password", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("idx_surprises_created_at", "surprises", ["created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_surprises_created_at", table_name="surprises")
    op.drop_table("surprises")
