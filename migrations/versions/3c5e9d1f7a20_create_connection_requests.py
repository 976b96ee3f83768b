"""create_connection_requests

Connection requests between users:
- One row per unordered pair, enforced by the canonical (low, high) columns
- Pending rows are deleted on reject; accepted rows are terminal

Revision ID: 3c5e9d1f7a20
Revises:
Create Date: 2026-10-19 10:12:44.318902

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c5e9d1f7a20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM type (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE connection_status AS ENUM ('pending', 'accepted');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.create_table(
        "connection_requests",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("requester", sa.String(255), nullable=False),
        sa.Column("recipient", sa.String(255), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending", "accepted", name="connection_status", create_type=False
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("participant_low", sa.String(255), nullable=False),
        sa.Column("participant_high", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "participant_low", "participant_high", name="uq_connection_pair"
        ),
        sa.CheckConstraint("requester <> recipient", name="ck_connection_not_self"),
        # Byte order, matching how usernames are sorted in the application
        sa.CheckConstraint(
            'participant_low COLLATE "C" < participant_high COLLATE "C"',
            name="ck_connection_pair_ordered",
        ),
    )
    op.create_index(
        "idx_connection_requests_recipient_status",
        "connection_requests",
        ["recipient", "status"],
    )
    op.create_index(
        "idx_connection_requests_requester_status",
        "connection_requests",
        ["requester", "status"],
    )
    # Accepted lookups hit (participant_low, ...) via the unique constraint;
    # this covers the high side
    op.create_index(
        "idx_connection_requests_high_status",
        "connection_requests",
        ["participant_high", "status"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        "idx_connection_requests_high_status", table_name="connection_requests"
    )
    op.drop_index(
        "idx_connection_requests_requester_status", table_name="connection_requests"
    )
    op.drop_index(
        "idx_connection_requests_recipient_status", table_name="connection_requests"
    )
    op.drop_table("connection_requests")
    op.execute("DROP TYPE IF EXISTS connection_status")
