"""SQLAlchemy table definitions.

These table definitions back the Core queries in the Postgres repositories.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CONNECTION REQUESTS TABLE
# ============================================================================
connection_requests_table = Table(
    "connection_requests",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column("requester", String(255), nullable=False),
    Column("recipient", String(255), nullable=False),
    Column(
        "status",
        Enum("pending", "accepted", name="connection_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    # Canonical (sorted) pair; the unique constraint below is the
    # create-if-absent guard for the pair
    Column("participant_low", String(255), nullable=False),
    Column("participant_high", String(255), nullable=False),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("participant_low", "participant_high", name="uq_connection_pair"),
    CheckConstraint("requester <> recipient", name="ck_connection_not_self"),
    CheckConstraint(
        'participant_low COLLATE "C" < participant_high COLLATE "C"',
        name="ck_connection_pair_ordered",
    ),
)

Index(
    "idx_connection_requests_recipient_status",
    connection_requests_table.c.recipient,
    connection_requests_table.c.status,
)
Index(
    "idx_connection_requests_requester_status",
    connection_requests_table.c.requester,
    connection_requests_table.c.status,
)
Index(
    "idx_connection_requests_high_status",
    connection_requests_table.c.participant_high,
    connection_requests_table.c.status,
)
