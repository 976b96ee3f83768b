"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from knowshare.domain.model import ConnectionRequest
from knowshare.domain.value import ConnectionRequestId, ConnectionStatus, Username


def row_to_connection_request(row: Dict[str, Any]) -> ConnectionRequest:
    """Convert database row to ConnectionRequest domain model.

    ``participant_low``/``participant_high`` are not read back: the model
    re-derives its participants from requester and recipient.

    Args:
        row: Database row as dict

    Returns:
        ConnectionRequest domain model
    """
    return ConnectionRequest(
        id=ConnectionRequestId(
            UUID(row["id"]) if isinstance(row["id"], str) else row["id"]
        ),
        requester=Username(row["requester"]),
        recipient=Username(row["recipient"]),
        status=ConnectionStatus(row["status"]),
        created_at=row["created_at"],
        accepted_at=row.get("accepted_at"),
    )


def connection_request_to_dict(request: ConnectionRequest) -> Dict[str, Any]:
    """Convert ConnectionRequest domain model to database dict.

    Args:
        request: ConnectionRequest domain model

    ``created_at`` is left out: the database assigns it on insert.

    Returns:
        Dict suitable for database insertion/update
    """
    low, high = request.participants
    return {
        "id": request.id,
        "requester": request.requester.root,
        "recipient": request.recipient.root,
        "status": request.status.value,
        "participant_low": low.root,
        "participant_high": high.root,
        "accepted_at": request.accepted_at,
    }
