"""Domain value objects for connections."""

from knowshare.domain.value.identifiers import ConnectionRequestId
from knowshare.domain.value.types import (
    ConnectionOutcome,
    ConnectionStatus,
    ConnectionView,
    RelationshipState,
    RequestDirection,
    Username,
)

__all__ = [
    # Identifiers
    "ConnectionRequestId",
    # Types
    "ConnectionOutcome",
    "ConnectionStatus",
    "ConnectionView",
    "RelationshipState",
    "RequestDirection",
    "Username",
]
