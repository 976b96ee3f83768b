"""Domain model entities."""

from knowshare.domain.model.connection import (
    ConnectionRequest,
    ConnectionResult,
    canonical_pair,
)

__all__ = [
    "ConnectionRequest",
    "ConnectionResult",
    "canonical_pair",
]
