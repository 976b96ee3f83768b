"""Domain value objects for connections.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from enum import Enum

from pydantic import field_validator

from knowshare.domain.value.common import RootValueObject


class ConnectionStatus(str, Enum):
    """Stored status of a connection request.

    Rejection is not a status: a rejected request is deleted.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"


class ConnectionView(str, Enum):
    """Derived per-user views over connection requests."""

    RECEIVED = "received"
    SENT = "sent"
    ACCEPTED = "accepted"


class ConnectionOutcome(str, Enum):
    """Terminal outcome of a connection directory operation."""

    CREATED = "created"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ALREADY_PENDING = "already_pending"
    ALREADY_CONNECTED = "already_connected"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    PERSISTENCE_ERROR = "persistence_error"


class RequestDirection(str, Enum):
    """Direction of an existing pending request relative to the caller."""

    OUTGOING = "outgoing"
    INCOMING = "incoming"


class RelationshipState(str, Enum):
    """State of a pair of users as seen by one of them."""

    NONE = "none"
    REQUEST_SENT = "request_sent"
    REQUEST_RECEIVED = "request_received"
    CONNECTED = "connected"


_WHITESPACE = re.compile(r"\s")


class Username(RootValueObject[str]):
    """User handle.

    Unique per user and immutable. Derived from the local part of the
    user's email at signup, but otherwise treated as an opaque string.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is non-empty, bounded and free of whitespace."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Username must be 1-255 characters")
        if _WHITESPACE.search(v):
            raise ValueError("Username must not contain whitespace")
        return v

    @classmethod
    def from_email(cls, email: str) -> "Username":
        """Derive a username from the local part of an email address.

        Raises:
            ValueError: If the email has no local part
        """
        local, _, _ = email.strip().partition("@")
        return cls(local)
