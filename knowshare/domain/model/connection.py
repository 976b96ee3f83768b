"""Connection request entity.

A connection request is a directed request from one user to another. Once
accepted it becomes a bidirectional link between the two users while still
remembering who asked.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field, model_validator

from knowshare.domain.model.common import DomainModel
from knowshare.domain.value import (
    ConnectionOutcome,
    ConnectionRequestId,
    ConnectionStatus,
    RequestDirection,
    Username,
)
from knowshare.domain.value.common import ValueObject


def canonical_pair(a: Username, b: Username) -> tuple[Username, Username]:
    """Return the unordered pair {a, b} in canonical (sorted) order."""
    return (a, b) if a.root <= b.root else (b, a)


class ConnectionRequest(DomainModel):
    """Connection request entity.

    Business rules:
    - At most one request per unordered pair of users
    - Requester and recipient are distinct
    - ``participants`` is the canonical pair and always matches
      requester/recipient
    - pending -> accepted is the only status transition; rejection deletes
    """

    id: ConnectionRequestId
    requester: Username
    recipient: Username
    status: ConnectionStatus = ConnectionStatus.PENDING
    participants: tuple[Username, Username]
    # Provisional until stored; the store assigns the authoritative value
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    accepted_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def derive_participants(cls, data: Any) -> Any:
        """Fill in participants from requester and recipient."""
        if isinstance(data, dict) and "requester" in data and "recipient" in data:
            requester = data["requester"]
            recipient = data["recipient"]
            if not isinstance(requester, Username):
                requester = Username(requester)
            if not isinstance(recipient, Username):
                recipient = Username(recipient)
            data = {
                **data,
                "requester": requester,
                "recipient": recipient,
                "participants": canonical_pair(requester, recipient),
            }
        return data

    @model_validator(mode="after")
    def check_distinct_users(self) -> "ConnectionRequest":
        """Refuse self-connections."""
        if self.requester == self.recipient:
            raise ValueError("A user cannot connect to themselves")
        return self

    def involves(self, user: Username) -> bool:
        """Whether ``user`` is one of the two participants."""
        return user in self.participants

    def peer_of(self, user: Username) -> Username:
        """Return the participant that is not ``user``.

        Raises:
            ValueError: If ``user`` is not a participant
        """
        if user == self.requester:
            return self.recipient
        if user == self.recipient:
            return self.requester
        raise ValueError(f"{user} is not a participant of request {self.id}")

    def accept(self, at: datetime | None = None) -> "ConnectionRequest":
        """Return the accepted version of this request (same id)."""
        return self.model_copy(
            update={
                "status": ConnectionStatus.ACCEPTED,
                "participants": canonical_pair(self.requester, self.recipient),
                "accepted_at": at or datetime.now(timezone.utc),
            }
        )


class ConnectionResult(ValueObject):
    """Outcome of a connection directory operation.

    Every operation resolves to exactly one of these. ``succeeded`` and
    ``failed`` count record mutations; they are both non-zero only for a
    partially applied accept/reject.
    """

    outcome: ConnectionOutcome
    request: Optional[ConnectionRequest] = None
    direction: Optional[RequestDirection] = None
    succeeded: int = 0
    failed: int = 0
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        """Whether the operation changed state as asked."""
        return self.outcome in (
            ConnectionOutcome.CREATED,
            ConnectionOutcome.ACCEPTED,
            ConnectionOutcome.REJECTED,
        )
