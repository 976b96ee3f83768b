"""Response model shared by the connection mutation use cases."""

from pydantic import BaseModel

from knowshare.domain.model import ConnectionResult
from knowshare.domain.value import (
    ConnectionOutcome,
    ConnectionStatus,
    RequestDirection,
)


class ConnectionActionResponse(BaseModel):
    """Outcome of a request/accept/reject action, ready for display."""

    outcome: ConnectionOutcome
    message: str
    request_id: str | None = None
    requester: str | None = None
    recipient: str | None = None
    status: ConnectionStatus | None = None
    direction: RequestDirection | None = None
    succeeded: int = 0
    failed: int = 0

    @classmethod
    def from_result(
        cls, result: ConnectionResult, message: str
    ) -> "ConnectionActionResponse":
        """Build a response from a directory result."""
        request = result.request
        return cls(
            outcome=result.outcome,
            message=message,
            request_id=str(request.id) if request else None,
            requester=str(request.requester) if request else None,
            recipient=str(request.recipient) if request else None,
            status=request.status if request else None,
            direction=result.direction,
            succeeded=result.succeeded,
            failed=result.failed,
        )
