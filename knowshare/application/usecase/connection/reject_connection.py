"""Reject connection use case."""

from pydantic import BaseModel

from knowshare.domain.service import ConnectionDirectory
from knowshare.domain.value import ConnectionOutcome

from .common import ConnectionActionResponse


class RejectConnectionRequest(BaseModel):
    """Reject connection request."""

    requester: str  # User who sent the request
    recipient: str  # Acting user


class RejectConnectionUseCase:
    """Use case for rejecting a received connection request."""

    def __init__(self, connection_directory: ConnectionDirectory) -> None:
        """Initialize reject connection use case.

        Args:
            connection_directory: Connection directory domain service
        """
        self.connection_directory = connection_directory

    async def execute(
        self, request: RejectConnectionRequest
    ) -> ConnectionActionResponse:
        """Execute reject flow.

        Args:
            request: Reject connection request

        Returns:
            Outcome with a user-facing message
        """
        result = await self.connection_directory.reject_request(
            request.requester, request.recipient
        )

        if result.outcome == ConnectionOutcome.REJECTED:
            message = f"Rejected @{request.requester}"
        elif result.outcome == ConnectionOutcome.NOT_FOUND:
            message = f"No pending request from @{request.requester}"
        elif result.outcome == ConnectionOutcome.INVALID_ARGUMENT:
            message = result.detail or "Invalid reject"
        else:
            message = "Failed to reject request"

        return ConnectionActionResponse.from_result(result, message)
