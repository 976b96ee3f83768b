"""Request connection use case."""

from pydantic import BaseModel

from knowshare.domain.model import ConnectionResult
from knowshare.domain.service import ConnectionDirectory
from knowshare.domain.value import ConnectionOutcome, RequestDirection

from .common import ConnectionActionResponse


class RequestConnectionRequest(BaseModel):
    """Request connection request."""

    requester: str  # Acting user
    recipient: str


class RequestConnectionUseCase:
    """Use case for sending a connection request."""

    def __init__(self, connection_directory: ConnectionDirectory) -> None:
        """Initialize request connection use case.

        Args:
            connection_directory: Connection directory domain service
        """
        self.connection_directory = connection_directory

    async def execute(
        self, request: RequestConnectionRequest
    ) -> ConnectionActionResponse:
        """Execute request connection flow.

        Args:
            request: Request connection request

        Returns:
            Outcome with a user-facing message
        """
        result = await self.connection_directory.request_connection(
            request.requester, request.recipient
        )
        return ConnectionActionResponse.from_result(
            result, self._message(result, request.recipient)
        )

    @staticmethod
    def _message(result: ConnectionResult, recipient: str) -> str:
        if result.outcome == ConnectionOutcome.CREATED:
            return f"Connection request sent to @{recipient}"
        if result.outcome == ConnectionOutcome.ALREADY_PENDING:
            if result.direction == RequestDirection.INCOMING:
                return f"@{recipient} already requested you"
            return f"You already requested @{recipient}"
        if result.outcome == ConnectionOutcome.ALREADY_CONNECTED:
            return f"You are already connected with @{recipient}"
        if result.outcome == ConnectionOutcome.INVALID_ARGUMENT:
            return result.detail or "Invalid connection request"
        return "Failed to send request"
