"""Accept connection use case."""

from pydantic import BaseModel

from knowshare.domain.service import ConnectionDirectory
from knowshare.domain.value import ConnectionOutcome

from .common import ConnectionActionResponse


class AcceptConnectionRequest(BaseModel):
    """Accept connection request."""

    requester: str  # User who sent the request
    recipient: str  # Acting user


class AcceptConnectionUseCase:
    """Use case for accepting a received connection request."""

    def __init__(self, connection_directory: ConnectionDirectory) -> None:
        """Initialize accept connection use case.

        Args:
            connection_directory: Connection directory domain service
        """
        self.connection_directory = connection_directory

    async def execute(
        self, request: AcceptConnectionRequest
    ) -> ConnectionActionResponse:
        """Execute accept flow.

        Args:
            request: Accept connection request

        Returns:
            Outcome with a user-facing message
        """
        result = await self.connection_directory.accept_request(
            request.requester, request.recipient
        )

        if result.outcome == ConnectionOutcome.ACCEPTED:
            message = f"Accepted @{request.requester}"
        elif result.outcome == ConnectionOutcome.NOT_FOUND:
            message = f"No pending request from @{request.requester}"
        elif result.outcome == ConnectionOutcome.INVALID_ARGUMENT:
            message = result.detail or "Invalid accept"
        else:
            message = "Failed to accept request"

        return ConnectionActionResponse.from_result(result, message)
