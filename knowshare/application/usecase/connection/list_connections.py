"""List connections use case."""

from pydantic import BaseModel

from knowshare.domain.service import ConnectionDirectory
from knowshare.domain.value import ConnectionView


class ListConnectionsRequest(BaseModel):
    """List connections request."""

    user: str
    view: ConnectionView = ConnectionView.ACCEPTED


class ListConnectionsResponse(BaseModel):
    """List connections response."""

    user: str
    view: ConnectionView
    usernames: list[str]
    total: int


class ListConnectionsUseCase:
    """Use case for reading one of a user's derived connection views."""

    def __init__(self, connection_directory: ConnectionDirectory) -> None:
        """Initialize list connections use case.

        Args:
            connection_directory: Connection directory domain service
        """
        self.connection_directory = connection_directory

    async def execute(self, request: ListConnectionsRequest) -> ListConnectionsResponse:
        """Execute list flow.

        Args:
            request: List connections request

        Returns:
            Peer usernames for the requested view
        """
        peers = await self.connection_directory.list_view(request.user, request.view)
        usernames = [str(peer) for peer in peers]
        return ListConnectionsResponse(
            user=request.user,
            view=request.view,
            usernames=usernames,
            total=len(usernames),
        )
