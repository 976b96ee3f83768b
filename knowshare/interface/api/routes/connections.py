"""Connection routes.

The acting user is taken from the path. Authentication is handled in front
of this service, so ``{username}`` is trusted as the caller's identity.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Response, status
from pydantic import BaseModel

from knowshare.application.usecase.connection import (
    AcceptConnectionRequest,
    AcceptConnectionUseCase,
    ConnectionActionResponse,
    GetRelationshipRequest,
    GetRelationshipResponse,
    GetRelationshipUseCase,
    ListConnectionsRequest,
    ListConnectionsResponse,
    ListConnectionsUseCase,
    RejectConnectionRequest,
    RejectConnectionUseCase,
    RequestConnectionRequest,
    RequestConnectionUseCase,
)
from knowshare.domain.value import ConnectionOutcome, ConnectionView

router = APIRouter(prefix="/users", tags=["connections"], route_class=DishkaRoute)

STATUS_BY_OUTCOME: dict[ConnectionOutcome, int] = {
    ConnectionOutcome.CREATED: status.HTTP_201_CREATED,
    ConnectionOutcome.ACCEPTED: status.HTTP_200_OK,
    ConnectionOutcome.REJECTED: status.HTTP_200_OK,
    ConnectionOutcome.ALREADY_PENDING: status.HTTP_409_CONFLICT,
    ConnectionOutcome.ALREADY_CONNECTED: status.HTTP_409_CONFLICT,
    ConnectionOutcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ConnectionOutcome.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ConnectionOutcome.PERSISTENCE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


class RequestConnectionAPIRequest(BaseModel):
    """API request for sending a connection request."""

    to: str


def _respond(
    response: Response, result: ConnectionActionResponse
) -> ConnectionActionResponse:
    response.status_code = STATUS_BY_OUTCOME[result.outcome]
    return result


@router.post(
    "/{username}/connections",
    response_model=ConnectionActionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def request_connection(
    username: str,
    request: RequestConnectionAPIRequest,
    response: Response,
    request_connection_use_case: FromDishka[RequestConnectionUseCase],
) -> ConnectionActionResponse:
    """Send a connection request from ``username`` to ``request.to``.

    Args:
        username: Acting user
        request: Target of the request
        response: Outgoing response, status set from the outcome
        request_connection_use_case: Request connection use case from DI

    Returns:
        Outcome and user-facing message
    """
    result = await request_connection_use_case.execute(
        RequestConnectionRequest(requester=username, recipient=request.to)
    )
    return _respond(response, result)


@router.post(
    "/{username}/connections/{requester}/accept",
    response_model=ConnectionActionResponse,
)
async def accept_connection(
    username: str,
    requester: str,
    response: Response,
    accept_connection_use_case: FromDishka[AcceptConnectionUseCase],
) -> ConnectionActionResponse:
    """Accept the pending request ``requester`` sent to ``username``."""
    result = await accept_connection_use_case.execute(
        AcceptConnectionRequest(requester=requester, recipient=username)
    )
    return _respond(response, result)


@router.post(
    "/{username}/connections/{requester}/reject",
    response_model=ConnectionActionResponse,
)
async def reject_connection(
    username: str,
    requester: str,
    response: Response,
    reject_connection_use_case: FromDishka[RejectConnectionUseCase],
) -> ConnectionActionResponse:
    """Reject the pending request ``requester`` sent to ``username``."""
    result = await reject_connection_use_case.execute(
        RejectConnectionRequest(requester=requester, recipient=username)
    )
    return _respond(response, result)


@router.get("/{username}/connections", response_model=ListConnectionsResponse)
async def list_connections(
    username: str,
    list_connections_use_case: FromDishka[ListConnectionsUseCase],
    view: ConnectionView = Query(default=ConnectionView.ACCEPTED),
) -> ListConnectionsResponse:
    """List received, sent or accepted connections of ``username``.

    Args:
        username: User whose connections to list
        list_connections_use_case: List connections use case from DI
        view: Which derived view (received, sent, accepted)

    Returns:
        Peer usernames, oldest first
    """
    return await list_connections_use_case.execute(
        ListConnectionsRequest(user=username, view=view)
    )


@router.get(
    "/{username}/relationship/{other}", response_model=GetRelationshipResponse
)
async def get_relationship(
    username: str,
    other: str,
    get_relationship_use_case: FromDishka[GetRelationshipUseCase],
) -> GetRelationshipResponse:
    """Relationship of ``username`` to the profile of ``other``."""
    return await get_relationship_use_case.execute(
        GetRelationshipRequest(viewer=username, other=other)
    )
