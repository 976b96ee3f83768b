"""Connection use cases."""

from .accept_connection import AcceptConnectionRequest, AcceptConnectionUseCase
from .common import ConnectionActionResponse
from .get_relationship import (
    GetRelationshipRequest,
    GetRelationshipResponse,
    GetRelationshipUseCase,
)
from .list_connections import (
    ListConnectionsRequest,
    ListConnectionsResponse,
    ListConnectionsUseCase,
)
from .reject_connection import RejectConnectionRequest, RejectConnectionUseCase
from .request_connection import RequestConnectionRequest, RequestConnectionUseCase

__all__ = [
    "AcceptConnectionRequest",
    "AcceptConnectionUseCase",
    "ConnectionActionResponse",
    "GetRelationshipRequest",
    "GetRelationshipResponse",
    "GetRelationshipUseCase",
    "ListConnectionsRequest",
    "ListConnectionsResponse",
    "ListConnectionsUseCase",
    "RejectConnectionRequest",
    "RejectConnectionUseCase",
    "RequestConnectionRequest",
    "RequestConnectionUseCase",
]
