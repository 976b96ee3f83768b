"""Connection request repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from knowshare.domain.model.connection import ConnectionRequest
from knowshare.domain.value import ConnectionRequestId, ConnectionStatus, Username


class ConnectionRepository(ABC):
    """Repository for ConnectionRequest entity.

    Stands in for the document store: each finder is one equality or
    membership query. Implementations make no cross-call transaction
    guarantees; ``create_if_absent`` is the only conditional write.
    """

    @abstractmethod
    async def find_by_id(
        self, request_id: ConnectionRequestId
    ) -> Optional[ConnectionRequest]:
        """Find a connection request by ID.

        Args:
            request_id: The request's unique identifier

        Returns:
            The request if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_pair(
        self, a: Username, b: Username
    ) -> Optional[ConnectionRequest]:
        """Find the request for the unordered pair {a, b}, in either direction.

        Args:
            a: One user
            b: The other user

        Returns:
            The request if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_direction(
        self,
        requester: Username,
        recipient: Username,
        status: Optional[ConnectionStatus] = None,
    ) -> List[ConnectionRequest]:
        """Find requests sent by ``requester`` to ``recipient``.

        More than one match is tolerated by callers even though the pair
        constraint should prevent it.

        Args:
            requester: User who sent the request
            recipient: User who received it
            status: Optional status filter

        Returns:
            Matching requests
        """
        pass

    @abstractmethod
    async def find_by_recipient(
        self, recipient: Username, status: ConnectionStatus
    ) -> List[ConnectionRequest]:
        """Find requests received by a user, oldest first.

        Args:
            recipient: Receiving user
            status: Status filter

        Returns:
            Matching requests
        """
        pass

    @abstractmethod
    async def find_by_requester(
        self, requester: Username, status: ConnectionStatus
    ) -> List[ConnectionRequest]:
        """Find requests sent by a user, oldest first.

        Args:
            requester: Sending user
            status: Status filter

        Returns:
            Matching requests
        """
        pass

    @abstractmethod
    async def find_accepted_for(self, user: Username) -> List[ConnectionRequest]:
        """Find accepted requests the user participates in, oldest first.

        Args:
            user: Either side of the link

        Returns:
            Accepted requests involving the user
        """
        pass

    @abstractmethod
    async def create_if_absent(self, request: ConnectionRequest) -> ConnectionRequest:
        """Insert a request unless one already exists for its pair.

        Args:
            request: The request to insert

        Returns:
            The stored request, with ``created_at`` assigned by the store
            (never earlier than any previously stored request)

        Raises:
            IntegrityError: If a request already exists for the pair
        """
        pass

    @abstractmethod
    async def update(self, request: ConnectionRequest) -> ConnectionRequest:
        """Overwrite a stored request (same id).

        Args:
            request: The new state of the request

        Returns:
            The stored request

        Raises:
            NotFoundError: If the request no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, request_id: ConnectionRequestId) -> bool:
        """Delete a request.

        Args:
            request_id: The request to delete

        Returns:
            True if a request was deleted, False if none existed
        """
        pass
