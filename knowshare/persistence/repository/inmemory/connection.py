"""In-memory connection request repository for testing."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from knowshare.domain.error import NotFoundError
from knowshare.domain.model import ConnectionRequest, canonical_pair
from knowshare.domain.repository.connection import ConnectionRepository
from knowshare.domain.value import ConnectionRequestId, ConnectionStatus, Username


class InMemoryConnectionRepository(ConnectionRepository):
    """In-memory implementation of ConnectionRepository for testing.

    Records are kept in insertion order, which is also creation order.
    Like the database column default, the store stamps ``created_at`` on
    insert and never hands out a time earlier than the last one.
    ``create_if_absent`` does its check and insert without awaiting in
    between, so it is atomic under asyncio.
    """

    def __init__(self) -> None:
        self._requests: list[ConnectionRequest] = []

    async def find_by_id(
        self, request_id: ConnectionRequestId
    ) -> Optional[ConnectionRequest]:
        """Find a connection request by ID."""
        for request in self._requests:
            if request.id == request_id:
                return request
        return None

    async def find_by_pair(
        self, a: Username, b: Username
    ) -> Optional[ConnectionRequest]:
        """Find the request for the unordered pair {a, b}."""
        return self._find_pair(canonical_pair(a, b))

    async def find_by_direction(
        self,
        requester: Username,
        recipient: Username,
        status: Optional[ConnectionStatus] = None,
    ) -> List[ConnectionRequest]:
        """Find requests sent by requester to recipient."""
        return [
            r
            for r in self._requests
            if r.requester == requester
            and r.recipient == recipient
            and (status is None or r.status == status)
        ]

    async def find_by_recipient(
        self, recipient: Username, status: ConnectionStatus
    ) -> List[ConnectionRequest]:
        """Find requests received by a user."""
        return [
            r for r in self._requests if r.recipient == recipient and r.status == status
        ]

    async def find_by_requester(
        self, requester: Username, status: ConnectionStatus
    ) -> List[ConnectionRequest]:
        """Find requests sent by a user."""
        return [
            r for r in self._requests if r.requester == requester and r.status == status
        ]

    async def find_accepted_for(self, user: Username) -> List[ConnectionRequest]:
        """Find accepted requests the user participates in."""
        return [
            r
            for r in self._requests
            if r.status == ConnectionStatus.ACCEPTED and r.involves(user)
        ]

    async def create_if_absent(self, request: ConnectionRequest) -> ConnectionRequest:
        """Insert a request unless its pair is taken.

        Raises:
            IntegrityError: If a request already exists for the pair
        """
        if self._find_pair(request.participants) is not None:
            raise IntegrityError("Duplicate connection pair", None, Exception())

        stored = request.model_copy(update={"created_at": self._now()})
        self._requests.append(stored)
        return stored

    async def update(self, request: ConnectionRequest) -> ConnectionRequest:
        """Replace the stored request with the same ID.

        Raises:
            NotFoundError: If no request has that ID
        """
        for i, existing in enumerate(self._requests):
            if existing.id == request.id:
                self._requests[i] = request
                return request
        raise NotFoundError("ConnectionRequest", str(request.id))

    async def delete(self, request_id: ConnectionRequestId) -> bool:
        """Delete a request by ID."""
        for i, request in enumerate(self._requests):
            if request.id == request_id:
                self._requests.pop(i)
                return True
        return False

    def _now(self) -> datetime:
        now = datetime.now(timezone.utc)
        if self._requests:
            latest = max(r.created_at for r in self._requests)
            if latest > now:
                return latest
        return now

    def _find_pair(
        self, pair: tuple[Username, Username]
    ) -> Optional[ConnectionRequest]:
        for request in self._requests:
            if request.participants == pair:
                return request
        return None
