"""PostgreSQL implementation of ConnectionRequest repository."""

from typing import List, Optional

from sqlalchemy import and_, delete, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from knowshare.domain.error import NotFoundError
from knowshare.domain.model import ConnectionRequest, canonical_pair
from knowshare.domain.repository import ConnectionRepository
from knowshare.domain.value import ConnectionRequestId, ConnectionStatus, Username
from knowshare.persistence.mappers import (
    connection_request_to_dict,
    row_to_connection_request,
)
from knowshare.persistence.tables import connection_requests_table

_table = connection_requests_table


class PostgresConnectionRepository(ConnectionRepository):
    """PostgreSQL implementation of ConnectionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, request_id: ConnectionRequestId
    ) -> Optional[ConnectionRequest]:
        """Find a connection request by ID."""
        stmt = select(_table).where(_table.c.id == request_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_connection_request(row._asdict()) if row else None

    async def find_by_pair(
        self, a: Username, b: Username
    ) -> Optional[ConnectionRequest]:
        """Find the request for the unordered pair, using the canonical columns."""
        low, high = canonical_pair(a, b)
        stmt = select(_table).where(
            and_(
                _table.c.participant_low == low.root,
                _table.c.participant_high == high.root,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_connection_request(row._asdict()) if row else None

    async def find_by_direction(
        self,
        requester: Username,
        recipient: Username,
        status: Optional[ConnectionStatus] = None,
    ) -> List[ConnectionRequest]:
        """Find requests sent by requester to recipient."""
        conditions = [
            _table.c.requester == requester.root,
            _table.c.recipient == recipient.root,
        ]
        if status is not None:
            conditions.append(_table.c.status == status.value)
        stmt = select(_table).where(and_(*conditions)).order_by(_table.c.created_at)
        result = await self.session.execute(stmt)
        return [row_to_connection_request(row._asdict()) for row in result.fetchall()]

    async def find_by_recipient(
        self, recipient: Username, status: ConnectionStatus
    ) -> List[ConnectionRequest]:
        """Find requests received by a user."""
        stmt = (
            select(_table)
            .where(
                and_(
                    _table.c.recipient == recipient.root,
                    _table.c.status == status.value,
                )
            )
            .order_by(_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_connection_request(row._asdict()) for row in result.fetchall()]

    async def find_by_requester(
        self, requester: Username, status: ConnectionStatus
    ) -> List[ConnectionRequest]:
        """Find requests sent by a user."""
        stmt = (
            select(_table)
            .where(
                and_(
                    _table.c.requester == requester.root,
                    _table.c.status == status.value,
                )
            )
            .order_by(_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_connection_request(row._asdict()) for row in result.fetchall()]

    async def find_accepted_for(self, user: Username) -> List[ConnectionRequest]:
        """Find accepted requests on either side of the pair."""
        stmt = (
            select(_table)
            .where(
                and_(
                    _table.c.status == ConnectionStatus.ACCEPTED.value,
                    or_(
                        _table.c.participant_low == user.root,
                        _table.c.participant_high == user.root,
                    ),
                )
            )
            .order_by(_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_connection_request(row._asdict()) for row in result.fetchall()]

    async def create_if_absent(self, request: ConnectionRequest) -> ConnectionRequest:
        """Insert a request; the pair unique constraint rejects duplicates.

        The insert runs in a savepoint so a constraint violation leaves the
        surrounding transaction usable. ``created_at`` comes from the
        column default and is read back from the inserted row.
        """
        stmt = (
            insert(_table)
            .values(**connection_request_to_dict(request))
            .returning(_table)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_connection_request(row._asdict())  # type: ignore[union-attr]

    async def update(self, request: ConnectionRequest) -> ConnectionRequest:
        """Overwrite status and acceptance fields of a stored request."""
        values = connection_request_to_dict(request)
        stmt = (
            update(_table)
            .where(_table.c.id == request.id)
            .values(
                status=values["status"],
                participant_low=values["participant_low"],
                participant_high=values["participant_high"],
                accepted_at=values["accepted_at"],
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundError("ConnectionRequest", str(request.id))
        return request

    async def delete(self, request_id: ConnectionRequestId) -> bool:
        """Delete a request by ID."""
        stmt = delete(_table).where(_table.c.id == request_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
