"""Connection directory domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from knowshare.domain.error import NotFoundError, ValidationError
from knowshare.domain.model.connection import ConnectionRequest, ConnectionResult
from knowshare.domain.repository import ConnectionRepository
from knowshare.domain.value import (
    ConnectionOutcome,
    ConnectionRequestId,
    ConnectionStatus,
    ConnectionView,
    RelationshipState,
    RequestDirection,
    Username,
)

from .base import Service
from .connection_feed import ConnectionFeed, Subscription, SubscriptionCallback


def parse_username(value: Username | str) -> Username:
    """Coerce a raw handle into a Username.

    Raises:
        ValidationError: If the handle is empty or malformed
    """
    if isinstance(value, Username):
        return value
    try:
        return Username(value)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid username: {value!r}") from e


class ConnectionDirectory(Service):
    """Domain service owning the connection-request lifecycle.

    State machine per unordered pair {A, B}:

        (no record) --request_connection--> pending
        pending     --accept_request------> accepted   (terminal)
        pending     --reject_request------> (no record)

    Every mutating operation resolves to exactly one ConnectionResult;
    store failures come back as ``persistence_error`` instead of raising.
    """

    def __init__(
        self,
        connection_repository: ConnectionRepository,
        connection_feed: ConnectionFeed,
    ) -> None:
        """Initialize connection directory.

        Args:
            connection_repository: Connection request repository
            connection_feed: Subscription registry notified after mutations
        """
        self.connection_repository = connection_repository
        self.connection_feed = connection_feed

    async def request_connection(
        self, from_user: Username | str, to_user: Username | str
    ) -> ConnectionResult:
        """Send a connection request from ``from_user`` to ``to_user``.

        An existing request for the pair, in either direction, blocks
        creation. The insert itself is conditional on the pair, so two
        concurrent opposite requests cannot both be stored.

        Args:
            from_user: Requesting user
            to_user: Receiving user

        Returns:
            ``created``, ``already_pending``, ``already_connected``,
            ``invalid_argument`` or ``persistence_error``
        """
        with logfire.span(
            "connection_directory.request_connection",
            requester=str(from_user),
            recipient=str(to_user),
        ):
            try:
                requester, recipient = self._parse_pair(from_user, to_user)
            except ValidationError as e:
                logfire.warn("Invalid connection request", error=str(e))
                return ConnectionResult(
                    outcome=ConnectionOutcome.INVALID_ARGUMENT, detail=str(e)
                )

            try:
                existing = await self.connection_repository.find_by_pair(
                    requester, recipient
                )
                if existing is not None:
                    return self._existing_result(existing, requester)

                request = ConnectionRequest(
                    id=ConnectionRequestId(uuid4()),
                    requester=requester,
                    recipient=recipient,
                    status=ConnectionStatus.PENDING,
                )
                try:
                    saved = await self.connection_repository.create_if_absent(
                        request
                    )
                except IntegrityError:
                    # Another request for the pair landed between read and write
                    logfire.warn(
                        "Concurrent connection request for pair",
                        requester=str(requester),
                        recipient=str(recipient),
                    )
                    existing = await self.connection_repository.find_by_pair(
                        requester, recipient
                    )
                    if existing is None:
                        return ConnectionResult(
                            outcome=ConnectionOutcome.PERSISTENCE_ERROR,
                            failed=1,
                            detail="Conflicting request disappeared, retry",
                        )
                    return self._existing_result(existing, requester)
            except SQLAlchemyError as e:
                logfire.error(
                    "Connection request failed",
                    requester=str(requester),
                    recipient=str(recipient),
                    error=str(e),
                )
                return ConnectionResult(
                    outcome=ConnectionOutcome.PERSISTENCE_ERROR,
                    failed=1,
                    detail=str(e),
                )

            logfire.info(
                "Connection requested",
                request_id=str(saved.id),
                requester=str(requester),
                recipient=str(recipient),
            )
            await self._publish(requester, recipient)
            return ConnectionResult(
                outcome=ConnectionOutcome.CREATED, request=saved, succeeded=1
            )

    async def accept_request(
        self, requester: Username | str, recipient: Username | str
    ) -> ConnectionResult:
        """Accept the pending request sent by ``requester`` to ``recipient``.

        Direction matters: accepting (B, A) does not match a request stored
        as A -> B. Every matching record is moved to accepted with the same
        timestamp; partial failure is reported with counts.

        Args:
            requester: User who sent the request
            recipient: User who received it

        Returns:
            ``accepted``, ``not_found``, ``invalid_argument`` or
            ``persistence_error``
        """
        with logfire.span(
            "connection_directory.accept_request",
            requester=str(requester),
            recipient=str(recipient),
        ):
            try:
                sender, receiver = self._parse_pair(requester, recipient)
            except ValidationError as e:
                logfire.warn("Invalid accept", error=str(e))
                return ConnectionResult(
                    outcome=ConnectionOutcome.INVALID_ARGUMENT, detail=str(e)
                )

            try:
                matches = await self.connection_repository.find_by_direction(
                    sender, receiver, ConnectionStatus.PENDING
                )
            except SQLAlchemyError as e:
                logfire.error("Accept lookup failed", error=str(e))
                return ConnectionResult(
                    outcome=ConnectionOutcome.PERSISTENCE_ERROR, detail=str(e)
                )

            if not matches:
                logfire.warn(
                    "No pending request to accept",
                    requester=str(sender),
                    recipient=str(receiver),
                )
                return ConnectionResult(outcome=ConnectionOutcome.NOT_FOUND)

            if len(matches) > 1:
                logfire.warn(
                    "Duplicate pending requests for pair",
                    requester=str(sender),
                    recipient=str(receiver),
                    count=len(matches),
                )

            accepted_at = datetime.now(timezone.utc)
            succeeded = 0
            failed = 0
            last: ConnectionRequest | None = None
            for match in matches:
                try:
                    last = await self.connection_repository.update(
                        match.accept(accepted_at)
                    )
                    succeeded += 1
                except (SQLAlchemyError, NotFoundError) as e:
                    failed += 1
                    logfire.error(
                        "Failed to accept connection request",
                        request_id=str(match.id),
                        error=str(e),
                    )

            if succeeded:
                await self._publish(sender, receiver)

            if failed:
                return ConnectionResult(
                    outcome=ConnectionOutcome.PERSISTENCE_ERROR,
                    request=last,
                    succeeded=succeeded,
                    failed=failed,
                    detail=f"{failed} of {len(matches)} updates failed",
                )

            logfire.info(
                "Connection accepted",
                requester=str(sender),
                recipient=str(receiver),
                count=succeeded,
            )
            return ConnectionResult(
                outcome=ConnectionOutcome.ACCEPTED, request=last, succeeded=succeeded
            )

    async def reject_request(
        self, requester: Username | str, recipient: Username | str
    ) -> ConnectionResult:
        """Reject the pending request sent by ``requester`` to ``recipient``.

        Rejection deletes the record; no tombstone is kept, so the pair can
        request again afterwards.

        Args:
            requester: User who sent the request
            recipient: User who received it

        Returns:
            ``rejected``, ``not_found``, ``invalid_argument`` or
            ``persistence_error``
        """
        with logfire.span(
            "connection_directory.reject_request",
            requester=str(requester),
            recipient=str(recipient),
        ):
            try:
                sender, receiver = self._parse_pair(requester, recipient)
            except ValidationError as e:
                logfire.warn("Invalid reject", error=str(e))
                return ConnectionResult(
                    outcome=ConnectionOutcome.INVALID_ARGUMENT, detail=str(e)
                )

            try:
                matches = await self.connection_repository.find_by_direction(
                    sender, receiver, ConnectionStatus.PENDING
                )
            except SQLAlchemyError as e:
                logfire.error("Reject lookup failed", error=str(e))
                return ConnectionResult(
                    outcome=ConnectionOutcome.PERSISTENCE_ERROR, detail=str(e)
                )

            deleted = 0
            failed = 0
            for match in matches:
                try:
                    if await self.connection_repository.delete(match.id):
                        deleted += 1
                except SQLAlchemyError as e:
                    failed += 1
                    logfire.error(
                        "Failed to delete connection request",
                        request_id=str(match.id),
                        error=str(e),
                    )

            if deleted:
                await self._publish(sender, receiver)

            if failed:
                return ConnectionResult(
                    outcome=ConnectionOutcome.PERSISTENCE_ERROR,
                    succeeded=deleted,
                    failed=failed,
                    detail=f"{failed} of {len(matches)} deletes failed",
                )

            if not deleted:
                logfire.warn(
                    "No pending request to reject",
                    requester=str(sender),
                    recipient=str(receiver),
                )
                return ConnectionResult(outcome=ConnectionOutcome.NOT_FOUND)

            logfire.info(
                "Connection rejected",
                requester=str(sender),
                recipient=str(receiver),
                count=deleted,
            )
            return ConnectionResult(
                outcome=ConnectionOutcome.REJECTED, succeeded=deleted
            )

    async def list_received_pending(self, user: Username | str) -> list[Username]:
        """Users with a pending request addressed to ``user``."""
        return await self.list_view(user, ConnectionView.RECEIVED)

    async def list_sent_pending(self, user: Username | str) -> list[Username]:
        """Users ``user`` has a pending request out to."""
        return await self.list_view(user, ConnectionView.SENT)

    async def list_accepted(self, user: Username | str) -> list[Username]:
        """Users connected to ``user``, whichever side asked."""
        return await self.list_view(user, ConnectionView.ACCEPTED)

    async def list_view(
        self, user: Username | str, view: ConnectionView
    ) -> list[Username]:
        """Compute one derived view from the persisted state.

        Args:
            user: User whose view to compute
            view: Which view

        Returns:
            Peer usernames, oldest request first. Empty for an invalid user.
        """
        with logfire.span(
            "connection_directory.list_view", user=str(user), view=view.value
        ):
            try:
                username = parse_username(user)
            except ValidationError:
                return []

            if view == ConnectionView.RECEIVED:
                records = await self.connection_repository.find_by_recipient(
                    username, ConnectionStatus.PENDING
                )
                return [r.requester for r in records]
            if view == ConnectionView.SENT:
                records = await self.connection_repository.find_by_requester(
                    username, ConnectionStatus.PENDING
                )
                return [r.recipient for r in records]

            records = await self.connection_repository.find_accepted_for(username)
            return [r.peer_of(username) for r in records]

    async def get_relationship(
        self, viewer: Username | str, other: Username | str
    ) -> RelationshipState:
        """State of the pair as seen by ``viewer``.

        Args:
            viewer: User looking at the other's profile
            other: Profile owner

        Returns:
            Relationship state; ``none`` for invalid or identical users
        """
        try:
            me, them = self._parse_pair(viewer, other)
        except ValidationError:
            return RelationshipState.NONE

        existing = await self.connection_repository.find_by_pair(me, them)
        if existing is None:
            return RelationshipState.NONE
        if existing.status == ConnectionStatus.ACCEPTED:
            return RelationshipState.CONNECTED
        if existing.requester == me:
            return RelationshipState.REQUEST_SENT
        return RelationshipState.REQUEST_RECEIVED

    async def is_connected(self, a: Username | str, b: Username | str) -> bool:
        """Whether an accepted connection links ``a`` and ``b``."""
        return await self.get_relationship(a, b) == RelationshipState.CONNECTED

    async def can_view_materials(
        self, viewer: Username | str, owner: Username | str
    ) -> bool:
        """Shared materials are visible to their owner and to connections."""
        try:
            if parse_username(viewer) == parse_username(owner):
                return True
        except ValidationError:
            return False
        return await self.is_connected(viewer, owner)

    async def subscribe(
        self,
        user: Username | str,
        view: ConnectionView,
        on_change: SubscriptionCallback,
    ) -> Subscription:
        """Watch one of ``user``'s derived views.

        The callback receives the current full view right away and again
        after every mutation made through a directory sharing the same feed.

        Deliveries happen inside the mutating call, before the surrounding
        request transaction commits. If that commit later fails, subscribers
        have seen a view that was never stored; the next delivery carries
        the stored state again.

        Args:
            user: User whose view to watch
            view: Which view
            on_change: Called with the full list of peers

        Returns:
            Cancellable subscription

        Raises:
            ValidationError: If the username is invalid
        """
        username = parse_username(user)
        subscription = self.connection_feed.add(username, view, on_change)
        logfire.info(
            "View subscribed",
            user=str(username),
            view=view.value,
            subscription_id=str(subscription.id),
        )
        await self._deliver(subscription)
        return subscription

    async def _publish(self, *users: Username) -> None:
        for subscription in self.connection_feed.subscriptions_for(users):
            await self._deliver(subscription)

    async def _deliver(self, subscription: Subscription) -> None:
        try:
            peers = await self.list_view(subscription.user, subscription.view)
        except SQLAlchemyError as e:
            logfire.warn(
                "Could not refresh subscribed view",
                subscription_id=str(subscription.id),
                error=str(e),
            )
            return

        try:
            await subscription.deliver(peers)
        except Exception:
            # Subscriber faults must not change the outcome of a mutation
            logfire.exception(
                "Subscriber callback failed",
                subscription_id=str(subscription.id),
                user=str(subscription.user),
                view=subscription.view.value,
            )

    @staticmethod
    def _parse_pair(
        a: Username | str, b: Username | str
    ) -> tuple[Username, Username]:
        first = parse_username(a)
        second = parse_username(b)
        if first == second:
            raise ValidationError("A user cannot connect to themselves")
        return first, second

    @staticmethod
    def _existing_result(
        existing: ConnectionRequest, caller: Username
    ) -> ConnectionResult:
        if existing.status == ConnectionStatus.ACCEPTED:
            logfire.info("Already connected", request_id=str(existing.id))
            return ConnectionResult(
                outcome=ConnectionOutcome.ALREADY_CONNECTED, request=existing
            )

        direction = (
            RequestDirection.OUTGOING
            if existing.requester == caller
            else RequestDirection.INCOMING
        )
        logfire.info(
            "Request already pending",
            request_id=str(existing.id),
            direction=direction.value,
        )
        return ConnectionResult(
            outcome=ConnectionOutcome.ALREADY_PENDING,
            request=existing,
            direction=direction,
        )
