"""Subscriptions to derived connection views.

The feed only keeps track of who is listening to what. Recomputing a view
and pushing it to subscribers is done by the ConnectionDirectory after each
mutation, so every delivery carries the full current set, never a diff.
"""

import inspect
from collections.abc import Awaitable, Callable, Iterable
from uuid import UUID, uuid4

from knowshare.domain.value import ConnectionView, Username

SubscriptionCallback = Callable[[list[Username]], Awaitable[None] | None]


class Subscription:
    """Cancellable handle for one subscriber of one view."""

    def __init__(
        self,
        feed: "ConnectionFeed",
        user: Username,
        view: ConnectionView,
        callback: SubscriptionCallback,
    ) -> None:
        self.id: UUID = uuid4()
        self.user = user
        self.view = view
        self._feed = feed
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        """Whether the subscription still receives deliveries."""
        return self._active

    def cancel(self) -> None:
        """Stop further deliveries. Safe to call more than once."""
        if self._active:
            self._active = False
            self._feed.remove(self)

    async def deliver(self, peers: list[Username]) -> None:
        """Invoke the callback with the full current view."""
        if not self._active:
            return
        result = self._callback(peers)
        if inspect.isawaitable(result):
            await result


class ConnectionFeed:
    """Registry of active view subscriptions.

    Application-scoped: it outlives the request-scoped directories that
    publish to it.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[UUID, Subscription] = {}

    def add(
        self, user: Username, view: ConnectionView, callback: SubscriptionCallback
    ) -> Subscription:
        """Register a subscriber.

        Args:
            user: User whose view is watched
            view: Which derived view to deliver
            callback: Called with the full list of peers on every change

        Returns:
            Subscription handle
        """
        subscription = Subscription(self, user, view, callback)
        self._subscriptions[subscription.id] = subscription
        return subscription

    def remove(self, subscription: Subscription) -> None:
        """Unregister a subscriber."""
        self._subscriptions.pop(subscription.id, None)

    def subscriptions_for(self, users: Iterable[Username]) -> list[Subscription]:
        """Active subscriptions watching any of ``users``."""
        wanted = set(users)
        return [s for s in list(self._subscriptions.values()) if s.user in wanted]

    def __len__(self) -> int:
        return len(self._subscriptions)
