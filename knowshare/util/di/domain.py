"""Domain layer DI providers."""

from dishka import Scope, provide

from knowshare.domain.repository import ConnectionRepository
from knowshare.domain.service import ConnectionDirectory, ConnectionFeed
from knowshare.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    The directory is REQUEST-scoped to follow the repository/session
    lifecycle. The feed is APP-scoped so subscriptions outlive requests.
    """

    @provide(scope=Scope.APP)
    def get_connection_feed(self) -> ConnectionFeed:
        """Provide the process-wide subscription registry."""
        return ConnectionFeed()

    @provide(scope=Scope.REQUEST)
    def get_connection_directory(
        self,
        connection_repository: ConnectionRepository,
        connection_feed: ConnectionFeed,
    ) -> ConnectionDirectory:
        """Provide connection directory domain service."""
        return ConnectionDirectory(
            connection_repository=connection_repository,
            connection_feed=connection_feed,
        )
