"""Application layer DI providers."""

from dishka import Scope, provide

from knowshare.application.usecase.connection import (
    AcceptConnectionUseCase,
    GetRelationshipUseCase,
    ListConnectionsUseCase,
    RejectConnectionUseCase,
    RequestConnectionUseCase,
)
from knowshare.domain.service import ConnectionDirectory
from knowshare.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_request_connection_use_case(
        self, connection_directory: ConnectionDirectory
    ) -> RequestConnectionUseCase:
        """Provide request connection use case."""
        return RequestConnectionUseCase(connection_directory=connection_directory)

    @provide(scope=Scope.REQUEST)
    def get_accept_connection_use_case(
        self, connection_directory: ConnectionDirectory
    ) -> AcceptConnectionUseCase:
        """Provide accept connection use case."""
        return AcceptConnectionUseCase(connection_directory=connection_directory)

    @provide(scope=Scope.REQUEST)
    def get_reject_connection_use_case(
        self, connection_directory: ConnectionDirectory
    ) -> RejectConnectionUseCase:
        """Provide reject connection use case."""
        return RejectConnectionUseCase(connection_directory=connection_directory)

    @provide(scope=Scope.REQUEST)
    def get_list_connections_use_case(
        self, connection_directory: ConnectionDirectory
    ) -> ListConnectionsUseCase:
        """Provide list connections use case."""
        return ListConnectionsUseCase(connection_directory=connection_directory)

    @provide(scope=Scope.REQUEST)
    def get_get_relationship_use_case(
        self, connection_directory: ConnectionDirectory
    ) -> GetRelationshipUseCase:
        """Provide get relationship use case."""
        return GetRelationshipUseCase(connection_directory=connection_directory)
