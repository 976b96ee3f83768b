"""Get relationship use case."""

from pydantic import BaseModel

from knowshare.domain.service import ConnectionDirectory
from knowshare.domain.value import RelationshipState


class GetRelationshipRequest(BaseModel):
    """Get relationship request."""

    viewer: str  # Acting user
    other: str  # Profile being viewed


class GetRelationshipResponse(BaseModel):
    """Relationship between viewer and profile owner."""

    viewer: str
    other: str
    state: RelationshipState
    can_view_materials: bool


class GetRelationshipUseCase:
    """Use case backing the connect button and materials section of a profile."""

    def __init__(self, connection_directory: ConnectionDirectory) -> None:
        """Initialize get relationship use case.

        Args:
            connection_directory: Connection directory domain service
        """
        self.connection_directory = connection_directory

    async def execute(self, request: GetRelationshipRequest) -> GetRelationshipResponse:
        """Execute get relationship flow.

        Args:
            request: Get relationship request

        Returns:
            Relationship state and materials visibility
        """
        state = await self.connection_directory.get_relationship(
            request.viewer, request.other
        )
        can_view = await self.connection_directory.can_view_materials(
            request.viewer, request.other
        )
        return GetRelationshipResponse(
            viewer=request.viewer,
            other=request.other,
            state=state,
            can_view_materials=can_view,
        )
