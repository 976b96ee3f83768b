"""Unit tests for RequestConnectionUseCase."""

import pytest

from knowshare.application.usecase.connection import (
    RequestConnectionRequest,
    RequestConnectionUseCase,
)
from knowshare.domain.value import (
    ConnectionOutcome,
    ConnectionStatus,
    RequestDirection,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRequestConnectionUseCase:
    """Tests for RequestConnectionUseCase."""

    @pytest.mark.asyncio
    async def test_request_sent(self, unit_env):
        """A new request reports the created record."""
        # Arrange
        use_case = await unit_env.get(RequestConnectionUseCase)

        # Act
        response = await use_case.execute(
            RequestConnectionRequest(requester="alice", recipient="bob")
        )

        # Assert
        assert response.outcome == ConnectionOutcome.CREATED
        assert response.message == "Connection request sent to @bob"
        assert response.request_id is not None
        assert response.requester == "alice"
        assert response.recipient == "bob"
        assert response.status == ConnectionStatus.PENDING
        assert response.succeeded == 1

    @pytest.mark.asyncio
    async def test_already_requested_messages_depend_on_direction(self, unit_env):
        """The message tells who sent the existing request."""
        use_case = await unit_env.get(RequestConnectionUseCase)
        await use_case.execute(
            RequestConnectionRequest(requester="alice", recipient="bob")
        )

        again = await use_case.execute(
            RequestConnectionRequest(requester="alice", recipient="bob")
        )
        reverse = await use_case.execute(
            RequestConnectionRequest(requester="bob", recipient="alice")
        )

        assert again.outcome == ConnectionOutcome.ALREADY_PENDING
        assert again.direction == RequestDirection.OUTGOING
        assert again.message == "You already requested @bob"
        assert reverse.outcome == ConnectionOutcome.ALREADY_PENDING
        assert reverse.direction == RequestDirection.INCOMING
        assert reverse.message == "@alice already requested you"

    @pytest.mark.asyncio
    async def test_self_request_message(self, unit_env):
        """Invalid requests surface the validation detail."""
        use_case = await unit_env.get(RequestConnectionUseCase)

        response = await use_case.execute(
            RequestConnectionRequest(requester="alice", recipient="alice")
        )

        assert response.outcome == ConnectionOutcome.INVALID_ARGUMENT
        assert response.message == "A user cannot connect to themselves"
        assert response.request_id is None
