"""Test configuration and fixtures."""

from uuid import uuid4

import pytest

from knowshare.domain.model import ConnectionRequest
from knowshare.domain.value import ConnectionRequestId, ConnectionStatus


def make_request(
    requester: str,
    recipient: str,
    status: ConnectionStatus = ConnectionStatus.PENDING,
) -> ConnectionRequest:
    """Helper to build a connection request for seeding repositories.

    Args:
        requester: Sending user
        recipient: Receiving user
        status: Stored status

    Returns:
        ConnectionRequest with a fresh id
    """
    return ConnectionRequest(
        id=ConnectionRequestId(uuid4()),
        requester=requester,
        recipient=recipient,
        status=status,
    )


@pytest.fixture
def unique_user():
    """Factory for usernames that cannot collide with rows left by other tests."""

    def _make(prefix: str) -> str:
        return f"{prefix}-{uuid4().hex[:8]}"

    return _make
