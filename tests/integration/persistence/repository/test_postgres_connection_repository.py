"""Integration tests for PostgresConnectionRepository.

Require a running Postgres with migrations applied.
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from knowshare.domain.repository import ConnectionRepository
from knowshare.domain.service import ConnectionDirectory
from knowshare.domain.value import (
    ConnectionOutcome,
    ConnectionStatus,
    RequestDirection,
    Username,
)
from tests.conftest import make_request
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresConnectionRepository:
    """Tests for the Postgres repository."""

    @pytest.mark.asyncio
    async def test_pair_unique_constraint(self, integration_env, unique_user):
        """The canonical pair constraint rejects the reversed request."""
        repo = await integration_env.get(ConnectionRepository)
        alice, bob = unique_user("alice"), unique_user("bob")

        created = await repo.create_if_absent(make_request(alice, bob))

        with pytest.raises(IntegrityError):
            await repo.create_if_absent(make_request(bob, alice))

        # Savepoint rolled back, session still usable
        found = await repo.find_by_pair(Username(bob), Username(alice))
        assert found is not None
        assert found.id == created.id

    @pytest.mark.asyncio
    async def test_create_returns_database_timestamp(
        self, integration_env, unique_user
    ):
        """created_at comes from the column default, not from the application."""
        repo = await integration_env.get(ConnectionRepository)
        request = make_request(unique_user("alice"), unique_user("bob"))
        provisional = request.model_copy(
            update={"created_at": datetime(2000, 1, 1, tzinfo=timezone.utc)}
        )

        stored = await repo.create_if_absent(provisional)

        assert stored.created_at.tzinfo is not None
        assert stored.created_at.year > 2000
        found = await repo.find_by_id(stored.id)
        assert found is not None
        assert found.created_at == stored.created_at

    @pytest.mark.asyncio
    async def test_accept_and_list(self, integration_env, unique_user):
        """Accepted rows are found from either side."""
        repo = await integration_env.get(ConnectionRepository)
        alice, bob = unique_user("alice"), unique_user("bob")

        request = await repo.create_if_absent(make_request(alice, bob))
        await repo.update(request.accept())

        for user in (alice, bob):
            accepted = await repo.find_accepted_for(Username(user))
            assert [r.id for r in accepted] == [request.id]
        assert (
            await repo.find_by_recipient(Username(bob), ConnectionStatus.PENDING) == []
        )

    @pytest.mark.asyncio
    async def test_delete(self, integration_env, unique_user):
        """Deleting reports whether a row was removed."""
        repo = await integration_env.get(ConnectionRepository)
        request = await repo.create_if_absent(
            make_request(unique_user("alice"), unique_user("bob"))
        )

        assert await repo.delete(request.id) is True
        assert await repo.delete(request.id) is False

    @pytest.mark.asyncio
    async def test_directory_against_postgres(self, integration_env, unique_user):
        """Opposite requests collapse into one record."""
        directory = await integration_env.get(ConnectionDirectory)
        alice, bob = unique_user("alice"), unique_user("bob")

        first = await directory.request_connection(alice, bob)
        second = await directory.request_connection(bob, alice)

        assert first.outcome == ConnectionOutcome.CREATED
        assert second.outcome == ConnectionOutcome.ALREADY_PENDING
        assert second.direction == RequestDirection.INCOMING
