"""Unit tests for InMemoryConnectionRepository."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from knowshare.domain.error import NotFoundError
from knowshare.domain.value import ConnectionStatus, Username
from knowshare.persistence.repository.inmemory import InMemoryConnectionRepository
from tests.conftest import make_request


class TestInMemoryConnectionRepository:
    """Tests for the in-memory repository used by unit tests."""

    @pytest.mark.asyncio
    async def test_find_by_pair_ignores_direction(self):
        """The pair lookup matches both orderings."""
        repo = InMemoryConnectionRepository()
        request = await repo.create_if_absent(make_request("alice", "bob"))

        assert await repo.find_by_pair(Username("alice"), Username("bob")) == request
        assert await repo.find_by_pair(Username("bob"), Username("alice")) == request
        assert await repo.find_by_pair(Username("alice"), Username("carol")) is None

    @pytest.mark.asyncio
    async def test_create_if_absent_rejects_duplicate_pair(self):
        """Only one record per unordered pair."""
        repo = InMemoryConnectionRepository()
        await repo.create_if_absent(make_request("alice", "bob"))

        with pytest.raises(IntegrityError):
            await repo.create_if_absent(make_request("alice", "bob"))

    @pytest.mark.asyncio
    async def test_directional_finders(self):
        """Direction and status filters are applied."""
        repo = InMemoryConnectionRepository()
        sent = await repo.create_if_absent(make_request("alice", "bob"))
        accepted = await repo.create_if_absent(
            make_request("carol", "alice", ConnectionStatus.ACCEPTED)
        )

        assert await repo.find_by_requester(
            Username("alice"), ConnectionStatus.PENDING
        ) == [sent]
        assert await repo.find_by_recipient(
            Username("alice"), ConnectionStatus.PENDING
        ) == []
        assert await repo.find_by_direction(Username("alice"), Username("bob")) == [
            sent
        ]
        assert (
            await repo.find_by_direction(
                Username("alice"), Username("bob"), ConnectionStatus.ACCEPTED
            )
            == []
        )
        assert await repo.find_accepted_for(Username("alice")) == [accepted]

    @pytest.mark.asyncio
    async def test_update_and_delete(self):
        """Update replaces by id, delete reports whether anything was removed."""
        repo = InMemoryConnectionRepository()
        request = await repo.create_if_absent(make_request("alice", "bob"))

        await repo.update(request.accept())
        stored = await repo.find_by_id(request.id)
        assert stored is not None
        assert stored.status == ConnectionStatus.ACCEPTED

        assert await repo.delete(request.id) is True
        assert await repo.delete(request.id) is False
        with pytest.raises(NotFoundError):
            await repo.update(request)

    @pytest.mark.asyncio
    async def test_create_if_absent_assigns_created_at(self):
        """The store stamps creation time; the caller's provisional value is ignored."""
        repo = InMemoryConnectionRepository()
        provisional = make_request("alice", "bob").model_copy(
            update={"created_at": datetime(2000, 1, 1, tzinfo=timezone.utc)}
        )
        before = datetime.now(timezone.utc)

        stored = await repo.create_if_absent(provisional)

        assert stored.created_at >= before
        assert stored.created_at.tzinfo is not None
        found = await repo.find_by_id(stored.id)
        assert found is not None
        assert found.created_at == stored.created_at

    @pytest.mark.asyncio
    async def test_created_at_never_goes_backwards(self):
        """A later insert is never stamped earlier than an existing record."""
        repo = InMemoryConnectionRepository()
        ahead = make_request("carol", "dave").model_copy(
            update={"created_at": datetime.now(timezone.utc) + timedelta(hours=1)}
        )
        # Seed directly, as if written by a store whose clock ran ahead
        repo._requests.append(ahead)

        stored = await repo.create_if_absent(make_request("alice", "bob"))

        assert stored.created_at >= ahead.created_at
        assert await repo.find_by_recipient(
            Username("dave"), ConnectionStatus.PENDING
        ) == [ahead]
