"""Unit tests for provider selection and the test container."""

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from knowshare.config import Settings
from knowshare.domain.repository import ConnectionRepository
from knowshare.domain.service import ConnectionDirectory, ConnectionFeed
from knowshare.persistence.repository.inmemory import InMemoryConnectionRepository
from knowshare.util.di import (
    PersistenceProvider,
    ProdConfigProvider,
    ProdPersistenceProvider,
    get_provider,
)
from knowshare.util.error import DependencyInjectionError
from tests.di import MockPersistenceProvider, build_test_container


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_returned_as_is(self):
        """Providers without subclasses are used directly."""
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_mockable_component(self):
        """Mockable components resolve by the mock flag."""
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider


class TestBuildTestContainer:
    """Tests for build_test_container."""

    def test_unknown_component_rejected(self):
        """Unmocking a component that does not exist is an error."""
        with pytest.raises(DependencyInjectionError, match="Unknown components"):
            build_test_container(unmock={"search"})  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_mock_container_wires_in_memory_persistence(self):
        """The default test container uses in-memory repositories."""
        container = build_test_container()
        try:
            async with container() as request_container:
                repo = await request_container.get(ConnectionRepository)
                directory = await request_container.get(ConnectionDirectory)
                settings = await request_container.get(Settings)

                assert isinstance(repo, InMemoryConnectionRepository)
                assert directory.connection_repository is repo
                assert settings.database.pool_size > 0
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_feed_is_shared_across_requests(self):
        """Subscriptions live in one feed for the whole container."""
        container = build_test_container()
        try:
            async with container() as first:
                feed_a = await first.get(ConnectionFeed)
            async with container() as second:
                feed_b = await second.get(ConnectionFeed)

            assert feed_a is feed_b
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_unmocked_persistence_selects_postgres(self):
        """Unmocking persistence swaps in the production provider."""
        container = build_test_container(unmock={"persistence"})
        try:
            async with container() as request_container:
                # Engine creation is lazy, no database connection is made here
                engine = await request_container.get(AsyncEngine)
                assert engine.url.drivername.startswith("postgresql")
        finally:
            await container.close()
