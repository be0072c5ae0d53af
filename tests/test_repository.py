"""Tests for the instance stores."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from kaltura_broker.broker import InMemoryInstanceRepository, InstanceRepository
from kaltura_broker.db import create_tables
from kaltura_broker.errors import PersistenceError


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repo(request, tmp_path):
    """Run the contract tests against both stores."""
    if request.param == "memory":
        yield InMemoryInstanceRepository()
        return

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'instances.db'}")
    await create_tables(engine)
    yield InstanceRepository(session_factory=async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


class TestInstanceStoreContract:
    """Behaviour shared by every instance store."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, repo):
        """Test creating and reading back an instance."""
        created = await repo.create("instance-1", 42, "s3cr3t")

        assert created.id == "instance-1"
        found = await repo.find("instance-1")
        assert found is not None
        assert found.partner_id == 42
        assert found.admin_secret == "s3cr3t"

    @pytest.mark.asyncio
    async def test_find_nonexistent(self, repo):
        """Test looking up an unknown instance."""
        assert await repo.find("missing") is None

    @pytest.mark.asyncio
    async def test_delete(self, repo):
        """Test deleting an instance."""
        await repo.create("instance-1", 42, "s3cr3t")

        assert await repo.delete("instance-1") is True
        assert await repo.find("instance-1") is None

    @pytest.mark.asyncio
    async def test_delete_nonexistent(self, repo):
        """Test deleting an unknown instance."""
        assert await repo.delete("missing") is False

    @pytest.mark.asyncio
    async def test_duplicate_create_rejected(self, repo):
        """Test that the instance ID is unique."""
        await repo.create("instance-1", 42, "s3cr3t")

        with pytest.raises(PersistenceError):
            await repo.create("instance-1", 43, "other")

        found = await repo.find("instance-1")
        assert found.partner_id == 42
        assert found.admin_secret == "s3cr3t"
