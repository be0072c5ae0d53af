"""Stores for provisioned Kaltura service instances.

``InstanceRepository`` persists to the ``kaltura_instances`` table via
SQLAlchemy. ``InMemoryInstanceRepository`` honours the same contract and is
used for tests and local development.
"""

import logging
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kaltura_broker.broker.models import Instance
from kaltura_broker.db import KalturaInstanceModel, get_session
from kaltura_broker.errors import PersistenceError

logger = logging.getLogger(__name__)


class InstanceStore(Protocol):
    """Persistence contract used by the broker service."""

    async def create(self, instance_id: str, partner_id: int, admin_secret: str) -> Instance:
        ...

    async def find(self, instance_id: str) -> Instance | None:
        ...

    async def delete(self, instance_id: str) -> bool:
        ...


class InstanceRepository:
    """Repository for Kaltura instances backed by SQLAlchemy.

    Every call runs in its own session and touches a single row.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        """Initialize the repository.

        Args:
            session_factory: Session factory to use. Defaults to the
                process-wide factory from ``kaltura_broker.db``.
        """
        self._session_factory = session_factory

    async def create(self, instance_id: str, partner_id: int, admin_secret: str) -> Instance:
        """Create a new instance record.

        A record with the same ID is rejected by the primary key.

        Args:
            instance_id: The service instance ID.
            partner_id: Kaltura partner ID.
            admin_secret: Kaltura partner admin secret.

        Returns:
            The created instance.

        Raises:
            PersistenceError: If the row could not be written.
        """
        try:
            async with get_session(self._session_factory) as session:
                model = KalturaInstanceModel(
                    id=instance_id,
                    partner_id=partner_id,
                    admin_secret=admin_secret,
                )
                session.add(model)
                await session.flush()
                instance = self._model_to_entity(model)
        except SQLAlchemyError as e:
            logger.error("Failed to create instance %s: %s", instance_id, e)
            raise PersistenceError(f"Failed to store instance {instance_id}") from e

        logger.info("Created instance: %s (partner_id=%s)", instance_id, partner_id)
        return instance

    async def find(self, instance_id: str) -> Instance | None:
        """Get an instance by ID.

        Args:
            instance_id: The service instance ID.

        Returns:
            Instance if found, None otherwise.

        Raises:
            PersistenceError: If the lookup failed.
        """
        try:
            async with get_session(self._session_factory) as session:
                result = await session.execute(
                    select(KalturaInstanceModel).where(KalturaInstanceModel.id == instance_id)
                )
                model = result.scalar_one_or_none()
                if model:
                    return self._model_to_entity(model)
                return None
        except SQLAlchemyError as e:
            logger.error("Failed to look up instance %s: %s", instance_id, e)
            raise PersistenceError(f"Failed to look up instance {instance_id}") from e

    async def delete(self, instance_id: str) -> bool:
        """Delete an instance.

        Args:
            instance_id: The service instance ID.

        Returns:
            True if deleted, False if not found.

        Raises:
            PersistenceError: If the delete failed.
        """
        try:
            async with get_session(self._session_factory) as session:
                result = await session.execute(
                    delete(KalturaInstanceModel).where(KalturaInstanceModel.id == instance_id)
                )
                deleted = result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error("Failed to delete instance %s: %s", instance_id, e)
            raise PersistenceError(f"Failed to delete instance {instance_id}") from e

        if deleted:
            logger.info("Deleted instance: %s", instance_id)
        return deleted

    def _model_to_entity(self, model: KalturaInstanceModel) -> Instance:
        """Convert ORM model to Pydantic entity."""
        return Instance(
            id=model.id,
            partner_id=model.partner_id,
            admin_secret=model.admin_secret,
        )


class InMemoryInstanceRepository:
    """In-memory repository for Kaltura instances."""

    def __init__(self) -> None:
        self._instances: dict[str, Instance] = {}

    async def create(self, instance_id: str, partner_id: int, admin_secret: str) -> Instance:
        if instance_id in self._instances:
            raise PersistenceError(f"Instance {instance_id} already exists")
        instance = Instance(id=instance_id, partner_id=partner_id, admin_secret=admin_secret)
        self._instances[instance_id] = instance
        logger.info("Created instance: %s (partner_id=%s)", instance_id, partner_id)
        return instance

    async def find(self, instance_id: str) -> Instance | None:
        return self._instances.get(instance_id)

    async def delete(self, instance_id: str) -> bool:
        if instance_id in self._instances:
            del self._instances[instance_id]
            logger.info("Deleted instance: %s", instance_id)
            return True
        return False
