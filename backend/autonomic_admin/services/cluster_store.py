"""Data access for cluster administration state and the cluster inventory.

Every method works on a caller-supplied session; transaction boundaries
belong to the caller. Database errors are not caught here.
"""
from datetime import datetime
from typing import List, Optional
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autonomic_admin.models.cluster import Cluster
from autonomic_admin.models.cluster_administration import ClusterAdministration
from autonomic_admin.models.types import ClusterAdministrationStatus


class ClusterStateStore:
    """Reads and writes the ``cluster_administration`` table."""

    async def _get_record(self, session: AsyncSession, cluster_id: uuid.UUID) -> Optional[ClusterAdministration]:
        # populate_existing: never trust what the identity map already holds
        return await session.get(ClusterAdministration, cluster_id, populate_existing=True)

    async def _get_or_create_record(self, session: AsyncSession, cluster_id: uuid.UUID) -> ClusterAdministration:
        record = await self._get_record(session, cluster_id)
        if record is None:
            record = ClusterAdministration(
                cluster_id=cluster_id,
                status=ClusterAdministrationStatus.NOT_PROCESSED,
            )
            session.add(record)
        return record

    async def get_status(self, session: AsyncSession, cluster_id: uuid.UUID) -> ClusterAdministrationStatus:
        """Stored status, NotProcessed for clusters never seen before."""
        record = await self._get_record(session, cluster_id)
        if record is None or record.status is None:
            return ClusterAdministrationStatus.NOT_PROCESSED
        return record.status

    async def set_status(
        self,
        session: AsyncSession,
        cluster_id: uuid.UUID,
        status: ClusterAdministrationStatus,
    ) -> None:
        record = await self._get_or_create_record(session, cluster_id)
        record.status = status
        await session.flush()

    async def get_last_administration(self, session: AsyncSession, cluster_id: uuid.UUID) -> Optional[datetime]:
        """Time the last administration pass completed, None if it never did."""
        record = await self._get_record(session, cluster_id)
        return record.last_administration if record else None

    async def set_last_administration(
        self,
        session: AsyncSession,
        cluster_id: uuid.UUID,
        last_administration: datetime,
    ) -> None:
        record = await self._get_or_create_record(session, cluster_id)
        record.last_administration = last_administration
        await session.flush()


class ClusterInventory:
    """Enumerates the clusters known to the platform."""

    async def list_all_clusters(self, session: AsyncSession) -> List[uuid.UUID]:
        stmt = select(Cluster.id).where(Cluster.is_active == True)
        result = await session.execute(stmt)
        return list(result.scalars().all())
