"""Cluster administration lifecycle.

Decides whether an autonomic administration pass may run on a cluster,
tracks the passes that are running and reclaims clusters left InProgress by
workers that died before reporting completion.

The InProgress marker is advisory: ``mark_in_progress`` is not a
compare-and-swap, so two schedulers sharing a database can both claim the
same cluster. Deployments run a single scheduler.
"""
from datetime import timedelta
from typing import Awaitable, Callable, List, Optional
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from autonomic_admin.config import settings
from autonomic_admin.models.types import ClusterAdministrationStatus
from autonomic_admin.services.cluster_store import ClusterInventory, ClusterStateStore
from autonomic_admin.services.policy import AdministrationPolicy
from autonomic_admin.utils.time_utils import Clock, has_elapsed, utcnow

logger = logging.getLogger(__name__)


class ClusterAdministrationService:
    """Status queries, eligibility checks and transitions for cluster administration.

    Each call opens its own session, so nothing is cached between calls.
    Transitions run in a single transaction. Database errors propagate to
    the caller.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], AsyncSession]] = None,
        store: Optional[ClusterStateStore] = None,
        inventory: Optional[ClusterInventory] = None,
        stuck_threshold: Optional[timedelta] = None,
        clock: Clock = utcnow,
    ):
        if session_factory is None:
            from autonomic_admin.database import AsyncSessionLocal
            session_factory = AsyncSessionLocal
        self.session_factory = session_factory
        self.store = store or ClusterStateStore()
        self.inventory = inventory or ClusterInventory()
        self.stuck_threshold = stuck_threshold or timedelta(hours=settings.STUCK_THRESHOLD_HOURS)
        self.clock = clock

    async def is_cluster_being_administrated(self, cluster_id: uuid.UUID) -> bool:
        """Returns True if the cluster is in InProgress state."""
        async with self.session_factory() as session:
            status = await self.store.get_status(session, cluster_id)
        return ClusterAdministrationStatus.is_cluster_being_managed(status)

    async def can_process_cluster(self, cluster_id: uuid.UUID, policy: AdministrationPolicy) -> bool:
        """Check whether the policy interval has passed since the last administration.

        A cluster that was never administrated can always be processed. The
        comparison is strict: a cluster becomes eligible only once
        ``last_administration + interval`` lies before now.
        """
        async with self.session_factory() as session:
            last_administration = await self.store.get_last_administration(session, cluster_id)
        if last_administration is None:
            return True
        return has_elapsed(last_administration, policy.minimum_interval_seconds, self.clock())

    async def mark_in_progress(self, cluster_id: uuid.UUID) -> None:
        """Set the cluster status to InProgress.

        Callers must have checked eligibility first; no precondition is
        verified here.
        """
        async with self.session_factory() as session:
            async with session.begin():
                await self.store.set_status(session, cluster_id, ClusterAdministrationStatus.IN_PROGRESS)
        logger.debug(f"Starting the administration of cluster {cluster_id}")

    async def mark_done(self, cluster_id: uuid.UUID) -> None:
        """Set the cluster status to Done and its last administration to now."""
        now = self.clock()
        async with self.session_factory() as session:
            async with session.begin():
                await self.store.set_last_administration(session, cluster_id, now)
                await self.store.set_status(session, cluster_id, ClusterAdministrationStatus.DONE)
        logger.debug(f"Finished the administration of cluster {cluster_id} at {now.isoformat()}")

    async def run_administration(
        self,
        cluster_id: uuid.UUID,
        policy: AdministrationPolicy,
        algorithm: Callable[[uuid.UUID], Awaitable[None]],
    ) -> bool:
        """Run one administration pass on the cluster if it may run now.

        Returns False when the cluster is already being administrated or the
        policy interval has not elapsed. The cluster is marked Done even when
        the algorithm raises; the exception is re-raised afterwards.
        """
        if await self.is_cluster_being_administrated(cluster_id):
            logger.debug(f"Cluster {cluster_id} is already being administrated, skipping")
            return False
        if not await self.can_process_cluster(cluster_id, policy):
            logger.debug(f"Cluster {cluster_id} was administrated recently, skipping")
            return False

        await self.mark_in_progress(cluster_id)
        try:
            await algorithm(cluster_id)
        finally:
            await self.mark_done(cluster_id)
        return True

    async def _reclaim_if_stuck(self, cluster_id: uuid.UUID) -> bool:
        async with self.session_factory() as session:
            async with session.begin():
                status = await self.store.get_status(session, cluster_id)
                if not ClusterAdministrationStatus.is_cluster_being_managed(status):
                    return False

                now = self.clock()
                last_administration = await self.store.get_last_administration(session, cluster_id)
                if last_administration is not None and not has_elapsed(
                    last_administration, self.stuck_threshold.total_seconds(), now
                ):
                    return False

                await self.store.set_last_administration(session, cluster_id, now)
                await self.store.set_status(session, cluster_id, ClusterAdministrationStatus.DONE)

        if last_administration is None:
            logger.warning(f"Cluster {cluster_id} was InProgress without ever completing; marked as Done")
        else:
            logger.warning(
                f"Cluster {cluster_id} stuck InProgress since before "
                f"{(last_administration + self.stuck_threshold).isoformat()}; marked as Done"
            )
        return True

    async def remove_clusters_stuck_processing(self) -> List[uuid.UUID]:
        """Reclaim clusters stuck as being administrated.

        A cluster stays InProgress forever when the worker administrating it
        dies before marking it as done. Every InProgress cluster whose last
        administration is older than the stuck threshold, or that never
        completed a pass, is marked as Done so the next scheduling cycle can
        pick it up again.

        Each cluster is handled in its own transaction; a failure on one
        cluster is logged and the remaining clusters are still processed.

        Returns the ids of the reclaimed clusters.
        """
        async with self.session_factory() as session:
            cluster_ids = await self.inventory.list_all_clusters(session)
        if not cluster_ids:
            return []

        reclaimed = []
        for cluster_id in cluster_ids:
            try:
                if await self._reclaim_if_stuck(cluster_id):
                    reclaimed.append(cluster_id)
            except Exception as e:
                logger.error(f"Failed to check cluster {cluster_id} for stuck administration: {type(e).__name__}: {e}")

        if reclaimed:
            logger.info(f"Reclaimed {len(reclaimed)} stuck cluster(s) out of {len(cluster_ids)}")
        return reclaimed


# Singleton instance
_administration_service = None


def get_administration_service() -> ClusterAdministrationService:
    """Get or create the administration service singleton."""
    global _administration_service
    if _administration_service is None:
        _administration_service = ClusterAdministrationService()
    return _administration_service
