"""Background task that periodically reclaims stuck clusters."""
from datetime import timedelta
from typing import Optional
import asyncio
import logging

from autonomic_admin.config import settings
from autonomic_admin.services.cluster_management import ClusterAdministrationService

logger = logging.getLogger(__name__)


class StuckClusterSweeper:
    """Runs ``remove_clusters_stuck_processing`` with a fixed delay.

    The first sweep happens ``initial_delay_seconds`` after ``start()``; the
    following ones ``interval_seconds`` after the previous sweep finished.
    """

    def __init__(
        self,
        service: ClusterAdministrationService,
        initial_delay_seconds: Optional[float] = None,
        interval_seconds: Optional[float] = None,
    ):
        self.service = service
        self.initial_delay_seconds = (
            settings.SWEEP_INITIAL_DELAY_SECONDS if initial_delay_seconds is None else initial_delay_seconds
        )
        self.interval_seconds = (
            settings.SWEEP_INTERVAL_MINUTES * 60 if interval_seconds is None else interval_seconds
        )
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self):
        await asyncio.sleep(self.initial_delay_seconds)
        while True:
            try:
                await self.service.remove_clusters_stuck_processing()
            except Exception as e:
                logger.error(f"Stuck cluster sweep failed: {type(e).__name__}: {e}")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self.running:
            return
        if timedelta(seconds=self.interval_seconds) >= self.service.stuck_threshold:
            logger.warning(
                f"Sweep interval ({self.interval_seconds}s) is not below the stuck threshold "
                f"({self.service.stuck_threshold.total_seconds()}s); live passes may be reclaimed"
            )
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(
            f"Stuck cluster sweeper started (initial delay {self.initial_delay_seconds}s, "
            f"interval {self.interval_seconds}s)"
        )

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Stuck cluster sweeper stopped")
