"""
Shared fixtures: in-memory database, controllable clock, service instance.
"""

from datetime import datetime, timedelta
import uuid

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from autonomic_admin.database import init_db
from autonomic_admin.models.cluster import Cluster
from autonomic_admin.services.cluster_management import ClusterAdministrationService

EPOCH = datetime(2026, 1, 1, 12, 0, 0)


class FakeClock:
    """Clock returning a fixed time until moved with ``set``/``advance``."""

    def __init__(self, start: datetime = EPOCH):
        self.start = start
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def set(self, seconds: float) -> datetime:
        """Move to ``start + seconds``."""
        self.now = self.start + timedelta(seconds=seconds)
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(session_factory, clock):
    return ClusterAdministrationService(
        session_factory=session_factory,
        stuck_threshold=timedelta(hours=6),
        clock=clock,
    )


@pytest.fixture
def add_cluster(session_factory):
    """Register a cluster in the inventory and return its id."""

    async def _add(name: str = None, is_active: bool = True) -> uuid.UUID:
        async with session_factory() as session:
            cluster = Cluster(name=name or f"cluster-{uuid.uuid4().hex[:8]}", is_active=is_active)
            session.add(cluster)
            await session.commit()
            return cluster.id

    return _add
