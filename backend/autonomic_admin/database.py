"""Database initialization and ORM setup."""
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm import DeclarativeBase
import logging

from autonomic_admin.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def get_database_url() -> str:
    """Get database URL - SQLite by default, Postgres when DB_BACKEND=postgresql."""
    return settings.DATABASE_URL


# Create async engine
engine = create_async_engine(
    get_database_url(),
    echo=False,  # Disable SQL echo to prevent logging
    pool_pre_ping=True,
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncSession:
    """Dependency for getting async database session."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_db(bind=None):
    """Initialize database tables."""
    bind = bind or engine
    logger.info(f"Initializing database: {bind.url.get_backend_name()}")

    try:
        # Import models to register with Base
        import autonomic_admin.models  # noqa: F401

        async with bind.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise
