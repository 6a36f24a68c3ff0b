"""FastAPI application factory and configuration."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from autonomic_admin.api import health, clusters, administration
from autonomic_admin.database import init_db
from autonomic_admin.config import settings
from autonomic_admin.services.cluster_management import get_administration_service
from autonomic_admin.services.sweeper import StuckClusterSweeper

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logging.getLogger("sqlalchemy").setLevel(logging.ERROR)
logging.getLogger("uvicorn.access").setLevel(logging.ERROR)  # Suppress HTTP access logs
logging.getLogger("autonomic_admin").setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Autonomic cluster administration control loop",
        version=settings.APP_VERSION,
    )

    # Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes
    app.include_router(health.router)
    app.include_router(clusters.router)
    app.include_router(administration.router)

    app.state.sweeper = StuckClusterSweeper(get_administration_service())

    @app.on_event("startup")
    async def startup_event():
        """Initialize database and start the stuck cluster sweeper."""
        await init_db()
        if settings.SWEEP_ENABLED:
            app.state.sweeper.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        """Stop the stuck cluster sweeper."""
        await app.state.sweeper.stop()

    return app


if __name__ == "__main__":
    import uvicorn
    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=3000)
