import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskkeeper import __version__
from taskkeeper.config.settings import Settings, configure_logging
from taskkeeper.errors import register_exception_handlers
from taskkeeper.routers import auth, tasks
from taskkeeper.services.scheduler import SessionSweeper
from taskkeeper.services.session_store import SessionStore
from taskkeeper.services.stores import Stores, build_stores

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, stores: Optional[Stores] = None) -> FastAPI:
    """Build the application with its stores and session state wired in"""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Task Keeper API", version=__version__)
    app.state.settings = settings
    app.state.stores = stores or build_stores(settings)
    app.state.sessions = SessionStore(ttl_minutes=settings.session_ttl_minutes)
    app.state.sweeper = SessionSweeper(app.state.sessions, settings.session_sweep_minutes)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Route registration
    app.include_router(auth.router, prefix="/api", tags=["Authentication"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])

    # Startup and shutdown events
    @app.on_event("startup")
    async def startup_event():
        logger.info("Starting Task Keeper API...")
        app.state.sweeper.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down Task Keeper API...")
        app.state.sweeper.stop()
        app.state.stores.close()

    # Root route
    @app.get("/")
    def read_root():
        return {"message": "Task Keeper API"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/scheduler/status")
    def get_scheduler_status():
        """Get scheduler status and job information"""
        return app.state.sweeper.get_status()

    return app


app = create_app()
