"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from report_tracker import __version__
from report_tracker.config import get_settings
from report_tracker.database import engine, init_db
from report_tracker.factories.service_factories import get_artifact_store

# Import routers
from report_tracker.routers import auth, health, reports

# Import middleware
from report_tracker.middleware import logging_middleware, register_exception_handlers
from report_tracker.utils.logger import configure_logging, get_logger

settings = get_settings()

# Configure logging early
configure_logging(log_level=settings.log_level, debug=settings.debug)
log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    log.info("starting application", debug=settings.debug, log_level=settings.log_level)
    await init_db()
    log.info("database initialized")

    artifact_store = get_artifact_store()
    artifact_store.ensure_base_dir()
    log.info("upload directory ready", path=str(artifact_store.base_dir))

    yield

    log.info("shutting down application")
    await engine.dispose()
    log.info("database connections closed")


app = FastAPI(
    title="Report Tracker API",
    description="Upload reports and track them through UPLOADED, PROCESSING and COMPLETED",
    version=__version__,
    lifespan=lifespan,
)

# Register exception handlers first
register_exception_handlers(app)

# CORS middleware (must be first in middleware stack)
_cors_origins = settings.get_cors_origins_list()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins or ["*"],
    allow_credentials=bool(_cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging middleware
app.middleware("http")(logging_middleware)

# Register routers
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(auth.router, prefix="/api/v1", tags=["Auth"])
app.include_router(reports.router, prefix="/api/v1", tags=["Reports"])


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Report Tracker API",
        "version": __version__,
        "features": [
            "Per-user report uploads",
            "Linear status workflow (UPLOADED -> PROCESSING -> COMPLETED)",
            "JWT authentication",
        ],
        "endpoints": {
            "health": "/api/v1/health",
            "auth": "/api/v1/auth/login",
            "reports": "/api/v1/reports",
        },
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "report_tracker.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
