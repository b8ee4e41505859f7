"""
Safety Signal Engine - FastAPI Application Entry Point

Backend for a personal-safety companion: contextual panic classification,
authority escalation, live alert sync and arrival estimates.

DESIGN PRINCIPLES:
- The hosted store is the only source of truth
- Failures degrade to "no update"; nothing here is fatal to the process
- silent_tracking never notifies authorities
- Identity is consumed, never established, by this service
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.settings import settings
from app.routes import alerts, escalations, eta, health, panic, zones
from app.services.alert_synchronizer import AlertSynchronizer
from app.services.store import get_store

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Contextual safety signals: panic context, escalation, live alerts and ETA",
    debug=settings.DEBUG
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them with full traceback."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}\n"
        f"{''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "path": request.url.path},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors with the offending path before returning 422."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError):
    # ctx may carry exception instances that are not JSON serializable
    return [{k: v for k, v in error.items() if k != "ctx"} for error in exc.errors()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Application lifecycle events
@app.on_event("startup")
async def startup_event():
    """
    Initialize services on application startup.
    Currently: data store connection and the live alert synchronizer.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    app.state.alert_synchronizer = None

    try:
        store = get_store()
    except RuntimeError as e:
        logger.warning(f"Data store initialization failed: {e}")
        logger.warning("The app will start but database operations may fail.")
        return

    synchronizer = AlertSynchronizer(store)
    await synchronizer.activate()
    app.state.alert_synchronizer = synchronizer
    logger.info(f"Live alert sync active ({len(synchronizer.alerts)} alert(s) loaded)")


@app.on_event("shutdown")
async def shutdown_event():
    """
    Cleanup on application shutdown.
    """
    synchronizer = getattr(app.state, "alert_synchronizer", None)
    if synchronizer is not None:
        synchronizer.deactivate()
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(panic.router)
app.include_router(escalations.router)
app.include_router(alerts.router)
app.include_router(eta.router)
app.include_router(zones.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "live_alerts": "/alerts/live",
    }
