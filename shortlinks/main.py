"""Short Links Service - Main FastAPI Application.

A URL shortening service with:
- Short URLs with generated or custom codes
- Redirects with visit counting
- Optional expiry and password protection
- Owner-scoped soft delete, update and listing
- Bulk creation for enterprise accounts
- Recent activity analytics
"""

import logging
import signal
import threading
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .core.blacklist import get_blacklist
from .core.config import settings
from .core.database import get_db
from .core.exceptions import ShortenerError
from .middleware import RequestLoggingMiddleware
from .api.routes import health_router, users_router, links_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def install_reload_handler() -> None:
    """Reload the blacklist on SIGHUP where the platform allows it."""
    if not hasattr(signal, "SIGHUP"):
        return
    if threading.current_thread() is not threading.main_thread():
        logger.warning("Not in the main thread, SIGHUP blacklist reload disabled")
        return
    signal.signal(signal.SIGHUP, get_blacklist().handle_signal)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    logger.info(f"Starting {settings.app_title}...")
    db = get_db()
    db.init_db()
    logger.info("Database initialized")
    get_blacklist().load()
    install_reload_handler()
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_title}...")
    db.close()


# Create FastAPI application
app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(ShortenerError)
async def shortener_exception_handler(request: Request, exc: ShortenerError):
    """Render a classified error."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """General exception handler."""
    logger.exception(f"Unhandled Exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_code": "500"},
    )


@app.get("/", include_in_schema=False)
async def root() -> dict:
    return {"message": "Welcome to the Short Links Service. Go to /docs for documentation."}


# Include routers
app.include_router(health_router)
app.include_router(users_router)
app.include_router(links_router)


def main() -> None:
    uvicorn.run("shortlinks.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
