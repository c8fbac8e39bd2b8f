# backend/app/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from fastapi.routing import APIRoute

from .api.dependencies.auth import get_current_user_id
from .core.config import is_running_tests, settings
from .core.constants import (
    API_DESCRIPTION,
    API_TITLE,
    API_VERSION,
    BOOKING_PREFIX,
    BRAND_NAME,
)
from .database import init_db
from .routes.v1 import (
    bookings as bookings_v1,
    health as health_v1,
    prometheus as prometheus_v1,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    # Startup
    logger.info(f"{BRAND_NAME} booking API starting up...")
    logger.info(f"Environment: {settings.environment}")

    if is_running_tests():
        logger.info("Running under pytest (test mode active)")

    init_db()

    yield

    # Shutdown
    logger.info(f"{BRAND_NAME} booking API shutting down...")


def _unique_operation_id(route: APIRoute) -> str:
    methods = "_".join(sorted(m.lower() for m in route.methods or []))
    path = route.path_format.replace("/", "_").replace("{", "").replace("}", "").strip("_")
    name = (route.name or "operation").lower().replace(" ", "_")
    return f"{methods}__{path}__{name}".strip("_")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
    generate_unique_id_function=_unique_operation_id,
)
# Register unified error envelope handlers
from .errors import register_error_handlers  # noqa: E402

register_error_handlers(app)

# Every booking route requires a valid session token
app.include_router(
    bookings_v1.router,
    prefix=BOOKING_PREFIX,
    dependencies=[Depends(get_current_user_id)],
)
app.include_router(health_v1.router, prefix="/health")
app.include_router(prometheus_v1.router, prefix="/metrics")


# Keep the original FastAPI app for tools/tests that need access to routes
fastapi_app = app

# Export what's needed
__all__ = ["app", "fastapi_app"]
