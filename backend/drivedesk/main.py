# backend/drivedesk/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from .core.config import is_running_tests, settings
from .database import init_db
from .errors import register_error_handlers
from .middleware.prometheus_middleware import PrometheusMiddleware
from .routes.v1 import (
    bookings as bookings_v1,
    calendar as calendar_v1,
    cars as cars_v1,
    dashboard as dashboard_v1,
    driving_tests as driving_tests_v1,
    mileage as mileage_v1,
    prepaid_hours as prepaid_hours_v1,
    profile as profile_v1,
    progress as progress_v1,
    prometheus,
    resources as resources_v1,
    students as students_v1,
    support as support_v1,
)
from .schemas.health import HealthResponse

API_TITLE = "DriveDesk API"
API_DESCRIPTION = "Scheduling, student tracking and business records for driving instructors"
API_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{API_TITLE} starting up...")
    logger.info(f"Environment: {settings.environment}")
    if is_running_tests():
        logger.info("Running under pytest (test mode active)")

    if settings.is_sqlite:
        # Local and test databases are created on demand; Postgres is provisioned ahead of time.
        init_db()

    yield

    logger.info(f"{API_TITLE} shutting down...")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)
app.add_middleware(PrometheusMiddleware)
logger.info("CORS allow_origins=%s", settings.cors_origins)

# Create API v1 router
api_v1 = APIRouter(prefix="/api/v1")

api_v1.include_router(calendar_v1.router, prefix="/calendar")
api_v1.include_router(bookings_v1.router, prefix="/bookings")
api_v1.include_router(students_v1.router, prefix="/students")
api_v1.include_router(cars_v1.router, prefix="/cars")
api_v1.include_router(mileage_v1.router, prefix="/mileage")
api_v1.include_router(progress_v1.router, prefix="/progress")
api_v1.include_router(driving_tests_v1.router, prefix="/driving-tests")
api_v1.include_router(prepaid_hours_v1.router, prefix="/prepaid-hours")
api_v1.include_router(resources_v1.router, prefix="/resources")
api_v1.include_router(support_v1.router, prefix="/support")
api_v1.include_router(dashboard_v1.router, prefix="/dashboard")
api_v1.include_router(profile_v1.router, prefix="/profile")

app.include_router(api_v1)

# Public scrape endpoint at /metrics (and /metrics/prometheus)
app.include_router(prometheus.router)


def _health_payload() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service="drivedesk-api",
        version=API_VERSION,
        environment=settings.environment,
    )


@app.get("/health", response_model=HealthResponse, include_in_schema=False)
def health_check(response: Response) -> HealthResponse:
    response.headers["Cache-Control"] = "no-store"
    return _health_payload()


@app.get("/api/health", response_model=HealthResponse)
def api_health(response: Response) -> HealthResponse:
    response.headers["Cache-Control"] = "no-store"
    return _health_payload()


fastapi_app = app

__all__ = ["app", "fastapi_app"]
