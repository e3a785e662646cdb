# backend/tutorlink/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import is_running_tests, settings
from .core.constants import BRAND_NAME
from .errors import register_error_handlers
from .routes.v1 import (
    auth as auth_v1,
    availability as availability_v1,
    conversations as conversations_v1,
    health as health_v1,
    lessons as lessons_v1,
    metrics as metrics_v1,
    realtime as realtime_v1,
    requests as requests_v1,
    reviews as reviews_v1,
    students as students_v1,
    subjects as subjects_v1,
    teachers as teachers_v1,
)
from .services.messaging import connection_manager

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")
    if is_running_tests():
        logger.info("Running under pytest (test mode active)")

    # Services publish from worker threads; they need the loop that owns the sockets.
    connection_manager.bind_loop()
    logger.info(f"Allowed origins: {settings.cors_origins}")

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Tutoring marketplace: profiles, availability, requests, messaging, lessons",
        version="1.0.0",
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

    app.include_router(auth_v1.router, prefix="/auth")
    app.include_router(teachers_v1.router, prefix="/teachers")
    app.include_router(students_v1.router, prefix="/students")
    app.include_router(subjects_v1.router, prefix="/subjects")
    app.include_router(requests_v1.router, prefix="/requests")
    app.include_router(conversations_v1.router, prefix="/conversations")
    app.include_router(lessons_v1.router, prefix="/lessons")
    app.include_router(reviews_v1.router, prefix="/reviews")
    app.include_router(availability_v1.router, prefix="/availability")
    app.include_router(realtime_v1.router)
    app.include_router(health_v1.router)
    app.include_router(metrics_v1.router)
    return app


app = create_app()
