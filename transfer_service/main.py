import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from transfer_service import __version__
from transfer_service.api import create_api_router
from transfer_service.core.config import get_settings
from transfer_service.core.logging import setup_logging
from transfer_service.infrastructure.database import dispose_engine, init_db
from transfer_service.interfaces.http.errors import register_exception_handlers
from transfer_service.jobs.scheduler import init_scheduler, start_scheduler, stop_scheduler
from transfer_service.schemas import HealthResponse

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.logging)
    logger.info("%s %s starting (%s)", settings.project_name, __version__, settings.environment)
    if settings.database.create_tables:
        await init_db()
    if settings.scheduler.enabled:
        init_scheduler(settings)
        start_scheduler()
    try:
        yield
    finally:
        stop_scheduler()
        await dispose_engine()
        logger.info("%s shutting down", settings.project_name)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Account-to-account transfers with a fee-bearing ledger",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "HTTP %s %s from %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            request.client.host if request.client else "?",
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    register_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get(f"{settings.api_prefix}/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="healthy", version=__version__)

    return app


app = create_app()
