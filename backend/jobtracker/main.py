from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobtracker.api import analytics, applications, statuses
from jobtracker.bootstrap import run_runtime_migrations
from jobtracker.config import Settings, settings
from jobtracker.database import Base, SessionLocal, engine
from jobtracker.errors import ConcurrentUpdateError, ValidationError
from jobtracker.models import application  # noqa: F401
from jobtracker.services.applications import ApplicationService
from jobtracker.services.repository import ApplicationRepository, InMemoryApplicationRepository
from jobtracker.services.sql_repository import SqlApplicationRepository


logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_repository(config: Settings) -> ApplicationRepository:
    if config.storage_backend == "memory":
        return InMemoryApplicationRepository()
    if config.storage_backend == "sql":
        config.ensure_directories()
        Base.metadata.create_all(bind=engine)
        run_runtime_migrations(engine)
        return SqlApplicationRepository(SessionLocal)
    raise ValueError(f"Unknown STORAGE_BACKEND {config.storage_backend!r}; expected 'sql' or 'memory'")


def create_app(repository: ApplicationRepository | None = None) -> FastAPI:
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if repository is not None:
        app.state.application_service = ApplicationService(repository, max_write_retries=settings.max_write_retries)

    @app.on_event("startup")
    def on_startup() -> None:
        if getattr(app.state, "application_service", None) is None:
            store = build_repository(settings)
            app.state.application_service = ApplicationService(store, max_write_retries=settings.max_write_retries)
        logger.info("Started %s with %s", settings.app_name, type(app.state.application_service.repository).__name__)

    @app.exception_handler(ValidationError)
    def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=400, content={"detail": f"Validation error: {message}"})

    @app.exception_handler(ConcurrentUpdateError)
    def handle_concurrent_update(request: Request, exc: ConcurrentUpdateError) -> JSONResponse:
        logger.warning("Giving up on application %s after %d attempts", exc.application_id, exc.attempts)
        return JSONResponse(status_code=409, content={"detail": "Application was modified concurrently, retry"})

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
    app.include_router(statuses.router, prefix="/api", tags=["statuses"])
    app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])
    return app


app = create_app()
