"""
FastAPI application factory and process entry point.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import asyncpg
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backoffice.api.cities import router as cities_router
from backoffice.api.contacts import router as contacts_router
from backoffice.api.deals import router as deals_router
from backoffice.api.enquiries import router as enquiries_router
from backoffice.api.jobs import router as jobs_router
from backoffice.api.payloads import format_validation_errors
from backoffice.api.tasks import router as tasks_router
from backoffice.config import Settings, get_settings
from backoffice.db_context import DatabaseManager
from backoffice.errors import ApiError
from backoffice.resources import (
    CityRepository,
    ContactRepository,
    DealRepository,
    EnquiryRepository,
    JobRepository,
    TaskRepository,
)
from backoffice.schema import create_schema
from backoffice.utils.logging import configure_logging, get_logger
from backoffice.utils.uploads import UploadStore

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def install_repositories(app: FastAPI, db: DatabaseManager) -> None:
    """Bind one repository per resource to `db` and publish them on app.state."""
    app.state.db = db
    app.state.cities = CityRepository(db)
    app.state.contacts = ContactRepository(db)
    app.state.deals = DealRepository(db)
    app.state.enquiries = EnquiryRepository(db)
    app.state.jobs = JobRepository(db)
    app.state.tasks = TaskRepository(db)


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, format_validation_errors(exc.errors()))

    @app.exception_handler(asyncpg.UniqueViolationError)
    async def handle_unique_violation(
        request: Request, exc: asyncpg.UniqueViolationError
    ) -> JSONResponse:
        logger.info(
            "unique constraint rejected write",
            extra={"path": request.url.path, "constraint": exc.constraint_name},
        )
        return _error(409, "Duplicate entry")

    @app.exception_handler(asyncpg.PostgresError)
    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unhandled error", extra={"path": request.url.path, "method": request.method}
        )
        return _error(500, "Internal server error")


def create_app(settings: Settings | None = None, db: DatabaseManager | None = None) -> FastAPI:
    """Build the API.

    When `db` is given the caller owns it (tests, embedding); otherwise the
    lifespan opens a pool from `settings` and closes it on shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level, settings.log_json, force=False)
        owned: DatabaseManager | None = None
        if db is None:
            owned = await DatabaseManager.connect(settings)
            install_repositories(app, owned)
        if settings.create_schema:
            await create_schema(app.state.db)
        logger.info("backoffice api started", extra={"port": settings.port})
        try:
            yield
        finally:
            if owned is not None:
                await owned.close()
            logger.info("backoffice api stopped")

    app = FastAPI(title="Back-office API", lifespan=lifespan)
    app.state.settings = settings
    app.state.uploads = UploadStore(settings.upload_dir, settings.max_upload_size)
    if db is not None:
        install_repositories(app, db)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    install_exception_handlers(app)

    app.include_router(cities_router.router, tags=["cities"])
    app.include_router(contacts_router.router, tags=["contacts"])
    app.include_router(deals_router.router, tags=["deals"])
    app.include_router(enquiries_router.router, tags=["enquiries"])
    app.include_router(jobs_router.router, tags=["jobs"])
    app.include_router(tasks_router.router, tags=["tasks"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
