"""LMS API - Main Application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, NamedTuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.analytics.router import router as analytics_router
from src.analytics.service import AnalyticsService
from src.assignments.repository import AssignmentRepository, CassandraAssignmentRepository
from src.assignments.router import course_assignments_router, submissions_router
from src.assignments.router import router as assignments_router
from src.assignments.service import AssignmentService
from src.auth.repository import CassandraUserRepository, UserRepository
from src.auth.router import router as auth_router
from src.auth.service import AuthService
from src.config import Settings, get_settings
from src.core.context import get_request_id
from src.core.database import init_async_cassandra, shutdown_async_cassandra
from src.core.logging import configure_structlog, get_logger
from src.core.middleware import RequestContextMiddleware
from src.courses.repository import CassandraCourseRepository, CourseRepository
from src.courses.router import router_content, router_courses, router_weeks
from src.courses.service import CourseService
from src.health.router import router as health_router
from src.progress.repository import CassandraProgressRepository, ProgressRepository
from src.progress.router import course_enrollments_router, enrollments_router
from src.progress.router import router as progress_router
from src.progress.service import ProgressService


# Configure logging early (before creating logger)
settings = get_settings()
configure_structlog(settings, log_dir=Path(settings.log_dir))

logger = get_logger(__name__)


class Repositories(NamedTuple):
    """Storage backends, created once per process."""

    users: UserRepository
    courses: CourseRepository
    progress: ProgressRepository
    assignments: AssignmentRepository


def cassandra_repositories(session: Any, keyspace: str) -> Repositories:
    """Cassandra-backed repositories sharing one session."""
    return Repositories(
        users=CassandraUserRepository(session, keyspace),
        courses=CassandraCourseRepository(session, keyspace),
        progress=CassandraProgressRepository(session, keyspace),
        assignments=CassandraAssignmentRepository(session, keyspace),
    )


def install_services(app: FastAPI, repositories: Repositories, settings: Settings) -> None:
    """Build the domain services and expose them on ``app.state``.

    Dependencies resolve services through ``request.app.state``.
    """
    course_service = CourseService(repositories.courses)

    app.state.auth_service = AuthService(repositories.users)
    app.state.course_service = course_service
    app.state.progress_service = ProgressService(repositories.progress, course_service)
    app.state.assignment_service = AssignmentService(
        repositories.assignments, course_service
    )
    app.state.analytics_service = AnalyticsService(
        progress=repositories.progress,
        catalog=course_service,
        assignments=repositories.assignments,
        low_score_threshold=settings.analytics_low_score_threshold,
        max_weak_areas=settings.analytics_max_weak_areas,
    )
    app.state.services_ready = True
    logger.info("services_initialized")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        "starting_application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    owns_database = False
    if not getattr(app.state, "services_ready", False):
        try:
            session = await init_async_cassandra()
            owns_database = True
            logger.info("cassandra_initialized")

            install_services(
                app,
                cassandra_repositories(session, settings.cassandra_keyspace),
                settings,
            )
        except Exception as e:
            logger.warning(
                "database_init_skipped",
                error=str(e),
                message="Running without database connection",
            )

    yield

    # Shutdown
    logger.info("shutting_down_application")
    if owns_database:
        await shutdown_async_cassandra()


def create_app(repositories: Repositories | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        repositories: Pre-built storage. When given, services are installed
            immediately and no database connection is made at startup.
    """
    settings = get_settings()

    # Always debug=False so stack traces never reach responses
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Learning Management System - API",
        debug=False,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )
    app.state.services_ready = False

    if repositories is not None:
        install_services(app, repositories, settings)

    # Request context middleware (must be added first - outermost)
    app.add_middleware(
        RequestContextMiddleware,
        log_requests=settings.log_requests,
        exclude_paths=settings.log_exclude_paths,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )

    def _get_request_id_safe(request: Request) -> str | None:
        """Get request_id from request state or context."""
        if hasattr(request.state, "request_id"):
            return request.state.request_id
        return get_request_id()

    # Global exception handlers (never expose stack traces)
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ORJSONResponse:
        """Handle HTTP exceptions with safe error messages."""
        request_id = _get_request_id_safe(request)

        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )

        return ORJSONResponse(
            status_code=exc.status_code,
            content={
                "error": True,
                "message": str(exc.detail)
                if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR
                else "Internal server error",
                "status_code": exc.status_code,
                "request_id": request_id,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """Handle validation errors; field messages are safe to expose."""
        request_id = _get_request_id_safe(request)

        logger.warning(
            "validation_error",
            errors=exc.errors(),
            path=request.url.path,
            method=request.method,
        )

        return ORJSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": True,
                "message": "Validation error",
                "status_code": 422,
                "request_id": request_id,
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in err.get("loc", [])),
                        "message": err.get("msg", "Invalid value"),
                    }
                    for err in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> ORJSONResponse:
        """Catch-all handler for unhandled exceptions.

        Details are logged internally; the response stays generic.
        """
        request_id = _get_request_id_safe(request)

        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
            method=request.method,
        )

        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "message": "An unexpected error occurred. Please try again later.",
                "status_code": 500,
                "request_id": request_id,
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(router_courses)
    app.include_router(course_enrollments_router)
    app.include_router(course_assignments_router)
    app.include_router(router_weeks)
    app.include_router(router_content)
    app.include_router(enrollments_router)
    app.include_router(progress_router)
    app.include_router(assignments_router)
    app.include_router(submissions_router)
    app.include_router(analytics_router)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": "LMS API",
            "version": settings.app_version,
            "docs": f"{request.url}docs",
        }

    return app


app = create_app()
