"""FastAPI Application Entry Point"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from feebook.config import settings
from feebook.database import AsyncSessionLocal, init_db, close_db
from feebook.core.exceptions import ConflictError, FeebookError, NotFoundError, ValidationError
from feebook.core.logging import setup_logging, get_logger
from feebook.core.middleware import RequestIDMiddleware, RequestTimingMiddleware
from feebook.schemas.responses import ErrorResponse
from feebook.services.migration_service import run_migrations
from feebook.services.record_store import SqlRecordStore
from feebook.api.v1.router import api_router

# Setup logging
setup_logging()
logger = get_logger(__name__)


# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    enabled=settings.RATE_LIMIT_ENABLED,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting application", extra={"environment": settings.ENVIRONMENT})

    # Create tables in development and for the local SQLite file; use Alembic otherwise
    if settings.is_development or settings.is_sqlite:
        await init_db()
        logger.info("Database initialized")

    async with AsyncSessionLocal() as session:
        store = SqlRecordStore(session, lock_for_update=True)
        try:
            await store.ensure_collections()
            await run_migrations(store)
            await session.commit()
        except ConflictError:
            # Another worker seeded or migrated first
            await session.rollback()
            logger.info("Record store prepared by another process")

    yield

    # Shutdown
    logger.info("Shutting down application")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Fee, payment and school transport bookkeeping",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=settings.ALLOWED_METHODS,
    allow_headers=[settings.ALLOWED_HEADERS],
    expose_headers=["X-Request-ID", "X-Process-Time"],
)

# Custom middleware
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestTimingMiddleware)
app.add_middleware(RequestIDMiddleware)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


# Health check endpoints
@app.get("/health", tags=["Health"])
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "academic_year": settings.ACADEMIC_YEAR,
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health"
    }


# Exception handlers
def _error_response(status_code: int, exc: FeebookError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse.from_error(exc).model_dump())


@app.exception_handler(ValidationError)
async def ledger_validation_handler(request: Request, exc: ValidationError):
    """Rejected input; nothing was written"""
    logger.info(
        "Request rejected",
        extra={
            "path": request.url.path,
            "reason": exc.message,
            "correlation_id": getattr(request.state, "request_id", None),
        }
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    logger.warning(
        "Write conflict",
        extra={
            "path": request.url.path,
            "collection": exc.collection,
            "correlation_id": getattr(request.state, "request_id", None),
        }
    )
    return _error_response(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors"""
    logger.warning(
        "Validation error",
        extra={
            "path": request.url.path,
            "errors": jsonable_encoder(exc.errors()),
            "correlation_id": getattr(request.state, "request_id", None),
        }
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({
            "detail": exc.errors(),
            "body": exc.body
        }),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "correlation_id": getattr(request.state, "request_id", None),
        },
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error"
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "feebook.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
