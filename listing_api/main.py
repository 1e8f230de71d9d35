"""
ASGI application: routers, middleware, exception handlers and health probes.
Run with `uvicorn listing_api.main:app` or `python -m listing_api.main`.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
from typing import Union
import logging

from listing_api.config import settings
from listing_api.database import check_database_connection, close_db_connection
from listing_api.routers import auth_router, listings_router
from listing_api.utils.exceptions import APIException
from listing_api.services.error_handler import ErrorHandlerService
from listing_api.middleware import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Probe the database on startup and dispose of the engine on shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await check_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Real-estate listing API for realtors and buyers.

    ## Features

    * **Listings**: Realtors create, update and delete the listings they own
    * **Search**: Filter listings by city, price range and property type
    * **Inquiries**: Buyers message the realtor who owns a listing
    * **Authentication**: Session tokens with ADMIN, REALTOR and BUYER roles

    ## Authentication

    Obtain a token from `/api/v1/auth/signup/{role}` or `/api/v1/auth/signin`,
    then include it in the Authorization header as `Bearer <token>`.
    ADMIN and REALTOR signups need a product key issued through `/api/v1/auth/key`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Authentication",
            "description": "Signup, signin and registration keys"
        },
        {
            "name": "Listings",
            "description": "Listing management, search and inquiries"
        },
        {
            "name": "Health",
            "description": "System health endpoints"
        }
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

app.add_middleware(RequestLoggingMiddleware, enable_request_logging=not settings.is_testing)

# Include API routers
app.include_router(auth_router, prefix=settings.api_v1_prefix)
app.include_router(listings_router, prefix=settings.api_v1_prefix)


async def _api_error(request: Request, exc: APIException):
    return ErrorHandlerService.handle_api_exception(exc, request)


async def _validation_error(request: Request, exc: Union[RequestValidationError, PydanticValidationError]):
    return ErrorHandlerService.handle_validation_error(exc.errors(), request)


async def _database_error(request: Request, exc: SQLAlchemyError):
    return ErrorHandlerService.handle_database_error(exc, request)


async def _http_error(request: Request, exc: StarletteHTTPException):
    return ErrorHandlerService.handle_http_exception(exc, request)


async def _unexpected_error(request: Request, exc: Exception):
    return ErrorHandlerService.handle_unexpected_error(exc, request)


# Handlers resolve along the exception MRO, so APIException wins over HTTPException
EXCEPTION_HANDLERS = (
    (APIException, _api_error),
    (RequestValidationError, _validation_error),
    (PydanticValidationError, _validation_error),
    (SQLAlchemyError, _database_error),
    (StarletteHTTPException, _http_error),
    (Exception, _unexpected_error),
)

for exc_class, handler in EXCEPTION_HANDLERS:
    app.add_exception_handler(exc_class, handler)


@app.get("/", tags=["Health"])
async def root():
    """Service name, version and where to find the docs."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "status": "healthy",
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_v1_prefix
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe; 503 when the database cannot be reached."""
    db_healthy = await check_database_connection()

    if not db_healthy:
        logger.error("Health check failed: database unreachable")
        raise HTTPException(
            status_code=503,
            detail="Database connection failed"
        )

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "listing_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
