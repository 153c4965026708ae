"""
FastAPI application entry point.
Serves the page routes at the root and the JSON API under the versioned prefix.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
import logging

from tumharaghar.config import settings
from tumharaghar.database import test_database_connection, close_db_connection, create_tables
from tumharaghar.routers import (
    auth_router,
    properties_router,
    seller_router,
    pages_router,
    dashboard_router
)
from tumharaghar.utils.exceptions import APIException
from tumharaghar.services.error_handler import ErrorHandlerService

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await test_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")
    elif settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables created")

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Property marketplace for renting and buying homes.

    ## Features

    * **Browse**: Active listings newest first, filtered by rent or sale and searched by title or location
    * **Detail**: Listing with photos, seller contact and a WhatsApp enquiry link
    * **Accounts**: Buyer and seller sign-up and sign-in
    * **Seller listings**: Create, edit and delete your own listings

    ## Authentication

    Use `/api/v1/auth/sign-in` to obtain a JWT, then send it as `Authorization: Bearer <token>`.
    Browser pages use the session cookie set by the same call.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Authentication",
            "description": "Sign-in, sign-up and session"
        },
        {
            "name": "Properties",
            "description": "Public listing browsing and detail"
        },
        {
            "name": "Seller Listings",
            "description": "Listing management for sellers"
        },
        {
            "name": "Pages",
            "description": "Page view-models for the web client"
        },
        {
            "name": "Dashboards",
            "description": "Buyer and seller dashboards"
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
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# JSON API
app.include_router(auth_router, prefix=settings.api_v1_prefix)
app.include_router(properties_router, prefix=settings.api_v1_prefix)
app.include_router(seller_router, prefix=settings.api_v1_prefix)

# Pages
app.include_router(pages_router)
app.include_router(dashboard_router)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    """Handle Pydantic validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors as gateway errors."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle framework HTTP exceptions with structured error responses."""
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    Used by container health checks and load balancers.
    """
    db_healthy = await test_database_connection()

    if not db_healthy:
        logger.error("Health check failed: database unreachable")
        return JSONResponse(
            status_code=503,
            content=ErrorHandlerService.format_error_response(
                error_code="SERVICE_UNAVAILABLE",
                message="Database connection failed"
            )
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
        "tumharaghar.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
