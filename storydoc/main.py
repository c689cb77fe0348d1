"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .routers import conversions_router
from .services.mark_tree_converter import MalformedInputError

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


# Create FastAPI application
app = FastAPI(
    title="Storydoc API",
    description="Converts story documents between editor and storage formats",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS Middleware - the editor bridge runs inside a WebView
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MalformedInputError)
async def malformed_input_handler(request: Request, exc: MalformedInputError):
    """Report unparseable documents as 400 Bad Request."""
    logger.warning(f"Malformed document on {request.method} {request.url}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


# Conversion bugs surface as 500 with the traceback logged once
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log an unhandled exception and hide its details from the client."""
    logger.error(
        "Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Include API routers
app.include_router(conversions_router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "split_formatting_runs": settings.split_formatting_runs,
        "default_starting_key_id": settings.default_starting_key_id,
    }
