"""
Stockkeeper API - account registration and per-account inventory.

ARCHITECTURE:
- FastAPI handlers: parse body, call one store operation, map errors
- SQLAlchemy: pooled connections to PostgreSQL (SQLite for development)
- Stateless JWT bearer tokens, bcrypt password digests

Every inventory query is scoped to the token's account id in SQL.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockkeeper import __version__
from stockkeeper.api.routes import auth, inventory
from stockkeeper.core.config import settings
from stockkeeper.db.init_db import init_db
from stockkeeper.db.session import engine

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

ENDPOINTS = [
    ("POST", "/api/register", "Register new user"),
    ("POST", "/api/login", "User login"),
    ("GET", "/api/profile", "Get user profile"),
    ("GET", "/api/inventory", "Get all inventory items"),
    ("GET", "/api/inventory/low-stock", "Get items at or below minimum stock"),
    ("POST", "/api/inventory", "Create inventory item"),
    ("PUT", "/api/inventory/{id}", "Update inventory item"),
    ("DELETE", "/api/inventory/{id}", "Delete inventory item"),
    ("GET", "/api/health", "Health check"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: check the database and create tables.
    Shutdown: close pooled connections once in-flight requests are done.
    """
    logger.info("API endpoints:")
    for method, path, description in ENDPOINTS:
        logger.info(f"   {method:<7}{path:<28}- {description}")

    logger.info("Testing database connection...")
    if not init_db():
        logger.warning("Starting without a reachable database; requests will fail until it is available")

    yield

    logger.info("Shutting down gracefully...")
    engine.dispose()
    logger.info("Database connections closed")


app = FastAPI(
    title="Stockkeeper API",
    description="Per-account inventory with JWT authentication.",
    version=__version__,
    lifespan=lifespan,
)

# Restrict CORS to the fixed origin allow-list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unmatched paths and methods both surface as a plain 404
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED or (
        exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found"
    ):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Route not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request body on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Something went wrong!"},
    )


app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(inventory.router, prefix="/api/inventory", tags=["inventory"])


@app.get("/api/health")
def health():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": "API is running",
    }


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "stockkeeper.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        timeout_graceful_shutdown=settings.SHUTDOWN_TIMEOUT,
    )
