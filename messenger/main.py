"""
FastAPI Application Entry Point.
Initializes the FastAPI app with logging, CORS, error handling and routes.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from messenger import __version__
from messenger.config import settings
from messenger.core.database import AsyncSessionLocal, engine
from messenger.core.exceptions import MessengerError, StoreError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Messenger server starting ({settings.environment})")
    yield
    await engine.dispose()
    logger.info("Messenger server stopped")


# Initialize FastAPI application
app = FastAPI(
    title="Messenger Server",
    description="Contacts, block lists, group chats and notifications",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)


@app.exception_handler(MessengerError)
async def messenger_error_handler(request: Request, exc: MessengerError):
    """Render domain errors as {"error": kind, "detail": message}."""
    if isinstance(exc, StoreError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.debug(f"{request.method} {request.url.path} rejected: {exc.kind.value}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health Check Endpoints
@app.get("/health", tags=["Health"])
async def health_check():
    """Basic health check endpoint."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "environment": settings.environment,
        }
    )


@app.get("/health/ready", tags=["Health"])
async def readiness_check():
    """
    Readiness check endpoint.
    Verifies database connectivity.
    """
    database_ok = False
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
            database_ok = True
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Readiness check: database unavailable: {e}")

    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "ready" if database_ok else "not ready",
            "checks": {"database": database_ok},
        }
    )


# Include API routers
from messenger.api.v1 import users, relationships, chats, messages, notifications

app.include_router(
    users.router,
    prefix="/api/v1/users",
    tags=["Users"]
)

app.include_router(
    relationships.router,
    prefix="/api/v1/relationships",
    tags=["Relationships"]
)

app.include_router(
    chats.router,
    prefix="/api/v1/chats",
    tags=["Chats"]
)

app.include_router(
    messages.router,
    prefix="/api/v1/messages",
    tags=["Messages"]
)

app.include_router(
    notifications.router,
    prefix="/api/v1/notifications",
    tags=["Notifications"]
)
