"""
Main Application Module

This module serves as the primary FastAPI application entry point,
configuring routes, middleware, sessions and static file serving.

Features:
- Route management
- Session cookies
- CORS configuration
- Uploaded file serving
- Error handling
- Request logging

Data Model:
- API routes
- Uploaded files under /uploads
- Session cookie

Security:
- Signed session cookie
- CORS policies with credentials
- Authorization gate on mutations
- Uniform error bodies

Dependencies:
- FastAPI for routing
- Starlette sessions
- CORS middleware
- Static files
- Logging
- Database

Author: Care Admin Development Team
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
import logging

from .shared import config
from .shared.database import close_db, init_db
from .shared.exceptions import register_exception_handlers

from .features.auth import router as auth_router
from .features.center import routers as center_routers
from .features.insurance import router as insurance_router
from .features.uploads import get_upload_acceptor, router as uploads_router
from .features.uploads.policies import ALL_POLICIES

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.

    Notes:
        - Creates the upload directories
        - Pings MongoDB (aborts startup when unreachable)
        - Closes the client on shutdown
    """
    get_upload_acceptor().storage.prepare(policy.category for policy in ALL_POLICIES)

    logger.info("Starting database initialization...")
    if not await init_db():
        raise RuntimeError("Failed to initialize database")
    logger.info("Database initialization complete")

    yield

    close_db()
    logger.info("Database connections closed")


app = FastAPI(title="Care Admin API", lifespan=lifespan)

# Session cookie read by the authorization gate
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET,
    session_cookie=config.SESSION_COOKIE,
    max_age=config.SESSION_MAX_AGE,
    same_site="lax",
    https_only=False,
)

# CORS middleware setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include the API routers
logger.info("Mounting API routers...")
app.include_router(auth_router)
app.include_router(uploads_router)
app.include_router(insurance_router)
for router in center_routers:
    app.include_router(router)

logger.info(f"Serving uploads from {config.UPLOADS_ROOT}")
app.mount(
    f"/{config.UPLOADS_DIR_NAME}",
    StaticFiles(directory=str(config.UPLOADS_ROOT), check_dir=False),
    name="uploads",
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """
    Log HTTP requests and responses.

    Args:
        request: HTTP request
        call_next: Next handler

    Returns:
        Response: HTTP response
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")
    try:
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code}")
        return response
    except Exception as e:
        logger.exception(f"Request failed: {e}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
