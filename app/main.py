# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the theirBio API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main          (host/port from API_HOST / API_PORT)
# =============================================================================

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from app.config import settings
from app.exceptions import (
    TheirBioException,
    http_exception_handler,
    theirbio_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import client_errors, health, profile, seals, users
from app.auth import routes as auth_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup. There are no background
    tasks or connections to tear down.
    """
    logger.info(f"Starting theirBio API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Seal mode: {settings.SEAL_MODE.value}, storage: {settings.STORAGE_BACKEND}")
    if not settings.JWT_SECRET:
        logger.warning("JWT_SECRET is not set: signup, login and protected routes will fail")

    yield

    logger.info("Shutting down theirBio API")


# Create FastAPI application
app = FastAPI(
    title="theirBio API",
    description="""
## Public bio profiles with employer-sealed work experience

### How It Works

1. **Sign up** as a person, company or institution - you get a session token
2. **Edit your profile** - display name, bio, avatar and social links
3. **Seal** - a company vouches for a person's role and period
4. **Confirm** - the person accepts the seal and it shows on their profile

### Quick Start

```bash
# 1. Create a company account
curl -X POST http://localhost:8000/api/signup \\
  -H "Content-Type: application/json" \\
  -d '{"username": "acme", "password": "changeme123", "accountType": "company"}'

# 2. Seal a person's experience
curl -X POST http://localhost:8000/api/seals \\
  -H "Authorization: Bearer <token>" \\
  -H "Content-Type: application/json" \\
  -d '{"personHandle": "alice", "role": "Engineer", "period": "2023-2024"}'
```
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Signup, login and token checks",
        },
        {
            "name": "Users",
            "description": "Browse public profiles",
        },
        {
            "name": "Profile",
            "description": "Manage your own profile",
        },
        {
            "name": "Seals",
            "description": "Issue and confirm work experience seals",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - only explicitly allowed origins, with credentials
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
    return response


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(TheirBioException, theirbio_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Signup, login and token checks
app.include_router(
    auth_routes.router,
    prefix="/api",
    tags=["Auth"]
)

# Public profiles
app.include_router(
    users.router,
    prefix="/api/users",
    tags=["Users"]
)

# Own profile (bearer token)
app.include_router(
    profile.router,
    prefix="/api/profile",
    tags=["Profile"]
)

# Seals
app.include_router(
    seals.router,
    prefix="/api/seals",
    tags=["Seals"]
)

# Client error reports
app.include_router(
    client_errors.router,
    prefix="/api/client-errors",
    tags=["Health"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "success": True,
        "data": {
            "name": "theirBio API",
            "version": health.API_VERSION,
            "docs": "/docs",
            "health": "/api/health",
        },
    }


def run() -> None:
    """Serve the API with uvicorn, reloading on code changes in development."""
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
