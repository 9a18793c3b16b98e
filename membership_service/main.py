"""
Membership Service - FastAPI Application
Member registration, login and the admin registrations listing
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from membership_service.config import get_settings
from membership_service.exceptions import MembershipError
from membership_service.routes import auth, health, logs, registrations
from membership_service.utils.database import MemberDatabase
from membership_service.utils.logger import LogBuffer, configure_logging
from membership_service.utils.security import PasswordHasher

settings = get_settings()

# Configure structured logging
log_buffer = LogBuffer(settings.log_buffer_size)
configure_logging(
    log_level=settings.log_level,
    log_format=settings.log_format,
    buffer=log_buffer,
    config_path=settings.logging_config_path,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    logger.info("Starting Membership Service", port=settings.port)

    db = MemberDatabase(settings)
    try:
        await db.initialize()
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise
    app.state.db = db
    logger.info("Database connection initialized")

    yield

    await db.close()
    logger.info("Membership Service shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Member registration, login and registrations listing",
    version=settings.version,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
app.state.log_buffer = log_buffer

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests except the log viewer's own polling"""
    if request.url.path != "/logs":
        logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


@app.exception_handler(MembershipError)
async def membership_error_handler(request: Request, exc: MembershipError):
    """Render service errors as {"error": ...}"""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Custom HTTP exception handler"""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        method=request.method,
        url=str(request.url),
        exc_info=True,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Register routes
app.include_router(health.router, tags=["Health"])
app.include_router(logs.router, tags=["Logs"])
app.include_router(registrations.router, prefix="/api", tags=["Registrations"])
app.include_router(auth.router, prefix="/api", tags=["Authentication"])


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "membership-service",
        "version": settings.version,
        "status": "running",
        "docs": "/docs",
    }


def run():
    """Run the service with uvicorn"""
    import uvicorn
    uvicorn.run(
        "membership_service.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
