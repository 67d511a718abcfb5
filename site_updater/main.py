"""
Main FastAPI application for Site Updater
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from site_updater import __version__
from site_updater.config import settings, validate_required_config
from site_updater.logging_config import logger

# Import routers
from site_updater.routers import generate, ui


STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting Site Updater", environment=settings.ENVIRONMENT)

    # Missing GEMINI_API_KEY stops startup here
    validate_required_config()

    # Initialize Sentry if DSN provided
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.SENTRY_ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            integrations=[FastApiIntegration()],
        )
        logger.info("Sentry initialized")

    logger.info(
        "Site Updater started",
        gemini_model=settings.GEMINI_MODEL,
        rate_limit=settings.GENERATE_RATE_LIMIT if settings.RATE_LIMIT_ENABLED else "disabled"
    )

    yield

    logger.info("Shutting down Site Updater")


# Create FastAPI app
app = FastAPI(
    title="Site Updater",
    description="AI-assisted updates for data.json, functions.php and index.php",
    version=__version__,
    lifespan=lifespan
)

# Add rate limiter
app.state.limiter = generate.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

def configure_cors(target: FastAPI):
    """CORS middleware - Configure from environment"""
    allowed_origins = [
        origin.strip()
        for origin in settings.CORS_ORIGINS.split(",")
        if origin.strip()
    ]

    # In development, allow all origins for easier testing
    if settings.ENVIRONMENT == "development" or settings.DEBUG:
        target.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=False,  # Cannot use credentials with wildcard origins
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        target.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )


configure_cors(app)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.get("/health")
async def health_check():
    """Health check"""
    health = {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {}
    }

    health["checks"]["gemini_api"] = {
        "configured": bool(settings.GEMINI_API_KEY),
        "model": settings.GEMINI_MODEL,
        "status": "ok" if settings.GEMINI_API_KEY else "missing"
    }

    all_critical_ok = health["checks"]["gemini_api"]["status"] == "ok"
    health["status"] = "healthy" if all_critical_ok else "degraded"

    return health


@app.get("/readiness")
async def readiness_check():
    """Readiness probe"""
    health = await health_check()

    if health["status"] == "healthy":
        return {"status": "ready"}
    else:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": health["checks"]}
        )


# Include routers
app.include_router(ui.router, tags=["UI"])
app.include_router(generate.router, prefix="/api", tags=["Code Updates"])


# Error handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler with Sentry integration"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        path=request.url.path,
        exc_info=True
    )

    if settings.SENTRY_DSN:
        sentry_sdk.capture_exception(exc)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.ENVIRONMENT == "development" else None
        }
    )


def run():
    """Run the service with uvicorn"""
    import uvicorn
    # Only enable reload in development
    reload_enabled = settings.ENVIRONMENT == "development" or settings.DEBUG
    uvicorn.run(
        "site_updater.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=reload_enabled
    )


if __name__ == "__main__":
    run()
