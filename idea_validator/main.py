import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from idea_validator import __version__
from idea_validator.config import get_settings, configure_logging
from idea_validator.middleware import setup_middleware
from idea_validator.analysis.router import router as analysis_router
from idea_validator.analysis.service import AnalysisPipeline, get_pipeline

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

_started_at = time.monotonic()

ENDPOINTS = ["GET /", "POST /analyze", "GET /health"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    pipeline = get_pipeline()
    if pipeline.provider is None:
        logger.warning(
            f"Missing env vars: {settings.missing_provider_keys}. "
            "Analysis is unavailable until one of them is set."
        )
    logger.info(f"Startup Idea Validator API ready. AI provider: {pipeline.provider_name or 'None configured'}")

    yield

    await pipeline.aclose()
    get_pipeline.cache_clear()


app = FastAPI(
    title="Startup Idea Validator API",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url=None,
    lifespan=lifespan,
)

setup_middleware(app, settings.frontend_url, settings.allowed_hosts)

app.include_router(analysis_router)


@app.get("/")
async def root(pipeline: AnalysisPipeline = Depends(get_pipeline)):
    return {
        "message": "Startup Idea Validator API",
        "version": __version__,
        "endpoints": {"analyze": "POST /analyze"},
        "provider": pipeline.provider_name,
    }


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Known path with the wrong method answers like an unknown route
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={"error": "Endpoint not found", "availableEndpoints": ENDPOINTS},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Something went wrong!", "message": str(exc)},
    )
