"""
FastAPI entrypoint for GlobeTrotter backend application.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from globetrotter.core.config import settings
from globetrotter.core.errors import ErrorCode, GlobeTrotterError
from globetrotter.core.utils import format_error
from globetrotter.api.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.ACCESS_DENIED: 403,
    ErrorCode.CONFLICT: 409,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.INVALID_REORDER: 400,
    ErrorCode.UNAVAILABLE: 503,
}

app = FastAPI(
    title="GlobeTrotter API",
    description="Backend API for multi-city trip planning",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GlobeTrotterError)
async def globetrotter_error_handler(request: Request, exc: GlobeTrotterError):
    """Translate domain errors into HTTP responses."""
    status_code = STATUS_BY_CODE.get(exc.code, 400)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=format_error(exc.message, exc.code.value)
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": f"{settings.APP_NAME} API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
