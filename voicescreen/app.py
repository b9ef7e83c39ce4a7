"""
FastAPI application factory for VoiceScreen.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from voicescreen.api.dependencies import build_components, cleanup
from voicescreen.api.router import api_router
from voicescreen.config.settings import Settings, get_settings
from voicescreen.core.audio_processor import AudioProcessor
from voicescreen.core.interview_orchestrator import InterviewOrchestrator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Running in {'production' if settings.is_production else settings.environment} mode")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await cleanup(app)


def create_app(
    settings: Settings | None = None,
    orchestrator: InterviewOrchestrator | None = None,
    audio_processor: AudioProcessor | None = None,
) -> FastAPI:
    """
    Build the application.

    Components not given are constructed from settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Timed voice interview simulator",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if orchestrator is None or audio_processor is None:
        built_orchestrator, built_audio = build_components(settings)
        orchestrator = orchestrator or built_orchestrator
        audio_processor = audio_processor or built_audio
    app.state.orchestrator = orchestrator
    app.state.audio_processor = audio_processor

    # Signed cookie carrying only the opaque session id
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age_seconds,
        same_site="lax",
        https_only=settings.is_production,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected malformed request to {request.url.path}")
        return JSONResponse(status_code=400, content={"detail": "Invalid input"})

    # Mount API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app
