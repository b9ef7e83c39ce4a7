"""
API Dependencies

Provides dependency injection for API endpoints.
Core components live on `app.state` and are built once per application by
`build_components`; client identity comes from the signed session cookie.
"""

import logging
from uuid import uuid4

from fastapi import FastAPI, Request

from voicescreen.config.settings import Settings
from voicescreen.core.ai_reasoning import AIReasoningLayer
from voicescreen.core.audio_processor import AudioProcessor
from voicescreen.core.interview_orchestrator import InterviewOrchestrator
from voicescreen.core.session_store import build_session_store

logger = logging.getLogger(__name__)

SESSION_ID_KEY = "sid"


# ============================================================================
# COMPONENTS
# ============================================================================

def build_components(settings: Settings) -> tuple[InterviewOrchestrator, AudioProcessor]:
    """Build the orchestrator and speech adapter from settings."""
    store = build_session_store(
        settings.session_backend,
        ttl_seconds=settings.session_max_age_seconds,
        redis_url=settings.redis_url,
    )
    ai_reasoning = AIReasoningLayer(settings)
    orchestrator = InterviewOrchestrator(
        store=store,
        ai_reasoning=ai_reasoning,
        recent_window=settings.recent_history_window,
    )
    audio_processor = AudioProcessor(settings)

    logger.info(f"Components ready | session_backend={settings.session_backend} | model={settings.openai_model}")
    return orchestrator, audio_processor


def get_orchestrator(request: Request) -> InterviewOrchestrator:
    """Get the application's interview orchestrator."""
    return request.app.state.orchestrator


def get_audio_processor(request: Request) -> AudioProcessor:
    """Get the application's audio processor."""
    return request.app.state.audio_processor


# ============================================================================
# CLIENT IDENTITY
# ============================================================================

def get_session_id(request: Request) -> str:
    """
    Opaque session id for this client.

    Issued on first contact and stored in the signed session cookie.
    """
    session_id = request.session.get(SESSION_ID_KEY)
    if not session_id:
        session_id = uuid4().hex
        request.session[SESSION_ID_KEY] = session_id
    return session_id


def peek_session_id(request: Request) -> str | None:
    """Session id if the client already has one; never issues a new one."""
    return request.session.get(SESSION_ID_KEY)


async def cleanup(app: FastAPI):
    """Cleanup resources on shutdown."""
    orchestrator: InterviewOrchestrator | None = getattr(app.state, "orchestrator", None)
    audio_processor: AudioProcessor | None = getattr(app.state, "audio_processor", None)

    if orchestrator:
        await orchestrator.close()
        if orchestrator.ai_reasoning and hasattr(orchestrator.ai_reasoning, "close"):
            await orchestrator.ai_reasoning.close()
        await orchestrator.store.close()

    if audio_processor and hasattr(audio_processor, "close"):
        await audio_processor.close()
