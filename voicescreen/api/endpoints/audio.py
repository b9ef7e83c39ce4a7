"""
Audio API endpoints

Handles:
- Text-to-speech for the interviewer's voice
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from pydantic import BaseModel

from voicescreen.api.dependencies import get_audio_processor, get_orchestrator, peek_session_id
from voicescreen.core.audio_processor import AUDIO_MEDIA_TYPE, AudioProcessor
from voicescreen.core.exceptions import InvalidInput, TTSFailure
from voicescreen.core.interview_orchestrator import InterviewOrchestrator

router = APIRouter()


# ============================================================================
# REQUEST MODELS
# ============================================================================

class TTSRequest(BaseModel):
    """Request for text-to-speech."""
    text: str | None = None
    voice: str | None = None
    speed: Any = None
    instructions: str | None = None


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/tts")
async def text_to_speech(
    body: TTSRequest,
    request: Request,
    processor: AudioProcessor = Depends(get_audio_processor),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> Response:
    """
    Convert text to speech.

    Returns raw MP3 bytes. The voice style follows the caller's interviewer
    personality unless `instructions` overrides it.
    """
    session_id = peek_session_id(request)
    personality = await orchestrator.get_personality(session_id) if session_id else None

    try:
        audio = await processor.text_to_speech(
            text=body.text,
            voice=body.voice,
            speed=body.speed,
            instructions=body.instructions,
            personality=personality,
        )
    except InvalidInput:
        raise HTTPException(status_code=400, detail="text required")
    except TTSFailure:
        raise HTTPException(status_code=500, detail="TTS failed")

    return Response(
        content=audio,
        media_type=AUDIO_MEDIA_TYPE,
        headers={"Cache-Control": "no-store"},
    )
