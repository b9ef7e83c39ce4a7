"""
Main API router for VoiceScreen

Aggregates all API routes. Paths are flat (`/api/start`, `/api/tts`, ...)
to match the browser client.
"""

from fastapi import APIRouter

from voicescreen.api.endpoints import interview, audio

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    interview.router,
    tags=["Interview"]
)

api_router.include_router(
    audio.router,
    tags=["Audio"]
)
