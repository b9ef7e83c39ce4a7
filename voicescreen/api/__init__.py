"""
API layer for VoiceScreen

Contains FastAPI routers for:
- Interview lifecycle (start, questions, answers, transcript, result)
- Audio (text-to-speech)
"""

from voicescreen.api.router import api_router

__all__ = ["api_router"]
