"""
API endpoint modules for VoiceScreen
"""

from voicescreen.api.endpoints import interview, audio

__all__ = ["interview", "audio"]
