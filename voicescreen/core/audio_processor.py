"""
Audio Processing Layer for VoiceScreen

Handles Text-to-Speech (TTS) for the interviewer's voice through the
OpenAI-compatible `/audio/speech` endpoint.

Speech-to-text happens in the browser; the server only ever receives
transcribed answers.
"""

import logging
import math
from typing import Any

import httpx

from voicescreen.config.settings import Settings, get_settings
from voicescreen.core.exceptions import InvalidInput, TTSFailure

logger = logging.getLogger(__name__)

DEFAULT_PERSONALITY = "professional"
AUDIO_MEDIA_TYPE = "audio/mpeg"


class AudioProcessor:
    """
    Speech synthesis adapter.

    Text is truncated to the provider's input limit; speed is passed through
    as given and left for the provider to range-check. Nothing is cached.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize audio processor."""
        self.settings = settings or get_settings()

        # HTTP client for the speech API
        self.client = httpx.AsyncClient(
            base_url=self.settings.openai_base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {self.settings.openai_api_key}"},
            timeout=self.settings.request_timeout_seconds,
            transport=transport,
        )

    async def close(self):
        """Clean up resources."""
        await self.client.aclose()

    # =========================================================================
    # REQUEST NORMALIZATION
    # =========================================================================

    def prepare_text(self, text: Any) -> str:
        """
        Raises:
            InvalidInput: Text is missing or blank
        """
        cleaned = str(text if text is not None else "").strip()
        if not cleaned:
            raise InvalidInput("text required")
        return cleaned[:self.settings.tts_max_chars]

    def resolve_voice(self, voice: Any) -> str:
        cleaned = str(voice or "").strip()
        return cleaned or self.settings.openai_tts_voice

    def resolve_speed(self, speed: Any) -> float:
        """Numeric finite speeds pass through; anything else uses the default."""
        if isinstance(speed, bool) or speed is None:
            return self.settings.openai_tts_speed
        try:
            value = float(speed)
        except (TypeError, ValueError):
            return self.settings.openai_tts_speed
        return value if math.isfinite(value) else self.settings.openai_tts_speed

    def resolve_instructions(self, instructions: Any, personality: str | None) -> str:
        cleaned = str(instructions or "").strip()
        if cleaned:
            return cleaned
        return (
            f"Speak like a {personality or DEFAULT_PERSONALITY} interviewer. "
            "Natural pacing, slight pauses, not robotic."
        )

    # =========================================================================
    # TEXT-TO-SPEECH
    # =========================================================================

    async def text_to_speech(
        self,
        text: Any,
        voice: Any = None,
        speed: Any = None,
        instructions: Any = None,
        personality: str | None = None,
    ) -> bytes:
        """
        Convert text to speech.

        Args:
            text: Text to synthesize (required)
            voice: Voice id (optional, uses default)
            speed: Playback speed (optional, uses default)
            instructions: Style override (optional, derived from personality)
            personality: Interviewer personality of the caller's session

        Returns:
            MP3 audio bytes

        Raises:
            InvalidInput: Text is missing or blank
            TTSFailure: The speech collaborator failed
        """
        payload = {
            "model": self.settings.openai_tts_model,
            "voice": self.resolve_voice(voice),
            "input": self.prepare_text(text),
            "instructions": self.resolve_instructions(instructions, personality),
            "speed": self.resolve_speed(speed),
            "response_format": "mp3",
        }

        try:
            async with self.client.stream("POST", "/audio/speech", json=payload) as response:
                response.raise_for_status()
                audio_chunks = []
                async for chunk in response.aiter_bytes():
                    audio_chunks.append(chunk)
        except httpx.HTTPError as e:
            logger.error(f"TTS error: {e}")
            raise TTSFailure("TTS failed") from e

        audio_data = b"".join(audio_chunks)
        if not audio_data:
            logger.error("TTS returned an empty body")
            raise TTSFailure("TTS returned no audio")

        logger.debug(f"Synthesized {len(audio_data)} bytes for {len(payload['input'])} chars")
        return audio_data
