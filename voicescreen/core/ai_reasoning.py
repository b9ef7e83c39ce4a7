"""
AI Reasoning Layer for VoiceScreen

Thin async client for the text-completion collaborator. Every AI-powered
component (question generation, summarization, answer analysis, verdicts)
goes through `AIReasoningLayer.complete`.

Speaks the OpenAI-compatible chat completions API over httpx.
"""

import logging
from typing import Any

import httpx

from voicescreen.config.settings import Settings, get_settings
from voicescreen.core.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)

Message = dict[str, str]


class AIReasoningLayer:
    """
    Central completion client.

    One request per call: no retries, no streaming. Failures of any kind
    surface as UpstreamFailure; callers decide on fallbacks.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client from settings."""
        self.settings = settings or get_settings()
        self.model = self.settings.openai_model
        self.headers = {
            "Authorization": f"Bearer {self.settings.openai_api_key}",
            "Content-Type": "application/json",
        }

        # HTTP client for API calls
        self.client = httpx.AsyncClient(
            base_url=self.settings.openai_base_url.rstrip("/"),
            headers=self.headers,
            timeout=self.settings.request_timeout_seconds,
            transport=transport,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    def _extract_content(self, result: dict) -> str:
        """
        Extract text content from API response, handling list/dict formats.

        Raises:
            ValueError: The body is not shaped like a chat completion
        """
        choices = result.get("choices")
        if not isinstance(choices, list) or not choices:
            raise ValueError("missing choices")
        choice = choices[0]
        if not isinstance(choice, dict) or not isinstance(choice.get("message"), dict):
            raise ValueError("choice has no message")
        content = choice["message"].get("content", "")

        # Handle case where content is a list (multi-part response)
        if isinstance(content, list):
            text_parts = []
            for part in content:
                if isinstance(part, str):
                    text_parts.append(part)
                elif isinstance(part, dict) and "text" in part:
                    text_parts.append(part["text"])
            content = "".join(text_parts)

        if content is None:
            return ""
        return content if isinstance(content, str) else str(content)

    async def complete(
        self,
        messages: list[Message],
        temperature: float = 0.7,
        purpose: str = "completion",
    ) -> str:
        """
        Request one chat completion.

        Args:
            messages: Ordered role/content messages
            temperature: Sampling temperature
            purpose: Short label used in logs

        Returns:
            Stripped reply text

        Raises:
            UpstreamFailure: On transport errors, non-2xx replies or bodies
                that are not a JSON chat completion
        """
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }

        try:
            response = await self.client.post("/chat/completions", json=payload)
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Completion API error ({purpose}): {e}")
            raise UpstreamFailure(f"{purpose} request failed") from e
        except ValueError as e:
            logger.error(f"Completion API returned a non-JSON body ({purpose}): {e}")
            raise UpstreamFailure(f"{purpose} returned an unreadable body") from e

        if not isinstance(result, dict):
            raise UpstreamFailure(f"{purpose} returned an unexpected body")

        try:
            content = self._extract_content(result)
        except ValueError as e:
            logger.error(f"Completion API returned an unexpected body ({purpose}): {e}")
            raise UpstreamFailure(f"{purpose} returned an unexpected body") from e

        return content.strip()
