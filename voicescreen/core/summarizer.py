"""
Context Summarizer for VoiceScreen

Condenses older question/answer/weakness history into a short synopsis so
the question prompt stays bounded regardless of interview length.
"""

import logging

from voicescreen.core.exceptions import UpstreamFailure
from voicescreen.models.interview import HistoryItem
from voicescreen.prompts.interviewer import InterviewerPrompts

logger = logging.getLogger(__name__)


class ContextSummarizer:
    """Two-sentence synopsis of earlier exchanges."""

    TEMPERATURE = 0.5

    def __init__(self, ai_reasoning, prompts: InterviewerPrompts | None = None):
        self.ai_reasoning = ai_reasoning
        self.prompts = prompts or InterviewerPrompts()

    async def summarize(self, items: list[HistoryItem]) -> str:
        """
        Summarize `items` in order.

        Returns an empty string for empty input without calling the model,
        and also when the model call fails.
        """
        if not items:
            return ""

        messages = [{"role": "user", "content": self.prompts.summary_prompt(items)}]
        try:
            reply = await self.ai_reasoning.complete(
                messages,
                temperature=self.TEMPERATURE,
                purpose="summarize_history",
            )
        except UpstreamFailure as e:
            logger.warning(f"History summary unavailable, continuing without it: {e}")
            return ""

        return (reply or "").strip()
