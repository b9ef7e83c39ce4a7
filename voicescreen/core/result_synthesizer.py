"""
Result Synthesizer for VoiceScreen

Aggregates the full transcript into a pass/fail verdict with a confidence
score. Malformed model output fails closed.
"""

import logging

from voicescreen.core.exceptions import NoData
from voicescreen.core.reply_parser import parse_reply_or
from voicescreen.models.interview import HistoryItem
from voicescreen.models.result import InterviewVerdict
from voicescreen.prompts.evaluator import EvaluatorPrompts

logger = logging.getLogger(__name__)


class ResultSynthesizer:
    """Produces the final interview verdict."""

    TEMPERATURE = 0.5

    def __init__(self, ai_reasoning, prompts: EvaluatorPrompts | None = None):
        self.ai_reasoning = ai_reasoning
        self.prompts = prompts or EvaluatorPrompts()

    async def synthesize(self, history: list[HistoryItem]) -> InterviewVerdict:
        """
        Args:
            history: Full interview history in order

        Returns:
            Parsed verdict, or a Fail/0 verdict when the reply is malformed

        Raises:
            NoData: History is empty
            UpstreamFailure: The completion call failed
        """
        if not history:
            raise NoData("No interview data")

        messages = [{"role": "user", "content": self.prompts.verdict_prompt(history)}]
        reply = await self.ai_reasoning.complete(
            messages,
            temperature=self.TEMPERATURE,
            purpose="synthesize_result",
        )

        verdict = parse_reply_or(reply, InterviewVerdict, InterviewVerdict.fail_closed())
        logger.info(f"Verdict: {verdict.status.value} ({verdict.confidence}) over {len(history)} answers")
        return verdict
