"""
Answer Analyzer for VoiceScreen

Scores a submitted answer for a one-sentence weakness in the background.
The submission response never waits on this: jobs run as detached asyncio
tasks owned by `AnalysisQueue`, and results are delivered through a
completion callback.

Failures are logged and dropped. There are no retries.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from voicescreen.core.exceptions import UpstreamFailure
from voicescreen.prompts.evaluator import EvaluatorPrompts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisJob:
    """One answer awaiting weakness analysis."""

    session_id: str
    question: str
    answer: str


# Called with the job and the weakness sentence once analysis succeeds
CompletionCallback = Callable[[AnalysisJob, str], Awaitable[None]]


class AnswerAnalyzer:
    """Produces the weakness sentence for one answer."""

    TEMPERATURE = 0.6

    def __init__(self, ai_reasoning, prompts: EvaluatorPrompts | None = None):
        self.ai_reasoning = ai_reasoning
        self.prompts = prompts or EvaluatorPrompts()

    async def analyze(self, question: str, answer: str) -> str:
        """
        Raises:
            UpstreamFailure: The completion call failed
        """
        messages = [{"role": "user", "content": self.prompts.weakness_prompt(question, answer)}]
        reply = await self.ai_reasoning.complete(
            messages,
            temperature=self.TEMPERATURE,
            purpose="analyze_answer",
        )
        return (reply or "").strip()


class AnalysisQueue:
    """
    Runs analysis jobs detached from the request that submitted them.

    Tasks are referenced until done so they are not garbage collected
    mid-flight; `drain()` awaits whatever is still outstanding.
    """

    def __init__(self, analyzer: AnswerAnalyzer, on_complete: CompletionCallback | None = None):
        self.analyzer = analyzer
        self._on_complete = on_complete
        self._tasks: set[asyncio.Task] = set()

    def set_completion_callback(self, on_complete: CompletionCallback) -> None:
        self._on_complete = on_complete

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, job: AnalysisJob) -> asyncio.Task:
        """Schedule `job` on the running loop and return immediately."""
        task = asyncio.create_task(self._run(job), name=f"analyze-answer-{job.session_id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, job: AnalysisJob) -> None:
        try:
            weakness = await self.analyzer.analyze(job.question, job.answer)
        except UpstreamFailure as e:
            logger.error(f"Weakness analysis failed for session {job.session_id}: {e}")
            return

        if not weakness:
            logger.warning(f"Weakness analysis returned nothing for session {job.session_id}")
            return

        if self._on_complete is None:
            return

        try:
            await self._on_complete(job, weakness)
        except Exception as e:
            logger.error(f"Weakness callback failed for session {job.session_id}: {e}")

    async def drain(self) -> None:
        """Wait for all outstanding jobs to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
