"""
Interview Orchestrator - State machine for managing interview lifecycle.

This is the central coordinator for the timed interview. It owns the
session lifecycle, computes time limits through the clock policy, and
coordinates question generation, background answer analysis and the
final verdict.
"""

import logging
import math
import random
from typing import Any

from voicescreen.core.answer_analyzer import AnalysisJob, AnalysisQueue, AnswerAnalyzer
from voicescreen.core.clock import InterviewClock
from voicescreen.core.exceptions import InvalidInput, InvalidState, NoData, NotStarted
from voicescreen.core.question_generator import QuestionGenerator
from voicescreen.core.result_synthesizer import ResultSynthesizer
from voicescreen.core.session_store import SessionStore
from voicescreen.models.interview import (
    ANSWER_SOURCE_SPEECH,
    PERSONALITIES,
    HistoryItem,
    InterviewSession,
    InterviewState,
    Profile,
)

logger = logging.getLogger(__name__)


def parse_duration_minutes(duration: Any) -> float:
    """
    Validate the requested interview length.

    Raises:
        InvalidInput: Not a finite positive number
    """
    if duration is None or isinstance(duration, bool):
        raise InvalidInput("Invalid input")
    try:
        minutes = float(str(duration).strip()) if isinstance(duration, str) else float(duration)
    except (TypeError, ValueError):
        raise InvalidInput("Invalid input")
    if not math.isfinite(minutes) or minutes <= 0:
        raise InvalidInput("Invalid input")
    return minutes


class InterviewOrchestrator:
    """
    Manages the interview lifecycle.

    States:
        NOT_STARTED → ACTIVE → EXPIRED

    Expiry is observed, never scheduled: every call recomputes the
    remaining time from the session's start timestamp. After expiry a
    pending question may still be answered, but no new question is asked
    once at least one answer exists.

    The orchestrator coordinates between:
    - Session store
    - Question generator (with history summarization)
    - Background answer analysis
    - Result synthesizer
    """

    def __init__(
        self,
        store: SessionStore,
        ai_reasoning: Any = None,  # AIReasoningLayer
        clock: InterviewClock | None = None,
        question_generator: QuestionGenerator | None = None,
        analysis_queue: AnalysisQueue | None = None,
        result_synthesizer: ResultSynthesizer | None = None,
        rng: random.Random | None = None,
        recent_window: int = 5,
    ):
        """
        Initialize the orchestrator with component dependencies.

        Components not given are built around `ai_reasoning`.
        """
        self.store = store
        self.ai_reasoning = ai_reasoning
        self.clock = clock or InterviewClock()
        self.question_generator = question_generator or QuestionGenerator(
            ai_reasoning, recent_window=recent_window
        )
        self.analysis_queue = analysis_queue or AnalysisQueue(AnswerAnalyzer(ai_reasoning))
        self.analysis_queue.set_completion_callback(self._apply_weakness)
        self.result_synthesizer = result_synthesizer or ResultSynthesizer(ai_reasoning)
        self._rng = rng or random.Random()

    # =========================================================================
    # SESSION ACCESS
    # =========================================================================

    async def _require_session(self, session_id: str) -> InterviewSession:
        session = await self.store.get(session_id)
        if session is None:
            raise NotStarted("Interview not started")
        return session

    async def get_personality(self, session_id: str) -> str | None:
        session = await self.store.get(session_id)
        return session.personality if session else None

    # =========================================================================
    # INTERVIEW FLOW
    # =========================================================================

    async def start_interview(
        self,
        session_id: str,
        interview_type: Any,
        resume: Any,
        duration: Any,
    ) -> InterviewSession:
        """
        Start (or restart) the interview for this client.

        Any previous session under the same id is replaced. Fractional
        minutes are kept (``int(minutes * 60)`` seconds, at least 1) rather
        than truncated to whole minutes.

        Raises:
            InvalidInput: Missing profile fields or invalid duration
        """
        if not session_id:
            raise InvalidInput("Invalid input")
        if not isinstance(interview_type, str) or not interview_type.strip():
            raise InvalidInput("Invalid input")
        if not isinstance(resume, str) or not resume.strip():
            raise InvalidInput("Invalid input")
        minutes = parse_duration_minutes(duration)

        session = InterviewSession(
            session_id=session_id,
            profile=Profile(type=interview_type.strip(), resume=resume.strip()),
            personality=self._rng.choice(PERSONALITIES),
            start_time=self.clock.now_ms(),
            duration_seconds=max(1, int(minutes * 60)),
        )
        await self.store.set(session)

        logger.info(
            f"Started interview session {session_id} | type={session.profile.type!r} | "
            f"duration={session.duration_seconds}s | personality={session.personality!r}"
        )
        return session

    async def next_question(self, session_id: str) -> dict[str, Any]:
        """
        Generate and deliver the next question.

        Returns:
            {"question": text} or {"end": True} once the interview is over

        Raises:
            NotStarted: No session for this client
            UpstreamFailure: Question generation failed
        """
        session = await self._require_session(session_id)

        if (
            self.clock.state(session) is InterviewState.EXPIRED
            and session.history
            and not session.has_pending_question
        ):
            logger.info(f"Session {session_id}: time is up after {len(session.history)} answers")
            return {"end": True}

        seconds_left = self.clock.seconds_left(session)
        question = await self.question_generator.generate(session, seconds_left)

        # Re-read: background analysis may have written while we awaited the model
        session = await self._require_session(session_id)
        session.current_question = question
        session.current_question_started_at = self.clock.now_ms()
        await self.store.set(session)

        return {"question": question}

    async def submit_answer(self, session_id: str, answer: Any) -> dict[str, Any]:
        """
        Record the answer to the pending question.

        Schedules weakness analysis in the background and returns without
        waiting for it. Allowed after expiry when a question is pending.

        Raises:
            InvalidState: No session or no pending question
            InvalidInput: Blank answer
        """
        session = await self.store.get(session_id)
        if session is None or not session.has_pending_question:
            raise InvalidState("Invalid state")

        if not isinstance(answer, str) or not answer.strip():
            raise InvalidInput("Answer required")

        item = HistoryItem(
            question=session.current_question,
            answer=answer.strip(),
            asked_at=session.current_question_started_at,
            answered_at=self.clock.now_ms(),
            source=ANSWER_SOURCE_SPEECH,
        )
        session.history.append(item)
        session.clear_pending_question()
        await self.store.set(session)

        self.analysis_queue.submit(
            AnalysisJob(session_id=session_id, question=item.question, answer=item.answer)
        )

        return {"time_up": self.clock.state(session) is InterviewState.EXPIRED}

    async def _apply_weakness(self, job: AnalysisJob, weakness: str) -> None:
        """Completion callback: attach the weakness to the matching answer."""
        session = await self.store.get(job.session_id)
        if session is None:
            logger.info(f"Session {job.session_id} gone before analysis finished")
            return

        item = session.find_history_item(job.question, job.answer)
        if item is None:
            logger.info(f"Session {job.session_id}: analyzed answer no longer in history")
            return

        item.weakness = weakness
        await self.store.set(session)

    # =========================================================================
    # TRANSCRIPT & RESULT
    # =========================================================================

    async def get_transcript(self, session_id: str) -> dict[str, Any]:
        """
        Raises:
            NotStarted: No session for this client
        """
        session = await self._require_session(session_id)
        await self.store.touch(session_id)
        return {
            "profile": session.profile.model_dump(),
            "personality": session.personality,
            "startedAt": session.start_time,
            "durationSeconds": session.duration_seconds,
            "history": [item.model_dump(by_alias=True) for item in session.history],
        }

    async def get_result(self, session_id: str) -> dict[str, Any]:
        """
        Raises:
            NoData: No session or no answers yet
            UpstreamFailure: Verdict generation failed
        """
        session = await self.store.get(session_id)
        if session is None or not session.history:
            raise NoData("No interview data")

        verdict = await self.result_synthesizer.synthesize(session.history)

        # Weaknesses may have landed while the verdict was computed
        latest = await self.store.get(session_id) or session
        return {
            "status": verdict.status.value,
            "confidence": verdict.confidence,
            "reason": verdict.reason,
            "history": [item.model_dump(by_alias=True) for item in latest.history],
        }

    async def close(self) -> None:
        """Wait for outstanding background analysis."""
        await self.analysis_queue.drain()
