"""
Question Generator for VoiceScreen

Builds the directive prompt from profile, personality, time budget and recent
history, requests exactly one question and parses the strict reply.
"""

import logging

from voicescreen.core.reply_parser import parse_reply_or
from voicescreen.core.summarizer import ContextSummarizer
from voicescreen.models.interview import InterviewSession
from voicescreen.models.result import QuestionReply
from voicescreen.prompts.interviewer import InterviewerPrompts

logger = logging.getLogger(__name__)

DEFAULT_QUESTION = "Tell me about yourself."


class QuestionGenerator:
    """
    Generates the next interview question.

    History longer than the recent window is split: older items are folded
    into a summary message, the most recent ones are sent verbatim.
    """

    TEMPERATURE = 0.7

    def __init__(
        self,
        ai_reasoning,
        summarizer: ContextSummarizer | None = None,
        prompts: InterviewerPrompts | None = None,
        recent_window: int = 5,
    ):
        self.ai_reasoning = ai_reasoning
        self.prompts = prompts or InterviewerPrompts()
        self.summarizer = summarizer or ContextSummarizer(ai_reasoning, self.prompts)
        self.recent_window = recent_window

    async def build_messages(
        self,
        session: InterviewSession,
        seconds_left: int,
    ) -> list[dict[str, str]]:
        """Assemble the system/user message list for the next question."""
        profile = session.profile
        profile_sparse = self.prompts.is_profile_sparse(profile.type, profile.resume)

        messages = [
            {
                "role": "system",
                "content": self.prompts.question_system_prompt(
                    personality=session.personality,
                    interview_type=profile.type,
                    seconds_left=seconds_left,
                ),
            },
            {
                "role": "user",
                "content": self.prompts.profile_prompt(profile.resume, profile_sparse),
            },
        ]

        history = session.history
        if history:
            if len(history) > self.recent_window:
                summary = await self.summarizer.summarize(history[:-self.recent_window])
                messages.append({
                    "role": "user",
                    "content": self.prompts.summary_context_prompt(summary),
                })

            recent = history[-self.recent_window:]
            messages.append({
                "role": "user",
                "content": self.prompts.recent_exchanges_prompt(recent),
            })

        messages.append({"role": "user", "content": self.prompts.ASK_NOW})
        return messages

    async def generate(self, session: InterviewSession, seconds_left: int) -> str:
        """
        Request the next question.

        Returns the default question when the reply does not parse.

        Raises:
            UpstreamFailure: The completion call failed
        """
        messages = await self.build_messages(session, seconds_left)

        logger.info(
            f"Generating question #{len(session.history) + 1} | "
            f"session={session.session_id} | seconds_left={seconds_left}"
        )

        reply = await self.ai_reasoning.complete(
            messages,
            temperature=self.TEMPERATURE,
            purpose="generate_question",
        )

        parsed = parse_reply_or(reply, QuestionReply, QuestionReply(question=DEFAULT_QUESTION))
        return parsed.question
