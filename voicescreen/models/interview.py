"""
Interview session and state models for VoiceScreen
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


WEAKNESS_PENDING = "pending"
ANSWER_SOURCE_SPEECH = "speech_to_text"

PERSONALITIES: tuple[str, ...] = (
    "stern and no-nonsense",
    "friendly but probing",
    "dryly sarcastic",
    "warm and encouraging",
    "highly critical",
)


class InterviewState(str, Enum):
    """Interview lifecycle states (derived from session + clock, never stored)."""

    NOT_STARTED = "not_started"
    ACTIVE = "active"
    EXPIRED = "expired"


class Profile(BaseModel):
    """Candidate profile captured at start. Immutable afterwards."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Role or interview track")
    resume: str = Field(..., description="Free-text candidate background")


class HistoryItem(BaseModel):
    """A question-answer pair in the interview transcript."""

    model_config = ConfigDict(populate_by_name=True)

    question: str
    answer: str

    # Overwritten in place once background analysis completes
    weakness: str = WEAKNESS_PENDING

    # Timing (epoch milliseconds)
    asked_at: int | None = Field(default=None, alias="askedAt")
    answered_at: int = Field(..., alias="answeredAt")

    source: str = ANSWER_SOURCE_SPEECH


class InterviewSession(BaseModel):
    """Complete interview session state."""

    model_config = ConfigDict(populate_by_name=True)

    # Identification
    session_id: str = Field(..., alias="id")

    # Setup
    profile: Profile
    personality: str

    # Timing
    start_time: int = Field(..., description="Epoch milliseconds")
    duration_seconds: int = Field(..., gt=0)

    # Questions & Responses
    history: list[HistoryItem] = Field(default_factory=list)
    current_question: str | None = None
    current_question_started_at: int | None = None

    @property
    def end_time(self) -> int:
        """Epoch milliseconds at which the interview expires."""
        return self.start_time + self.duration_seconds * 1000

    @property
    def has_pending_question(self) -> bool:
        return self.current_question is not None

    def clear_pending_question(self) -> None:
        self.current_question = None
        self.current_question_started_at = None

    def find_history_item(self, question: str, answer: str) -> HistoryItem | None:
        """
        First history entry matching question and answer text.

        Duplicate question/answer pairs resolve to the earliest entry.
        """
        for item in self.history:
            if item.question == question and item.answer == answer:
                return item
        return None
