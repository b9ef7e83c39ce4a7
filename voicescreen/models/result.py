"""
Result models for VoiceScreen

Structured model replies and the final interview verdict.
"""

import math
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class VerdictStatus(str, Enum):
    """Pass/fail outcome of the interview."""

    SUCCESS = "Success"
    FAIL = "Fail"


class QuestionReply(BaseModel):
    """Expected shape of the question generator's model reply."""

    question: str = Field(..., min_length=1)

    @field_validator("question")
    @classmethod
    def _strip_question(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("question must not be blank")
        return value


class InterviewVerdict(BaseModel):
    """Final verdict synthesized from the whole transcript."""

    status: VerdictStatus
    confidence: int = Field(..., ge=0, le=100)
    reason: str = ""

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value):
        # Models occasionally answer 87.5, 120 or "150"; keep the 0-100 integer contract
        if isinstance(value, bool):
            raise ValueError("confidence must be numeric")
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                raise ValueError("confidence must be numeric") from None
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError("confidence must be finite")
            return max(0, min(100, int(round(value))))
        return value

    @field_validator("reason", mode="before")
    @classmethod
    def _coerce_reason(cls, value):
        return "" if value is None else value

    @classmethod
    def fail_closed(cls) -> "InterviewVerdict":
        """Verdict used when the model reply cannot be trusted."""
        return cls(status=VerdictStatus.FAIL, confidence=0, reason="")
