"""
Data models and schemas for VoiceScreen

Contains Pydantic models for:
- Interview sessions and transcript history
- Structured model replies
- Final verdicts
"""

from voicescreen.models.interview import (
    InterviewSession,
    InterviewState,
    HistoryItem,
    Profile,
    PERSONALITIES,
    WEAKNESS_PENDING,
)
from voicescreen.models.result import InterviewVerdict, QuestionReply, VerdictStatus

__all__ = [
    # Interview
    "InterviewSession",
    "InterviewState",
    "HistoryItem",
    "Profile",
    "PERSONALITIES",
    "WEAKNESS_PENDING",
    # Result
    "InterviewVerdict",
    "QuestionReply",
    "VerdictStatus",
]
