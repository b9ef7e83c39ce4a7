"""
Core business logic modules for VoiceScreen

Contains:
- Interview Orchestrator: State machine for the timed interview lifecycle
- Session Store: Per-client interview state with expiry
- AI Reasoning: Completion client shared by all AI components
- Question Generator / Context Summarizer: Next-question prompting
- Answer Analyzer: Background weakness analysis
- Result Synthesizer: Final verdict
- Audio Processing: TTS integration
"""

from voicescreen.core.interview_orchestrator import InterviewOrchestrator
from voicescreen.core.ai_reasoning import AIReasoningLayer
from voicescreen.core.audio_processor import AudioProcessor
from voicescreen.core.session_store import InMemorySessionStore, RedisSessionStore, SessionStore

__all__ = [
    "InterviewOrchestrator",
    "AIReasoningLayer",
    "AudioProcessor",
    "InMemorySessionStore",
    "RedisSessionStore",
    "SessionStore",
]
