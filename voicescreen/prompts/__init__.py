"""
AI prompt templates for VoiceScreen

Contains structured prompts for:
- Question generation
- Context summarization
- Answer weakness analysis
- Final verdict
"""

from voicescreen.prompts.interviewer import InterviewerPrompts
from voicescreen.prompts.evaluator import EvaluatorPrompts

__all__ = [
    "InterviewerPrompts",
    "EvaluatorPrompts",
]
