"""
AI Evaluator Prompt Templates

Contains prompts for:
- One-sentence weakness analysis of a single answer
- The final pass/fail verdict over the whole transcript
"""

import json

from voicescreen.models.interview import HistoryItem


class EvaluatorPrompts:
    """Prompt templates for AI evaluation of answers and transcripts."""

    WEAKNESS_REQUEST = (
        "Question: {question}\nAnswer: {answer}\n\n"
        "In one sentence, what is the key weakness of this answer?"
    )

    VERDICT_REQUEST = """Based on these Q&A and weaknesses:
{data}

Return ONLY a JSON object with:
  status: "Success" or "Fail",
  confidence: integer 0–100,
  reason: string (only if status is "Fail").
Be as brief as possible."""

    def weakness_prompt(self, question: str, answer: str) -> str:
        return self.WEAKNESS_REQUEST.format(question=question, answer=answer)

    def verdict_prompt(self, history: list[HistoryItem]) -> str:
        data = {
            "q": [item.question for item in history],
            "a": [item.answer for item in history],
            "w": [item.weakness or "N/A" for item in history],
        }
        return self.VERDICT_REQUEST.format(data=json.dumps(data, ensure_ascii=False))
