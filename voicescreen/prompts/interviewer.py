"""
AI Interviewer Prompt Templates

Contains structured prompts for:
- Next-question generation under a time budget
- Summarizing older exchanges into a short synopsis

Designed to make the AI behave like a real human interviewer asking one
question at a time, not a chatbot.
"""

from voicescreen.models.interview import HistoryItem


def count_words(text: str | None) -> int:
    return len(str(text or "").split())


def format_exchanges(items: list[HistoryItem]) -> str:
    """Render history items as Q/A/Weakness blocks."""
    return "\n\n".join(
        f"Q: {item.question}\nA: {item.answer}\nWeakness: {item.weakness or 'Analyzing...'}"
        for item in items
    )


class InterviewerPrompts:
    """
    Prompt templates for the AI interviewer.

    Key principles:
    - Exactly one question per turn
    - Clarify before probing when the profile is thin
    - Spend the remaining time on the highest-impact gap
    """

    SPARSE_RESUME_WORDS = 60
    SPARSE_TYPE_WORDS = 2
    SHORT_TIME_SECONDS = 120

    QUESTION_SYSTEM = """You are a {personality} interviewer running a TIMED interview.
Interview type: {interview_type}
Time remaining: {seconds_left} seconds.

You must ask EXACTLY ONE question at a time.

Behavior rules:
- If the candidate profile/answers are missing critical details needed to interview well (target role/title, level/seniority, location, availability, goals, key experience), ask a concise clarifying question first.
- If time remaining is short (<= {short_time} seconds), ask ONLY the single highest-impact missing detail.
- If the last answer was vague or lacked specifics (see weaknesses), ask a focused follow-up for details.
- Otherwise, ask a professional, role-relevant interview question based on the candidate's resume and prior answers.
- Avoid multi-part questions unless absolutely necessary.

Output ONLY a JSON object with a single field: "question". No extra text."""

    SUMMARY_HEADER = "Brief summary of earlier exchanges:"
    RECENT_HEADER = "Last five Q&A and weaknesses:"
    ASK_NOW = "Ask the next question now."

    SUMMARY_REQUEST = (
        "Summarize the following earlier interview exchanges (questions, answers, weaknesses) "
        "in two brief sentences, focusing on overall strengths and weaknesses:\n\n{exchanges}"
    )

    def is_profile_sparse(self, interview_type: str, resume: str) -> bool:
        """Heuristic: too little candidate detail to ask a substantive question yet."""
        return (
            count_words(resume) < self.SPARSE_RESUME_WORDS
            or count_words(interview_type) < self.SPARSE_TYPE_WORDS
        )

    def question_system_prompt(
        self,
        personality: str,
        interview_type: str,
        seconds_left: int,
    ) -> str:
        return self.QUESTION_SYSTEM.format(
            personality=personality,
            interview_type=interview_type,
            seconds_left=seconds_left,
            short_time=self.SHORT_TIME_SECONDS,
        )

    def profile_prompt(self, resume: str, profile_sparse: bool) -> str:
        return (
            f"Candidate profile (resume / notes):\n{resume}\n\n"
            f"Hint: profile_sparse={'true' if profile_sparse else 'false'}"
        )

    def summary_context_prompt(self, summary: str) -> str:
        return f"{self.SUMMARY_HEADER}\n{summary}"

    def recent_exchanges_prompt(self, items: list[HistoryItem]) -> str:
        return f"{self.RECENT_HEADER}\n{format_exchanges(items)}"

    def summary_prompt(self, items: list[HistoryItem]) -> str:
        return self.SUMMARY_REQUEST.format(exchanges=format_exchanges(items))
