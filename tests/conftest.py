import random
import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from voicescreen.config.settings import Settings
from voicescreen.core.audio_processor import AudioProcessor
from voicescreen.core.clock import InterviewClock
from voicescreen.core.interview_orchestrator import InterviewOrchestrator
from voicescreen.core.session_store import InMemorySessionStore

START_MS = 1_700_000_000_000

LONG_RESUME = " ".join(
    [
        "Backend engineer with eight years building payment and ledger services in Go and Python.",
        "Led migration of a monolith to event-driven services on Kafka, cutting settlement latency by forty percent.",
        "Owns on-call for a team of six, designed idempotent retry semantics, and mentored three junior engineers.",
        "Comfortable with PostgreSQL tuning, Kubernetes deployments, observability with OpenTelemetry,",
        "and writing design documents for cross-team reviews across product, risk and finance stakeholders.",
    ]
)

DEFAULT_REPLIES = {
    "generate_question": '{"question": "Walk me through your most recent project."}',
    "summarize_history": "Strong on fundamentals. Weak on quantifying impact.",
    "analyze_answer": "The answer lacks concrete metrics.",
    "synthesize_result": '{"status": "Success", "confidence": 82}',
}


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: int = START_MS):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


class FakeAIReasoning:
    """Scripted completion collaborator that records every call."""

    def __init__(self, replies: dict | None = None):
        self.replies = dict(DEFAULT_REPLIES)
        self.replies.update(replies or {})
        self.calls: list[dict] = []

    async def complete(self, messages, temperature=0.7, purpose="completion"):
        self.calls.append({"messages": messages, "temperature": temperature, "purpose": purpose})
        reply = self.replies.get(purpose, "")
        if isinstance(reply, list):
            reply = reply.pop(0) if len(reply) > 1 else reply[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    def calls_for(self, purpose: str) -> list[dict]:
        return [call for call in self.calls if call["purpose"] == purpose]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="test-key",
        session_secret="test-secret",
        _env_file=None,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ai() -> FakeAIReasoning:
    return FakeAIReasoning()


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore(ttl_seconds=3600)


@pytest.fixture
def orchestrator(store, ai, clock) -> InterviewOrchestrator:
    return InterviewOrchestrator(
        store=store,
        ai_reasoning=ai,
        clock=InterviewClock(now_ms=clock),
        rng=random.Random(7),
    )


@pytest.fixture
def tts_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def audio_processor(settings, tts_requests) -> AudioProcessor:
    def handler(request: httpx.Request) -> httpx.Response:
        tts_requests.append(request)
        return httpx.Response(200, content=b"ID3-fake-mp3", headers={"Content-Type": "audio/mpeg"})

    return AudioProcessor(settings, transport=httpx.MockTransport(handler))
