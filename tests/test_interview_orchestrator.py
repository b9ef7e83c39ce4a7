import asyncio

import pytest

from conftest import START_MS, FakeAIReasoning
from voicescreen.core.exceptions import InvalidInput, InvalidState, NoData, NotStarted, UpstreamFailure
from voicescreen.core.interview_orchestrator import parse_duration_minutes
from voicescreen.models.interview import PERSONALITIES, WEAKNESS_PENDING, InterviewState


async def _start(orchestrator, session_id="s1", duration=10):
    return await orchestrator.start_interview(
        session_id, interview_type="Backend Engineer", resume="Python services.", duration=duration
    )


async def _answer_one(orchestrator, session_id="s1", answer="I built a ledger."):
    await orchestrator.next_question(session_id)
    return await orchestrator.submit_answer(session_id, answer)


@pytest.mark.parametrize("duration", [10, 0.5, "15", " 3 "])
def test_parse_duration_accepts_positive_numbers(duration) -> None:
    assert parse_duration_minutes(duration) > 0


@pytest.mark.parametrize("duration", [None, 0, -5, "abc", "", True, float("inf"), float("nan"), [10]])
def test_parse_duration_rejects_invalid_values(duration) -> None:
    with pytest.raises(InvalidInput):
        parse_duration_minutes(duration)


def test_start_initializes_active_session(orchestrator, store) -> None:
    async def scenario():
        session = await _start(orchestrator, duration="2")
        assert orchestrator.clock.state(await store.get("s1")) is InterviewState.ACTIVE
        return session, await store.get("s1")

    session, stored = asyncio.run(scenario())

    assert stored == session
    assert session.start_time == START_MS
    assert session.duration_seconds == 120
    assert session.personality in PERSONALITIES
    assert session.history == []
    assert session.current_question is None


@pytest.mark.parametrize(
    "fields",
    [
        {"interview_type": "", "resume": "x", "duration": 5},
        {"interview_type": "Engineer", "resume": "   ", "duration": 5},
        {"interview_type": None, "resume": "x", "duration": 5},
        {"interview_type": "Engineer", "resume": "x", "duration": 0},
    ],
)
def test_start_rejects_invalid_input(orchestrator, fields) -> None:
    with pytest.raises(InvalidInput):
        asyncio.run(orchestrator.start_interview("s1", **fields))


def test_operations_before_start(orchestrator) -> None:
    async def scenario():
        assert orchestrator.clock.state(await orchestrator.store.get("s1")) is InterviewState.NOT_STARTED
        with pytest.raises(NotStarted):
            await orchestrator.next_question("s1")
        with pytest.raises(NotStarted):
            await orchestrator.get_transcript("s1")
        with pytest.raises(InvalidState):
            await orchestrator.submit_answer("s1", "hello")
        with pytest.raises(NoData):
            await orchestrator.get_result("s1")

    asyncio.run(scenario())


def test_next_question_sets_pending_question(orchestrator, store, clock) -> None:
    async def scenario():
        await _start(orchestrator)
        clock.advance(3)
        result = await orchestrator.next_question("s1")
        return result, await store.get("s1")

    result, session = asyncio.run(scenario())

    assert result == {"question": "Walk me through your most recent project."}
    assert session.current_question == "Walk me through your most recent project."
    assert session.current_question_started_at == START_MS + 3000


def test_submit_clears_question_and_second_submit_is_invalid(orchestrator, store, clock) -> None:
    async def scenario():
        await _start(orchestrator)
        await orchestrator.next_question("s1")
        clock.advance(20)
        result = await orchestrator.submit_answer("s1", "  I built a ledger.  ")
        session = await store.get("s1")
        with pytest.raises(InvalidState):
            await orchestrator.submit_answer("s1", "Another answer")
        await orchestrator.close()
        return result, session

    result, session = asyncio.run(scenario())

    assert result == {"time_up": False}
    assert session.current_question is None
    assert session.current_question_started_at is None
    assert len(session.history) == 1
    item = session.history[0]
    assert item.answer == "I built a ledger."
    assert item.asked_at == START_MS
    assert item.answered_at == START_MS + 20000
    assert item.source == "speech_to_text"


def test_blank_answer_keeps_question_pending(orchestrator, store) -> None:
    async def scenario():
        await _start(orchestrator)
        await orchestrator.next_question("s1")
        with pytest.raises(InvalidInput):
            await orchestrator.submit_answer("s1", "   ")
        return await store.get("s1")

    session = asyncio.run(scenario())
    assert session.current_question is not None
    assert session.history == []


def test_history_grows_by_one_per_answer(orchestrator, store) -> None:
    async def scenario():
        await _start(orchestrator)
        lengths = []
        for index in range(4):
            await _answer_one(orchestrator, answer=f"Answer {index}")
            lengths.append(len((await store.get("s1")).history))
        await orchestrator.close()
        return lengths

    assert asyncio.run(scenario()) == [1, 2, 3, 4]


def test_background_analysis_fills_in_weakness(orchestrator, store) -> None:
    async def scenario():
        await _start(orchestrator)
        await _answer_one(orchestrator)
        assert (await store.get("s1")).history[0].weakness == WEAKNESS_PENDING
        await orchestrator.close()
        return await store.get("s1")

    session = asyncio.run(scenario())
    assert session.history[0].weakness == "The answer lacks concrete metrics."


def test_failed_analysis_leaves_placeholder(store, clock) -> None:
    from voicescreen.core.clock import InterviewClock
    from voicescreen.core.interview_orchestrator import InterviewOrchestrator

    ai = FakeAIReasoning({"analyze_answer": UpstreamFailure("down")})
    orchestrator = InterviewOrchestrator(store=store, ai_reasoning=ai, clock=InterviewClock(now_ms=clock))

    async def scenario():
        await _start(orchestrator)
        result = await _answer_one(orchestrator)
        await orchestrator.close()
        return result, await store.get("s1")

    result, session = asyncio.run(scenario())
    assert result == {"time_up": False}
    assert session.history[0].weakness == WEAKNESS_PENDING


def test_duplicate_answers_update_first_match(orchestrator, store) -> None:
    async def scenario():
        await _start(orchestrator)
        await _answer_one(orchestrator, answer="Same.")
        await orchestrator.close()
        first = await store.get("s1")
        first.history[0].weakness = "earlier"
        await store.set(first)

        await _answer_one(orchestrator, answer="Same.")
        await orchestrator.close()
        return await store.get("s1")

    session = asyncio.run(scenario())
    assert [item.weakness for item in session.history] == [
        "The answer lacks concrete metrics.",
        WEAKNESS_PENDING,
    ]


def test_expired_interview_ends_after_answers(orchestrator, clock) -> None:
    async def scenario():
        await _start(orchestrator, duration=1)
        await _answer_one(orchestrator)
        clock.advance(61)
        assert orchestrator.clock.state(await orchestrator.store.get("s1")) is InterviewState.EXPIRED
        result = await orchestrator.next_question("s1")
        await orchestrator.close()
        return result

    assert asyncio.run(scenario()) == {"end": True}


def test_pending_question_can_be_answered_after_expiry(orchestrator, store, clock) -> None:
    async def scenario():
        await _start(orchestrator, duration=1)
        await _answer_one(orchestrator)
        await orchestrator.next_question("s1")
        clock.advance(90)
        result = await orchestrator.submit_answer("s1", "Late answer")
        follow_up = await orchestrator.next_question("s1")
        await orchestrator.close()
        return result, follow_up, await store.get("s1")

    result, follow_up, session = asyncio.run(scenario())
    assert result == {"time_up": True}
    assert follow_up == {"end": True}
    assert len(session.history) == 2


def test_expired_interview_without_answers_still_asks(orchestrator, ai, clock) -> None:
    async def scenario():
        await _start(orchestrator, duration=1)
        clock.advance(120)
        return await orchestrator.next_question("s1")

    assert "question" in asyncio.run(scenario())
    prompt = ai.calls_for("generate_question")[0]["messages"][0]["content"]
    assert "Time remaining: 0 seconds." in prompt


def test_upstream_failure_leaves_no_pending_question(store, clock) -> None:
    from voicescreen.core.clock import InterviewClock
    from voicescreen.core.interview_orchestrator import InterviewOrchestrator

    ai = FakeAIReasoning({"generate_question": UpstreamFailure("down")})
    orchestrator = InterviewOrchestrator(store=store, ai_reasoning=ai, clock=InterviewClock(now_ms=clock))

    async def scenario():
        await _start(orchestrator)
        with pytest.raises(UpstreamFailure):
            await orchestrator.next_question("s1")
        return await store.get("s1")

    assert asyncio.run(scenario()).current_question is None


def test_restart_replaces_session(orchestrator, store) -> None:
    async def scenario():
        await _start(orchestrator)
        await _answer_one(orchestrator)
        await orchestrator.close()
        await orchestrator.start_interview("s1", interview_type="Data Analyst", resume="SQL.", duration=5)
        return await store.get("s1")

    session = asyncio.run(scenario())
    assert session.profile.type == "Data Analyst"
    assert session.history == []


def test_transcript_shape(orchestrator) -> None:
    async def scenario():
        await _start(orchestrator)
        await _answer_one(orchestrator)
        await orchestrator.close()
        return await orchestrator.get_transcript("s1")

    transcript = asyncio.run(scenario())
    assert transcript["profile"] == {"type": "Backend Engineer", "resume": "Python services."}
    assert transcript["startedAt"] == START_MS
    assert transcript["durationSeconds"] == 600
    assert transcript["personality"] in PERSONALITIES
    assert set(transcript["history"][0]) == {"question", "answer", "weakness", "askedAt", "answeredAt", "source"}


def test_result_includes_verdict_and_history(orchestrator) -> None:
    async def scenario():
        await _start(orchestrator)
        with pytest.raises(NoData):
            await orchestrator.get_result("s1")
        await _answer_one(orchestrator)
        await orchestrator.close()
        return await orchestrator.get_result("s1")

    result = asyncio.run(scenario())
    assert result["status"] == "Success"
    assert result["confidence"] == 82
    assert result["reason"] == ""
    assert result["history"][0]["weakness"] == "The answer lacks concrete metrics."


@pytest.mark.parametrize("duration, seconds", [(0.5, 30), ("1.5", 90), (0.001, 1)])
def test_fractional_minutes_are_not_truncated(orchestrator, duration, seconds) -> None:
    session = asyncio.run(_start(orchestrator, duration=duration))
    assert session.duration_seconds == seconds
