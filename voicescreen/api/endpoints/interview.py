"""
Interview API endpoints

Handles the interview session lifecycle:
- Starting interviews
- Delivering questions
- Submitting answers
- Transcript and final result
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from voicescreen.api.dependencies import get_orchestrator, get_session_id
from voicescreen.core.exceptions import (
    InvalidInput,
    InvalidState,
    NoData,
    NotStarted,
    UpstreamFailure,
)
from voicescreen.core.interview_orchestrator import InterviewOrchestrator

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class StartRequest(BaseModel):
    """Request model for starting an interview."""
    type: str | None = None
    resume: str | None = None
    duration: Any = None  # minutes; number or numeric string


class StartResponse(BaseModel):
    success: bool = True


class SubmitAnswerRequest(BaseModel):
    """Request model for submitting a transcribed answer."""
    answer: str | None = None


class SubmitAnswerResponse(BaseModel):
    time_up: bool


# ============================================================================
# REST ENDPOINTS
# ============================================================================

@router.post("/start", response_model=StartResponse)
async def start_interview(
    request: StartRequest,
    session_id: str = Depends(get_session_id),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> StartResponse:
    """
    Start a timed interview for this client.

    Replaces any interview already running under the same session cookie.
    """
    try:
        await orchestrator.start_interview(
            session_id,
            interview_type=request.type,
            resume=request.resume,
            duration=request.duration,
        )
    except InvalidInput:
        raise HTTPException(status_code=400, detail="Invalid input")

    return StartResponse(success=True)


@router.get("/next-question")
async def next_question(
    session_id: str = Depends(get_session_id),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """
    Get the next question, or `{"end": true}` once time is up.
    """
    try:
        return await orchestrator.next_question(session_id)
    except NotStarted:
        raise HTTPException(status_code=400, detail="Interview not started")
    except UpstreamFailure:
        raise HTTPException(status_code=500, detail="Failed to generate question")


@router.post("/submit-answer", response_model=SubmitAnswerResponse)
async def submit_answer(
    request: SubmitAnswerRequest,
    session_id: str = Depends(get_session_id),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> SubmitAnswerResponse:
    """
    Submit the transcribed answer to the pending question.

    Weakness analysis runs in the background; the response does not wait.
    """
    try:
        result = await orchestrator.submit_answer(session_id, request.answer)
    except InvalidState:
        raise HTTPException(status_code=400, detail="Invalid state")
    except InvalidInput:
        raise HTTPException(status_code=400, detail="Answer required")

    return SubmitAnswerResponse(time_up=result["time_up"])


@router.get("/transcript")
async def get_transcript(
    session_id: str = Depends(get_session_id),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Get the interview transcript so far."""
    try:
        return await orchestrator.get_transcript(session_id)
    except NotStarted:
        raise HTTPException(status_code=400, detail="Interview not started")


@router.get("/result")
async def get_result(
    session_id: str = Depends(get_session_id),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Get the pass/fail verdict with the full history."""
    try:
        return await orchestrator.get_result(session_id)
    except NoData:
        raise HTTPException(status_code=400, detail="No interview data")
    except UpstreamFailure:
        raise HTTPException(status_code=500, detail="Failed to compute result")
