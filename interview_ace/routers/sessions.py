"""
Interview session endpoints driving the step-by-step wizard.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from interview_ace.dependencies import get_session_service
from interview_ace.models.schemas import InterviewSummaryResponse, SessionResponse
from interview_ace.services.session_service import InterviewSessionService, build_session_response
from interview_ace.services.video_analysis_service import load_facial_data
from interview_ace.utils.endpoint_helpers import handle_service_errors


router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=201)
@handle_service_errors("create session")
async def create_session(session_service: InterviewSessionService = Depends(get_session_service)):
    session = session_service.create_session()
    return build_session_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
@handle_service_errors("get session")
async def get_session(session_id: str, session_service: InterviewSessionService = Depends(get_session_service)):
    return build_session_response(session_service.get_session(session_id))


@router.post("/{session_id}/resume", response_model=SessionResponse)
@handle_service_errors("upload resume")
async def upload_resume(
    session_id: str,
    file: UploadFile = File(..., description="Resume as PDF or plain text"),
    session_service: InterviewSessionService = Depends(get_session_service)
):
    data = await file.read()
    session = await session_service.upload_resume(session_id, data, file.content_type or "")
    return build_session_response(session)


@router.post("/{session_id}/questions", response_model=SessionResponse)
@handle_service_errors("generate session questions")
async def generate_questions(session_id: str, session_service: InterviewSessionService = Depends(get_session_service)):
    session = await session_service.generate_questions(session_id)
    return build_session_response(session)


@router.post("/{session_id}/start", response_model=SessionResponse)
@handle_service_errors("start interview")
async def start_interview(session_id: str, session_service: InterviewSessionService = Depends(get_session_service)):
    return build_session_response(session_service.start_interview(session_id))


@router.post("/{session_id}/answers", response_model=SessionResponse)
@handle_service_errors("submit answer")
async def submit_answer(
    session_id: str,
    media: UploadFile = File(..., description="Recorded answer (audio or video)"),
    facial_data: Optional[str] = Form(None, description="JSON array of facial expression samples"),
    session_service: InterviewSessionService = Depends(get_session_service)
):
    samples = load_facial_data(facial_data) if facial_data else None
    data = await media.read()
    session = await session_service.submit_answer(session_id, data, media.content_type or "", samples)
    return build_session_response(session)


@router.post("/{session_id}/next", response_model=SessionResponse)
@handle_service_errors("next question")
async def next_question(session_id: str, session_service: InterviewSessionService = Depends(get_session_service)):
    return build_session_response(session_service.next_question(session_id))


@router.post("/{session_id}/restart", response_model=SessionResponse)
@handle_service_errors("restart interview")
async def restart_interview(session_id: str, session_service: InterviewSessionService = Depends(get_session_service)):
    return build_session_response(session_service.restart(session_id))


@router.get("/{session_id}/summary", response_model=InterviewSummaryResponse)
@handle_service_errors("interview summary")
async def get_summary(session_id: str, session_service: InterviewSessionService = Depends(get_session_service)):
    return session_service.get_summary(session_id)
