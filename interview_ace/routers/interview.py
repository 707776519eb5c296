"""
Stateless interview flow endpoints.

Each endpoint runs one step of the interview in isolation; the browser holds
the state between calls.
"""
from fastapi import APIRouter, Depends

from interview_ace.dependencies import (
    get_resume_service, get_question_service, get_speech_service,
    get_evaluation_service, get_video_analysis_service
)
from interview_ace.models.schemas import (
    ParseResumeRequest, ParseResumeResponse,
    GenerateInterviewQuestionsRequest, GenerateInterviewQuestionsOutput,
    TranscribeAnswerRequest, TranscribeAnswerOutput,
    EvaluateAnswerRequest, EvaluateAnswerOutput,
    AnalyzeVideoPerformanceRequest, AnalyzeVideoPerformanceOutput
)
from interview_ace.services.resume_service import ResumeService, build_resume_summary
from interview_ace.services.question_service import QuestionService
from interview_ace.services.speech_service import SpeechToTextService
from interview_ace.services.evaluation_service import EvaluationService
from interview_ace.services.video_analysis_service import VideoAnalysisService
from interview_ace.utils.endpoint_helpers import handle_service_errors


router = APIRouter(prefix="/api/v1", tags=["interview"])


@router.post("/resume/parse", response_model=ParseResumeResponse)
@handle_service_errors("parse resume")
async def parse_resume(
    request: ParseResumeRequest,
    resume_service: ResumeService = Depends(get_resume_service)
):
    """Extract work experience, skills and projects from a resume data URI."""
    parsed = await resume_service.parse_resume_data_uri(request.resumeDataUri)
    return ParseResumeResponse(**parsed.model_dump(), summary=build_resume_summary(parsed))


@router.post("/questions/generate", response_model=GenerateInterviewQuestionsOutput)
@handle_service_errors("generate questions")
async def generate_questions(
    request: GenerateInterviewQuestionsRequest,
    question_service: QuestionService = Depends(get_question_service)
):
    return await question_service.generate_questions(request.resumeData)


@router.post("/transcribe", response_model=TranscribeAnswerOutput)
@handle_service_errors("transcribe answer")
async def transcribe_answer(
    request: TranscribeAnswerRequest,
    speech_service: SpeechToTextService = Depends(get_speech_service)
):
    return await speech_service.transcribe_data_uri(request.audioDataUri, request.language)


@router.post("/evaluate-answer", response_model=EvaluateAnswerOutput)
@handle_service_errors("evaluate answer")
async def evaluate_answer(
    request: EvaluateAnswerRequest,
    evaluation_service: EvaluationService = Depends(get_evaluation_service)
):
    """Score an answer from 0 to 10 and suggest a follow-up question."""
    return await evaluation_service.evaluate_answer(request.question, request.answer, request.resumeData)


@router.post("/video/analyze", response_model=AnalyzeVideoPerformanceOutput)
@handle_service_errors("analyze video performance")
async def analyze_video_performance(
    request: AnalyzeVideoPerformanceRequest,
    video_analysis_service: VideoAnalysisService = Depends(get_video_analysis_service)
):
    if request.facialData is not None:
        return await video_analysis_service.analyze(request.facialData)
    return await video_analysis_service.analyze_json(request.facialDataJson)
