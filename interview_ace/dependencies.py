"""
Dependency injection utilities for Interview Ace.
"""

from functools import lru_cache
from fastapi import Depends
from sqlalchemy.orm import Session
from interview_ace.config import get_settings
from interview_ace.database.connection import get_db
from interview_ace.services.llm_client import LLMClient
from interview_ace.services.resume_service import ResumeService
from interview_ace.services.question_service import QuestionService
from interview_ace.services.speech_service import SpeechToTextService
from interview_ace.services.evaluation_service import EvaluationService
from interview_ace.services.video_analysis_service import VideoAnalysisService
from interview_ace.services.session_service import InterviewSessionService


@lru_cache()
def get_llm_client() -> LLMClient:
    """Shared LLM client for the lifetime of the process."""
    return LLMClient(get_settings())


def get_resume_service(llm_client: LLMClient = Depends(get_llm_client)) -> ResumeService:
    return ResumeService(llm_client, get_settings())


def get_question_service(llm_client: LLMClient = Depends(get_llm_client)) -> QuestionService:
    return QuestionService(llm_client, get_settings())


def get_speech_service(llm_client: LLMClient = Depends(get_llm_client)) -> SpeechToTextService:
    return SpeechToTextService(llm_client, get_settings())


def get_evaluation_service(llm_client: LLMClient = Depends(get_llm_client)) -> EvaluationService:
    return EvaluationService(llm_client)


def get_video_analysis_service(llm_client: LLMClient = Depends(get_llm_client)) -> VideoAnalysisService:
    return VideoAnalysisService(llm_client)


def get_session_service(
    db: Session = Depends(get_db),
    resume_service: ResumeService = Depends(get_resume_service),
    question_service: QuestionService = Depends(get_question_service),
    speech_service: SpeechToTextService = Depends(get_speech_service),
    evaluation_service: EvaluationService = Depends(get_evaluation_service),
    video_analysis_service: VideoAnalysisService = Depends(get_video_analysis_service)
) -> InterviewSessionService:
    return InterviewSessionService(
        db, resume_service, question_service, speech_service, evaluation_service, video_analysis_service
    )
