"""
Interview session service.

Persists mock interviews and drives them through the wizard stages: resume
upload, question generation, answering each question and the final summary.
"""
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from interview_ace.database.models import InterviewLogEntry, InterviewSession
from interview_ace.exceptions import SessionNotFoundError, ValidationError
from interview_ace.models.interview import InterviewStage, assert_transition
from interview_ace.models.schemas import (
    AnalyzeVideoPerformanceOutput, EvaluateAnswerOutput, FacialSnapshot, InterviewLogEntryResponse,
    InterviewSummaryResponse, ParseResumeOutput, SessionResponse
)
from interview_ace.services.evaluation_service import EvaluationService, score_band
from interview_ace.services.question_service import QuestionService
from interview_ace.services.resume_service import ResumeService, build_resume_summary
from interview_ace.services.speech_service import SpeechToTextService
from interview_ace.services.video_analysis_service import VideoAnalysisService
from interview_ace.utils.logger import get_logger

logger = get_logger(__name__)

RESUME_PARSE_FAILED = "Failed to parse resume."
MISSING_RESUME_DATA = "Cannot generate questions without parsed resume data."
QUESTION_GENERATION_FAILED = "Failed to generate interview questions."
ANSWER_PROCESSING_FAILED = "Failed to process your answer."


def build_log_entry_response(entry: InterviewLogEntry) -> InterviewLogEntryResponse:
    return InterviewLogEntryResponse(
        questionIndex=entry.question_index,
        question=entry.question,
        mediaMimeType=entry.media_mime_type,
        mediaSize=entry.media_size,
        transcribedAnswer=entry.transcribed_answer,
        evaluation=EvaluateAnswerOutput.model_validate(entry.evaluation) if entry.evaluation else None,
        videoAnalysis=AnalyzeVideoPerformanceOutput.model_validate(entry.video_analysis) if entry.video_analysis else None,
        scoreBand=score_band(entry.score)
    )


def build_session_response(session: InterviewSession) -> SessionResponse:
    entries = session.log_entries
    return SessionResponse(
        id=session.id,
        stage=session.current_stage,
        resumeData=ParseResumeOutput.model_validate(session.resume_data) if session.resume_data else None,
        resumeSummary=session.resume_summary,
        questions=list(session.questions or []),
        currentQuestionIndex=session.current_question_index,
        currentQuestion=session.current_question,
        errorMessage=session.error_message,
        lastEntry=build_log_entry_response(entries[-1]) if entries else None,
        createdAt=session.created_at,
        updatedAt=session.updated_at
    )


def _failure_message(prefix: str, error: Exception) -> str:
    return f"{prefix} {error}".strip()


class InterviewSessionService:
    """Drives one interview session through the wizard stages."""

    def __init__(
        self,
        db: Session,
        resume_service: ResumeService,
        question_service: QuestionService,
        speech_service: SpeechToTextService,
        evaluation_service: EvaluationService,
        video_analysis_service: VideoAnalysisService
    ):
        self.db = db
        self.resume_service = resume_service
        self.question_service = question_service
        self.speech_service = speech_service
        self.evaluation_service = evaluation_service
        self.video_analysis_service = video_analysis_service

    def _save(self, session: InterviewSession) -> InterviewSession:
        self.db.commit()
        self.db.refresh(session)
        return session

    def _move(self, session: InterviewSession, stage: InterviewStage) -> InterviewSession:
        assert_transition(session.current_stage, stage)
        logger.info(f"Session {session.id}: {session.stage} -> {stage.value}")
        session.stage = stage.value
        return self._save(session)

    def _fail(self, session: InterviewSession, message: str) -> InterviewSession:
        logger.error(f"Session {session.id} failed in {session.stage}: {message}")
        session.error_message = message
        return self._move(session, InterviewStage.ERROR_STATE)

    def create_session(self) -> InterviewSession:
        session = InterviewSession(stage=InterviewStage.INITIAL.value, questions=[], current_question_index=0)
        self.db.add(session)
        self._save(session)
        logger.info(f"Created interview session {session.id}")
        return session

    def get_session(self, session_id: str) -> InterviewSession:
        session = self.db.query(InterviewSession).filter(InterviewSession.id == session_id).first()
        if session is None:
            raise SessionNotFoundError(f"Interview session {session_id} not found", context={"session_id": session_id})
        return session

    async def upload_resume(self, session_id: str, data: bytes, mime_type: str) -> InterviewSession:
        session = self.get_session(session_id)
        self._move(session, InterviewStage.RESUME_PARSING)

        try:
            parsed = await self.resume_service.parse_resume(data, mime_type)
        except Exception as e:
            self._fail(session, _failure_message(RESUME_PARSE_FAILED, e))
            raise

        session.resume_data = parsed.model_dump()
        session.resume_summary = build_resume_summary(parsed)
        session.error_message = None
        return self._move(session, InterviewStage.RESUME_PARSED)

    async def generate_questions(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        assert_transition(session.current_stage, InterviewStage.GENERATING_QUESTIONS)

        if not (session.resume_summary or "").strip():
            self._fail(session, MISSING_RESUME_DATA)
            raise ValidationError(MISSING_RESUME_DATA, context={"session_id": session_id})

        self._move(session, InterviewStage.GENERATING_QUESTIONS)
        try:
            result = await self.question_service.generate_questions(session.resume_summary)
        except Exception as e:
            self._fail(session, _failure_message(QUESTION_GENERATION_FAILED, e))
            raise

        session.questions = list(result.questions)
        session.current_question_index = 0
        return self._move(session, InterviewStage.QUESTIONS_READY)

    def start_interview(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        assert_transition(session.current_stage, InterviewStage.INTERVIEWING)
        session.current_question_index = 0
        session.log_entries = []
        session.error_message = None
        return self._move(session, InterviewStage.INTERVIEWING)

    async def submit_answer(
        self,
        session_id: str,
        data: bytes,
        mime_type: str,
        facial_data: Optional[Sequence[Optional[FacialSnapshot]]] = None
    ) -> InterviewSession:
        session = self.get_session(session_id)
        assert_transition(session.current_stage, InterviewStage.PROCESSING_ANSWER)
        mime_type = self.speech_service.validate_media(data, mime_type)

        question = session.current_question
        entry = InterviewLogEntry(
            question_index=session.current_question_index,
            question=question or "",
            media_mime_type=mime_type,
            media_size=len(data)
        )
        self._move(session, InterviewStage.PROCESSING_ANSWER)

        try:
            transcription = await self.speech_service.transcribe(data, mime_type)
            entry.transcribed_answer = transcription.transcription
            evaluation = await self.evaluation_service.evaluate_answer(
                question or "", transcription.transcription, session.resume_summary or ""
            )
        except Exception as e:
            session.log_entries = list(session.log_entries) + [entry]
            self._fail(session, _failure_message(ANSWER_PROCESSING_FAILED, e))
            raise

        entry.evaluation = evaluation.model_dump()
        if facial_data is not None:
            entry.video_analysis = await self._analyze_video(session, facial_data)

        session.log_entries = list(session.log_entries) + [entry]
        return self._move(session, InterviewStage.QUESTION_EVALUATED)

    async def _analyze_video(self, session: InterviewSession, facial_data: Sequence[Optional[FacialSnapshot]]):
        try:
            analysis = await self.video_analysis_service.analyze(facial_data)
        except Exception as e:
            logger.warning(f"Session {session.id}: video analysis skipped: {e}")
            return None
        return analysis.model_dump()

    def next_question(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        if session.current_question_index + 1 < len(session.questions or []):
            assert_transition(session.current_stage, InterviewStage.INTERVIEWING)
            session.current_question_index += 1
            return self._move(session, InterviewStage.INTERVIEWING)
        return self._move(session, InterviewStage.INTERVIEW_COMPLETE)

    def restart(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        session.resume_data = None
        session.resume_summary = None
        session.questions = []
        session.current_question_index = 0
        session.log_entries = []
        session.error_message = None
        return self._move(session, InterviewStage.INITIAL)

    def get_summary(self, session_id: str) -> InterviewSummaryResponse:
        session = self.get_session(session_id)
        entries: List[InterviewLogEntryResponse] = [build_log_entry_response(e) for e in session.log_entries]
        scores = [e.evaluation.score for e in entries if e.evaluation is not None]
        average = round(sum(scores) / len(scores), 1) if scores else None

        return InterviewSummaryResponse(
            sessionId=session.id,
            stage=session.current_stage,
            totalQuestions=len(entries),
            answeredQuestions=len(scores),
            averageScore=average,
            averageBand=score_band(average),
            entries=entries
        )
