"""
Test configuration for Interview Ace tests.

Provides an in-memory database, a fake LLM client and a FastAPI test client
with both wired in through dependency overrides.
"""
# Set test environment variables BEFORE any imports that might use them
import os
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LLM_PROVIDER"] = "openai"
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["TRANSCRIPTION_PROVIDER"] = "openai"
os.environ["MAX_QUESTIONS"] = "5"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from interview_ace.config import Settings
from interview_ace.database.connection import Base, engine, SessionLocal, get_db
from interview_ace.database import models  # noqa: F401
from interview_ace.dependencies import get_llm_client
from interview_ace.main import app
from interview_ace.services.evaluation_service import EvaluationService
from interview_ace.services.question_service import QuestionService
from interview_ace.services.resume_service import ResumeService
from interview_ace.services.session_service import InterviewSessionService
from interview_ace.services.speech_service import SpeechToTextService
from interview_ace.services.video_analysis_service import VideoAnalysisService
from interview_ace.utils.data_uri import to_data_uri

RESUME_TEXT = """Jane Doe
Senior Backend Engineer at Acme Corp (2019-2024): built payment APIs in Python and FastAPI.
Skills: Python, FastAPI, PostgreSQL, Kubernetes
Projects: Open-source rate limiter for ASGI apps
"""

DEFAULT_LLM_RESPONSES = {
    "resume_parsing": {
        "workExperience": ["Senior Backend Engineer at Acme Corp (2019-2024)"],
        "skills": ["Python", "FastAPI", "PostgreSQL"],
        "projects": ["ASGI rate limiter"]
    },
    "question_generation": {
        "questions": [
            "1. Tell me about the payment APIs you built at Acme Corp.",
            "2. How did you scale PostgreSQL for high write volumes?",
            "3. What trade-offs did you make in your ASGI rate limiter?"
        ]
    },
    "answer_evaluation": {
        "evaluation": "Clear and specific answer with a concrete example.",
        "score": 8,
        "expectedAnswerElements": "Architecture, idempotency, monitoring",
        "suggestedResources": [{"title": "Designing Data-Intensive Applications", "url": "https://dataintensive.net"}],
        "followUpQuestion": "How did you guarantee idempotency for retries?"
    },
    "video_analysis": {
        "nervousnessAnalysis": "Expressions were mostly stable and neutral.",
        "confidenceScore": 7,
        "gazeAnalysis": "Direct gaze analysis is not possible from expression data alone.",
        "cheatingSuspicion": False
    }
}


class FakeLLMClient:
    """In-memory LLM client returning canned JSON per operation."""

    def __init__(self):
        self.responses = {key: value for key, value in DEFAULT_LLM_RESPONSES.items()}
        self.transcription = "I designed the payment API around idempotency keys."
        self.calls = []
        self.transcribe_calls = []

    async def generate_json(self, operation, system_prompt, prompt, schema):
        self.calls.append((operation, prompt))
        response = self.responses[operation]
        if isinstance(response, Exception):
            raise response
        return schema.model_validate(response)

    async def transcribe(self, audio, filename, mime_type, language=None):
        self.transcribe_calls.append((filename, mime_type, language, len(audio)))
        if isinstance(self.transcription, Exception):
            raise self.transcription
        return self.transcription

    def operations(self):
        return [operation for operation, _ in self.calls]

    def health_check(self):
        return {"status": "configured", "provider": "fake", "model": "fake-model"}

    async def close(self):
        pass


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def db_session():
    """Fresh schema per test on the shared in-memory engine."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def resume_service(fake_llm, settings):
    return ResumeService(fake_llm, settings)


@pytest.fixture
def question_service(fake_llm, settings):
    return QuestionService(fake_llm, settings)


@pytest.fixture
def speech_service(fake_llm, settings):
    return SpeechToTextService(fake_llm, settings)


@pytest.fixture
def evaluation_service(fake_llm):
    return EvaluationService(fake_llm)


@pytest.fixture
def video_analysis_service(fake_llm):
    return VideoAnalysisService(fake_llm)


@pytest.fixture
def session_service(db_session, resume_service, question_service, speech_service,
                    evaluation_service, video_analysis_service):
    return InterviewSessionService(
        db_session, resume_service, question_service, speech_service,
        evaluation_service, video_analysis_service
    )


@pytest.fixture
def resume_bytes():
    return RESUME_TEXT.encode("utf-8")


@pytest.fixture
def resume_data_uri(resume_bytes):
    return to_data_uri(resume_bytes, "text/plain")


@pytest.fixture
def audio_bytes():
    return b"\x1aE\xdf\xa3" + b"\x00" * 256


@pytest.fixture
def facial_samples():
    return [
        {"expressions": {"neutral": 0.8, "happy": 0.1, "fearful": 0.1}, "timestamp": 0},
        {"expressions": {"neutral": 0.7, "happy": 0.2, "fearful": 0.1}, "timestamp": 500},
        None,
        None,
        {"expressions": {"neutral": 0.2, "happy": 0.1, "fearful": 0.7}, "timestamp": 2000},
        None,
        {"expressions": {"neutral": 0.6, "happy": 0.3, "fearful": 0.1}, "timestamp": 3000},
    ]


@pytest.fixture
def client(db_session, fake_llm):
    """Test client with the database and LLM client overridden."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
