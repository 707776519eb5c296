"""
Integration tests for the interview session wizard endpoints.
"""
import json

import pytest

from interview_ace.exceptions import ServiceUnavailableError


def _create(client):
    response = client.post("/api/v1/sessions")
    assert response.status_code == 201
    return response.json()["id"]


def _upload_resume(client, session_id, resume_bytes):
    return client.post(
        f"/api/v1/sessions/{session_id}/resume",
        files={"file": ("resume.txt", resume_bytes, "text/plain")}
    )


def _submit(client, session_id, audio_bytes, facial_data=None):
    data = {"facial_data": json.dumps(facial_data)} if facial_data is not None else None
    return client.post(
        f"/api/v1/sessions/{session_id}/answers",
        files={"media": ("answer.webm", audio_bytes, "audio/webm")},
        data=data
    )


@pytest.fixture
def interviewing_session(client, resume_bytes):
    session_id = _create(client)
    assert _upload_resume(client, session_id, resume_bytes).status_code == 200
    assert client.post(f"/api/v1/sessions/{session_id}/questions").status_code == 200
    assert client.post(f"/api/v1/sessions/{session_id}/start").status_code == 200
    return session_id


class TestSessionEndpoints:
    """Test cases for the session wizard API."""

    @pytest.mark.integration
    def test_create_and_get_session(self, client):
        session_id = _create(client)
        response = client.get(f"/api/v1/sessions/{session_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["stage"] == "INITIAL"
        assert data["questions"] == []
        assert data["currentQuestion"] is None

    @pytest.mark.integration
    def test_unknown_session(self, client):
        response = client.get("/api/v1/sessions/missing")
        assert response.status_code == 404

    @pytest.mark.integration
    def test_upload_resume(self, client, resume_bytes):
        session_id = _create(client)
        response = _upload_resume(client, session_id, resume_bytes)

        assert response.status_code == 200
        data = response.json()
        assert data["stage"] == "RESUME_PARSED"
        assert data["resumeData"]["projects"] == ["ASGI rate limiter"]
        assert data["resumeSummary"].startswith("Work Experience:")

    @pytest.mark.integration
    def test_upload_unsupported_resume(self, client):
        session_id = _create(client)
        response = client.post(
            f"/api/v1/sessions/{session_id}/resume",
            files={"file": ("photo.png", b"\x89PNG", "image/png")}
        )

        assert response.status_code == 400
        state = client.get(f"/api/v1/sessions/{session_id}").json()
        assert state["stage"] == "ERROR_STATE"
        assert state["errorMessage"].startswith("Failed to parse resume.")

    @pytest.mark.integration
    def test_questions_before_resume(self, client):
        session_id = _create(client)
        response = client.post(f"/api/v1/sessions/{session_id}/questions")
        assert response.status_code == 409

    @pytest.mark.integration
    def test_question_generation_failure(self, client, fake_llm, resume_bytes):
        fake_llm.responses["question_generation"] = ServiceUnavailableError("LLM down")
        session_id = _create(client)
        _upload_resume(client, session_id, resume_bytes)

        response = client.post(f"/api/v1/sessions/{session_id}/questions")

        assert response.status_code == 503
        state = client.get(f"/api/v1/sessions/{session_id}").json()
        assert state["stage"] == "ERROR_STATE"
        assert state["errorMessage"].startswith("Failed to generate interview questions.")

    @pytest.mark.integration
    def test_start_interview(self, client, interviewing_session):
        data = client.get(f"/api/v1/sessions/{interviewing_session}").json()
        assert data["stage"] == "INTERVIEWING"
        assert data["currentQuestionIndex"] == 0
        assert data["currentQuestion"] == data["questions"][0]

    @pytest.mark.integration
    def test_submit_answer(self, client, interviewing_session, audio_bytes, facial_samples):
        response = _submit(client, interviewing_session, audio_bytes, facial_samples)

        assert response.status_code == 200
        data = response.json()
        assert data["stage"] == "QUESTION_EVALUATED"
        entry = data["lastEntry"]
        assert entry["questionIndex"] == 0
        assert entry["mediaMimeType"] == "audio/webm"
        assert entry["mediaSize"] == len(audio_bytes)
        assert entry["evaluation"]["score"] == 8
        assert entry["videoAnalysis"]["confidenceScore"] == 7
        assert entry["scoreBand"] == "strong"

    @pytest.mark.integration
    def test_video_analysis_error_still_records_answer(self, client, fake_llm, interviewing_session,
                                                       audio_bytes, facial_samples):
        fake_llm.responses["video_analysis"] = ValueError("Expecting value: line 1 column 1")
        response = _submit(client, interviewing_session, audio_bytes, facial_samples)

        assert response.status_code == 200
        data = response.json()
        assert data["stage"] == "QUESTION_EVALUATED"
        assert data["lastEntry"]["videoAnalysis"] is None
        assert data["lastEntry"]["evaluation"]["score"] == 8

    @pytest.mark.integration
    def test_submit_answer_with_invalid_facial_data(self, client, interviewing_session, audio_bytes):
        response = client.post(
            f"/api/v1/sessions/{interviewing_session}/answers",
            files={"media": ("answer.webm", audio_bytes, "audio/webm")},
            data={"facial_data": "{not json"}
        )
        assert response.status_code == 400

    @pytest.mark.integration
    def test_answer_twice_is_rejected(self, client, interviewing_session, audio_bytes):
        assert _submit(client, interviewing_session, audio_bytes).status_code == 200
        response = _submit(client, interviewing_session, audio_bytes)
        assert response.status_code == 409

    @pytest.mark.integration
    def test_full_interview_and_summary(self, client, fake_llm, interviewing_session, audio_bytes):
        """Answer every question, complete the interview and read the summary."""
        questions = client.get(f"/api/v1/sessions/{interviewing_session}").json()["questions"]

        for _ in questions:
            assert _submit(client, interviewing_session, audio_bytes).status_code == 200
            response = client.post(f"/api/v1/sessions/{interviewing_session}/next")
            assert response.status_code == 200

        assert response.json()["stage"] == "INTERVIEW_COMPLETE"

        summary = client.get(f"/api/v1/sessions/{interviewing_session}/summary").json()
        assert summary["sessionId"] == interviewing_session
        assert summary["totalQuestions"] == len(questions)
        assert summary["answeredQuestions"] == len(questions)
        assert summary["averageScore"] == 8.0
        assert summary["averageBand"] == "strong"

    @pytest.mark.integration
    def test_restart(self, client, interviewing_session, audio_bytes):
        _submit(client, interviewing_session, audio_bytes)
        response = client.post(f"/api/v1/sessions/{interviewing_session}/restart")

        assert response.status_code == 200
        data = response.json()
        assert data["stage"] == "INITIAL"
        assert data["questions"] == []
        assert data["lastEntry"] is None
        assert data["resumeData"] is None


class TestOperationalEndpoints:
    """Test cases for service info, health and response headers."""

    @pytest.mark.integration
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["message"] == "Interview Ace API"

    @pytest.mark.integration
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["database"]["status"] == "healthy"
        assert data["llm"]["provider"] == "openai"
        assert data["status"] == "healthy"

    @pytest.mark.integration
    def test_security_headers(self, client):
        response = client.get("/api/v1/sessions/missing")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"].startswith("no-store")
        assert response.headers["API-Version"] == "v1"
        assert "X-Request-ID" in response.headers

    @pytest.mark.integration
    def test_request_id_is_echoed(self, client):
        response = client.get("/", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"
