"""
Unit tests for EvaluationService and score bands.
"""
import pytest

from interview_ace.exceptions import ValidationError
from interview_ace.services.evaluation_service import NO_ANSWER_PLACEHOLDER, score_band


class TestEvaluationService:
    """Test cases for EvaluationService."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_evaluate_answer(self, evaluation_service, fake_llm):
        result = await evaluation_service.evaluate_answer(
            "Tell me about your payment API.", "We used idempotency keys.", "Skills: Python"
        )

        assert result.score == 8
        assert result.followUpQuestion == "How did you guarantee idempotency for retries?"
        assert result.suggestedResources[0].url == "https://dataintensive.net"
        prompt = fake_llm.calls[0][1]
        assert "Answer: We used idempotency keys." in prompt
        assert "Resume Data: Skills: Python" in prompt

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_blank_answer_is_still_evaluated(self, evaluation_service, fake_llm):
        """A silent answer is scored rather than rejected."""
        await evaluation_service.evaluate_answer("Why Python?", "   ", "Skills: Python")
        assert f"Answer: {NO_ANSWER_PLACEHOLDER}" in fake_llm.calls[0][1]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_blank_question_is_rejected(self, evaluation_service, fake_llm):
        with pytest.raises(ValidationError):
            await evaluation_service.evaluate_answer("  ", "answer", "resume")
        assert fake_llm.calls == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_out_of_range_score_is_clamped(self, evaluation_service, fake_llm):
        fake_llm.responses["answer_evaluation"] = {
            "evaluation": "Outstanding", "score": 14, "followUpQuestion": "What next?"
        }
        result = await evaluation_service.evaluate_answer("Q?", "A.", "R")
        assert result.score == 10
        assert result.suggestedResources == []
        assert result.expectedAnswerElements is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_expected_elements_list_is_joined(self, evaluation_service, fake_llm):
        fake_llm.responses["answer_evaluation"] = {
            "evaluation": "Ok", "score": -2, "followUpQuestion": "Why?",
            "expectedAnswerElements": ["Context", "Result"], "suggestedResources": None
        }
        result = await evaluation_service.evaluate_answer("Q?", "A.", "R")
        assert result.score == 0
        assert result.expectedAnswerElements == "Context\nResult"
        assert result.suggestedResources == []


class TestScoreBand:
    """Test cases for score_band."""

    @pytest.mark.unit
    @pytest.mark.parametrize("score,band", [
        (10, "strong"), (8, "strong"), (7.9, "fair"), (5, "fair"), (4.9, "weak"), (0, "weak"), (None, "unscored"),
    ])
    def test_score_band(self, score, band):
        assert score_band(score) == band
