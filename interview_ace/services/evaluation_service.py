from typing import Optional

from interview_ace.exceptions import ValidationError
from interview_ace.models.schemas import EvaluateAnswerOutput
from interview_ace.services.llm_client import LLMClient
from interview_ace.utils.logger import get_logger
from interview_ace.utils.prompt_templates import PromptTemplates

logger = get_logger(__name__)

NO_ANSWER_PLACEHOLDER = "(no answer provided)"
NO_RESUME_PLACEHOLDER = "(no resume data provided)"


def score_band(score: Optional[float]) -> str:
    """Bucket a 0-10 score the way results are presented to the candidate."""
    if score is None:
        return "unscored"
    if score >= 8:
        return "strong"
    if score >= 5:
        return "fair"
    return "weak"


class EvaluationService:
    """Scores an answer and proposes one follow-up question."""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    async def evaluate_answer(self, question: str, answer: str, resume_data: str) -> EvaluateAnswerOutput:
        if not question or not question.strip():
            raise ValidationError("Cannot evaluate an answer without the question")

        answer = (answer or "").strip() or NO_ANSWER_PLACEHOLDER
        resume_data = (resume_data or "").strip() or NO_RESUME_PLACEHOLDER

        result = await self.llm_client.generate_json(
            "answer_evaluation",
            PromptTemplates.EVALUATION_SYSTEM,
            PromptTemplates.get_evaluation_prompt(question.strip(), answer, resume_data),
            EvaluateAnswerOutput
        )
        logger.info(f"Evaluated answer: score={result.score} ({score_band(result.score)})")
        return result
