from typing import Optional

from interview_ace.config import Settings, get_settings
from interview_ace.exceptions import InvalidResponseError, ValidationError
from interview_ace.models.schemas import GenerateInterviewQuestionsOutput
from interview_ace.services.llm_client import LLMClient
from interview_ace.utils.logger import get_logger
from interview_ace.utils.prompt_templates import PromptTemplates
from interview_ace.utils.response_parser import clean_question_list

logger = get_logger(__name__)


class QuestionService:
    """Generates personalized interview questions from resume data."""

    def __init__(self, llm_client: LLMClient, settings: Optional[Settings] = None):
        self.llm_client = llm_client
        self.settings = settings or get_settings()

    async def generate_questions(self, resume_data: str) -> GenerateInterviewQuestionsOutput:
        if not resume_data or not resume_data.strip():
            raise ValidationError("Cannot generate questions without resume data")

        max_questions = self.settings.MAX_QUESTIONS
        result = await self.llm_client.generate_json(
            "question_generation",
            PromptTemplates.QUESTION_GENERATION_SYSTEM,
            PromptTemplates.get_question_generation_prompt(resume_data.strip(), max_questions),
            GenerateInterviewQuestionsOutput
        )

        questions = clean_question_list(result.questions, max_questions)
        if not questions:
            raise InvalidResponseError("AI service returned no interview questions")

        logger.info(f"Generated {len(questions)} interview questions")
        return GenerateInterviewQuestionsOutput(questions=questions)
