"""
Resume parsing: local text extraction followed by LLM structuring.
"""
import io
from typing import Optional

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from interview_ace.config import Settings, get_settings
from interview_ace.exceptions import ValidationError
from interview_ace.models.schemas import ParseResumeOutput
from interview_ace.services.llm_client import LLMClient
from interview_ace.utils.data_uri import normalize_mime_type, parse_data_uri
from interview_ace.utils.logger import get_logger
from interview_ace.utils.prompt_templates import PromptTemplates

logger = get_logger(__name__)

# Resume text beyond this many characters is not sent to the model
MAX_RESUME_CHARS = 15000


def build_resume_summary(parsed: ParseResumeOutput) -> str:
    """Render parsed resume data as the one-line context string used by later prompts."""
    work = ", ".join(parsed.workExperience) or "N/A"
    skills = ", ".join(parsed.skills) or "N/A"
    projects = ", ".join(parsed.projects) or "N/A"
    return f"Work Experience: {work}. Skills: {skills}. Projects: {projects}."


class ResumeService:
    def __init__(self, llm_client: LLMClient, settings: Optional[Settings] = None):
        self.llm_client = llm_client
        self.settings = settings or get_settings()

    def validate_document(self, data: bytes, mime_type: str) -> str:
        mime_type = normalize_mime_type(mime_type)
        if mime_type not in self.settings.FILE_ALLOWED_DOCUMENT_TYPES:
            raise ValidationError(
                f"Unsupported resume format '{mime_type}'. Supported: {', '.join(self.settings.FILE_ALLOWED_DOCUMENT_TYPES)}",
                context={"mime_type": mime_type}
            )
        if not data:
            raise ValidationError("Resume file is empty")
        if len(data) > self.settings.FILE_MAX_SIZE_DOCUMENT:
            raise ValidationError(
                f"Resume file exceeds the maximum size of {self.settings.FILE_MAX_SIZE_DOCUMENT} bytes",
                context={"size": len(data)}
            )
        return mime_type

    def extract_text(self, data: bytes, mime_type: str) -> str:
        mime_type = normalize_mime_type(mime_type)
        if mime_type == "application/pdf":
            text = self._extract_pdf_text(data)
        elif mime_type == "text/plain":
            text = data.decode("utf-8", errors="ignore")
        else:
            raise ValidationError(f"Cannot extract text from '{mime_type}'")

        text = text.strip()
        if not text:
            raise ValidationError("No text could be extracted from the resume (is it a scanned image?)")
        return text

    def _extract_pdf_text(self, data: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PdfReadError, ValueError) as e:
            raise ValidationError(f"Could not read PDF resume: {e}")
        return "\n".join(pages)

    async def parse_resume(self, data: bytes, mime_type: str) -> ParseResumeOutput:
        mime_type = self.validate_document(data, mime_type)
        text = self.extract_text(data, mime_type)
        if len(text) > MAX_RESUME_CHARS:
            logger.info(f"Truncating resume text from {len(text)} to {MAX_RESUME_CHARS} characters")
            text = text[:MAX_RESUME_CHARS]

        parsed = await self.llm_client.generate_json(
            "resume_parsing",
            PromptTemplates.RESUME_PARSING_SYSTEM,
            PromptTemplates.get_resume_parsing_prompt(text),
            ParseResumeOutput
        )
        logger.info(
            f"Parsed resume: {len(parsed.workExperience)} positions, "
            f"{len(parsed.skills)} skills, {len(parsed.projects)} projects"
        )
        return parsed

    async def parse_resume_data_uri(self, resume_data_uri: str) -> ParseResumeOutput:
        decoded = parse_data_uri(resume_data_uri)
        return await self.parse_resume(decoded.data, decoded.mime_type)
