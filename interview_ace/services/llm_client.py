"""
LLM client used by every AI-backed flow.

Talks to either the OpenAI API (via the official async SDK) or a local Ollama
server (via httpx) and always returns schema-validated JSON.
"""

from typing import Any, Dict, Optional, Type, TypeVar

import httpx
import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError as PydanticValidationError

from interview_ace.config import Settings, get_settings
from interview_ace.exceptions import AIServiceError, ConfigurationError, InvalidResponseError, ServiceUnavailableError
from interview_ace.utils.error_context import ErrorContext
from interview_ace.utils.error_handling import with_async_retry
from interview_ace.utils.logger import get_logger
from interview_ace.utils.prompt_templates import JSON_ONLY_INSTRUCTION
from interview_ace.utils.response_parser import extract_json_object

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Client errors that retrying cannot fix
_NON_TRANSIENT_OPENAI_ERRORS = (
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.BadRequestError,
    openai.NotFoundError,
)


class LLMClient:
    """Provider-neutral chat completion client returning parsed JSON."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        openai_client: Optional[AsyncOpenAI] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        retry_delay: float = 1.0
    ):
        self.settings = settings or get_settings()
        config = self.settings.get_llm_config()
        self.provider = config["provider"]
        self.model = config["model"]
        self.temperature = config["temperature"]
        self.max_tokens = config["max_tokens"]
        self.timeout = config["timeout"]
        self.max_retries = config["max_retries"]
        self.retry_delay = retry_delay

        self._openai_client = openai_client
        self._http_client = http_client

        logger.info(f"LLM client initialized: provider={self.provider}, model={self.model}")

    def _get_openai_client(self) -> AsyncOpenAI:
        if self._openai_client is None:
            if not self.settings.OPENAI_API_KEY:
                raise ConfigurationError("OpenAI is not configured: OPENAI_API_KEY is missing")
            self._openai_client = AsyncOpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                base_url=self.settings.OPENAI_BASE_URL or None,
                timeout=self.timeout,
                max_retries=0
            )
        return self._openai_client

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def complete(self, system_prompt: str, prompt: str) -> str:
        """Run a single chat completion and return the raw text reply."""
        if self.provider == "openai":
            return await self._complete_openai(system_prompt, prompt)
        if self.provider == "ollama":
            return await self._complete_ollama(system_prompt, prompt)
        raise ConfigurationError(f"Unsupported LLM provider: {self.provider}")

    async def _complete_openai(self, system_prompt: str, prompt: str) -> str:
        client = self._get_openai_client()
        try:
            completion = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
            )
        except _NON_TRANSIENT_OPENAI_ERRORS as e:
            logger.error(f"OpenAI rejected the request: {e}")
            raise AIServiceError(f"OpenAI rejected the request: {e}", context={"service": "openai"})
        except openai.OpenAIError as e:
            raise ErrorContext.create_service_error("openai", "chat completion", e)

        if not completion.choices:
            raise InvalidResponseError("OpenAI returned no choices")
        return completion.choices[0].message.content or ""

    async def _complete_ollama(self, system_prompt: str, prompt: str) -> str:
        client = self._get_http_client()
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
            "format": "json",
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_tokens
            }
        }
        try:
            response = await client.post(f"{self.settings.OLLAMA_BASE_URL.rstrip('/')}/api/chat", json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ErrorContext.create_service_error("ollama", "chat completion", e)

        try:
            result = response.json()
            return (result.get("message") or {}).get("content") or ""
        except (ValueError, AttributeError) as e:
            raise InvalidResponseError(
                f"Ollama returned a malformed chat response: {e}",
                context={"service": "ollama", "response_snippet": response.text[:200]}
            )

    async def generate_json(
        self,
        operation: str,
        system_prompt: str,
        prompt: str,
        schema: Type[SchemaT]
    ) -> SchemaT:
        """Ask the model for JSON and validate it against ``schema``."""
        logger.info(f"LLM call '{operation}' via {self.provider}: prompt length={len(prompt)}")

        complete = with_async_retry(max_retries=self.max_retries, delay=self.retry_delay)(self.complete)
        content = await complete(f"{system_prompt}\n{JSON_ONLY_INSTRUCTION}", prompt)
        logger.debug(f"LLM '{operation}' raw response snippet: {content[:200]}")

        data = extract_json_object(content)
        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            logger.warning(f"LLM '{operation}' response failed schema validation: {e}")
            raise InvalidResponseError(
                f"AI service returned an invalid {operation} response",
                context={"operation": operation, "errors": e.errors(include_url=False)}
            )

    async def transcribe(self, audio: bytes, filename: str, mime_type: str, language: Optional[str] = None) -> str:
        """Transcribe audio with the OpenAI speech-to-text endpoint."""
        client = self._get_openai_client()
        kwargs: Dict[str, Any] = {
            "model": self.settings.TRANSCRIPTION_MODEL,
            "file": (filename, audio, mime_type),
        }
        if language:
            # Whisper expects ISO-639-1 codes ("en"), browsers send BCP-47 tags ("en-US")
            kwargs["language"] = language.split("-")[0].lower()

        create = with_async_retry(max_retries=self.max_retries, delay=self.retry_delay)(self._create_transcription)
        result = await create(client, **kwargs)
        return (result.text or "").strip()

    async def _create_transcription(self, client: AsyncOpenAI, **kwargs):
        try:
            return await client.audio.transcriptions.create(**kwargs)
        except _NON_TRANSIENT_OPENAI_ERRORS as e:
            raise AIServiceError(f"OpenAI rejected the transcription request: {e}", context={"service": "openai"})
        except openai.OpenAIError as e:
            raise ErrorContext.create_service_error("openai", "transcription", e)

    def health_check(self) -> Dict[str, Any]:
        configured = self.settings.is_service_configured(self.provider)
        return {
            "status": "configured" if configured else "not_configured",
            "provider": self.provider,
            "model": self.model
        }

    async def close(self):
        if self._http_client is not None:
            await self._http_client.aclose()
        if self._openai_client is not None:
            await self._openai_client.close()
        logger.info("LLM client closed")
