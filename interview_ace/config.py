import os
from dotenv import load_dotenv
from typing import Dict, List, Any
from functools import lru_cache

load_dotenv()

SUPPORTED_LLM_PROVIDERS = ("openai", "ollama")
SUPPORTED_TRANSCRIPTION_PROVIDERS = ("openai", "google")


class Settings:
    # Database Settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./interview_ace.db")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"
    DATABASE_POOL_SIZE: int = int(os.getenv("DATABASE_POOL_SIZE", "10"))
    DATABASE_MAX_OVERFLOW: int = int(os.getenv("DATABASE_MAX_OVERFLOW", "20"))
    DATABASE_POOL_TIMEOUT: int = int(os.getenv("DATABASE_POOL_TIMEOUT", "30"))
    DATABASE_POOL_RECYCLE: int = int(os.getenv("DATABASE_POOL_RECYCLE", "3600"))

    # LLM Settings
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "openai").lower()
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    LLM_MAX_TOKENS: int = int(os.getenv("LLM_MAX_TOKENS", "2000"))
    LLM_TIMEOUT: int = int(os.getenv("LLM_TIMEOUT", "60"))
    LLM_MAX_RETRIES: int = int(os.getenv("LLM_MAX_RETRIES", "2"))

    # OpenAI Settings
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    # Ollama Settings
    OLLAMA_BASE_URL: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    OLLAMA_MODEL: str = os.getenv("OLLAMA_MODEL", "llama3")

    # Transcription Settings
    TRANSCRIPTION_PROVIDER: str = os.getenv("TRANSCRIPTION_PROVIDER", "openai").lower()
    TRANSCRIPTION_MODEL: str = os.getenv("TRANSCRIPTION_MODEL", "whisper-1")
    TRANSCRIPTION_LANGUAGE: str = os.getenv("TRANSCRIPTION_LANGUAGE", "en-US")

    # Interview Settings
    MAX_QUESTIONS: int = int(os.getenv("MAX_QUESTIONS", "10"))

    # File Upload Settings
    FILE_MAX_SIZE_DOCUMENT: int = int(os.getenv("FILE_MAX_SIZE_DOCUMENT", "10485760"))  # 10MB
    FILE_MAX_SIZE_MEDIA: int = int(os.getenv("FILE_MAX_SIZE_MEDIA", "52428800"))  # 50MB
    FILE_ALLOWED_DOCUMENT_TYPES: List[str] = os.getenv("FILE_ALLOWED_DOCUMENT_TYPES", "application/pdf,text/plain").split(",")
    FILE_ALLOWED_MEDIA_TYPES: List[str] = os.getenv(
        "FILE_ALLOWED_MEDIA_TYPES",
        "audio/webm,audio/wav,audio/x-wav,audio/mpeg,audio/mp4,audio/ogg,video/webm,video/mp4"
    ).split(",")

    # Security Headers Settings
    SECURITY_HEADERS_ENABLED: bool = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"

    # CORS Configuration
    CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:9002").split(",")
    CORS_METHODS: List[str] = os.getenv("CORS_METHODS", "GET,POST,PUT,DELETE,OPTIONS").split(",")
    CORS_HEADERS: List[str] = os.getenv("CORS_HEADERS", "Content-Type,Authorization,X-Requested-With").split(",")
    CORS_MAX_AGE: int = int(os.getenv("CORS_MAX_AGE", "86400"))  # 24 hours

    @property
    def security_headers(self) -> Dict[str, str]:
        """Get security headers configuration."""
        return {
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            # Camera and microphone are needed to record answers
            "Permissions-Policy": "geolocation=(), camera=(self), microphone=(self), payment=(), usb=()",
            "X-Permitted-Cross-Domain-Policies": "none",
        }

    @property
    def cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration."""
        return {
            "allow_origins": self.CORS_ORIGINS,
            "allow_credentials": True,
            "allow_methods": self.CORS_METHODS,
            "allow_headers": self.CORS_HEADERS,
            "expose_headers": ["X-Request-ID"],
            "max_age": self.CORS_MAX_AGE
        }

    @property
    def configured_services(self) -> Dict[str, bool]:
        """Get all service configuration status at once."""
        return {
            "openai": bool(self.OPENAI_API_KEY),
            "ollama": bool(self.OLLAMA_BASE_URL)
        }

    def is_service_configured(self, service: str) -> bool:
        """Check if a specific service is configured."""
        return self.configured_services.get(service, False)

    def get_llm_config(self) -> Dict[str, Any]:
        """Get configuration for the active LLM provider."""
        model = self.OPENAI_MODEL if self.LLM_PROVIDER == "openai" else self.OLLAMA_MODEL
        return {
            "provider": self.LLM_PROVIDER,
            "model": model,
            "temperature": self.LLM_TEMPERATURE,
            "max_tokens": self.LLM_MAX_TOKENS,
            "timeout": self.LLM_TIMEOUT,
            "max_retries": self.LLM_MAX_RETRIES
        }

    def validate_configuration(self) -> List[str]:
        """Validate configuration and return list of issues."""
        errors = []
        if self.LLM_PROVIDER not in SUPPORTED_LLM_PROVIDERS:
            errors.append(f"Unknown LLM_PROVIDER '{self.LLM_PROVIDER}' (expected one of {', '.join(SUPPORTED_LLM_PROVIDERS)})")
        elif not self.is_service_configured(self.LLM_PROVIDER):
            errors.append(f"LLM provider '{self.LLM_PROVIDER}' is selected but not configured")

        if self.TRANSCRIPTION_PROVIDER not in SUPPORTED_TRANSCRIPTION_PROVIDERS:
            errors.append(
                f"Unknown TRANSCRIPTION_PROVIDER '{self.TRANSCRIPTION_PROVIDER}' "
                f"(expected one of {', '.join(SUPPORTED_TRANSCRIPTION_PROVIDERS)})"
            )
        elif self.TRANSCRIPTION_PROVIDER == "openai" and not self.OPENAI_API_KEY:
            errors.append("TRANSCRIPTION_PROVIDER 'openai' requires OPENAI_API_KEY")

        if self.MAX_QUESTIONS < 1:
            errors.append("MAX_QUESTIONS must be at least 1")
        return errors


@lru_cache()
def get_settings():
    return Settings()


settings = get_settings()
