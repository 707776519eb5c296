import asyncio
import io
from typing import Optional

import speech_recognition as sr
from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from interview_ace.config import Settings, get_settings
from interview_ace.exceptions import TranscriptionError, ValidationError
from interview_ace.models.schemas import TranscribeAnswerOutput
from interview_ace.services.llm_client import LLMClient
from interview_ace.utils.data_uri import normalize_mime_type, parse_data_uri
from interview_ace.utils.logger import get_logger

logger = get_logger(__name__)

_EXTENSIONS = {
    "audio/webm": "webm",
    "video/webm": "webm",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/mpeg": "mp3",
    "audio/mp4": "m4a",
    "video/mp4": "mp4",
    "audio/ogg": "ogg",
}


class SpeechToTextService:
    def __init__(self, llm_client: LLMClient, settings: Optional[Settings] = None):
        self.llm_client = llm_client
        self.settings = settings or get_settings()
        self.provider = self.settings.TRANSCRIPTION_PROVIDER

        self.recognizer = sr.Recognizer()
        # Configure recognizer settings
        self.recognizer.energy_threshold = 300
        self.recognizer.dynamic_energy_threshold = True

    def validate_media(self, data: bytes, mime_type: str) -> str:
        mime_type = normalize_mime_type(mime_type)
        if mime_type not in self.settings.FILE_ALLOWED_MEDIA_TYPES:
            raise ValidationError(
                f"Unsupported recording format '{mime_type}'. Supported: {', '.join(self.settings.FILE_ALLOWED_MEDIA_TYPES)}",
                context={"mime_type": mime_type}
            )
        if not data:
            raise ValidationError("Recording is empty")
        if len(data) > self.settings.FILE_MAX_SIZE_MEDIA:
            raise ValidationError(
                f"Recording exceeds the maximum size of {self.settings.FILE_MAX_SIZE_MEDIA} bytes",
                context={"size": len(data)}
            )
        return mime_type

    async def transcribe(self, data: bytes, mime_type: str, language: Optional[str] = None) -> TranscribeAnswerOutput:
        """Transcribe a recorded answer with the configured provider."""
        mime_type = self.validate_media(data, mime_type)
        language = language or self.settings.TRANSCRIPTION_LANGUAGE
        logger.info(f"Transcribing {len(data)} bytes of {mime_type} via {self.provider}")

        if self.provider == "openai":
            filename = f"answer.{_EXTENSIONS.get(mime_type, 'webm')}"
            text = await self.llm_client.transcribe(data, filename, mime_type, language)
        elif self.provider == "google":
            text = await asyncio.to_thread(self._transcribe_google, data, language)
        else:
            raise TranscriptionError(f"Unsupported transcription provider: {self.provider}")

        if not text:
            logger.info("Transcription is empty, the answer will be evaluated as silent")
        return TranscribeAnswerOutput(transcription=text)

    async def transcribe_data_uri(self, audio_data_uri: str, language: Optional[str] = None) -> TranscribeAnswerOutput:
        decoded = parse_data_uri(audio_data_uri)
        return await self.transcribe(decoded.data, decoded.mime_type, language)

    def _transcribe_google(self, audio_data: bytes, language: str) -> str:
        try:
            audio = self._prepare_audio(audio_data)
            return self._recognize_audio(audio, language).strip()
        except sr.UnknownValueError:
            raise TranscriptionError(
                "Could not understand audio",
                context={"service": "speech_recognition", "operation": "transcribe_audio"}
            )
        except sr.RequestError as e:
            raise TranscriptionError(
                f"speech_recognition transcribe_audio failed: {e}",
                context={"service": "speech_recognition", "operation": "transcribe_audio"}
            )
        except CouldntDecodeError as e:
            raise TranscriptionError(f"Could not decode the recording: {e}", context={"service": "pydub"})

    def _prepare_audio(self, audio_data: bytes) -> io.BytesIO:
        """Convert the recording to WAV for the recognizer."""
        audio = AudioSegment.from_file(io.BytesIO(audio_data))
        wav_data = io.BytesIO()
        audio.export(wav_data, format="wav")
        wav_data.seek(0)
        return wav_data

    def _recognize_audio(self, audio_data: io.BytesIO, language: str) -> str:
        """Recognize audio using Google Speech Recognition."""
        with sr.AudioFile(audio_data) as source:
            audio = self.recognizer.record(source)
            return self.recognizer.recognize_google(audio, language=language)
