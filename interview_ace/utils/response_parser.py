"""
Helpers for turning raw LLM replies into structured data.

Models frequently wrap JSON in markdown fences or append commentary after the
closing brace, so parsing falls through progressively looser strategies.
"""
import json
import re
from typing import Any, Dict, Iterable, List

from interview_ace.exceptions import InvalidResponseError
from interview_ace.utils.logger import get_logger

logger = get_logger(__name__)

_LEADING_ENUMERATION = re.compile(r'^\s*(?:[-*•]|\d+[.)]|Q\d+[.:)]?)\s*', re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if present."""
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = "\n".join(cleaned.splitlines()[1:])
    if cleaned.endswith("```"):
        cleaned = "\n".join(cleaned.splitlines()[:-1])
    return cleaned.strip()


def _loads_object(candidate: str) -> Dict[str, Any]:
    data = json.loads(candidate)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def extract_json_object(text: str) -> Dict[str, Any]:
    """Extract the first JSON object from an LLM reply."""
    if not text or not text.strip():
        raise InvalidResponseError("Empty response from AI service")

    cleaned = strip_code_fences(text)
    for candidate in (text.strip(), cleaned):
        try:
            return _loads_object(candidate)
        except ValueError:
            continue

    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        try:
            return _loads_object(text[start:end + 1])
        except ValueError as e:
            logger.warning(f"JSON parse failed after trimming surrounding text: {e}")

    raise InvalidResponseError(
        "AI service response did not contain a JSON object",
        context={"response_snippet": text[:200]}
    )


def clean_question_list(items: Iterable[Any], max_questions: int) -> List[str]:
    """Normalize generated questions: strip numbering, drop blanks and duplicates, cap the count."""
    questions: List[str] = []
    seen = set()
    for item in items or []:
        if not isinstance(item, str):
            continue
        question = _LEADING_ENUMERATION.sub("", item).strip()
        key = question.casefold()
        if not question or key in seen:
            continue
        seen.add(key)
        questions.append(question)
        if len(questions) >= max_questions:
            break
    return questions
