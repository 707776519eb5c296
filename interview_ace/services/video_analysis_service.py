"""
Video performance analysis.

The browser samples facial expressions while the answer is recorded and sends
the resulting time series. A deterministic summary is computed locally and
handed to the LLM together with the raw samples.
"""
import json
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from interview_ace.exceptions import ValidationError
from interview_ace.models.schemas import AnalyzeVideoPerformanceOutput, FacialDataSummary, FacialSnapshot
from interview_ace.services.llm_client import LLMClient
from interview_ace.utils.logger import get_logger
from interview_ace.utils.prompt_templates import PromptTemplates

logger = get_logger(__name__)

# Samples sent verbatim to the model; the summary covers the full series
MAX_PROMPT_SAMPLES = 200


def _dominant_expression(snapshot: FacialSnapshot) -> Optional[str]:
    if not snapshot.expressions:
        return None
    return max(snapshot.expressions.items(), key=lambda item: item[1])[0]


def summarize_facial_data(samples: Sequence[Optional[FacialSnapshot]]) -> FacialDataSummary:
    total = len(samples)
    detected = [s for s in samples if s is not None]

    longest_absence = 0
    run = 0
    for sample in samples:
        if sample is None:
            run += 1
            longest_absence = max(longest_absence, run)
        else:
            run = 0

    dominant_counts: Counter = Counter()
    changes = 0
    previous = None
    sums: Dict[str, float] = {}
    for sample in detected:
        for name, value in sample.expressions.items():
            sums[name] = sums.get(name, 0.0) + value
        dominant = _dominant_expression(sample)
        if dominant is None:
            continue
        dominant_counts[dominant] += 1
        if previous is not None and dominant != previous:
            changes += 1
        previous = dominant

    means = {name: round(value / len(detected), 4) for name, value in sums.items()} if detected else {}

    return FacialDataSummary(
        totalSamples=total,
        detectedSamples=len(detected),
        presenceRatio=round(len(detected) / total, 4) if total else 0.0,
        longestAbsenceRun=longest_absence,
        dominantCounts=dict(dominant_counts),
        meanExpressions=means,
        dominantChanges=changes
    )


def load_facial_data(facial_data_json: str) -> List[Optional[FacialSnapshot]]:
    """Parse the JSON-string form of a facial sample series."""
    try:
        raw = json.loads(facial_data_json)
    except (json.JSONDecodeError, TypeError) as e:
        raise ValidationError(f"Facial data is not valid JSON: {e}")
    if not isinstance(raw, list):
        raise ValidationError("Facial data must be a JSON array")
    try:
        return [None if item is None else FacialSnapshot.model_validate(item) for item in raw]
    except PydanticValidationError as e:
        raise ValidationError(
            "Facial data contains malformed samples",
            context={"errors": e.errors(include_url=False)}
        )


class VideoAnalysisService:
    """Assesses nervousness, confidence and gaze from facial expression samples."""

    def __init__(self, llm_client: LLMClient):
        self.llm_client = llm_client

    async def analyze(self, samples: Sequence[Optional[FacialSnapshot]]) -> AnalyzeVideoPerformanceOutput:
        if not samples:
            raise ValidationError("No facial data was captured for this answer")

        summary = summarize_facial_data(samples)
        if summary.detectedSamples == 0:
            logger.warning(f"No face detected in any of {summary.totalSamples} samples")

        facial_data: List[Any] = [
            None if s is None else s.model_dump(exclude_none=True) for s in samples[:MAX_PROMPT_SAMPLES]
        ]
        result = await self.llm_client.generate_json(
            "video_analysis",
            PromptTemplates.VIDEO_ANALYSIS_SYSTEM,
            PromptTemplates.get_video_analysis_prompt(facial_data, summary.model_dump()),
            AnalyzeVideoPerformanceOutput
        )
        logger.info(
            f"Video analysis: confidence={result.confidenceScore}, "
            f"presence={summary.presenceRatio}, cheating_suspicion={result.cheatingSuspicion}"
        )
        return result

    async def analyze_json(self, facial_data_json: str) -> AnalyzeVideoPerformanceOutput:
        return await self.analyze(load_facial_data(facial_data_json))
