# Models package for Pydantic schemas and interview stages

from .interview import InterviewStage, can_transition, assert_transition
from .schemas import (
    ParseResumeOutput, GenerateInterviewQuestionsOutput, TranscribeAnswerOutput,
    EvaluateAnswerOutput, SuggestedResource, FacialSnapshot, FacialDataSummary,
    AnalyzeVideoPerformanceOutput, SessionResponse, InterviewSummaryResponse
)

__all__ = [
    "InterviewStage", "can_transition", "assert_transition",
    "ParseResumeOutput", "GenerateInterviewQuestionsOutput", "TranscribeAnswerOutput",
    "EvaluateAnswerOutput", "SuggestedResource", "FacialSnapshot", "FacialDataSummary",
    "AnalyzeVideoPerformanceOutput", "SessionResponse", "InterviewSummaryResponse"
]
