from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional, Dict, Any
from datetime import datetime

from interview_ace.models.interview import InterviewStage

SCORE_MIN = 0.0
SCORE_MAX = 10.0


def _clamp_score(value: float) -> float:
    return max(SCORE_MIN, min(SCORE_MAX, float(value)))


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


# Resume parsing
class ParseResumeRequest(BaseModel):
    resumeDataUri: str = Field(..., min_length=1, description="The resume file as a base64 data URI")


class ParseResumeOutput(BaseModel):
    workExperience: List[str] = Field(default_factory=list, description="Work experience entries")
    skills: List[str] = Field(default_factory=list, description="Skills listed on the resume")
    projects: List[str] = Field(default_factory=list, description="Projects listed on the resume")

    @field_validator('workExperience', 'skills', 'projects', mode='before')
    @classmethod
    def coerce_string_list(cls, v):
        return _string_list(v)


class ParseResumeResponse(ParseResumeOutput):
    summary: str = Field(..., description="Resume summary used as context for later steps")


# Question generation
class GenerateInterviewQuestionsRequest(BaseModel):
    resumeData: str = Field(..., max_length=20000, description="Extracted resume data")


class GenerateInterviewQuestionsOutput(BaseModel):
    questions: List[str] = Field(..., description="Personalized interview questions")

    @field_validator('questions', mode='before')
    @classmethod
    def coerce_questions(cls, v):
        return _string_list(v)


# Transcription
class TranscribeAnswerRequest(BaseModel):
    audioDataUri: str = Field(..., min_length=1, description="The recorded answer as a base64 data URI")
    language: Optional[str] = Field(None, description="Language code, e.g. en-US")


class TranscribeAnswerOutput(BaseModel):
    transcription: str = Field("", description="Transcribed answer text")


# Answer evaluation
class EvaluateAnswerRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=2000, description="The interview question asked")
    answer: str = Field("", max_length=20000, description="The answer provided by the user")
    resumeData: str = Field("", max_length=20000, description="The extracted resume data")


class SuggestedResource(BaseModel):
    title: str
    url: str


class EvaluateAnswerOutput(BaseModel):
    evaluation: str = Field(..., description="The evaluation of the answer")
    score: float = Field(..., description="Score from 0 to 10")
    followUpQuestion: str = Field(..., description="A suggested follow-up question")
    expectedAnswerElements: Optional[str] = Field(None, description="Key points a strong answer covers")
    suggestedResources: List[SuggestedResource] = Field(default_factory=list)

    @field_validator('score')
    @classmethod
    def clamp_score(cls, v):
        return _clamp_score(v)

    @field_validator('suggestedResources', mode='before')
    @classmethod
    def default_resources(cls, v):
        return v or []

    @field_validator('expectedAnswerElements', mode='before')
    @classmethod
    def join_elements(cls, v):
        if isinstance(v, list):
            return "\n".join(str(item) for item in v)
        return v


# Video performance
class FacialSnapshot(BaseModel):
    expressions: Dict[str, float] = Field(default_factory=dict, description="Expression probabilities 0..1")
    timestamp: Optional[float] = Field(None, description="Milliseconds since recording started")


class FacialDataSummary(BaseModel):
    totalSamples: int
    detectedSamples: int
    presenceRatio: float
    longestAbsenceRun: int
    dominantCounts: Dict[str, int]
    meanExpressions: Dict[str, float]
    dominantChanges: int


class AnalyzeVideoPerformanceRequest(BaseModel):
    facialData: Optional[List[Optional[FacialSnapshot]]] = None
    facialDataJson: Optional[str] = None

    @model_validator(mode='after')
    def require_one_source(self):
        if self.facialData is None and self.facialDataJson is None:
            raise ValueError('Either facialData or facialDataJson is required')
        return self


class AnalyzeVideoPerformanceOutput(BaseModel):
    nervousnessAnalysis: str
    confidenceScore: float
    gazeAnalysis: str
    cheatingSuspicion: bool = False

    @field_validator('confidenceScore')
    @classmethod
    def clamp_confidence(cls, v):
        return _clamp_score(v)


# Interview sessions
class InterviewLogEntryResponse(BaseModel):
    questionIndex: int
    question: str
    mediaMimeType: Optional[str] = None
    mediaSize: Optional[int] = None
    transcribedAnswer: Optional[str] = None
    evaluation: Optional[EvaluateAnswerOutput] = None
    videoAnalysis: Optional[AnalyzeVideoPerformanceOutput] = None
    scoreBand: str


class SessionResponse(BaseModel):
    id: str
    stage: InterviewStage
    resumeData: Optional[ParseResumeOutput] = None
    resumeSummary: Optional[str] = None
    questions: List[str] = Field(default_factory=list)
    currentQuestionIndex: int = 0
    currentQuestion: Optional[str] = None
    errorMessage: Optional[str] = None
    lastEntry: Optional[InterviewLogEntryResponse] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class InterviewSummaryResponse(BaseModel):
    sessionId: str
    stage: InterviewStage
    totalQuestions: int
    answeredQuestions: int
    averageScore: Optional[float] = None
    averageBand: str
    entries: List[InterviewLogEntryResponse]
