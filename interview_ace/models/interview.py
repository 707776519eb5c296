"""
Interview wizard stages and the transitions allowed between them.
"""
from enum import Enum
from typing import Dict, FrozenSet

from interview_ace.exceptions import InvalidStageTransitionError


class InterviewStage(str, Enum):
    INITIAL = "INITIAL"
    RESUME_PARSING = "RESUME_PARSING"
    RESUME_PARSED = "RESUME_PARSED"
    GENERATING_QUESTIONS = "GENERATING_QUESTIONS"
    QUESTIONS_READY = "QUESTIONS_READY"
    INTERVIEWING = "INTERVIEWING"
    PROCESSING_ANSWER = "PROCESSING_ANSWER"
    QUESTION_EVALUATED = "QUESTION_EVALUATED"
    INTERVIEW_COMPLETE = "INTERVIEW_COMPLETE"
    ERROR_STATE = "ERROR_STATE"


# Restart (any stage -> INITIAL) is handled in can_transition.
TRANSITIONS: Dict[InterviewStage, FrozenSet[InterviewStage]] = {
    InterviewStage.INITIAL: frozenset({InterviewStage.RESUME_PARSING}),
    InterviewStage.RESUME_PARSING: frozenset({InterviewStage.RESUME_PARSED, InterviewStage.ERROR_STATE}),
    InterviewStage.RESUME_PARSED: frozenset({InterviewStage.GENERATING_QUESTIONS, InterviewStage.ERROR_STATE}),
    InterviewStage.GENERATING_QUESTIONS: frozenset({InterviewStage.QUESTIONS_READY, InterviewStage.ERROR_STATE}),
    InterviewStage.QUESTIONS_READY: frozenset({InterviewStage.INTERVIEWING}),
    InterviewStage.INTERVIEWING: frozenset({InterviewStage.PROCESSING_ANSWER}),
    InterviewStage.PROCESSING_ANSWER: frozenset({InterviewStage.QUESTION_EVALUATED, InterviewStage.ERROR_STATE}),
    InterviewStage.QUESTION_EVALUATED: frozenset({InterviewStage.INTERVIEWING, InterviewStage.INTERVIEW_COMPLETE}),
    InterviewStage.INTERVIEW_COMPLETE: frozenset(),
    InterviewStage.ERROR_STATE: frozenset(),
}

BUSY_STAGES = frozenset({
    InterviewStage.RESUME_PARSING,
    InterviewStage.GENERATING_QUESTIONS,
    InterviewStage.PROCESSING_ANSWER,
})


def can_transition(src: InterviewStage, dst: InterviewStage) -> bool:
    if dst == InterviewStage.INITIAL:
        return True
    return dst in TRANSITIONS[src]


def assert_transition(src: InterviewStage, dst: InterviewStage) -> None:
    if not can_transition(src, dst):
        detail = "an operation is already in progress" if src in BUSY_STAGES else "not allowed"
        raise InvalidStageTransitionError(
            f"Cannot move interview from {src.value} to {dst.value}: {detail}",
            context={"from": src.value, "to": dst.value}
        )
