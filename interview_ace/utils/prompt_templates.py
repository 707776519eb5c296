"""
Centralized prompt templates for all LLM-backed flows.
"""
import json
from typing import Any, Dict, List, Optional

JSON_ONLY_INSTRUCTION = "Respond with a single JSON object only. Do not wrap it in markdown and do not add commentary."


class PromptTemplates:
    """Centralized prompt templates for all AI services."""

    RESUME_PARSING_SYSTEM = """You are an expert resume parser. You extract the key facts from a candidate's resume
    so that an interviewer can prepare personalized questions."""

    QUESTION_GENERATION_SYSTEM = """You are an expert career coach specializing in helping candidates prepare for job interviews."""

    EVALUATION_SYSTEM = """You are an expert interview evaluator."""

    VIDEO_ANALYSIS_SYSTEM = """You are an expert interview coach who specializes in analyzing non-verbal communication."""

    @staticmethod
    def get_resume_parsing_prompt(resume_text: str) -> str:
        return f"""
        Extract the following information from the resume below:
        - workExperience: one entry per position, summarizing role, company and key responsibilities
        - skills: individual technical and soft skills
        - projects: one entry per project, summarizing what was built and with what

        Return JSON in exactly this shape:
        {{
            "workExperience": ["..."],
            "skills": ["..."],
            "projects": ["..."]
        }}
        Use an empty list for any section the resume does not contain.

        Resume:
        {resume_text}
        """

    @staticmethod
    def get_question_generation_prompt(resume_data: str, max_questions: int) -> str:
        return f"""
        Based on the following information extracted from the candidate's resume, generate a list of interview questions
        that are relevant to their experience and skills.
        The questions should be challenging but fair, and designed to assess the candidate's suitability for a role.
        Generate at most {max_questions} questions.

        Return the interview questions as a JSON array under the "questions" key:
        {{
            "questions": ["question 1", "question 2"]
        }}

        Resume Data: {resume_data}
        """

    @staticmethod
    def get_evaluation_prompt(question: str, answer: str, resume_data: str) -> str:
        return f"""
        Please evaluate the candidate's answer to the question, taking into account their resume data.

        Question: {question}
        Answer: {answer}
        Resume Data: {resume_data}

        Consider the following:
        - Did the candidate answer the question directly?
        - Did the candidate provide sufficient detail?
        - Did the candidate use specific examples to support their answer?
        - How does the answer relate to the information provided in their resume?

        In addition to your evaluation, suggest ONE follow-up question that would help you better assess the
        candidate's skills and experience, based on the question, the answer and the resume.

        Return JSON in exactly this shape:
        {{
            "evaluation": "<your evaluation of the answer>",
            "score": <number from 0 to 10>,
            "expectedAnswerElements": "<the key points a strong answer would cover>",
            "suggestedResources": [{{"title": "<resource title>", "url": "<https url>"}}],
            "followUpQuestion": "<one follow-up question>"
        }}
        """

    @staticmethod
    def get_video_analysis_prompt(facial_data: List[Optional[Dict[str, Any]]], statistics: Dict[str, Any]) -> str:
        facial_data_json = json.dumps(facial_data)
        statistics_json = json.dumps(statistics)
        return f"""
        Analyze the provided time-series data of a candidate's facial expressions recorded during an interview answer.

        The input is a JSON array of snapshots. Each snapshot contains expression probabilities (0 to 1)
        or is null if no face was detected.

        Facial Data Log:
        {facial_data_json}

        Summary statistics computed from the log:
        {statistics_json}

        Based on this data, provide the following analysis:
        1. nervousnessAnalysis: Evaluate the stability of expressions. Frequent fluctuations between neutral, surprised,
           or fearful expressions might indicate nervousness. A consistent neutral or happy expression suggests calmness.
           Provide a brief textual summary.
        2. confidenceScore: On a scale of 0 to 10, how confident does the candidate appear? High confidence can be
           inferred from a high average 'happy' or 'neutral' score. Low confidence might be indicated by high 'sad',
           'fearful', or 'surprised' scores.
        3. gazeAnalysis: The data does not include head pose or eye tracking. State that direct gaze analysis is not
           possible. You can make a general comment on focus based on whether expressions were detected consistently.
           For example, if many entries are null, it might suggest the user was not consistently in front of the camera.
        4. cheatingSuspicion: Set this flag to false. Since eye movement away from the screen cannot be tracked with the
           given data, cheating cannot be reliably detected. Only set it to true if there are large gaps in the data
           (many consecutive null entries) where no face was detected, which could imply the user left the camera's view.

        Return JSON in exactly this shape:
        {{
            "nervousnessAnalysis": "...",
            "confidenceScore": <number from 0 to 10>,
            "gazeAnalysis": "...",
            "cheatingSuspicion": false
        }}
        """
