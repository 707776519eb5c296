"""
Unit tests for prompt templates.
"""
import json

import pytest

from interview_ace.utils.prompt_templates import PromptTemplates


class TestPromptTemplates:
    """Test cases for PromptTemplates."""

    @pytest.mark.unit
    def test_resume_parsing_prompt_includes_text_and_keys(self):
        prompt = PromptTemplates.get_resume_parsing_prompt("Jane Doe, Python developer")
        assert "Jane Doe, Python developer" in prompt
        for key in ("workExperience", "skills", "projects"):
            assert key in prompt

    @pytest.mark.unit
    def test_question_generation_prompt_mentions_limit(self):
        prompt = PromptTemplates.get_question_generation_prompt("Skills: Python", 7)
        assert "at most 7 questions" in prompt
        assert "Resume Data: Skills: Python" in prompt
        assert '"questions"' in prompt

    @pytest.mark.unit
    def test_evaluation_prompt_includes_all_inputs(self):
        prompt = PromptTemplates.get_evaluation_prompt("Why Python?", "It is readable.", "Skills: Python")
        assert "Question: Why Python?" in prompt
        assert "Answer: It is readable." in prompt
        assert "Resume Data: Skills: Python" in prompt
        for key in ("evaluation", "score", "followUpQuestion", "expectedAnswerElements", "suggestedResources"):
            assert key in prompt

    @pytest.mark.unit
    def test_video_analysis_prompt_embeds_json(self):
        facial_data = [{"expressions": {"neutral": 0.9}}, None]
        statistics = {"totalSamples": 2, "detectedSamples": 1}
        prompt = PromptTemplates.get_video_analysis_prompt(facial_data, statistics)
        assert json.dumps(facial_data) in prompt
        assert json.dumps(statistics) in prompt
        assert "cheatingSuspicion" in prompt
