"""
Tests for request validation and the immutable data model.
"""

import pytest
from pydantic import ValidationError

from conftest import make_skill
from schemas import (
    DiscoveredSkill,
    Err,
    GetRelevantSkillsInput,
    MatchDetails,
    Ok,
    SkillMatch,
)


class TestGetRelevantSkillsInput:

    def test_prompt_is_trimmed(self):
        assert GetRelevantSkillsInput(prompt="  convex query \n").prompt == "convex query"

    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    def test_blank_prompt_rejected(self, prompt):
        with pytest.raises(ValidationError):
            GetRelevantSkillsInput(prompt=prompt)

    def test_length_limit(self):
        assert len(GetRelevantSkillsInput(prompt="a" * 10000).prompt) == 10000
        with pytest.raises(ValidationError):
            GetRelevantSkillsInput(prompt="a" * 10001)

    def test_limit_applies_after_trimming(self):
        assert GetRelevantSkillsInput(prompt=" " + "a" * 10000 + " ").prompt == "a" * 10000

    def test_accepts_camel_case_json(self):
        request = GetRelevantSkillsInput.model_validate({
            "prompt": "hi",
            "openFiles": ["a.ts"],
            "workingDirectory": "/work",
        })
        context = request.to_context()
        assert context.open_files == ("a.ts",)
        assert context.working_directory == "/work"

    def test_context_without_open_files(self):
        assert GetRelevantSkillsInput(prompt="hi").to_context().open_files == ()

    def test_prompt_must_be_string(self):
        with pytest.raises(ValidationError):
            GetRelevantSkillsInput.model_validate({"prompt": 42})


class TestDiscoveredSkill:

    def test_keywords_lowercased_and_blanks_dropped(self):
        skill = make_skill(keywords=["Convex", "", "  ", "API"])
        assert skill.keywords == ("convex", "api")

    def test_blank_patterns_dropped(self):
        assert make_skill(file_patterns=["**/*.ts", ""]).file_patterns == ("**/*.ts",)

    def test_frozen(self):
        skill = make_skill()
        with pytest.raises(ValidationError):
            skill.name = "other"

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            DiscoveredSkill.model_validate({"name": "x", "description": "y"})

    def test_dump_uses_camel_case(self):
        dumped = make_skill(file_patterns=["a"]).model_dump(by_alias=True)
        assert set(dumped) == {"name", "description", "keywords", "filePatterns", "skillPath", "skillMdPath"}


class TestSkillMatch:

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            SkillMatch(skill=make_skill(), confidence=101, details=MatchDetails())
        with pytest.raises(ValidationError):
            SkillMatch(skill=make_skill(), confidence=-1, details=MatchDetails())

    def test_signal_score_bounds(self):
        with pytest.raises(ValidationError):
            MatchDetails(keyword_score=120)


class TestResult:

    def test_ok(self):
        result = Ok("content")
        assert result.ok
        assert result.value == "content"

    def test_err(self):
        result = Err(ValueError("nope"))
        assert not result.ok
        assert str(result.error) == "nope"
