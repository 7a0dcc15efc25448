"""
Data model for skill matching.

Attributes are snake_case; JSON uses the camelCase names skill indexes and
hook callers already speak (filePatterns, skillMdPath, totalSkillsScanned...).
Serialize with model_dump(by_alias=True).
"""

from dataclasses import dataclass
from typing import Annotated, Generic, List, Optional, Tuple, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from config import MAX_PROMPT_CHARS, MAX_SCORE


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ---------- Skill Catalog ----------

class SkillFrontmatter(_Schema):
    """The required part of a SKILL.md frontmatter block."""
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class DiscoveredSkill(_Schema):
    """
    One loadable skill as seen by the matcher.
    Built once when the catalog loads and never mutated afterwards.
    """
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    keywords: Tuple[str, ...] = ()
    file_patterns: Tuple[str, ...] = ()
    skill_path: str = Field(..., min_length=1)
    skill_md_path: str = Field(..., min_length=1)

    @field_validator("keywords")
    @classmethod
    def _normalize_keywords(cls, keywords: Tuple[str, ...]) -> Tuple[str, ...]:
        # A blank keyword is a substring of every prompt
        return tuple(kw.lower() for kw in keywords if kw.strip())

    @field_validator("file_patterns")
    @classmethod
    def _drop_blank_patterns(cls, patterns: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(p for p in patterns if p.strip())


# ---------- Matching ----------

class MatchContext(_Schema):
    """Per-request signals besides the prompt. working_directory is not scored yet."""
    open_files: Tuple[str, ...] = ()
    working_directory: Optional[str] = None


class MatchDetails(_Schema):
    """Per-signal breakdown behind a confidence value."""
    keyword_matches: Tuple[str, ...] = ()
    file_matches: Tuple[str, ...] = ()
    content_matches: Tuple[str, ...] = ()
    keyword_score: int = Field(default=0, ge=0, le=MAX_SCORE)
    file_score: int = Field(default=0, ge=0, le=MAX_SCORE)
    content_score: int = Field(default=0, ge=0, le=MAX_SCORE)


class SkillMatch(_Schema):
    skill: DiscoveredSkill
    confidence: int = Field(..., ge=0, le=MAX_SCORE)
    matched_keywords: Tuple[str, ...] = ()  # same as details.keyword_matches, kept for older callers
    details: MatchDetails


# ---------- Boundary ----------

Prompt = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_PROMPT_CHARS)
]


class GetRelevantSkillsInput(_Schema):
    """Request accepted from the hook / tool layer."""
    prompt: Prompt
    open_files: Optional[List[str]] = None
    working_directory: Optional[str] = None

    def to_context(self) -> MatchContext:
        return MatchContext(
            open_files=tuple(self.open_files or ()),
            working_directory=self.working_directory,
        )


class GetRelevantSkillsOutput(_Schema):
    matches: List[SkillMatch]
    total_skills_scanned: int = Field(..., ge=0)


# ---------- Result ----------

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]
