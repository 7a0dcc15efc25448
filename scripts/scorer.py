"""
Weighted confidence scoring for skill matching.
Pure text processing, no LLM calls.

Signals (0-100 raw score each):
- Keywords: 40% weight
- File patterns: 30% weight
- Content (semantic categories): 30% weight

Only signals that fire take part; their weights are renormalized so a skill
without file patterns is judged on keywords + content alone.
"""

import math
from typing import NamedTuple, Optional, Sequence, Tuple

from config import (
    WEIGHT_KEYWORDS,
    WEIGHT_FILES,
    WEIGHT_CONTENT,
    KEYWORD_BASE_SCORE,
    KEYWORD_STEP,
    FILE_BASE_SCORE,
    FILE_STEP,
    CONTENT_BASE_SCORE,
    CONTENT_STEP,
    MAX_SCORE,
)
from globs import glob_match
from schemas import DiscoveredSkill, MatchContext, MatchDetails
from semantic import DEFAULT_SEMANTIC_TABLE, SemanticTable


class SignalResult(NamedTuple):
    score: int
    matches: Tuple[str, ...]


class Weights(NamedTuple):
    keywords: float = WEIGHT_KEYWORDS
    files: float = WEIGHT_FILES
    content: float = WEIGHT_CONTENT


DEFAULT_WEIGHTS = Weights()

_NO_MATCH = SignalResult(0, ())


def _stepped_score(count: int, base: int, step: int) -> int:
    """First match gives base, each additional adds step, cap at 100."""
    if count == 0:
        return 0
    return min(MAX_SCORE, base + (count - 1) * step)


# ---------- Signal 1: Keywords ----------

def score_keywords(prompt: str, keywords: Sequence[str]) -> SignalResult:
    """
    Plain substring match of each keyword in the lowercased prompt.

    No word boundaries: "api" also fires inside "rapid". Matches are
    reported in keyword order, each keyword once.
    """
    prompt_lower = prompt.lower()
    matches = []
    for kw in keywords:
        if kw and kw in prompt_lower and kw not in matches:
            matches.append(kw)

    if not matches:
        return _NO_MATCH
    return SignalResult(_stepped_score(len(matches), KEYWORD_BASE_SCORE, KEYWORD_STEP), tuple(matches))


# ---------- Signal 2: File Patterns ----------

def score_files(open_files: Sequence[str], file_patterns: Sequence[str]) -> SignalResult:
    """
    Count open files matching any of the skill's globs.
    A file counts once, on its first matching pattern; order follows open_files.
    """
    if not open_files or not file_patterns:
        return _NO_MATCH

    matches = []
    for path in open_files:
        for pattern in file_patterns:
            if glob_match(path, pattern):
                matches.append(path)
                break

    if not matches:
        return _NO_MATCH
    return SignalResult(_stepped_score(len(matches), FILE_BASE_SCORE, FILE_STEP), tuple(matches))


# ---------- Signal 3: Semantic Content ----------

def score_content(
    prompt: str,
    skill_name: str,
    table: SemanticTable = DEFAULT_SEMANTIC_TABLE,
) -> SignalResult:
    """Test the prompt against each semantic category mapped to this skill."""
    prompt_lower = prompt.lower()
    matches = [
        category
        for category in table.categories_for(skill_name)
        if table.pattern(category).search(prompt_lower)
    ]

    if not matches:
        return _NO_MATCH
    return SignalResult(_stepped_score(len(matches), CONTENT_BASE_SCORE, CONTENT_STEP), tuple(matches))


# ---------- Combination ----------

def combine_weighted(signals: Sequence[Tuple[float, float]]) -> int:
    """
    Weighted average over (weight, score) pairs whose score is > 0.

    Active weights are renormalized to sum to 1.0, so a single active
    signal contributes its raw score. Returns 0 if nothing is active.
    Rounds half up.
    """
    active = [(w, s) for w, s in signals if s > 0]
    if not active:
        return 0

    total_weight = sum(w for w, _ in active)
    if total_weight <= 0:
        return 0

    weighted = sum(s * (w / total_weight) for w, s in active)
    # Trim float noise (69.99999999999999) before rounding
    return int(math.floor(round(weighted, 9) + 0.5))


def calculate_confidence(
    prompt: str,
    skill: DiscoveredSkill,
    context: Optional[MatchContext] = None,
    table: Optional[SemanticTable] = None,
    weights: Optional[Weights] = None,
) -> Tuple[int, MatchDetails]:
    """
    Compute the 0-100 confidence for one skill against one prompt.
    Never raises; missing inputs just leave their signal at 0.
    """
    table = table or DEFAULT_SEMANTIC_TABLE
    weights = weights or DEFAULT_WEIGHTS
    open_files = context.open_files if context is not None else ()

    kw = score_keywords(prompt, skill.keywords)
    files = score_files(open_files, skill.file_patterns)
    content = score_content(prompt, skill.name, table)

    if not (kw.score or files.score or content.score):
        return 0, MatchDetails()

    confidence = combine_weighted([
        (weights.keywords, kw.score),
        (weights.files, files.score),
        (weights.content, content.score),
    ])

    details = MatchDetails(
        keyword_matches=kw.matches,
        file_matches=files.matches,
        content_matches=content.matches,
        keyword_score=kw.score,
        file_score=files.score,
        content_score=content.score,
    )
    return confidence, details
