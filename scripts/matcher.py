"""
Catalog-wide skill matching: score every skill, filter, rank.
"""

from typing import List, Optional, Sequence

from config import DEFAULT_MIN_CONFIDENCE
from logger import get_logger
from schemas import (
    DiscoveredSkill,
    GetRelevantSkillsInput,
    GetRelevantSkillsOutput,
    MatchContext,
    SkillMatch,
)
from scorer import Weights, calculate_confidence
from semantic import SemanticTable

log = get_logger("matcher")


def match_prompt_to_skills(
    prompt: str,
    skills: Sequence[DiscoveredSkill],
    context: Optional[MatchContext] = None,
    min_confidence: int = DEFAULT_MIN_CONFIDENCE,
    table: Optional[SemanticTable] = None,
    weights: Optional[Weights] = None,
) -> List[SkillMatch]:
    """
    Match prompt against all skills, return matches sorted by confidence (highest first).
    Only includes skills with confidence >= min_confidence.

    Equal confidences keep catalog order (list.sort is stable, also with reverse=True).
    """
    results = []

    for skill in skills:
        confidence, details = calculate_confidence(prompt, skill, context, table, weights)
        if confidence >= min_confidence:
            results.append(SkillMatch(
                skill=skill,
                confidence=confidence,
                matched_keywords=details.keyword_matches,
                details=details,
            ))

    # Sort by confidence descending
    results.sort(key=lambda m: m.confidence, reverse=True)
    return results


def get_relevant_skills(
    request: GetRelevantSkillsInput,
    skills: Sequence[DiscoveredSkill],
    min_confidence: int = DEFAULT_MIN_CONFIDENCE,
    table: Optional[SemanticTable] = None,
) -> GetRelevantSkillsOutput:
    """Boundary operation: validated request in, ranked matches plus scan count out."""
    matches = match_prompt_to_skills(
        request.prompt,
        skills,
        context=request.to_context(),
        min_confidence=min_confidence,
        table=table,
    )
    log.debug(
        f"{len(matches)} of {len(skills)} skills at or above {min_confidence}: "
        f"{[(m.skill.name, m.confidence) for m in matches]}"
    )
    return GetRelevantSkillsOutput(matches=matches, total_skills_scanned=len(skills))
