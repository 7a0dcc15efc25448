"""
Semantic categories for content scoring.

A category is a named, case-insensitive regex standing for a recurring user
intent ("create a webhook" -> webhook/callback). Each skill name maps to the
categories relevant to it; skills absent from the mapping never score on
this signal.
"""

import re
from pathlib import Path
from typing import Dict, Iterable, Mapping, Tuple, Union

import yaml

from logger import get_logger

log = get_logger("semantic")

DEFAULT_PATTERNS: Dict[str, str] = {
    "webhook/callback":
        r"\b(webhook|callback|event.*handler|api.*endpoint|http.*action|external.*api|payload|signature.*verif)",
    "payment/stripe":
        r"\b(stripe|payment|checkout|charge|subscription|invoice|billing|transaction|card)",
    "auth/session":
        r"\b(auth|login|signup|session|jwt|oauth|token|credentials|password|user.*management)",
    "database/schema":
        r"\b(schema|table|query|mutation|database|data.*model|field|index|migration)",
    "validation/security":
        r"\b(validat|sanitiz|xss|sql.*inject|csrf|rate.*limit|audit|pii|encrypt)",
    "realtime/convex":
        r"\b(realtime|live.*query|subscri|reactive|websocket|sse|push.*notif)",
    "forms/input":
        r"\b(form|input|textarea|checkbox|radio|select|validation|submit|field)",
    "api/http":
        r"\b(api|rest|endpoint|route|request|response|fetch|axios|http.*client)",
}

DEFAULT_SKILL_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "convex-patterns": ("webhook/callback", "database/schema", "realtime/convex", "api/http"),
    "security-patterns": ("validation/security", "auth/session", "payment/stripe"),
    "react-patterns": ("forms/input", "realtime/convex"),
    "typescript-patterns": ("database/schema", "validation/security"),
}


class SemanticTable:
    """
    Immutable pattern table + skill-to-category mapping, injected into the scorer.

    Usage:
        table = SemanticTable({"api/http": r"\\bapi"}, {"my-skill": ["api/http"]})
        table.categories_for("my-skill")   # ("api/http",)
    """

    def __init__(
        self,
        patterns: Mapping[str, Union[str, "re.Pattern[str]"]],
        skill_categories: Mapping[str, Iterable[str]],
    ):
        compiled = {}
        for name, pattern in patterns.items():
            if isinstance(pattern, re.Pattern):
                compiled[name] = pattern
                continue
            try:
                compiled[name] = re.compile(pattern, re.IGNORECASE | re.ASCII)
            except re.error as e:
                raise ValueError(f"invalid regex for category '{name}': {e}") from e
        self._patterns: Dict[str, "re.Pattern[str]"] = compiled

        mapping = {}
        for skill_name, categories in skill_categories.items():
            ordered = []
            for category in categories:
                if category not in compiled:
                    log.warning(f"skill '{skill_name}' references unknown category '{category}'")
                    continue
                if category not in ordered:
                    ordered.append(category)
            mapping[skill_name] = tuple(ordered)
        self._skill_categories: Dict[str, Tuple[str, ...]] = mapping

    @property
    def category_names(self) -> Tuple[str, ...]:
        return tuple(self._patterns)

    def pattern(self, category: str) -> "re.Pattern[str]":
        return self._patterns[category]

    def categories_for(self, skill_name: str) -> Tuple[str, ...]:
        return self._skill_categories.get(skill_name, ())


DEFAULT_SEMANTIC_TABLE = SemanticTable(DEFAULT_PATTERNS, DEFAULT_SKILL_CATEGORIES)


def load_semantic_table(path: Union[str, Path], base: SemanticTable = DEFAULT_SEMANTIC_TABLE) -> SemanticTable:
    """
    Load a YAML table and layer it over `base`.

    Expected shape:
        patterns:
          i18n/locale: "\\b(i18n|locale|translat)"
        skills:
          i18n-patterns: [i18n/locale, forms/input]

    Raises ValueError for a malformed file or an invalid regex.
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ValueError(f"cannot read semantic table {path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"semantic table {path.name} must be a mapping")

    patterns = data.get("patterns") or {}
    skills = data.get("skills") or {}
    if not isinstance(patterns, dict) or not isinstance(skills, dict):
        raise ValueError(f"semantic table {path.name}: 'patterns' and 'skills' must be mappings")

    patterns = {str(k): str(v) for k, v in patterns.items()}
    skills = {
        str(k): [v] if isinstance(v, str) else [str(c) for c in (v or [])]
        for k, v in skills.items()
    }

    # Unknown-category checks need the merged pattern set
    merged_patterns = {**base._patterns}
    merged_patterns.update(SemanticTable(patterns, {})._patterns)
    table = SemanticTable(merged_patterns, {**base._skill_categories, **skills})
    log.debug(f"loaded semantic table {path.name}: {len(patterns)} patterns, {len(skills)} skills")
    return table
