"""
Catalog loading and atomic reload.
"""

import threading
from typing import Any, Optional, Tuple

from pydantic import ValidationError

from config import INDEX_FILENAME, SKILLS_DIR
from logger import get_logger
from registry import LocalRegistry, SkillDirRegistry, SkillRegistry
from schemas import DiscoveredSkill

log = get_logger("index_loader")


def load_index(registry: Optional[SkillRegistry] = None) -> Optional[dict]:
    """
    Load the skill index from the registry (default: see _default_registry).
    Returns parsed index dict or None.
    """
    if registry is None:
        registry = _default_registry()

    index = registry.fetch_index()
    if index is None:
        log.debug(f"no index available from {type(registry).__name__}")
    return index


def get_skills_list(index: Optional[dict]) -> Tuple[DiscoveredSkill, ...]:
    """
    Validate the index's skill entries into an immutable catalog.
    Malformed entries are logged and skipped; a later duplicate name is dropped.
    """
    if not index:
        return ()

    skills = []
    seen = set()
    for entry in index.get("skills", []) or []:
        skill = _skill_from_entry(entry)
        if skill is None:
            continue
        if skill.name in seen:
            log.warning(f"duplicate skill name '{skill.name}', keeping the first")
            continue
        seen.add(skill.name)
        skills.append(skill)
    return tuple(skills)


def _skill_from_entry(entry: Any) -> Optional[DiscoveredSkill]:
    try:
        return DiscoveredSkill.model_validate(entry)
    except ValidationError as e:
        name = entry.get("name") if isinstance(entry, dict) else None
        log.warning(f"skipping malformed skill entry '{name}': {e.error_count()} validation error(s)")
        return None


class SkillCatalog:
    """
    Read-only skill catalog with whole-snapshot reload.

    Readers take `snapshot()` once per request and keep using it; `reload()`
    builds a complete new tuple before swapping the reference, so a request
    sees either the old catalog or the new one, never a mix.

    Usage:
        catalog = SkillCatalog(SkillDirRegistry(skills_dir))
        catalog.reload()
        skills = catalog.snapshot()
    """

    def __init__(self, registry: Optional[SkillRegistry] = None):
        self.registry = registry or _default_registry()
        self._skills: Tuple[DiscoveredSkill, ...] = ()
        self._lock = threading.Lock()

    def snapshot(self) -> Tuple[DiscoveredSkill, ...]:
        return self._skills

    def reload(self) -> int:
        """Rebuild from the registry. Returns the new catalog size."""
        with self._lock:
            skills = get_skills_list(load_index(self.registry))
            self._skills = skills
        log.debug(f"catalog loaded: {len(skills)} skills")
        return len(skills)

    def __len__(self):
        return len(self._skills)


def _default_registry() -> SkillRegistry:
    """
    Return the best available registry.
    Prefer a prebuilt index.json if one exists, otherwise scan SKILL.md files.
    """
    index_path = SKILLS_DIR / INDEX_FILENAME
    if index_path.exists():
        return LocalRegistry(index_path)
    return SkillDirRegistry(SKILLS_DIR)
