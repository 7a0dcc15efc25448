"""
Data abstraction layer for skill catalogs.
Provides LocalRegistry (prebuilt index.json) and SkillDirRegistry
(SKILL.md discovery). Skill content is only ever read through the
path validator.
"""

import json
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from config import CLAUDE_DIR, INDEX_FILENAME, SKILL_FILENAME, SKILLS_DIR
from logger import get_logger
from sanitize import sanitize_error_for_logging
from schemas import DiscoveredSkill, Err, Ok, Result, SkillFrontmatter
from security import SecurityError, SecurityReason, validate_is_file, validate_path

log = get_logger("registry")


class SkillRegistry(ABC):
    """Abstract base for skill data sources."""

    def __init__(self, allowed_dir=None):
        self.allowed_dir = Path(allowed_dir or CLAUDE_DIR)

    @abstractmethod
    def fetch_index(self) -> Optional[dict]:
        """Fetch the skill index ({"skills": [...]}). Returns parsed data or None."""
        ...

    def fetch_skill_content(self, skill: DiscoveredSkill) -> Result[str, SecurityError]:
        """Read a skill's SKILL.md after validating its path against allowed_dir."""
        checked = validate_path(skill.skill_md_path, str(self.allowed_dir))
        if not checked.ok:
            log.warning(
                f"skill '{skill.name}' content rejected: {checked.error.reason.value} "
                f"({sanitize_error_for_logging(checked.error)})"
            )
            return checked

        is_file = validate_is_file(checked.value)
        if not is_file.ok:
            log.warning(f"skill '{skill.name}' content rejected: {is_file.error.reason.value}")
            return is_file

        try:
            return Ok(Path(checked.value).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            log.warning(f"cannot read skill '{skill.name}': {sanitize_error_for_logging(e)}")
            return Err(SecurityError(
                f"Cannot read file: {skill.skill_md_path}",
                skill.skill_md_path,
                _reason_for_read_error(e),
            ))


class LocalRegistry(SkillRegistry):
    """
    Reads a prebuilt index.json listing skills in the catalog format
    (name, description, keywords, filePatterns, skillPath, skillMdPath).
    Relative paths in the index are taken relative to the index file.
    """

    def __init__(self, index_path=None, allowed_dir=None):
        super().__init__(allowed_dir)
        self.index_path = Path(index_path or SKILLS_DIR / INDEX_FILENAME)

    def fetch_index(self) -> Optional[dict]:
        if not self.index_path.exists():
            return None
        try:
            data = json.loads(self.index_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            log.warning(f"unreadable index {self.index_path.name}: {sanitize_error_for_logging(e)}")
            return None
        if not isinstance(data, dict):
            log.warning(f"index {self.index_path.name} is not a JSON object")
            return None

        base = self.index_path.parent
        for entry in data.get("skills", []) or []:
            if not isinstance(entry, dict):
                continue
            for key in ("skillPath", "skillMdPath"):
                value = entry.get(key)
                if isinstance(value, str) and value and not Path(value).is_absolute():
                    entry[key] = str(base / value)
        return data


class SkillDirRegistry(SkillRegistry):
    """
    Discovers skills as <skills_dir>/<skill>/SKILL.md.

    Frontmatter supplies name and description (required) plus optional
    keywords and filePatterns / file_patterns. Without frontmatter
    keywords, a "## Keywords" section in the body is used.
    """

    def __init__(self, skills_dir=None, allowed_dir=None):
        super().__init__(allowed_dir)
        self.skills_dir = Path(skills_dir or SKILLS_DIR)

    def fetch_index(self) -> Optional[dict]:
        if not self.skills_dir.is_dir():
            log.debug(f"skills directory not found: {self.skills_dir}")
            return None

        skills = []
        for skill_dir in sorted(self.skills_dir.iterdir()):
            if not skill_dir.is_dir() or skill_dir.name.startswith("."):
                continue
            skill_md = skill_dir / SKILL_FILENAME
            if not skill_md.is_file():
                continue
            entry = self._parse_skill_md(skill_md)
            if entry is not None:
                skills.append(entry)

        return {"skills": skills}

    def _parse_skill_md(self, skill_md: Path) -> Optional[Dict[str, Any]]:
        """Build one index entry from a SKILL.md file, or None if it is unusable."""
        try:
            content = skill_md.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.warning(f"cannot read {skill_md.parent.name}/{SKILL_FILENAME}: {sanitize_error_for_logging(e)}")
            return None

        frontmatter, body = parse_frontmatter(content)
        try:
            meta = SkillFrontmatter.model_validate(frontmatter)
        except ValidationError as e:
            log.warning(f"skipping skill '{skill_md.parent.name}': invalid frontmatter ({e.__class__.__name__})")
            return None

        keywords = _as_list(frontmatter.get("keywords"))
        if not keywords:
            keywords = parse_keywords_section(body)
        file_patterns = _as_list(frontmatter.get("filePatterns", frontmatter.get("file_patterns")))

        return {
            "name": meta.name,
            "description": meta.description,
            "keywords": keywords,
            "filePatterns": file_patterns,
            "skillPath": str(skill_md.parent),
            "skillMdPath": str(skill_md),
        }


# ---------- SKILL.md parsing ----------

def parse_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """
    Split YAML frontmatter (delimited by --- lines) from the markdown body.
    Returns ({}, content) when there is no valid frontmatter.
    """
    if not content.startswith("---"):
        return {}, content

    end_idx = content.find("\n---", 3)
    if end_idx == -1:
        return {}, content

    frontmatter_str = content[3:end_idx].strip()
    body = content[end_idx + 4:].lstrip("-").strip()

    try:
        frontmatter = yaml.safe_load(frontmatter_str) or {}
    except yaml.YAMLError as e:
        log.warning(f"invalid YAML in frontmatter: {e.__class__.__name__}")
        return {}, content

    if not isinstance(frontmatter, dict):
        return {}, content
    return frontmatter, body


_KEYWORDS_SECTION_RE = re.compile(r"^## Keywords?\s*\n(.+?)(?=\n##|\Z)", re.DOTALL | re.MULTILINE)


def parse_keywords_section(body: str) -> List[str]:
    """Keywords from a '## Keywords' section: comma or line separated, '-' bullets allowed."""
    section = _KEYWORDS_SECTION_RE.search(body)
    if not section:
        return []
    keywords = []
    for line in section.group(1).splitlines():
        line = line.strip().lstrip("-*").strip()
        for kw in line.split(","):
            kw = kw.strip().strip("\"'`")
            if kw:
                keywords.append(kw)
    return keywords


def _as_list(value: Any) -> List[str]:
    """Frontmatter lists may be written as YAML lists or comma-separated strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return []


def _reason_for_read_error(error: BaseException) -> SecurityReason:
    if isinstance(error, FileNotFoundError):
        return SecurityReason.PATH_NOT_FOUND
    return SecurityReason.STAT_FAILED

