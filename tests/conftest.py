"""
Shared fixtures: a skill factory, a throwaway project with a .claude/ tree,
and logger cleanup between tests.
"""

import logging
import sys
from pathlib import Path

import pytest

# Make scripts/ importable when running without an installed package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))

from logger import ROOT_LOGGER_NAME
from schemas import DiscoveredSkill


def make_skill(name="demo-skill", keywords=(), file_patterns=(), description=None):
    return DiscoveredSkill(
        name=name,
        description=description or f"{name} description",
        keywords=list(keywords),
        file_patterns=list(file_patterns),
        skill_path=f"/skills/{name}",
        skill_md_path=f"/skills/{name}/SKILL.md",
    )


def write_skill_md(skills_dir: Path, name: str, frontmatter: str, body: str = "# Instructions\n") -> Path:
    skill_dir = skills_dir / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    path = skill_dir / "SKILL.md"
    path.write_text(f"---\n{frontmatter}\n---\n{body}", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_logging():
    # setup_logger() binds a handler to whatever sys.stderr is at call time
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers = [logging.NullHandler()]
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def project(tmp_path):
    """
    tmp/proj/            project root
    tmp/proj/.claude/    allowed directory
    tmp/proj/.claude/skills/
    tmp/outside/         not part of the project
    """
    root = tmp_path.resolve()
    proj = root / "proj"
    claude = proj / ".claude"
    skills = claude / "skills"
    skills.mkdir(parents=True)
    (root / "outside").mkdir()
    return {"root": proj, "claude": claude, "skills": skills, "outside": root / "outside"}
