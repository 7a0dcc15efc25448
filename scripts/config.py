"""
Skill Matcher configuration constants.
"""

import os
import pathlib

# --- Paths ---
CLAUDE_DIR = pathlib.Path(
    os.environ.get("SKILL_MATCHER_CLAUDE_DIR", pathlib.Path.cwd() / ".claude")
).absolute()
SKILLS_DIR = CLAUDE_DIR / "skills"
INDEX_FILENAME = "index.json"
SKILL_FILENAME = "SKILL.md"

# Optional YAML file overriding the built-in semantic categories
SEMANTIC_TABLE_PATH = os.environ.get("SKILL_MATCHER_SEMANTIC_TABLE") or None

# --- Matching Threshold (confidence out of 100) ---
def _env_int(name: str, default: int) -> int:
    """Integer from the environment; unset or non-numeric values give the default."""
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


DEFAULT_MIN_CONFIDENCE = _env_int("SKILL_MATCHER_MIN_CONFIDENCE", 70)

# --- Scoring Weights (must sum to 1.0) ---
WEIGHT_KEYWORDS = 0.40
WEIGHT_FILES = 0.30
WEIGHT_CONTENT = 0.30

# --- Per-signal scoring: first match gives BASE, each additional adds STEP ---
KEYWORD_BASE_SCORE = 70
KEYWORD_STEP = 5
FILE_BASE_SCORE = 80
FILE_STEP = 10
CONTENT_BASE_SCORE = 70
CONTENT_STEP = 10
MAX_SCORE = 100

# --- Input Limits ---
MAX_PROMPT_CHARS = 10000

# --- Injection Limits ---
MAX_SKILL_CONTENT_CHARS = 8000  # truncate SKILL.md beyond this

# --- Debug ---
DEBUG = os.environ.get("SKILL_MATCHER_DEBUG", "").lower() in ("1", "true", "yes")
