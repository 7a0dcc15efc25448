"""
Formats a matched skill's content for injection via systemMessage.
"""

from config import MAX_SKILL_CONTENT_CHARS
from logger import get_logger
from registry import SkillRegistry
from schemas import Result, SkillMatch
from security import SecurityError

log = get_logger("injector")


def load_skill_content(match: SkillMatch, registry: SkillRegistry) -> Result[str, SecurityError]:
    """Load SKILL.md content for a matched skill through the registry's path checks."""
    result = registry.fetch_skill_content(match.skill)
    if result.ok:
        log.debug(f"skill '{match.skill.name}' content loaded ({len(result.value)} chars)")
    return result


def format_injection(match: SkillMatch, content: str) -> str:
    """
    Format the systemMessage injection text.
    """
    skill = match.skill
    details = match.details

    # Truncate content if too long
    if len(content) > MAX_SKILL_CONTENT_CHARS:
        content = content[:MAX_SKILL_CONTENT_CHARS] + "\n\n[... content truncated ...]"

    signals = []
    if details.keyword_score:
        signals.append(f"keywords {details.keyword_score}: {', '.join(details.keyword_matches)}")
    if details.file_score:
        signals.append(f"files {details.file_score}: {len(details.file_matches)} open")
    if details.content_score:
        signals.append(f"content {details.content_score}: {', '.join(details.content_matches)}")

    lines = []
    lines.append(
        f"[skill-matcher] Automatically loaded skill: **{skill.name}** "
        f"(confidence: {match.confidence})"
    )
    if signals:
        lines.append(f"[skill-matcher] Signals: {'; '.join(signals)}")

    lines.append("")
    lines.append("--- BEGIN SKILL INSTRUCTIONS ---")
    lines.append(content)
    lines.append("--- END SKILL INSTRUCTIONS ---")
    lines.append("")
    lines.append(
        "[skill-matcher] Apply these skill instructions to the user's request. "
        "If the skill doesn't seem relevant, ignore these instructions and respond normally."
    )

    return "\n".join(lines)


def format_access_denied(match: SkillMatch) -> str:
    """Message for the caller when a skill's content failed path validation."""
    return (
        f"[skill-matcher] {SecurityError.public_message}: "
        f"could not load skill '{match.skill.name}'."
    )
