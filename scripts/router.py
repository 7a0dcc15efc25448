"""
Main entry point for the skill-matcher hook.
Reads a request JSON from stdin, runs matching, writes JSON to stdout.

Input:  {"prompt": "...", "openFiles": [...], "workingDirectory": "..."}
        (a hook payload's "cwd" is accepted as workingDirectory)
Output: --format json  {"matches": [...], "totalSkillsScanned": N}
        --format hook  {"systemMessage": "..."} for the top match, or nothing

Exit codes:
  0 - Always (never blocks user input)
"""

import argparse
import json
import os
import sys
import time
from pathlib import Path

# Add scripts dir to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from pydantic import ValidationError

import config
from index_loader import SkillCatalog
from injector import format_access_denied, format_injection, load_skill_content
from logger import setup_logger
from matcher import get_relevant_skills
from registry import LocalRegistry, SkillDirRegistry
from sanitize import sanitize_error_for_logging
from schemas import GetRelevantSkillsInput
from semantic import DEFAULT_SEMANTIC_TABLE, load_semantic_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Match a prompt against the skill catalog")
    parser.add_argument("--claude-dir", type=str, default=str(config.CLAUDE_DIR),
                        help="Allowed .claude directory (skill content must live under it)")
    parser.add_argument("--skills-dir", type=str, default=None,
                        help="Directory of <skill>/SKILL.md folders (default: <claude-dir>/skills)")
    parser.add_argument("--index", type=str, default=None, help="Prebuilt index.json to load instead")
    parser.add_argument("--min-confidence", type=int, default=config.DEFAULT_MIN_CONFIDENCE,
                        help="Minimum confidence 0-100 (default: %(default)s)")
    parser.add_argument("--semantic-table", type=str, default=config.SEMANTIC_TABLE_PATH,
                        help="YAML file extending the semantic categories")
    parser.add_argument("--format", choices=("json", "hook"), default="json", help="Output format")
    parser.add_argument("--debug", action="store_true", default=config.DEBUG, help="Verbose stderr logging")
    return parser


def build_catalog(args: argparse.Namespace) -> SkillCatalog:
    claude_dir = Path(args.claude_dir)
    if args.index:
        registry = LocalRegistry(args.index, allowed_dir=claude_dir)
    else:
        skills_dir = Path(args.skills_dir) if args.skills_dir else claude_dir / "skills"
        registry = SkillDirRegistry(skills_dir, allowed_dir=claude_dir)
    catalog = SkillCatalog(registry)
    catalog.reload()
    return catalog


def read_request(raw: str) -> GetRelevantSkillsInput:
    """Parse stdin JSON into a validated request. Raises ValueError / ValidationError."""
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError("request must be a JSON object")
    if "workingDirectory" not in payload and "cwd" in payload:
        payload["workingDirectory"] = payload["cwd"]
    return GetRelevantSkillsInput.model_validate(payload)


def write_json(data: dict):
    # Force UTF-8 for Windows compatibility
    sys.stdout.buffer.write(json.dumps(data, ensure_ascii=False).encode("utf-8"))
    sys.stdout.flush()


def main(argv=None):
    start_time = time.time()
    args = build_parser().parse_args(argv)
    log = setup_logger(debug=args.debug)

    try:
        # Read request from stdin (force UTF-8 for Windows compatibility)
        raw = sys.stdin.buffer.read().decode("utf-8")
        if not raw.strip():
            return 0

        try:
            request = read_request(raw)
        except (ValueError, ValidationError) as e:
            log.debug(f"rejected request: {sanitize_error_for_logging(e)}")
            return 0

        table = DEFAULT_SEMANTIC_TABLE
        if args.semantic_table:
            table = load_semantic_table(args.semantic_table)

        catalog = build_catalog(args)
        skills = catalog.snapshot()

        output = get_relevant_skills(request, skills, min_confidence=args.min_confidence, table=table)

        if args.format == "json":
            write_json(output.model_dump(mode="json", by_alias=True))
        elif output.matches:
            best = output.matches[0]
            content = load_skill_content(best, catalog.registry)
            if content.ok:
                message = format_injection(best, content.value)
            else:
                log.warning(
                    f"top match '{best.skill.name}' not loaded: {content.error.reason.value}"
                )
                message = format_access_denied(best)
            write_json({"systemMessage": message})

        elapsed = (time.time() - start_time) * 1000
        log.debug(
            f"{len(output.matches)} match(es) from {output.total_skills_scanned} skills ({elapsed:.0f}ms)"
        )

    except Exception as e:
        # Never crash, never block user input
        log.error(f"error: {sanitize_error_for_logging(e)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
