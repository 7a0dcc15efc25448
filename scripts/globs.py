"""
Path glob matching for skill file patterns.

Semantics follow the usual editor/tooling globs rather than fnmatch:
'*' and '?' stay inside one path segment, '**' spans any number of
segments, '{a,b}' expands to alternatives, and dotfiles are matched by
ordinary wildcards.
"""

import re
from functools import lru_cache
from typing import List


def expand_braces(pattern: str) -> List[str]:
    """
    Expand the first top-level {a,b,...} group, recursively.
    Groups without a top-level comma are left as literal text.
    """
    depth = 0
    start = -1
    commas = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            if depth == 0:
                start = i
                commas = []
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                if commas:
                    prefix = pattern[:start]
                    suffix = pattern[i + 1:]
                    bounds = [start] + commas + [i]
                    expanded = []
                    for a, b in zip(bounds, bounds[1:]):
                        option = pattern[a + 1:b]
                        expanded.extend(expand_braces(prefix + option + suffix))
                    return expanded
                # "{foo}" is literal; keep scanning after it
        elif ch == "," and depth == 1:
            commas.append(i)
        i += 1
    return [pattern]


def _segment_to_regex(segment: str) -> str:
    """Translate one path segment (no '/') to a regex fragment."""
    out = []
    i = 0
    n = len(segment)
    while i < n:
        ch = segment[i]
        if ch == "\\" and i + 1 < n:
            out.append(re.escape(segment[i + 1]))
            i += 2
            continue
        if ch == "*":
            # consecutive stars inside a segment behave like one
            while i < n and segment[i] == "*":
                i += 1
            out.append("[^/]*")
            continue
        if ch == "?":
            out.append("[^/]")
        elif ch == "[":
            end = segment.find("]", i + 2 if i + 1 < n and segment[i + 1] in "!^" else i + 1)
            if end == -1:
                out.append(re.escape(ch))
            else:
                body = segment[i + 1:end]
                negate = body[:1] in ("!", "^")
                if negate:
                    body = body[1:]
                body = body.replace("\\", "\\\\")
                char_class = f"[{'^/' if negate else ''}{body}]"
                try:
                    re.compile(char_class)
                except re.error:
                    # Unusable class such as [z-a]: the bracket is literal
                    out.append(re.escape(ch))
                else:
                    out.append(char_class)
                    i = end
        else:
            out.append(re.escape(ch))
        i += 1
    return "".join(out)


def _single_glob_to_regex(pattern: str) -> str:
    segments = pattern.split("/")
    last = len(segments) - 1
    parts = []
    for idx, seg in enumerate(segments):
        if seg == "**":
            parts.append("(?:.*/)?" if idx < last else ".*")
        else:
            parts.append(_segment_to_regex(seg) + ("/" if idx < last else ""))
    return "".join(parts)


@lru_cache(maxsize=512)
def glob_to_regex(pattern: str) -> "re.Pattern[str]":
    """Compile a glob (braces included) to an anchored regex."""
    alternatives = [_single_glob_to_regex(p) for p in expand_braces(pattern)]
    return re.compile("(?s:" + "|".join(f"(?:{a})" for a in alternatives) + r")\Z")


def glob_match(path: str, pattern: str) -> bool:
    """True if the whole path matches the glob pattern."""
    if not pattern:
        return False
    return glob_to_regex(pattern).match(path) is not None
