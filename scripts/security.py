"""
Path validation for skill file access.

Guards reads under the .claude/ directory against ../ traversal and symlink
escape. Every check returns a Result; expected failures are never raised.

Symlinks inside .claude/ may point anywhere in the project (the parent of
.claude/), but not outside it.
"""

import os
import stat
from enum import Enum

from schemas import Err, Ok, Result


class SecurityReason(str, Enum):
    ALLOWED_DIR_NOT_FOUND = "allowed_dir_not_found"
    OUTSIDE_ALLOWED_DIRECTORY = "outside_allowed_directory"
    PATH_NOT_FOUND = "path_not_found"
    PATH_RESOLUTION_FAILED = "path_resolution_failed"
    SYMLINK_OUTSIDE_PROJECT = "symlink_outside_project"
    PATH_TRAVERSAL_DETECTED = "path_traversal_detected"
    NOT_A_DIRECTORY = "not_a_directory"
    NOT_A_FILE = "not_a_file"
    STAT_FAILED = "stat_failed"


class SecurityError(Exception):
    """
    A rejected path. `reason` is for diagnostics; callers show end users
    only `public_message`.
    """

    public_message = "Access denied"

    def __init__(self, message: str, attempted_path: str, reason: SecurityReason):
        super().__init__(message)
        self.attempted_path = attempted_path
        self.reason = reason

    def __repr__(self):
        return f"SecurityError(reason={self.reason.value}, message={str(self)!r})"


def _with_sep(path: str) -> str:
    return path if path.endswith(os.sep) else path + os.sep


def validate_path(target_path: str, allowed_dir: str) -> Result[str, SecurityError]:
    """
    Validate that target_path lies within allowed_dir.

    Args:
        target_path: Path to validate (relative to cwd, or absolute)
        allowed_dir: Absolute path of the allowed directory (normally .claude/)

    Returns:
        Ok(canonical absolute path) or Err(SecurityError)
    """
    target_path = os.fspath(target_path)
    allowed_dir = os.fspath(allowed_dir)

    # Step 1: Canonical form of the allowed directory
    try:
        resolved_allowed = os.path.realpath(allowed_dir, strict=True)
    except (OSError, ValueError):
        return Err(SecurityError(
            f"Allowed directory does not exist: {allowed_dir}",
            allowed_dir,
            SecurityReason.ALLOWED_DIR_NOT_FOUND,
        ))

    # Step 2: Normalize and make absolute (no symlink resolution yet)
    normalized = os.path.normpath(target_path)
    absolute = os.path.abspath(normalized)

    # Step 3: The UNRESOLVED path must be inside the allowed directory
    if not absolute.startswith(_with_sep(resolved_allowed)):
        return Err(SecurityError(
            "Access denied: Path is outside allowed directory",
            target_path,
            SecurityReason.OUTSIDE_ALLOWED_DIRECTORY,
        ))

    # Step 4: Must exist to resolve symlinks
    if not os.path.exists(absolute):
        return Err(SecurityError(
            f"Path does not exist: {target_path}",
            target_path,
            SecurityReason.PATH_NOT_FOUND,
        ))

    # Step 5: Resolve symlinks
    try:
        resolved = os.path.realpath(absolute, strict=True)
    except (OSError, ValueError):
        return Err(SecurityError(
            f"Cannot resolve path: {target_path}",
            target_path,
            SecurityReason.PATH_RESOLUTION_FAILED,
        ))

    # Step 6: Resolved target must stay within the project (parent of allowed dir)
    project_root = os.path.dirname(resolved_allowed)
    if not resolved.startswith(_with_sep(project_root)):
        return Err(SecurityError(
            "Access denied: Symlink points outside project directory",
            target_path,
            SecurityReason.SYMLINK_OUTSIDE_PROJECT,
        ))

    # Step 7: No '..' segment may survive normalization
    if os.pardir in normalized.split(os.sep):
        return Err(SecurityError(
            f"Path traversal detected: {target_path}",
            target_path,
            SecurityReason.PATH_TRAVERSAL_DETECTED,
        ))

    return Ok(resolved)


def validate_is_directory(path: str) -> Result[None, SecurityError]:
    """Check that an already-validated path is a directory."""
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return Err(SecurityError(f"Cannot stat path: {path}", path, SecurityReason.STAT_FAILED))

    if not stat.S_ISDIR(st.st_mode):
        return Err(SecurityError(f"Path is not a directory: {path}", path, SecurityReason.NOT_A_DIRECTORY))
    return Ok(None)


def validate_is_file(path: str) -> Result[None, SecurityError]:
    """Check that an already-validated path is a regular file."""
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return Err(SecurityError(f"Cannot stat path: {path}", path, SecurityReason.STAT_FAILED))

    if not stat.S_ISREG(st.st_mode):
        return Err(SecurityError(f"Path is not a file: {path}", path, SecurityReason.NOT_A_FILE))
    return Ok(None)
