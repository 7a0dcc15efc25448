"""
Redaction of paths and PII from text before it reaches a log.
"""

import re

_ABSOLUTE_PATH_RE = re.compile(r"/[^\s]+")
_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_SSN_RE = re.compile(r"\b\d{3}-\d{2}-\d{4}\b")


def sanitize_message(text: str) -> str:
    """Replace absolute paths, email addresses and SSN-like numbers with placeholders."""
    # Emails first: the path pattern would otherwise swallow "user@host/..." fragments
    text = _EMAIL_RE.sub("[EMAIL]", text)
    text = _ABSOLUTE_PATH_RE.sub("[PATH]", text)
    text = _SSN_RE.sub("[SSN]", text)
    return text


def sanitize_error_for_logging(error: BaseException) -> str:
    """Sanitized message of an exception, safe to write to a log."""
    return sanitize_message(str(error))
