"""
Skill Matcher logging.
Diagnostics go to stderr (stdout carries the hook's JSON output) and every
record is sanitized before it is written.
"""

import logging
import sys

from config import DEBUG
from sanitize import sanitize_message

ROOT_LOGGER_NAME = "skill_matcher"

# Library default: silent until setup_logger() is called by an entry point
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class SanitizingFilter(logging.Filter):
    """Rewrites each record's message with paths and PII redacted."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = sanitize_message(record.getMessage())
        record.args = None
        return True


def setup_logger(debug: bool = DEBUG) -> logging.Logger:
    """
    Configure the skill_matcher logger with a single stderr handler.

    Debug mode shows everything; otherwise only warnings and errors.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    # Clear existing handlers
    logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("[skill-matcher][%(levelname)s] %(name)s: %(message)s")
    )
    handler.addFilter(SanitizingFilter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Get a child logger with the given name"""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
