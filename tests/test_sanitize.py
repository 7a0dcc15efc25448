"""
Tests for log redaction.
"""

import logging

import pytest

from logger import SanitizingFilter, get_logger, setup_logger
from sanitize import sanitize_error_for_logging, sanitize_message


@pytest.mark.parametrize("text,expected", [
    ("cannot open /home/alice/.claude/skills/a/SKILL.md", "cannot open [PATH]"),
    ("mail bob@example.com now", "mail [EMAIL] now"),
    ("ssn 123-45-6789 leaked", "ssn [SSN] leaked"),
    ("from /etc/passwd and /tmp/x", "from [PATH] and [PATH]"),
    ("nothing sensitive", "nothing sensitive"),
    ("phone 123-456-7890", "phone 123-456-7890"),
])
def test_sanitize_message(text, expected):
    assert sanitize_message(text) == expected


def test_sanitize_error():
    error = FileNotFoundError("No such file: /home/alice/secret.md")
    assert sanitize_error_for_logging(error) == "No such file: [PATH]"


class TestSanitizingFilter:

    def test_redacts_formatted_args(self):
        record = logging.LogRecord(
            "skill_matcher.test", logging.WARNING, __file__, 1,
            "bad path %s", ("/etc/passwd",), None,
        )
        assert SanitizingFilter().filter(record)
        assert record.getMessage() == "bad path [PATH]"

    def test_handler_output_is_sanitized(self, capsys):
        setup_logger(debug=True)
        get_logger("test").warning("user carol@example.org opened /srv/data/file.txt")
        err = capsys.readouterr().err
        assert "[skill-matcher][WARNING] skill_matcher.test:" in err
        assert "[EMAIL]" in err
        assert "[PATH]" in err
        assert "carol" not in err

    def test_debug_hidden_unless_enabled(self, capsys):
        setup_logger(debug=False)
        log = get_logger("test")
        log.debug("quiet")
        log.warning("loud")
        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err
