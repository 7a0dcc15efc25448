"""
Tests for skill file-pattern globs.
"""

import pytest

from globs import expand_braces, glob_match


@pytest.mark.parametrize("path,pattern", [
    ("src/a.ts", "**/*.ts"),
    ("a.ts", "**/*.ts"),
    ("src/deep/nested/a.ts", "**/*.ts"),
    ("convex/schema.ts", "convex/**"),
    ("convex/functions/users.ts", "convex/**"),
    ("src/a.ts", "src/*.ts"),
    ("src/components/Form.tsx", "**/*.{ts,tsx}"),
    ("src/util.ts", "**/*.{ts,tsx}"),
    ("lib/a1.js", "lib/a?.js"),
    ("lib/b.js", "lib/[abc].js"),
    ("lib/d.js", "lib/[!abc].js"),
    (".env", "*"),
    (".github/workflows/ci.yml", "**/*.yml"),
    ("src/auth/login.ts", "**/auth/**"),
    ("a/b/c/d.ts", "a/**/d.ts"),
    ("a/d.ts", "a/**/d.ts"),
    ("file[1].ts", r"file\[1\].ts"),
    ("{literal}.ts", "{literal}.ts"),
])
def test_matches(path, pattern):
    assert glob_match(path, pattern)


@pytest.mark.parametrize("path,pattern", [
    ("src/a.ts", "*.ts"),
    ("src/deep/a.ts", "src/*.ts"),
    ("src/a.tsx", "**/*.ts"),
    ("src/a.ts.bak", "**/*.ts"),
    ("lib/ab.js", "lib/a?.js"),
    ("lib/a/.js", "lib/a?.js"),
    ("lib/a.js", "lib/[!abc].js"),
    ("convexx/a.ts", "convex/**"),
    ("src/a.py", "**/*.{ts,tsx}"),
    ("fileX.ts", r"file\[1\].ts"),
])
def test_non_matches(path, pattern):
    assert not glob_match(path, pattern)


def test_empty_pattern_matches_nothing():
    assert not glob_match("a.ts", "")
    assert not glob_match("", "")


@pytest.mark.parametrize("pattern", ["src/[z-a].ts", "src/[].ts", "src/[!z-a].ts"])
def test_invalid_class_never_raises(pattern):
    assert not glob_match("src/x.ts", pattern)


def test_invalid_class_bracket_is_literal():
    assert glob_match("src/[z-a].ts", "src/[z-a].ts")


def test_regex_metacharacters_are_literal():
    assert glob_match("a+b(1).ts", "a+b(1).ts")
    assert not glob_match("aab1.ts", "a+b(1).ts")


class TestExpandBraces:

    def test_no_braces(self):
        assert expand_braces("src/**/*.ts") == ["src/**/*.ts"]

    def test_single_group(self):
        assert expand_braces("*.{ts,tsx,js}") == ["*.ts", "*.tsx", "*.js"]

    def test_two_groups_expand_in_order(self):
        assert expand_braces("a{b,c}d{e,f}") == ["abde", "abdf", "acde", "acdf"]

    def test_nested_groups(self):
        assert expand_braces("{a,b{c,d}}") == ["a", "bc", "bd"]

    def test_group_without_comma_is_literal(self):
        assert expand_braces("{foo}.ts") == ["{foo}.ts"]

    def test_escaped_brace_is_literal(self):
        assert expand_braces(r"\{a,b\}") == [r"\{a,b\}"]
