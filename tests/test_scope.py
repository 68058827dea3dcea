"""Tests for scope resolution."""

from pathlib import Path

import pytest

from claude_workflows.exceptions import InvalidScopeError
from claude_workflows.scope import (
    GLOBAL_SCOPE,
    PROJECT_SCOPE,
    check_duplicate_file,
    get_rules_directory,
    get_target_directory,
    resolve_home_path,
)


class TestGetTargetDirectory:
    """Test mapping scopes to .claude directories."""

    def test_project_scope(self):
        assert get_target_directory(PROJECT_SCOPE, "/work/app", "/home/me") == "/work/app/.claude"

    def test_global_scope(self):
        assert get_target_directory(GLOBAL_SCOPE, "/work/app", "/home/me") == "/home/me/.claude"

    def test_does_not_touch_filesystem(self):
        assert get_target_directory(PROJECT_SCOPE, "/does/not/exist", "/nope") == "/does/not/exist/.claude"

    def test_trailing_slash(self):
        assert get_target_directory(GLOBAL_SCOPE, "/work", "/home/me/") == "/home/me/.claude"

    def test_unknown_scope(self):
        with pytest.raises(InvalidScopeError, match="Unknown scope 'system'"):
            get_target_directory("system", "/work", "/home/me")


class TestScopeHelpers:
    def test_rules_directory(self):
        assert get_rules_directory("/home/me/.claude") == "/home/me/.claude/rules"

    def test_resolve_home_path(self):
        assert resolve_home_path("~", "/home/me") == "/home/me"
        assert resolve_home_path("~/.claude", "/home/me") == "/home/me/.claude"
        assert resolve_home_path("/abs/path", "/home/me") == "/abs/path"
        assert resolve_home_path("~other/x", "/home/me") == "~other/x"

    def test_check_duplicate_file(self, tmp_path: Path, backend):
        (tmp_path / "tdd.md").write_text("x")

        assert check_duplicate_file("tdd.md", str(tmp_path), backend) is True
        assert check_duplicate_file("other.md", str(tmp_path), backend) is False
