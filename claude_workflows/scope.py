"""
Installation scopes for Claude Workflows.

A scope is either the project-local .claude directory or the user-global one.
Both resolve to a directory of the same layout:

    <scope dir>/.metadata.json
    <scope dir>/rules/*.md
"""

from typing import List

from fs_backend import FileSystemBackend

from .exceptions import InvalidScopeError

PROJECT_SCOPE = 'project'
GLOBAL_SCOPE = 'global'
SCOPES: List[str] = [PROJECT_SCOPE, GLOBAL_SCOPE]

CLAUDE_DIR = '.claude'
RULES_DIR = 'rules'


def get_target_directory(scope: str, project_root: str, home_dir: str) -> str:
    """Determine the .claude directory for an installation scope.

    - project scope: {project_root}/.claude
    - global scope: {home_dir}/.claude

    Pure path arithmetic; nothing is checked on disk.
    """
    if scope == PROJECT_SCOPE:
        return f"{project_root.rstrip('/')}/{CLAUDE_DIR}"
    if scope == GLOBAL_SCOPE:
        return f"{home_dir.rstrip('/')}/{CLAUDE_DIR}"
    raise InvalidScopeError(f"Unknown scope '{scope}'. Expected one of: {', '.join(SCOPES)}")


def get_rules_directory(claude_dir: str) -> str:
    """Get the rules directory inside a scope directory."""
    return f"{claude_dir.rstrip('/')}/{RULES_DIR}"


def resolve_home_path(path: str, home_dir: str) -> str:
    """Expand a leading ~ to home_dir; other paths are returned unchanged."""
    if path == '~':
        return home_dir
    if path.startswith('~/'):
        return home_dir + path[1:]
    return path


def check_duplicate_file(file_name: str, rules_dir: str, backend: FileSystemBackend) -> bool:
    """Check if a file with this name is already installed in rules_dir."""
    return backend.exists(f"{rules_dir.rstrip('/')}/{file_name}")
