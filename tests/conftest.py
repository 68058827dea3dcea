"""Pytest configuration and fixtures for Claude Workflows tests."""

import json
from pathlib import Path
from typing import Dict, List, Optional

import httpx
import pytest

from claude_workflows.exceptions import FetchError
from claude_workflows.fetcher import ContentFetcher
from claude_workflows.utils import calculate_content_checksum
from fs_backend import LocalBackend

REPO_URL = "https://raw.githubusercontent.com/testuser/workflows"
BRANCH = "main"


def make_workflow(version: Optional[str], body: str = "# Workflow\nFollow these steps.\n",
                  updated: str = "2026-01-30") -> str:
    """Build workflow file content with version frontmatter."""
    if version is None:
        return body
    return f"---\nversion: {version}\nupdated: {updated}\n---\n{body}"


class FakeFetcher:
    """In-memory stand-in for ContentFetcher."""

    def __init__(self, files: Optional[Dict[str, str]] = None,
                 listings: Optional[Dict[str, List[Dict]]] = None):
        self.files = files or {}
        self.listings = listings or {}
        self.fetched: List[str] = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.closed = True

    def fetch_file(self, repo_url: str, branch: str, file_path: str) -> str:
        self.fetched.append(file_path)
        if file_path not in self.files:
            raise FetchError(f"Failed to fetch {file_path}: HTTP 404 Not Found")
        return self.files[file_path]

    def list_directory(self, owner: str, repo: str, path: str, branch: str) -> List[Dict]:
        if path not in self.listings:
            raise FetchError(f"Failed to fetch {path}: HTTP 404 Not Found")
        return self.listings[path]


def install_file(claude_dir: Path, file_name: str, content: str,
                 source: Optional[str] = None, checksum: Optional[str] = "auto") -> Path:
    """Place an installed workflow file and (optionally) track it in metadata.

    checksum="auto" stores the checksum of content, None stores no checksum.
    """
    rules_dir = claude_dir / "rules"
    rules_dir.mkdir(parents=True, exist_ok=True)
    file_path = rules_dir / file_name
    file_path.write_text(content)

    if source is not None:
        metadata_path = claude_dir / ".metadata.json"
        metadata = json.loads(metadata_path.read_text()) if metadata_path.exists() else {"files": {}}
        entry = {"source": source}
        if checksum == "auto":
            entry["checksum"] = calculate_content_checksum(content)
        elif checksum is not None:
            entry["checksum"] = checksum
        metadata["files"][file_name] = entry
        metadata_path.write_text(json.dumps(metadata, indent=2))

    return file_path


def http_fetcher(files: Dict[str, str]) -> ContentFetcher:
    """A real ContentFetcher whose raw file requests are served from files."""
    prefix = f"{httpx.URL(REPO_URL).path}/{BRANCH}/"

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith(prefix) and path[len(prefix):] in files:
            return httpx.Response(200, text=files[path[len(prefix):]])
        return httpx.Response(404)

    return ContentFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


def write_metadata_entry(claude_dir: Path, file_name: str, entry) -> None:
    """Store a raw metadata entry as-is, whatever its shape."""
    metadata_path = claude_dir / ".metadata.json"
    metadata = json.loads(metadata_path.read_text()) if metadata_path.exists() else {"files": {}}
    metadata["files"][file_name] = entry
    metadata_path.write_text(json.dumps(metadata, indent=2))


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create a project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Create a fake home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def claude_dir(project_root: Path) -> Path:
    """The project scope .claude directory (not created)."""
    return project_root / ".claude"


@pytest.fixture
def backend() -> LocalBackend:
    return LocalBackend()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def remote_listings() -> Dict[str, List[Dict]]:
    """A small remote repository layout."""
    return {
        "core": [
            {"name": "tdd-workflow.md", "path": "core/tdd-workflow.md", "type": "file"},
            {"name": "git-commits.md", "path": "core/git-commits.md", "type": "file"},
            {"name": "README.md", "path": "core/README.md", "type": "file"},
            {"name": "notes.txt", "path": "core/notes.txt", "type": "file"},
            {"name": "drafts", "path": "core/drafts", "type": "dir"},
        ],
        "stacks": [
            {"name": "python", "path": "stacks/python", "type": "dir"},
            {"name": "typescript", "path": "stacks/typescript", "type": "dir"},
            {"name": "README.md", "path": "stacks/README.md", "type": "file"},
        ],
        "stacks/python": [
            {"name": "code-style.md", "path": "stacks/python/code-style.md", "type": "file"},
            {"name": "README.md", "path": "stacks/python/README.md", "type": "file"},
        ],
        "stacks/typescript": [
            {"name": "strict-mode.md", "path": "stacks/typescript/strict-mode.md", "type": "file"},
        ],
    }


@pytest.fixture
def remote_fetcher(remote_listings) -> FakeFetcher:
    """A fetcher serving the remote repository layout with v0.1.0 content."""
    files = {
        "core/tdd-workflow.md": make_workflow("0.1.0", "# TDD\n"),
        "core/git-commits.md": make_workflow("0.1.0", "# Commits\n"),
        "stacks/python/code-style.md": make_workflow("0.1.0", "# Python style\n"),
        "stacks/typescript/strict-mode.md": make_workflow("0.1.0", "# Strict\n"),
    }
    return FakeFetcher(files=files, listings=remote_listings)
