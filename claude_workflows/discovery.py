"""
Workflow discovery for Claude Workflows.

Finds installed workflow files on disk, and available workflow files in the
source repository (core/ and stacks/<name>/ directories).
"""

from typing import List, NamedTuple

from fs_backend import FileSystemBackend

from .fetcher import ContentFetcher
from .source import WorkflowSource

WORKFLOW_EXTENSION = '.md'
CORE_DIR = 'core'
STACKS_DIR = 'stacks'
EXCLUDED_FILES = {'README.md'}


class WorkflowFile(NamedTuple):
    name: str
    path: str


class Stack(NamedTuple):
    name: str
    display_name: str


def discover_installed_workflows(rules_dir: str, backend: FileSystemBackend) -> List[str]:
    """List installed workflow files in rules_dir.

    Returns an empty list when the directory does not exist. Only regular
    markdown files are returned, as rules_dir + "/" + name, in whatever order
    the backend lists them.
    """
    if not backend.exists(rules_dir):
        return []

    rules_dir = rules_dir.rstrip('/')
    return [
        f"{rules_dir}/{entry.name}"
        for entry in backend.list_directory(rules_dir)
        if entry.is_file and entry.name.endswith(WORKFLOW_EXTENSION)
    ]


def _workflow_files(items: List[dict]) -> List[WorkflowFile]:
    return [
        WorkflowFile(name=item['name'], path=item['path'])
        for item in items
        if item['type'] == 'file'
        and item['name'].endswith(WORKFLOW_EXTENSION)
        and item['name'] not in EXCLUDED_FILES
    ]


def discover_core_workflows(fetcher: ContentFetcher, source: WorkflowSource) -> List[WorkflowFile]:
    """Discover core workflow files from the core/ directory."""
    items = fetcher.list_directory(source.owner, source.repo, CORE_DIR, source.branch)
    return _workflow_files(items)


def discover_stacks(fetcher: ContentFetcher, source: WorkflowSource) -> List[Stack]:
    """Discover available language stacks from the stacks/ directory."""
    items = fetcher.list_directory(source.owner, source.repo, STACKS_DIR, source.branch)
    return [Stack(name=item['name'], display_name=item['name'])
            for item in items if item['type'] == 'dir']


def discover_stack_workflows(fetcher: ContentFetcher, source: WorkflowSource,
                             stack_name: str) -> List[WorkflowFile]:
    """Discover workflow files for a specific stack."""
    items = fetcher.list_directory(source.owner, source.repo, f"{STACKS_DIR}/{stack_name}", source.branch)
    return _workflow_files(items)
