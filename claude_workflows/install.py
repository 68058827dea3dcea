"""
Workflow installation for Claude Workflows.

Downloads selected workflow files into a scope's rules directory and records
where each one came from in the scope metadata.
"""

from typing import Callable, Dict, List, Optional

from fs_backend import BackendError, FileSystemBackend, LocalBackend

from .exceptions import FileOperationError, WorkflowsError
from .fetcher import ContentFetcher
from .metadata import add_file_to_metadata, load_metadata, save_metadata
from .scope import check_duplicate_file, get_rules_directory
from .utils import calculate_content_checksum, file_name_from_path

REASON_ALREADY_INSTALLED = "Already installed (use --force to overwrite)"


def ensure_directory(path: str, dry_run: bool, backend: FileSystemBackend,
                     log: Callable[[str], None]):
    """Create path if it does not exist yet (only reported in dry run).

    Raises:
        FileOperationError: If path exists but is not a directory
    """
    if backend.exists(path):
        if not backend.is_dir(path):
            raise FileOperationError(f"{path} exists and is not a directory")
        return

    if dry_run:
        log(f"Would create directory: {path}")
        return

    backend.mkdir(path, parents=True, exist_ok=True)
    log(f"Created directory: {path}")


def install_workflows(file_paths: List[str], claude_dir: str, repo_url: str, branch: str,
                      dry_run: bool,
                      backend: Optional[FileSystemBackend] = None,
                      fetcher: Optional[ContentFetcher] = None,
                      force: bool = False,
                      log: Optional[Callable[[str], None]] = None,
                      warn: Optional[Callable[[str], None]] = None) -> Dict:
    """Install workflow files into a scope directory.

    Args:
        file_paths: Remote paths relative to the repository root
        claude_dir: Scope directory (the files land in its rules/ subdirectory)
        repo_url: Raw content base URL of the source repository
        branch: Branch to fetch from
        dry_run: Fetch and report, but write nothing
        backend: Filesystem backend (local disk by default)
        fetcher: Content fetcher (a fresh ContentFetcher by default)
        force: Overwrite files that are already installed in this scope
        log: Optional progress callback
        warn: Optional callback for a corrupted metadata file

    Returns:
        Dict with 'installed' (file names), 'skipped' ({'file', 'reason'})
        and 'errors' ({'file', 'error'})
    """
    backend = backend or LocalBackend()
    log = log or (lambda message: None)
    result = {'installed': [], 'skipped': [], 'errors': []}

    rules_dir = get_rules_directory(claude_dir)
    ensure_directory(claude_dir, dry_run, backend, log)
    ensure_directory(rules_dir, dry_run, backend, log)

    metadata = load_metadata(claude_dir, backend, warn=warn)

    owns_fetcher = fetcher is None
    fetcher = fetcher or ContentFetcher()
    try:
        for file_path in file_paths:
            file_name = file_name_from_path(file_path)
            target_path = f"{rules_dir}/{file_name}"
            try:
                if not force and check_duplicate_file(file_name, rules_dir, backend):
                    result['skipped'].append({'file': file_name, 'reason': REASON_ALREADY_INSTALLED})
                    continue

                content = fetcher.fetch_file(repo_url, branch, file_path)

                if dry_run:
                    log(f"Would write file: {target_path}")
                else:
                    backend.write_file(target_path, content)
                    log(f"Wrote file: {target_path}")
                    add_file_to_metadata(metadata, file_name, file_path,
                                         calculate_content_checksum(content))

                result['installed'].append(file_name)
            except (OSError, UnicodeDecodeError, BackendError, WorkflowsError) as e:
                result['errors'].append({'file': file_name, 'error': str(e)})
    finally:
        if owns_fetcher:
            fetcher.close()

    if not dry_run and result['installed']:
        try:
            save_metadata(claude_dir, metadata, backend)
        except (OSError, BackendError) as e:
            raise FileOperationError(f"Could not save metadata file: {e}") from e

    return result
