"""
Upgrade reconciliation for Claude Workflows.

For every installed workflow file, decide whether to leave it alone, replace it
with the newer remote version, or report it as unsafe to touch. The engine
never prints; callers get a result dict and may pass a log callback for
progress lines.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Optional

from fs_backend import BackendError, FileSystemBackend, LocalBackend

from .discovery import discover_installed_workflows
from .exceptions import WorkflowsError
from .fetcher import ContentFetcher
from .metadata import (
    METADATA_FILE,
    add_file_to_metadata,
    get_file_checksum,
    get_file_source,
    load_metadata,
    save_metadata,
)
from .scope import GLOBAL_SCOPE, PROJECT_SCOPE, get_rules_directory, get_target_directory
from .utils import calculate_content_checksum, file_name_from_path, is_newer_version, parse_frontmatter

LogFn = Callable[[str], None]

REASON_NO_LOCAL_VERSION = "No version metadata found"
REASON_UNTRACKED = "File not tracked in metadata (was it installed with an older version?)"
REASON_NO_REMOTE_VERSION = "Remote file has no version metadata"
REASON_MODIFIED = "Modified locally (use --force to overwrite)"


def _noop(message: str):
    pass


def new_upgrade_result() -> Dict:
    """Return an empty upgrade result."""
    return {'upgraded': [], 'skipped': [], 'errors': []}


def perform_upgrade(rules_dir: str, claude_dir: str, repo_url: str, branch: str,
                    force: bool, dry_run: bool,
                    backend: Optional[FileSystemBackend] = None,
                    fetcher: Optional[ContentFetcher] = None,
                    log: Optional[LogFn] = None,
                    warn: Optional[LogFn] = None) -> Dict:
    """Upgrade installed workflow files in one scope.

    Args:
        rules_dir: Directory holding the installed .md files
        claude_dir: Scope directory holding .metadata.json
        repo_url: Raw content base URL of the source repository
        branch: Branch to fetch from
        force: Overwrite files even when they were modified locally
        dry_run: Decide everything but write nothing
        backend: Filesystem backend (local disk by default)
        fetcher: Content fetcher (a fresh ContentFetcher by default)
        log: Optional progress callback
        warn: Optional callback for a corrupted metadata file

    Returns:
        Dict with 'upgraded' (file names), 'skipped' ({'file', 'reason'})
        and 'errors' ({'file', 'error'})
    """
    backend = backend or LocalBackend()
    log = log or _noop
    result = new_upgrade_result()

    installed_files = discover_installed_workflows(rules_dir, backend)
    if not installed_files:
        log(f"No workflow files found in {rules_dir}")
        return result

    log(f"Found {len(installed_files)} installed workflow file(s)")

    owns_fetcher = fetcher is None
    fetcher = fetcher or ContentFetcher()
    metadata = load_metadata(claude_dir, backend, warn=warn)
    written: Dict[str, str] = {}

    try:
        for file_path in installed_files:
            file_name = file_name_from_path(file_path)
            try:
                new_content = _upgrade_file(file_path, file_name, metadata, repo_url, branch,
                                            force, dry_run, backend, fetcher, log, result)
            except (OSError, UnicodeDecodeError, BackendError, WorkflowsError) as e:
                result['errors'].append({'file': file_name, 'error': str(e)})
                continue

            if new_content is not None:
                written[file_name] = new_content
    finally:
        if owns_fetcher:
            fetcher.close()

    if written and not dry_run:
        # Written files are now pristine copies; record their new checksums
        for file_name, content in written.items():
            add_file_to_metadata(metadata, file_name, get_file_source(metadata, file_name),
                                 calculate_content_checksum(content))
        try:
            save_metadata(claude_dir, metadata, backend)
        except (OSError, BackendError) as e:
            result['errors'].append({'file': METADATA_FILE,
                                     'error': f"Could not save metadata: {e}"})

    return result


def _upgrade_file(file_path: str, file_name: str, metadata: Dict, repo_url: str, branch: str,
                  force: bool, dry_run: bool, backend: FileSystemBackend,
                  fetcher: ContentFetcher, log: LogFn, result: Dict) -> Optional[str]:
    """Reconcile a single installed file, recording its outcome in result.

    Returns the content written to disk, or None if nothing was written.
    """
    local_content = backend.read_file(file_path)
    local_meta = parse_frontmatter(local_content)
    if not local_meta:
        result['skipped'].append({'file': file_name, 'reason': REASON_NO_LOCAL_VERSION})
        return None

    remote_path = get_file_source(metadata, file_name)
    if not remote_path:
        result['errors'].append({'file': file_name, 'error': REASON_UNTRACKED})
        return None

    remote_content = fetcher.fetch_file(repo_url, branch, remote_path)
    remote_meta = parse_frontmatter(remote_content)
    if not remote_meta:
        result['errors'].append({'file': file_name, 'error': REASON_NO_REMOTE_VERSION})
        return None

    if not is_newer_version(local_meta.version, remote_meta.version):
        result['skipped'].append({'file': file_name,
                                  'reason': f"Already up to date (v{local_meta.version})"})
        return None

    # No stored checksum means the file predates checksum tracking; treat as unmodified
    is_modified = False
    stored_checksum = get_file_checksum(metadata, file_name)
    if stored_checksum is not None:
        is_modified = calculate_content_checksum(local_content) != stored_checksum

    if is_modified and not force:
        result['skipped'].append({'file': file_name, 'reason': REASON_MODIFIED})
        return None

    change = f"{file_name} (v{local_meta.version} -> v{remote_meta.version})"
    if dry_run:
        log(f"Would upgrade: {change}{' [modified]' if is_modified else ''}")
        result['upgraded'].append(file_name)
        return None

    backend.write_file(file_path, remote_content)
    log(f"Upgraded: {change}{' [overwrote modifications]' if is_modified else ''}")
    result['upgraded'].append(file_name)
    return remote_content


def upgrade_all(project_root: str, home_dir: str, repo_url: str, branch: str,
                force: bool, dry_run: bool,
                backend: Optional[FileSystemBackend] = None,
                fetcher: Optional[ContentFetcher] = None,
                log: Optional[LogFn] = None,
                warn: Optional[LogFn] = None) -> Dict[str, Dict]:
    """Upgrade workflow files in the global and project scopes independently.

    Both scopes run concurrently. A failure in one scope is reported in that
    scope's errors and never affects the other.

    Returns:
        {'global': result, 'project': result}
    """
    backend = backend or LocalBackend()
    owns_fetcher = fetcher is None
    fetcher = fetcher or ContentFetcher()

    def upgrade_scope(scope: str) -> Dict:
        claude_dir = get_target_directory(scope, project_root, home_dir)
        rules_dir = get_rules_directory(claude_dir)
        try:
            return perform_upgrade(rules_dir, claude_dir, repo_url, branch, force, dry_run,
                                   backend=backend, fetcher=fetcher, log=log, warn=warn)
        except (OSError, BackendError, WorkflowsError) as e:
            scope_result = new_upgrade_result()
            scope_result['errors'].append({'file': rules_dir, 'error': str(e)})
            return scope_result

    try:
        with ThreadPoolExecutor(max_workers=2) as executor:
            futures = {scope: executor.submit(upgrade_scope, scope)
                       for scope in (GLOBAL_SCOPE, PROJECT_SCOPE)}
            return {scope: future.result() for scope, future in futures.items()}
    finally:
        if owns_fetcher:
            fetcher.close()
