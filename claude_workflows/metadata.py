"""
Install metadata management for Claude Workflows.

Each scope directory carries a .metadata.json sidecar that records, per
installed file name, the remote path it came from and the checksum of the
content last written by this tool.
"""

import json
from typing import Callable, Dict, Optional

from fs_backend import BackendError, FileSystemBackend

METADATA_FILE = '.metadata.json'


def empty_metadata() -> Dict:
    """Return a fresh metadata record with nothing tracked."""
    return {'files': {}}


def get_metadata_path(claude_dir: str) -> str:
    """Get the sidecar path for a scope directory."""
    return f"{claude_dir.rstrip('/')}/{METADATA_FILE}"


def load_metadata(claude_dir: str, backend: FileSystemBackend,
                  warn: Optional[Callable[[str], None]] = None) -> Dict:
    """Load metadata from <claude_dir>/.metadata.json.

    A missing file yields an empty record. So does a file that cannot be read
    or parsed: metadata is best-effort state, never a reason to fail.

    Args:
        claude_dir: Scope directory holding the sidecar
        backend: Filesystem backend to read through
        warn: Optional callback told about a corrupted sidecar

    Returns:
        Metadata dict of the shape {'files': {name: {'source', 'checksum'?}}}
    """
    metadata_path = get_metadata_path(claude_dir)

    try:
        if not backend.exists(metadata_path):
            return empty_metadata()
        data = json.loads(backend.read_file(metadata_path))
    except (OSError, UnicodeDecodeError, BackendError, json.JSONDecodeError) as e:
        if warn:
            warn(f"Could not load metadata file {metadata_path}: {e}")
        return empty_metadata()

    if not isinstance(data, dict) or not isinstance(data.get('files'), dict):
        if warn:
            warn(f"Ignoring malformed metadata file {metadata_path}")
        return empty_metadata()

    return data


def save_metadata(claude_dir: str, metadata: Dict, backend: FileSystemBackend):
    """Write metadata to <claude_dir>/.metadata.json, replacing prior content."""
    backend.mkdir(claude_dir, parents=True, exist_ok=True)
    backend.write_file(get_metadata_path(claude_dir), json.dumps(metadata, indent=2) + '\n')


def add_file_to_metadata(metadata: Dict, file_name: str, source_path: str,
                         checksum: Optional[str] = None):
    """Add or replace the entry for file_name.

    The checksum key is left out entirely when no checksum is given, so an
    untracked checksum stays distinguishable from an empty one.
    """
    entry = {'source': source_path}
    if checksum is not None:
        entry['checksum'] = checksum
    metadata.setdefault('files', {})[file_name] = entry


def get_file_source(metadata: Dict, file_name: str) -> Optional[str]:
    """Get the remote source path for a tracked file, or None.

    Entries whose source is not a non-empty string count as untracked.
    """
    entry = metadata.get('files', {}).get(file_name)
    if not isinstance(entry, dict):
        return None
    source = entry.get('source')
    if not isinstance(source, str) or not source:
        return None
    return source


def get_file_checksum(metadata: Dict, file_name: str) -> Optional[str]:
    """Get the stored checksum for a tracked file, or None."""
    entry = metadata.get('files', {}).get(file_name)
    if not isinstance(entry, dict):
        return None
    checksum = entry.get('checksum')
    return checksum if isinstance(checksum, str) else None
