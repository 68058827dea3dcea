"""
Offline status reporting for Claude Workflows.

Summarizes what is installed in a scope without touching the network.
"""

from typing import Callable, Dict, List, Optional

from fs_backend import BackendError, FileSystemBackend

from .discovery import discover_installed_workflows
from .metadata import get_file_checksum, get_file_source, load_metadata
from .utils import calculate_content_checksum, file_name_from_path, parse_frontmatter


def check_status(rules_dir: str, claude_dir: str, backend: FileSystemBackend,
                 warn: Optional[Callable[[str], None]] = None) -> List[Dict]:
    """Report installed workflow files in one scope, sorted by name.

    Each entry has 'name', 'version' (None without frontmatter), 'tracked',
    'source' and 'modified' (None when no checksum was recorded or the file
    could not be read). An unreadable file is reported through warn and
    listed without a version.
    """
    metadata = load_metadata(claude_dir, backend, warn=warn)
    status = []

    for file_path in discover_installed_workflows(rules_dir, backend):
        file_name = file_name_from_path(file_path)
        source = get_file_source(metadata, file_name)
        stored_checksum = get_file_checksum(metadata, file_name)

        try:
            content = backend.read_file(file_path)
        except (OSError, UnicodeDecodeError, BackendError) as e:
            if warn:
                warn(f"Could not read {file_path}: {e}")
            content = None

        frontmatter = parse_frontmatter(content) if content is not None else None
        modified = None
        if content is not None and stored_checksum is not None:
            modified = calculate_content_checksum(content) != stored_checksum

        status.append({
            'name': file_name,
            'version': frontmatter.version if frontmatter else None,
            'updated': frontmatter.updated if frontmatter else '',
            'tracked': source is not None,
            'source': source,
            'modified': modified,
        })

    return sorted(status, key=lambda item: item['name'])
