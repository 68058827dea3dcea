"""
Claude Workflows utility functions.

This module contains the small pure helpers the upgrade engine composes:
frontmatter parsing, content checksums and version comparison.
"""

import hashlib
import re
from typing import NamedTuple, Optional, Tuple

_FRONTMATTER_RE = re.compile(r'\A---\n(.*?)\n---(?:\n|\Z)', re.DOTALL)
_VERSION_RE = re.compile(r'^version:[ \t]*(\S.*)$', re.MULTILINE)
_UPDATED_RE = re.compile(r'^updated:[ \t]*(\S.*)$', re.MULTILINE)
_LEADING_DIGITS_RE = re.compile(r'\d+')


class Frontmatter(NamedTuple):
    """Version metadata embedded at the top of a workflow file."""
    version: str
    updated: str


def calculate_content_checksum(content: str) -> str:
    """Calculate SHA256 checksum of string content.

    The digest covers the exact UTF-8 bytes, frontmatter and whitespace
    included, so any edit at all counts as a local modification.

    Args:
        content: String content to checksum

    Returns:
        SHA256 hex digest of the content
    """
    return hashlib.sha256(content.encode('utf-8')).hexdigest()


def parse_frontmatter(content: str) -> Optional[Frontmatter]:
    """Parse version frontmatter from markdown content.

    Args:
        content: Markdown content that may start with a --- delimited block

    Returns:
        Frontmatter with version and updated fields, or None when there is no
        block, the block is unterminated, or it carries no version line
    """
    normalized = content.replace('\r\n', '\n').replace('\r', '\n')

    match = _FRONTMATTER_RE.match(normalized)
    if not match:
        return None

    block = match.group(1)
    version_match = _VERSION_RE.search(block)
    if not version_match:
        return None

    updated_match = _UPDATED_RE.search(block)
    return Frontmatter(
        version=version_match.group(1).strip(),
        updated=updated_match.group(1).strip() if updated_match else '',
    )


def parse_version(version: str) -> Tuple[int, int, int]:
    """Parse a version string into a (major, minor, patch) tuple.

    Each dot separated segment contributes its leading digits; a missing or
    non-numeric segment counts as 0. Pre-release and build suffixes are not
    ranked.
    """
    parts = version.strip().split('.')
    numbers = []
    for i in range(3):
        segment = parts[i].strip() if i < len(parts) else ''
        match = _LEADING_DIGITS_RE.match(segment)
        numbers.append(int(match.group(0)) if match else 0)
    return numbers[0], numbers[1], numbers[2]


def is_newer_version(local_version: str, remote_version: str) -> bool:
    """Return True if remote_version is strictly newer than local_version."""
    return parse_version(remote_version) > parse_version(local_version)


def file_name_from_path(path: str) -> str:
    """Return the last component of a slash separated path."""
    return path.rstrip('/').split('/')[-1] or path
