#!/usr/bin/env python3
"""
Filesystem backend abstraction layer.

Provides the capability set the workflow engine needs to read and write local
state (mkdir, exists, read, write, list). The engine only talks to
FileSystemBackend, so the hosting environment decides which concrete adapter
backs it.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, NamedTuple, Optional


class BackendError(Exception):
    """Base exception for backend errors."""
    pass


class DirEntry(NamedTuple):
    """A single directory listing entry."""
    name: str
    is_file: bool
    is_dir: bool


class FileSystemBackend(ABC):
    """Abstract base class for file system operations."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if path exists."""
        pass

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Check if path is a directory."""
        pass

    @abstractmethod
    def mkdir(self, path: str, parents: bool = True, exist_ok: bool = True):
        """Create directory."""
        pass

    @abstractmethod
    def read_file(self, path: str) -> str:
        """Read a text file as UTF-8."""
        pass

    @abstractmethod
    def write_file(self, path: str, content: str):
        """Write text content to a file, replacing whatever was there."""
        pass

    @abstractmethod
    def list_directory(self, path: str) -> List[DirEntry]:
        """List the entries of a directory."""
        pass


class LocalBackend(FileSystemBackend):
    """Backend for local file system operations."""

    def __init__(self, base_path: Optional[str] = None):
        """Initialize local backend.

        Args:
            base_path: Optional base path for relative operations
        """
        self.base_path = Path(base_path).resolve() if base_path else None

    def _resolve_path(self, path: str) -> Path:
        """Resolve path to absolute Path object."""
        p = Path(path)
        if self.base_path and not p.is_absolute():
            return self.base_path / p
        return p.resolve() if p.is_absolute() else Path.cwd() / p

    def exists(self, path: str) -> bool:
        """Check if path exists."""
        return self._resolve_path(path).exists()

    def is_dir(self, path: str) -> bool:
        """Check if path is a directory."""
        return self._resolve_path(path).is_dir()

    def mkdir(self, path: str, parents: bool = True, exist_ok: bool = True):
        """Create directory."""
        self._resolve_path(path).mkdir(parents=parents, exist_ok=exist_ok)

    def read_file(self, path: str) -> str:
        """Read a text file as UTF-8."""
        # newline='' keeps CRLF intact so checksums see the exact bytes on disk
        with open(self._resolve_path(path), encoding='utf-8', newline='') as f:
            return f.read()

    def write_file(self, path: str, content: str):
        """Write text content to a file, creating parent directories."""
        file_path = self._resolve_path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)

    def list_directory(self, path: str) -> List[DirEntry]:
        """List the entries of a directory."""
        dir_path = self._resolve_path(path)
        if not dir_path.is_dir():
            raise BackendError(f"Not a directory: {dir_path}")

        return [
            DirEntry(name=entry.name, is_file=entry.is_file(), is_dir=entry.is_dir())
            for entry in dir_path.iterdir()
        ]


def get_home_dir() -> str:
    """Return the user's home directory from the HOME environment variable.

    Raises:
        BackendError: If HOME is not set
    """
    home = os.environ.get('HOME')
    if not home:
        raise BackendError("HOME environment variable is not set")
    return home
