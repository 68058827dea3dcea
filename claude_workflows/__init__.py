"""
Claude Workflows - Install and upgrade curated workflow rules for Claude.

This package provides tools to install markdown workflow rule files from a
GitHub repository into a project or the user's home .claude directory, and to
upgrade them safely as new versions are published.
"""

__version__ = "0.1.0"

# Import exceptions
from .exceptions import (
    FetchError,
    FileOperationError,
    InvalidScopeError,
    WorkflowsError,
)

# Import engine
from .install import install_workflows
from .upgrade import perform_upgrade, upgrade_all

# Import utilities
from .utils import (
    Frontmatter,
    calculate_content_checksum,
    is_newer_version,
    parse_frontmatter,
    parse_version,
)

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "WorkflowsError",
    "FetchError",
    "InvalidScopeError",
    "FileOperationError",
    # Engine
    "install_workflows",
    "perform_upgrade",
    "upgrade_all",
    # Utilities
    "Frontmatter",
    "calculate_content_checksum",
    "is_newer_version",
    "parse_frontmatter",
    "parse_version",
]
