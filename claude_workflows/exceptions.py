"""
Claude Workflows exceptions.

This module contains all custom exception classes used throughout Claude Workflows.
"""


class WorkflowsError(Exception):
    """Base exception for Claude Workflows errors."""
    pass


class FetchError(WorkflowsError):
    """Raised when remote content cannot be retrieved."""
    pass


class InvalidScopeError(WorkflowsError):
    """Raised when an unknown installation scope is specified."""
    pass


class FileOperationError(WorkflowsError):
    """Raised when file operations fail."""
    pass
