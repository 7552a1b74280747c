"""
Exit codes for the taskflow CLI.

Semantic exit codes so scripts can tell a bad request from a missing
entity from a broken store.
"""

from taskflow.errors import NotFoundError, ValidationError

# Success
SUCCESS = 0

# General error (unspecified, including storage failures)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Resource not found
ERROR_NOT_FOUND = 5


def exit_code_for(error: Exception) -> int:
    """Map an exception raised by the entity service to an exit code."""
    if isinstance(error, ValidationError):
        return ERROR_INVALID_ARGS
    if isinstance(error, NotFoundError):
        return ERROR_NOT_FOUND
    return ERROR_GENERAL
