"""
Fatal error type raised by every failing filesystem operation.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


def describe_os_error(exc: BaseException) -> str:
    """
    Describe an OS-level failure in one line.

    Parameters:
    - exc (BaseException): The underlying error.

    Returns:
    - str: The OS description, with the Windows error code when there is one.
    """
    winerror = getattr(exc, "winerror", None)
    strerror = getattr(exc, "strerror", None) or str(exc)
    if winerror:
        return f"{strerror} (code {winerror})"
    return strerror


class PathError(RuntimeError):
    """
    A filesystem operation failed.

    Attributes:
    - operation (str): What was attempted, naming the path involved.
    - path (str or None): The path the operation was applied to.
    - cause (BaseException or None): The underlying OS error.
    - errno (int or None): The errno of the underlying error, if any.
    """

    def __init__(self, operation: str, path: Optional[str] = None, cause: Optional[BaseException] = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        self.errno = getattr(cause, "errno", None)
        if cause is not None:
            message = f"{operation}: {describe_os_error(cause)}"
        else:
            message = f"{operation}."
        super().__init__(message)


def fail(operation: str, path: Optional[str] = None, cause: Optional[BaseException] = None) -> PathError:
    """
    Build a PathError and log it.

    Callers write ``raise fail(...) from exc`` so the traceback keeps the OS error.
    """
    error = PathError(operation, path, cause)
    logger.debug("%s", error)
    return error
