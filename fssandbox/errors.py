from __future__ import annotations

from typing import Optional


class SandboxError(Exception):
    """Base class for errors raised by fssandbox itself."""


class SandboxCreationError(SandboxError, OSError):
    """Raised when a sandbox directory could not be set up.

    The original exception is chained as ``__cause__``. When it is an
    ``OSError`` its ``errno``, ``strerror`` and ``filename`` are carried over
    so callers can match on them exactly as they would on the host error.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        if isinstance(cause, OSError) and cause.errno is not None:
            super().__init__(cause.errno, cause.strerror, cause.filename)
        else:
            super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class PathEscapeError(SandboxError, PermissionError):
    """Raised when an absolute path is given where only sandbox-relative paths are allowed."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"absolute path not allowed in sandbox: {path}")

    def __str__(self) -> str:
        return f"absolute path not allowed in sandbox: {self.path}"
