"""Temporary directory sandboxes for tests.

``sandbox``/``sandbox_sync`` give a directory and a ``resolve`` helper,
``cwd_sandbox``/``cwd_sandbox_sync`` also move the working directory into
it, and ``managed_sandbox``/``managed_sandbox_sync`` add per-operation
convenience methods. Every handle is removed when disposed.
"""

from .config import SandboxOptions, load_options
from .cwd import CwdSandbox, cwd_sandbox, cwd_sandbox_sync
from .errors import PathEscapeError, SandboxCreationError, SandboxError
from .managed import DirEntry, ManagedSandbox, managed_sandbox, managed_sandbox_sync
from .path_sandbox import PathSandbox, sandbox, sandbox_sync

__all__ = [
    "CwdSandbox",
    "DirEntry",
    "ManagedSandbox",
    "PathEscapeError",
    "PathSandbox",
    "SandboxCreationError",
    "SandboxError",
    "SandboxOptions",
    "cwd_sandbox",
    "cwd_sandbox_sync",
    "load_options",
    "managed_sandbox",
    "managed_sandbox_sync",
    "sandbox",
    "sandbox_sync",
]
