"""Temporary directory sandbox that becomes the process working directory.

The working directory is process-wide state, so only one CwdSandbox may be
active at a time. Nothing here serialises access; tests using it must not
run in parallel threads. Prefer :class:`~fssandbox.path_sandbox.PathSandbox`
when they do.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Optional

from ._fs import OptionsLike, coerce_options, discard_tree, make_temp_dir, remove_tree
from .base import BaseSandbox
from .config import SandboxOptions
from .errors import SandboxCreationError

logger = logging.getLogger(__name__)


def enter_directory(path: Path) -> None:
    """chdir into a freshly created sandbox, removing it if that fails."""
    try:
        os.chdir(path)
    except OSError as exc:
        discard_tree(path)
        raise SandboxCreationError("failed to change into sandbox directory", exc) from exc
    logger.debug("changed working directory to %s", path)


class CwdSandbox(BaseSandbox):
    def __init__(self, path: Path, origin: Path, debug: bool = False) -> None:
        super().__init__(path, debug=debug)
        self._origin = origin

    @property
    def origin(self) -> Path:
        return self._origin

    def _teardown(self) -> None:
        # cwd must be restored before the tree is removed
        self._step("restore_cwd", os.chdir, self._origin)
        self._step("remove_tree", remove_tree, self._path)


def _create(options: SandboxOptions) -> CwdSandbox:
    try:
        origin = Path.cwd()
    except OSError as exc:
        raise SandboxCreationError("current working directory is unavailable", exc) from exc
    path = make_temp_dir(options)
    enter_directory(path)
    sbox = CwdSandbox(path, origin, debug=options.debug)
    sbox._announce()
    return sbox


def cwd_sandbox_sync(options: OptionsLike = None, *, config_path: Optional[str] = None,
                     **overrides: Any) -> CwdSandbox:
    """Create a sandbox directory and chdir into it until disposed."""
    return _create(coerce_options(options, overrides, config_path))


async def cwd_sandbox(options: OptionsLike = None, *, config_path: Optional[str] = None,
                      **overrides: Any) -> CwdSandbox:
    opts = coerce_options(options, overrides, config_path)
    return await asyncio.to_thread(_create, opts)
