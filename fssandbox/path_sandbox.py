"""Temporary directory sandbox that leaves the working directory alone."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Any, Optional

from ._fs import OptionsLike, coerce_options, make_temp_dir, remove_tree
from .base import BaseSandbox
from .config import SandboxOptions


class PathSandbox(BaseSandbox):
    """Sandbox exposing only its root and :meth:`resolve`.

    Several PathSandbox instances can be active at the same time; none of
    them changes the process working directory. Build paths with
    ``sbox.resolve("foo")`` instead::

        with sandbox_sync() as sbox:
            open(sbox.resolve("foo"), "w").close()
            os.chmod(sbox.resolve("foo"), 0o700)
    """

    def resolve(self, *segments: str) -> Path:
        return Path(os.path.normpath(self._path.joinpath(*segments)))

    def _teardown(self) -> None:
        self._step("remove_tree", remove_tree, self._path)


def _create(options: SandboxOptions) -> PathSandbox:
    sbox = PathSandbox(make_temp_dir(options), debug=options.debug)
    sbox._announce()
    return sbox


def sandbox_sync(options: OptionsLike = None, *, config_path: Optional[str] = None,
                 **overrides: Any) -> PathSandbox:
    """Create a :class:`PathSandbox`.

    Raises :class:`~fssandbox.errors.SandboxCreationError` if the directory
    cannot be allocated.
    """
    return _create(coerce_options(options, overrides, config_path))


async def sandbox(options: OptionsLike = None, *, config_path: Optional[str] = None,
                  **overrides: Any) -> PathSandbox:
    """Asynchronous :func:`sandbox_sync`.

    ::

        async with await sandbox() as sbox:
            ...
    """
    opts = coerce_options(options, overrides, config_path)
    return await asyncio.to_thread(_create, opts)
