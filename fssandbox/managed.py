"""Sandbox façade with one forwarding method per filesystem operation.

Every method takes paths relative to the sandbox root, rejects absolute
ones with :class:`~fssandbox.errors.PathEscapeError` before touching the
disk, and otherwise behaves exactly like the ``os``/``shutil``/``tempfile``
call it forwards to, errors included.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, List, Optional

from ._fs import OptionsLike, coerce_options, make_temp_dir, remove_tree
from .config import SandboxOptions
from .cwd import enter_directory
from .errors import PathEscapeError, SandboxCreationError
from .path_sandbox import PathSandbox


@dataclass(frozen=True)
class DirEntry:
    name: str
    is_file: bool
    is_directory: bool
    is_symlink: bool


class ManagedSandbox(PathSandbox):
    """PathSandbox plus convenience methods and open-file tracking.

    Files returned by :meth:`create` and :meth:`open` are closed at teardown
    if the caller has not done so. Set ``debug`` to log teardown failures.
    """

    def __init__(self, path: Path, debug: bool = False, origin: Optional[Path] = None) -> None:
        super().__init__(path, debug=debug)
        self._origin = origin
        self._resources: List[IO[Any]] = []

    @property
    def root(self) -> Path:
        return self._path

    @property
    def origin(self) -> Optional[Path]:
        return self._origin

    def resolve(self, *segments: str) -> Path:
        for segment in segments:
            if os.path.isabs(segment):
                raise PathEscapeError(segment)
        return super().resolve(*segments)

    def _track(self, f: IO[Any]) -> IO[Any]:
        self._resources.append(f)
        return f

    def exists(self, path: str) -> bool:
        return os.path.lexists(self.resolve(path))

    def create(self, path: str) -> IO[bytes]:
        return self._track(open(self.resolve(path), "w+b"))

    def open(self, path: str, mode: str = "r", **kwargs: Any) -> IO[Any]:
        return self._track(open(self.resolve(path), mode, **kwargs))

    def mkdir(self, path: str, mode: int = 0o777, *, recursive: bool = False) -> None:
        target = self.resolve(path)
        if recursive:
            os.makedirs(target, mode=mode, exist_ok=True)
        else:
            os.mkdir(target, mode)

    def chmod(self, path: str, mode: int) -> None:
        os.chmod(self.resolve(path), mode)

    def chown(self, path: str, uid: int, gid: int) -> None:
        os.chown(self.resolve(path), uid, gid)

    def copy_file(self, src: str, dst: str) -> None:
        shutil.copyfile(self.resolve(src), self.resolve(dst))

    def link(self, src: str, dst: str) -> None:
        os.link(self.resolve(src), self.resolve(dst))

    def symlink(self, target: str, link: str) -> None:
        """Create ``link`` pointing at ``target``.

        ``target`` is stored as given, so it is interpreted relative to the
        directory holding ``link``.
        """
        if os.path.isabs(target):
            raise PathEscapeError(target)
        os.symlink(target, self.resolve(link))

    def read_link(self, path: str) -> str:
        return os.readlink(self.resolve(path))

    def lstat(self, path: str) -> os.stat_result:
        return os.lstat(self.resolve(path))

    def stat(self, path: str) -> os.stat_result:
        return os.stat(self.resolve(path))

    def make_temp_dir(self, *, dir: Optional[str] = None, prefix: Optional[str] = None,
                      suffix: Optional[str] = None) -> Path:
        parent = self.resolve(dir) if dir else self._path
        return Path(tempfile.mkdtemp(suffix=suffix, prefix=prefix, dir=parent))

    def make_temp_file(self, *, dir: Optional[str] = None, prefix: Optional[str] = None,
                       suffix: Optional[str] = None) -> Path:
        parent = self.resolve(dir) if dir else self._path
        fd, name = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=parent)
        os.close(fd)
        return Path(name)

    def read_dir(self, path: str = "") -> List[DirEntry]:
        with os.scandir(self.resolve(path)) as it:
            return [
                DirEntry(
                    name=entry.name,
                    is_file=entry.is_file(follow_symlinks=False),
                    is_directory=entry.is_dir(follow_symlinks=False),
                    is_symlink=entry.is_symlink(),
                )
                for entry in it
            ]

    def read_file(self, path: str) -> bytes:
        with open(self.resolve(path), "rb") as f:
            return f.read()

    def read_text_file(self, path: str, encoding: str = "utf-8") -> str:
        with open(self.resolve(path), "r", encoding=encoding) as f:
            return f.read()

    def write_file(self, path: str, data: bytes) -> None:
        with open(self.resolve(path), "wb") as f:
            f.write(data)

    def write_text_file(self, path: str, text: str, encoding: str = "utf-8") -> None:
        with open(self.resolve(path), "w", encoding=encoding) as f:
            f.write(text)

    def real_path(self, path: str) -> Path:
        return self.resolve(path).resolve(strict=True)

    def remove(self, path: str, *, recursive: bool = False) -> None:
        target = self.resolve(path)
        if os.path.isdir(target) and not os.path.islink(target):
            if recursive:
                shutil.rmtree(target)
            else:
                os.rmdir(target)
        else:
            os.remove(target)

    def rename(self, src: str, dst: str) -> None:
        os.rename(self.resolve(src), self.resolve(dst))

    def _teardown(self) -> None:
        if self._origin is not None:
            self._step("restore_cwd", os.chdir, self._origin)
        self._step("remove_tree", remove_tree, self._path)
        resources, self._resources = self._resources, []
        for f in resources:
            self._step("close_handle", f.close)


def _create(options: SandboxOptions, chdir: bool) -> ManagedSandbox:
    origin = None
    if chdir:
        try:
            origin = Path.cwd()
        except OSError as exc:
            raise SandboxCreationError("current working directory is unavailable", exc) from exc
    path = make_temp_dir(options)
    if chdir:
        enter_directory(path)
    sbox = ManagedSandbox(path, debug=options.debug, origin=origin)
    sbox._announce()
    return sbox


def managed_sandbox_sync(options: OptionsLike = None, *, chdir: bool = False,
                         config_path: Optional[str] = None, **overrides: Any) -> ManagedSandbox:
    """Create a :class:`ManagedSandbox`.

    ``chdir=True`` also moves the working directory into the sandbox and
    restores it on teardown; the single-active-instance rule of
    :mod:`fssandbox.cwd` then applies. It is only taken from this argument,
    never from configuration.
    """
    return _create(coerce_options(options, overrides, config_path), chdir)


async def managed_sandbox(options: OptionsLike = None, *, chdir: bool = False,
                          config_path: Optional[str] = None, **overrides: Any) -> ManagedSandbox:
    opts = coerce_options(options, overrides, config_path)
    return await asyncio.to_thread(_create, opts, chdir)
