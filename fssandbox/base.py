from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable

from . import events

logger = logging.getLogger(__name__)


class BaseSandbox:
    """Scoped temporary directory.

    Subclasses implement :meth:`_teardown`. Disposal runs at most once,
    whether it is triggered by ``with``/``async with`` or called directly,
    and it never raises: each teardown step goes through :meth:`_step`.
    """

    def __init__(self, path: Path, debug: bool = False) -> None:
        self._path = path
        self.debug = debug
        self._disposed = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _teardown(self) -> None:
        raise NotImplementedError

    def _step(self, step: str, func: Callable[..., Any], *args: Any) -> None:
        try:
            func(*args)
        except Exception as exc:  # pylint: disable=broad-except
            self._report(step, exc)

    def _report(self, step: str, exc: BaseException) -> None:
        if self.debug:
            logger.warning("sandbox %s: %s failed: %s", self._path, step, exc)
        try:
            events.emit(events.TEARDOWN_ERROR, self, step, exc)
        except Exception:  # pylint: disable=broad-except
            logger.debug("teardown_error listener failed", exc_info=True)

    def _announce(self) -> None:
        try:
            events.emit(events.SANDBOX_CREATED, self)
        except BaseException:
            self.dispose()
            raise

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._teardown()
        logger.debug("disposed sandbox %s", self._path)
        try:
            events.emit(events.SANDBOX_DISPOSED, self)
        except Exception:  # pylint: disable=broad-except
            logger.debug("sandbox_disposed listener failed", exc_info=True)

    async def adispose(self) -> None:
        await asyncio.to_thread(self.dispose)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.adispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"<{type(self).__name__} {str(self._path)!r} {state}>"
