from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict, List


SANDBOX_CREATED = "sandbox_created"
SANDBOX_DISPOSED = "sandbox_disposed"
TEARDOWN_ERROR = "teardown_error"

_listeners: Dict[str, List[Callable]] = defaultdict(list)


def on(event: str, func: Callable) -> None:
    _listeners[event].append(func)


def off(event: str, func: Callable) -> None:
    try:
        _listeners[event].remove(func)
    except ValueError:
        pass


def emit(event: str, *args, **kwargs) -> None:
    for func in list(_listeners.get(event, [])):
        func(*args, **kwargs)
