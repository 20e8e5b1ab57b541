"""pytest fixtures.

Enable with ``pytest_plugins = ["fssandbox.pytest_plugin"]`` in a top-level
``conftest.py``.
"""

from __future__ import annotations

import pytest

from .cwd import cwd_sandbox_sync
from .managed import managed_sandbox_sync
from .path_sandbox import sandbox_sync


@pytest.fixture
def path_sandbox():
    with sandbox_sync() as sbox:
        yield sbox


@pytest.fixture
def cwd_sandbox():
    """Working directory moved into a fresh sandbox; do not use under xdist threads."""
    with cwd_sandbox_sync() as sbox:
        yield sbox


@pytest.fixture
def managed_sandbox():
    with managed_sandbox_sync() as sbox:
        yield sbox
