import asyncio
import errno
import os
import shutil
from pathlib import Path

import pytest

from fssandbox import CwdSandbox, SandboxCreationError, cwd_sandbox, cwd_sandbox_sync
from fssandbox import cwd as cwd_module


@pytest.fixture(autouse=True)
def restore_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_cwd_switched_until_disposed():
    cwd = Path.cwd()
    sbox = cwd_sandbox_sync()
    assert isinstance(sbox, CwdSandbox)
    assert sbox.origin == cwd
    assert Path.cwd() == sbox.path
    assert os.listdir(".") == []

    sbox.dispose()
    assert Path.cwd() == cwd
    assert not sbox.path.exists()


def test_relative_paths_land_in_sandbox():
    with cwd_sandbox_sync() as sbox:
        Path("foo").write_text("hello")
        assert (sbox.path / "foo").exists()
    assert not Path("foo").exists()


def test_cwd_restored_when_block_raises():
    cwd = Path.cwd()
    with pytest.raises(ValueError):
        with cwd_sandbox_sync():
            raise ValueError("boom")
    assert Path.cwd() == cwd


def test_chdir_failure_removes_directory(tmp_path, monkeypatch):
    parent = tmp_path / "parent"
    parent.mkdir()
    cwd = Path.cwd()

    def refuse(path):
        raise PermissionError(errno.EACCES, "Permission denied", str(path))

    monkeypatch.setattr(os, "chdir", refuse)
    with pytest.raises(SandboxCreationError) as info:
        cwd_sandbox_sync(dir=str(parent))
    assert isinstance(info.value.__cause__, PermissionError)
    assert info.value.errno == errno.EACCES
    assert list(parent.iterdir()) == []
    assert Path.cwd() == cwd


def test_teardown_restores_cwd_before_removing(monkeypatch):
    calls = []
    real_chdir = os.chdir
    real_remove = cwd_module.remove_tree
    sbox = cwd_sandbox_sync()

    def chdir(path):
        calls.append(("chdir", path))
        real_chdir(path)

    def remove(path):
        calls.append(("remove", path))
        real_remove(path)

    monkeypatch.setattr(os, "chdir", chdir)
    monkeypatch.setattr(cwd_module, "remove_tree", remove)
    sbox.dispose()
    assert calls == [("chdir", sbox.origin), ("remove", sbox.path)]


def test_failed_restore_still_removes_tree(monkeypatch, teardown_errors):
    sbox = cwd_sandbox_sync()

    def refuse(path):
        raise PermissionError(errno.EACCES, "Permission denied", str(path))

    monkeypatch.setattr(os, "chdir", refuse)
    sbox.dispose()
    assert not sbox.path.exists()
    assert [step for step, _ in teardown_errors] == ["restore_cwd"]


def test_dispose_tolerates_directory_removed_out_of_band(teardown_errors):
    sbox = cwd_sandbox_sync()
    cwd = sbox.origin
    shutil.rmtree(sbox.path)
    sbox.dispose()
    sbox.dispose()
    assert Path.cwd() == cwd
    assert [step for step, _ in teardown_errors] == ["remove_tree"]


def test_chdir_is_not_an_option(tmp_path):
    with pytest.raises(SandboxCreationError):
        cwd_sandbox_sync(dir=str(tmp_path), chdir=False)
    assert list(tmp_path.iterdir()) == []


def test_async_cwd_sandbox():
    cwd = Path.cwd()

    async def main():
        async with await cwd_sandbox() as sbox:
            assert Path.cwd() == sbox.path
        return sbox

    sbox = asyncio.run(main())
    assert Path.cwd() == cwd
    assert not sbox.path.exists()
