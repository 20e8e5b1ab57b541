import pytest

from fssandbox import events

pytest_plugins = ["fssandbox.pytest_plugin"]


@pytest.fixture
def teardown_errors():
    seen = []

    def listener(handle, step, exc):
        seen.append((step, exc))

    events.on(events.TEARDOWN_ERROR, listener)
    yield seen
    events.off(events.TEARDOWN_ERROR, listener)
