import pytest

from ringbuffer.const import (
    ENV_DROP_LOG_INTERVAL,
    ENV_DTYPE,
    ENV_OVERWRITE,
    ENV_SIZE,
)


@pytest.fixture(autouse=True)
def clear_ringbuffer_env(monkeypatch):
    """Fixture to keep the caller's RINGBUFFER_* variables out of tests."""
    for env_var in (ENV_SIZE, ENV_OVERWRITE, ENV_DTYPE, ENV_DROP_LOG_INTERVAL):
        monkeypatch.delenv(env_var, raising=False)
