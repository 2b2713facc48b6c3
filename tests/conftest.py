"""Configure pytest environment for all tests."""

import os

import pytest

from errhandling.core.config import ErrhandlingConfig, reset_config, set_config
from errhandling.core.propagation import active_boundary_count


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Run every test against the default configuration, isolated from the host."""
    for key in list(os.environ):
        if key.startswith("ERRHANDLING_"):
            monkeypatch.delenv(key, raising=False)
    set_config(ErrhandlingConfig())
    yield
    reset_config()


@pytest.fixture(autouse=True)
def no_leaked_boundaries():
    """Fail a test that leaves a boundary registered as active."""
    yield
    assert active_boundary_count() == 0


@pytest.fixture
def quiet_termination():
    """Terminate without logging the full report."""
    config = ErrhandlingConfig.model_validate({"termination": {"log_report": False}})
    set_config(config)
    return config
