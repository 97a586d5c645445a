import pytest

from pyredux import global_error_handler, reset_config


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    monkeypatch.delenv("PYREDUX_ENV", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def diagnostics():
    """Collects every diagnostic handed to the global error handler."""
    received = []
    global_error_handler.register_handler(received.append)
    yield received
    global_error_handler.unregister_handler(received.append)
