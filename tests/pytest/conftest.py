import pytest

from gslbridge.bridge import reset_default_bridge


@pytest.fixture(autouse=True)
def default_bridge_env(monkeypatch):
    monkeypatch.delenv("GSLBRIDGE_ENABLE_VIEWS", raising=False)
    monkeypatch.delenv("GSLBRIDGE_GSL_CONFIG", raising=False)
    reset_default_bridge()
    yield
    reset_default_bridge()
