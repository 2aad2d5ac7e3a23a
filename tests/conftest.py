import pytest

from core.config import (
    API_KEY_VAR,
    BASE_URL_VAR,
    LEGACY_API_KEY_VAR,
    LEGACY_BASE_URL_VAR,
    SERVER_NAME_VAR,
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without any Gamma settings in the environment."""
    for name in (API_KEY_VAR, BASE_URL_VAR, LEGACY_API_KEY_VAR, LEGACY_BASE_URL_VAR, SERVER_NAME_VAR):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
