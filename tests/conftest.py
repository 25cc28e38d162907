"""Pytest configuration and shared fixtures for aiven-rest-client tests."""

import httpx
import pytest

from aiven_rest.testing import RecordingTransport, json_response

API_URL = "https://api.example.test"


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear Aiven and test environment variables before each test.

    This prevents a developer's own AIVEN_WEB_URL or token from leaking into
    the tests.
    """
    import os

    test_prefixes = ("TEST_", "AIVEN_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    """Make retry backoff instant; records the requested delays."""
    delays: list[float] = []
    monkeypatch.setattr("aiven_rest.transport.retry.time.sleep", delays.append)
    return delays


@pytest.fixture
def api_url() -> str:
    return API_URL


@pytest.fixture
def projects_backend() -> RecordingTransport:
    """Backend answering every request with an empty project list."""

    def handler(request: httpx.Request) -> httpx.Response:
        return json_response(200, {"projects": []})

    return RecordingTransport(handler)
