import sys
from pathlib import Path
from typing import Union

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from afterbuy_client import AfterbuyClient, HttpxTransport  # noqa: E402
from afterbuy_client.config.settings import get_settings  # noqa: E402
from afterbuy_client.models import CredentialContext  # noqa: E402

FIXTURES = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    # Add custom markers for test organization
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set the Afterbuy environment variables for tests.

    Clears the cached settings so every test sees its own environment.
    """
    monkeypatch.setenv("AFTERBUY_USER_ID", "test-user")
    monkeypatch.setenv("AFTERBUY_USER_PASSWORD", "test-user-secret")
    monkeypatch.setenv("AFTERBUY_PARTNER_ID", "1234")
    monkeypatch.setenv("AFTERBUY_PARTNER_PASSWORD", "test-partner-secret")
    monkeypatch.setenv("AFTERBUY_ERROR_LANGUAGE", "DE")
    monkeypatch.setenv("AFTERBUY_LOG_LEVEL", "INFO")
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(Path(__file__).parent)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def credentials():
    """Credential context matching the test environment."""
    return CredentialContext(
        user_id="test-user",
        user_password="test-user-secret",
        partner_id=1234,
        partner_password="test-partner-secret",
        error_language="DE",
    )


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays a body."""

    def __init__(self, body: Union[str, bytes] = "", status_code: int = 200, error: Exception = None):
        self.body = body
        self.status_code = status_code
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, bytes):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_body(self) -> str:
        return self.requests[-1].content.decode("utf-8")


@pytest.fixture
def make_client():
    """Factory building a client wired to an in-memory HTTP handler."""
    clients = []

    def factory(handler: RecordingHandler, **kwargs) -> AfterbuyClient:
        transport = HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))
        client = AfterbuyClient(
            "test-user",
            "test-user-secret",
            1234,
            "test-partner-secret",
            "DE",
            transport=transport,
            **kwargs,
        )
        clients.append(transport)
        return client

    yield factory
    for transport in clients:
        transport.client.close()


@pytest.fixture
def xml_fixture():
    """Loader for the canned Afterbuy response documents."""
    return load_fixture


@pytest.fixture
def http_handler():
    """Factory for :class:`RecordingHandler` instances."""
    return RecordingHandler
