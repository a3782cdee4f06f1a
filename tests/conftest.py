"""
Global pytest configuration and fixtures for the apiclients test suite.

Shared fixtures available to all test modules without explicit import.
"""

import sys
from pathlib import Path
from typing import Callable, Sequence

import pytest  # type: ignore
from faker import Faker  # type: ignore

# Add the project root to Python path
project_root: Path = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from apiclients.sources.client.http.http_client import HTTPClient  # noqa: E402
from tests.fixtures.http_fixtures import ScriptedTransport, ScriptItem  # noqa: E402

fake: Faker = Faker()


@pytest.fixture(scope="session")
def faker_instance() -> Faker:
    """
    Provide a Faker instance for generating test data.

    Returns:
        Configured Faker instance
    """
    return fake


@pytest.fixture
def scripted_transport() -> Callable[[Sequence[ScriptItem]], ScriptedTransport]:
    """Factory for ScriptedTransport instances"""
    return ScriptedTransport


@pytest.fixture
def scripted_client() -> Callable[..., tuple]:
    """
    Factory returning (HTTPClient, ScriptedTransport) pairs.

    Example:
        async def test_call(scripted_client):
            client, transport = scripted_client([json_response({"ok": True})])
    """
    def _build(script: Sequence[ScriptItem], token: str = "test-token") -> tuple:
        transport = ScriptedTransport(script)
        return HTTPClient(token=token, transport=transport), transport

    return _build


@pytest.fixture(autouse=True)
def isolated_connector_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials from the environment or a .env file out of the tests"""
    for name in (
        "DOCUSIGN_ACCESS_TOKEN",
        "DOCUSIGN_BASE_PATH",
        "GUSTO_ACCESS_TOKEN",
        "GUSTO_BASE_URL",
        "SENDGRID_API_KEY",
        "SENDGRID_BASE_URL",
        "ZOOM_ACCESS_TOKEN",
        "ZOOM_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)
