"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - chat_config: Valid model configuration with a dummy key
    - fake_client: Upstream client replaying a scripted reply
    - session_manager: SessionManager wired to the fake client
    - async_client: HTTPX client for API testing

No fixture touches the network.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from clara.agent.config import ChatConfig
from clara.agent.session import SessionManager
from clara.api import create_app
from tests.fakes import FakeOpenAIClient


@pytest.fixture
def chat_config() -> ChatConfig:
    """Return a valid configuration that never reaches a real provider."""
    return ChatConfig(
        api_key="sk-test-key",
        model_name="gpt-4o-mini",
        temperature=0.7,
        max_tokens=1024,
    )


@pytest.fixture
def fake_client() -> FakeOpenAIClient:
    """Upstream client that streams "Hello", " there", "!"."""
    return FakeOpenAIClient(["Hello", " there", "!"])


@pytest.fixture
def session_manager(chat_config: ChatConfig, fake_client: FakeOpenAIClient) -> SessionManager:
    """SessionManager whose sessions all talk to ``fake_client``."""
    return SessionManager(
        config_factory=lambda: chat_config,
        client_factory=lambda config: fake_client,
    )


@pytest.fixture
async def async_client(session_manager: SessionManager) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app(session_manager))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
