"""Global test fixtures for CallGateway."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from call_gateway.config import Settings, get_settings
from call_gateway.main import app
from call_gateway.services.dependencies import get_twilio_service
from call_gateway.services.twilio_mock import MockTwilioService

TEST_ACCOUNT_SID = "AC" + "0" * 32
TEST_API_KEY_SID = "SK" + "1" * 32
TEST_API_KEY_SECRET = "test-api-key-secret"
TEST_CALLER_ID = "+15551234567"


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio for async tests."""
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials and the mock Twilio client."""
    return Settings(
        _env_file=None,
        twilio_account_sid=TEST_ACCOUNT_SID,
        twilio_auth_token="test-auth-token",
        twilio_api_key_sid=TEST_API_KEY_SID,
        twilio_api_key_secret=TEST_API_KEY_SECRET,
        twilio_app_sid="",
        twilio_phone_number=TEST_CALLER_ID,
        twilio_use_mock=True,
    )


@pytest.fixture
def twilio_mock() -> MockTwilioService:
    """Fresh in-memory Twilio client per test."""
    return MockTwilioService()


@pytest.fixture
async def client(settings: Settings, twilio_mock: MockTwilioService) -> AsyncIterator[AsyncClient]:
    """Create async HTTP client wired to the test settings and mock Twilio."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_twilio_service] = lambda: twilio_mock

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply test markers based on directory."""
    for item in items:
        path = Path(str(item.fspath))
        parts = path.parts
        if "tests" in parts:
            if "unit" in parts:
                item.add_marker(pytest.mark.unit)
            elif "e2e" in parts:
                item.add_marker(pytest.mark.e2e)
