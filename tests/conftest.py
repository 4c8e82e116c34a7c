from unittest.mock import AsyncMock, MagicMock

import pytest

from meeting_webinar.domain.webinar_session import WebinarSession


@pytest.fixture
def webinar_session() -> WebinarSession:
    return WebinarSession(control_url="locusUrl", webcast_url="webcastInstanceUrl")


@pytest.fixture
def transport() -> MagicMock:
    fake = MagicMock()
    fake.send = AsyncMock(return_value="REQUEST_RETURN_VALUE")
    return fake


@pytest.fixture
def credentials() -> MagicMock:
    fake = MagicMock()
    fake.get_token = AsyncMock(return_value="test-token")
    return fake


@pytest.fixture
def error_logger() -> MagicMock:
    return MagicMock()
