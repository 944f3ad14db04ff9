"""
Shared fixtures for engage_voice tests.
"""
import pytest
import respx
from unittest.mock import AsyncMock, MagicMock

import httpx

from engage_voice.client import EngageVoice

MODERN_SERVER = "https://engage.ringcentral.com"
LEGACY_SERVER = "https://portal.vacd.biz"


@pytest.fixture
def router():
    """respx router; requests are routed to it through httpx.MockTransport."""
    return respx.MockRouter(assert_all_called=False)


@pytest.fixture
def mock_http_client(router):
    """httpx.AsyncClient whose requests are answered by ``router``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(router.async_handler))


@pytest.fixture
def mock_identity():
    """Identity platform stand-in holding a RingCentral access token."""
    identity = MagicMock()
    identity.login = AsyncMock(return_value={"access_token": "rc-access"})
    identity.auth_data = MagicMock(return_value={"access_token": "rc-access"})
    identity.close = AsyncMock()
    return identity


@pytest.fixture
def modern_client(mock_http_client, mock_identity):
    return EngageVoice(
        "client-id",
        "client-secret",
        http_client=mock_http_client,
        identity=mock_identity,
    )


@pytest.fixture
def legacy_client(mock_http_client):
    return EngageVoice(
        "client-id",
        "client-secret",
        server=LEGACY_SERVER,
        api_prefix="",
        http_client=mock_http_client,
    )
