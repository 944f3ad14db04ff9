"""
Tests for identity.py
Logic testing: Decision/Branch, Error Path
"""
import base64
from urllib.parse import parse_qs

import pytest
from httpx import Response

from engage_voice.exceptions import EngageVoiceError, HTTPError
from engage_voice.identity import JWT_GRANT_TYPE, RingCentralPlatform, build_grant

TOKEN_URL = "https://platform.ringcentral.com/restapi/oauth/token"


def _form(request) -> dict:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


class TestBuildGrant:
    """Tests for build_grant function."""

    def test_password_grant(self):
        assert build_grant(username="u", password="p") == {
            "grant_type": "password",
            "username": "u",
            "password": "p",
        }

    def test_password_grant_with_extension(self):
        assert build_grant(username="u", password="p", extension="101")["extension"] == "101"

    def test_jwt_grant(self):
        assert build_grant(jwt="eyJ") == {"grant_type": JWT_GRANT_TYPE, "assertion": "eyJ"}

    def test_code_grant(self):
        grant = build_grant(code="c", redirect_uri="https://app.example.com/cb")
        assert grant["grant_type"] == "authorization_code"
        assert grant["redirect_uri"] == "https://app.example.com/cb"

    # Error Path: code without redirect uri
    def test_code_requires_redirect_uri(self):
        with pytest.raises(ValueError, match="redirect_uri"):
            build_grant(code="c")

    # Error Path: nothing usable
    def test_no_credentials(self):
        with pytest.raises(ValueError, match="login requires"):
            build_grant(username="u")


class TestRingCentralPlatform:
    """Tests for RingCentralPlatform class."""

    @pytest.fixture
    def platform(self, mock_http_client):
        return RingCentralPlatform(
            "https://platform.ringcentral.com/",
            "client-id",
            "client-secret",
            http_client=mock_http_client,
        )

    # State: no session before login
    def test_auth_data_before_login(self, platform):
        assert platform.auth_data() is None
        assert platform.access_token == ""

    @pytest.mark.asyncio
    async def test_login_password(self, router, platform):
        route = router.post(TOKEN_URL).mock(
            return_value=Response(200, json={"access_token": "rc-token", "expires_in": 3600})
        )

        data = await platform.login(username="u", password="p")

        request = route.calls.last.request
        expected_basic = base64.b64encode(b"client-id:client-secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected_basic}"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert _form(request) == {"grant_type": "password", "username": "u", "password": "p"}
        assert data["access_token"] == "rc-token"
        assert platform.auth_data() == data
        assert platform.access_token == "rc-token"

    @pytest.mark.asyncio
    async def test_login_jwt(self, router, platform):
        route = router.post(TOKEN_URL).mock(return_value=Response(200, json={"access_token": "rc-jwt"}))

        await platform.login(jwt="eyJhbGciOi")

        assert _form(route.calls.last.request) == {"grant_type": JWT_GRANT_TYPE, "assertion": "eyJhbGciOi"}
        assert platform.access_token == "rc-jwt"

    # Error Path: rejected login surfaces as HTTPError, session untouched
    @pytest.mark.asyncio
    async def test_login_rejected(self, router, platform):
        router.post(TOKEN_URL).mock(
            return_value=Response(400, json={"error": "invalid_grant"})
        )

        with pytest.raises(HTTPError) as exc_info:
            await platform.login(username="u", password="wrong")

        assert exc_info.value.status == 400
        assert exc_info.value.data == {"error": "invalid_grant"}
        assert platform.auth_data() is None

    # Error Path: 2xx reply that is not a JSON object
    @pytest.mark.asyncio
    async def test_login_non_json_reply(self, router, platform):
        router.post(TOKEN_URL).mock(
            return_value=Response(200, text="<html>maintenance</html>", headers={"Content-Type": "text/html"})
        )

        with pytest.raises(EngageVoiceError, match="Unexpected OAuth token response"):
            await platform.login(username="u", password="p")

        assert platform.auth_data() is None

    @pytest.mark.asyncio
    async def test_close(self, platform, mock_http_client):
        await platform.close()
        assert mock_http_client.is_closed is True
