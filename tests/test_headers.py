"""
Tests for headers.py
Logic testing: Decision/Branch, Boundary Value
"""
from engage_voice.constants import VERSION
from engage_voice.headers import (
    auth_headers,
    build_request_headers,
    mask_headers,
    mask_sensitive,
    user_agent_headers,
)
from engage_voice.types import ServerMode


class TestAuthHeaders:
    """Tests for auth_headers function."""

    # Boundary: legacy, no bundle yet
    def test_legacy_without_bundle(self):
        assert auth_headers(ServerMode.LEGACY, None) == {"X-Auth-Token": ""}

    def test_legacy_with_api_token(self):
        assert auth_headers(ServerMode.LEGACY, {"apiToken": "abc"}) == {"X-Auth-Token": "abc"}

    # Boundary: non-string api token is sent as a string
    def test_legacy_with_numeric_api_token(self):
        assert auth_headers(ServerMode.LEGACY, {"apiToken": 1234567890}) == {"X-Auth-Token": "1234567890"}

    def test_modern_with_access_token(self):
        assert auth_headers(ServerMode.MODERN, {"accessToken": "xyz"}) == {"Authorization": "Bearer xyz"}

    # Boundary: modern, no bundle yet
    def test_modern_without_bundle(self):
        assert auth_headers(ServerMode.MODERN, None) == {"Authorization": "Bearer "}

    # Decision: exactly one scheme per mode
    def test_legacy_never_sends_bearer(self):
        bundle = {"apiToken": "abc", "accessToken": "xyz"}
        assert "Authorization" not in auth_headers(ServerMode.LEGACY, bundle)

    def test_modern_never_sends_auth_token(self):
        bundle = {"apiToken": "abc", "accessToken": "xyz"}
        assert "X-Auth-Token" not in auth_headers(ServerMode.MODERN, bundle)


class TestBuildRequestHeaders:
    """Tests for build_request_headers function."""

    def test_includes_user_agent(self):
        result = build_request_headers(ServerMode.MODERN, {"accessToken": "t"})
        expected = f"ringcentral-engage-voice-python/v{VERSION}"
        assert result["X-User-Agent"] == expected
        assert result["RC-User-Agent"] == expected
        assert result["Authorization"] == "Bearer t"

    # Decision: caller headers win over auth and user agent
    def test_caller_headers_override(self):
        result = build_request_headers(
            ServerMode.LEGACY,
            {"apiToken": "abc"},
            {"X-Auth-Token": "override", "X-User-Agent": "custom"},
        )
        assert result["X-Auth-Token"] == "override"
        assert result["X-User-Agent"] == "custom"

    def test_user_agent_headers_pair(self):
        assert set(user_agent_headers()) == {"X-User-Agent", "RC-User-Agent"}


class TestMasking:
    """Tests for mask_sensitive / mask_headers."""

    def test_mask_sensitive_none(self):
        assert mask_sensitive(None) == "<none>"

    def test_mask_sensitive_short(self):
        assert mask_sensitive("abc") == "***"

    def test_mask_sensitive_long(self):
        assert mask_sensitive("secrettoken") == "secr***"

    def test_mask_sensitive_number(self):
        assert mask_sensitive(1234567890) == "1234***"

    def test_mask_headers_bearer(self):
        masked = mask_headers({"Authorization": "Bearer abcdefgh", "Accept": "json"})
        assert masked == {"Authorization": "Bearer abcd***", "Accept": "json"}

    def test_mask_headers_legacy(self):
        assert mask_headers({"X-Auth-Token": "abcdefgh"}) == {"X-Auth-Token": "abcd***"}

    def test_mask_headers_does_not_mutate(self):
        headers = {"Authorization": "Bearer abcdefgh"}
        mask_headers(headers)
        assert headers == {"Authorization": "Bearer abcdefgh"}
