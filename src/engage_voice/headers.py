"""
Header injection for engage_voice.

Exactly one auth scheme is injected per request, chosen by server mode:
legacy servers get ``X-Auth-Token``, modern servers get ``Authorization: Bearer``.
"""
import logging
from typing import Any, Dict, Optional

from .constants import USER_AGENT_NAME, VERSION
from .types import CredentialBundle, ServerMode

logger = logging.getLogger("engage_voice.headers")

LEGACY_AUTH_HEADER = "X-Auth-Token"
BEARER_AUTH_HEADER = "Authorization"

_SENSITIVE_HEADERS = {"authorization", "x-auth-token"}


def mask_sensitive(value: Optional[Any], show_chars: int = 4) -> str:
    """Mask sensitive value for logging, showing the first ``show_chars`` chars."""
    if value is None or value == "":
        return "<none>"
    value = str(value)
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Copy of ``headers`` with credential values masked."""
    masked = dict(headers)
    for key in masked:
        if key.lower() in _SENSITIVE_HEADERS:
            value = masked[key]
            if key.lower() == "authorization" and value.startswith("Bearer "):
                masked[key] = "Bearer " + mask_sensitive(value[len("Bearer "):])
            else:
                masked[key] = mask_sensitive(value)
    return masked


def legacy_auth_header(bundle: Optional[CredentialBundle]) -> Dict[str, str]:
    """``X-Auth-Token`` carrying the legacy api token (empty before login)."""
    api_token = ""
    if bundle:
        api_token = bundle.get("apiToken") or ""
    return {LEGACY_AUTH_HEADER: str(api_token)}


def bearer_auth_header(bundle: Optional[CredentialBundle]) -> Dict[str, str]:
    """``Authorization: Bearer`` with the Engage Voice access token (empty before login)."""
    access_token = ""
    if bundle:
        access_token = bundle.get("accessToken") or ""
    return {BEARER_AUTH_HEADER: f"Bearer {access_token}"}


def auth_headers(mode: ServerMode, bundle: Optional[CredentialBundle]) -> Dict[str, str]:
    """Auth headers for ``mode``; never fails on a missing bundle."""
    if mode is ServerMode.LEGACY:
        return legacy_auth_header(bundle)
    return bearer_auth_header(bundle)


def user_agent_headers() -> Dict[str, str]:
    user_agent = f"{USER_AGENT_NAME}/v{VERSION}"
    return {
        "X-User-Agent": user_agent,
        "RC-User-Agent": user_agent,
    }


def build_request_headers(
    mode: ServerMode,
    bundle: Optional[CredentialBundle],
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Merge auth < user agent < caller headers (caller wins)."""
    result = auth_headers(mode, bundle)
    result.update(user_agent_headers())
    if headers:
        result.update(headers)
    logger.debug(f"build_request_headers: mode={mode.value}, headers={mask_headers(result)}")
    return result
