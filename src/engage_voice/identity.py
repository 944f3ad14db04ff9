"""
RingCentral identity platform client.

Modern Engage Voice servers accept a RingCentral OAuth access token and trade
it for their own token bundle. This module obtains that RingCentral token.
Any object with the ``IdentityPlatform`` shape can be handed to the client
instead.
"""
import base64
import logging
from typing import Any, Dict, Optional, Protocol
from urllib.parse import urlencode

import httpx

from .config import DEFAULT_TIMEOUT, TimeoutConfig
from .constants import FORM_CONTENT_TYPE, OAUTH_TOKEN_PATH
from .exceptions import EngageVoiceError, response_data
from .headers import mask_sensitive
from .transport import Transport
from .types import RequestSpec

logger = logging.getLogger("engage_voice.identity")

JWT_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"


class IdentityPlatform(Protocol):
    """What the auth engine needs from the identity platform."""

    async def login(self, **kwargs: Any) -> Any:
        """Interactive / credential login; establishes the session."""
        ...

    def auth_data(self) -> Optional[Dict[str, Any]]:
        """Current session token data (``access_token`` etc.), None before login."""
        ...

    async def close(self) -> None:
        ...


def _base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("utf-8")


def build_grant(
    username: Optional[str] = None,
    password: Optional[str] = None,
    extension: Optional[str] = None,
    jwt: Optional[str] = None,
    code: Optional[str] = None,
    redirect_uri: Optional[str] = None,
) -> Dict[str, str]:
    """OAuth token request body for the given credentials."""
    if jwt:
        return {"grant_type": JWT_GRANT_TYPE, "assertion": jwt}
    if code:
        if not redirect_uri:
            raise ValueError("authorization code login requires redirect_uri")
        return {"grant_type": "authorization_code", "code": code, "redirect_uri": redirect_uri}
    if username and password is not None:
        grant = {"grant_type": "password", "username": username, "password": password}
        if extension:
            grant["extension"] = extension
        return grant
    raise ValueError("login requires jwt, code + redirect_uri, or username + password")


class RingCentralPlatform:
    """Minimal RingCentral OAuth client: token endpoint and session data only."""

    def __init__(
        self,
        server: str,
        client_id: str,
        client_secret: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: TimeoutConfig = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
    ):
        self.server = server.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self._transport = Transport(http_client, timeout=timeout, verify_ssl=verify_ssl)
        self._auth_data: Optional[Dict[str, Any]] = None

    def _client_auth_header(self) -> Dict[str, str]:
        credentials = f"{self.client_id}:{self.client_secret}"
        return {"Authorization": f"Basic {_base64_encode(credentials)}"}

    async def login(self, **kwargs: Any) -> Dict[str, Any]:
        """Obtain a RingCentral token with password, JWT or authorization-code grant."""
        grant = build_grant(**kwargs)
        logger.debug(
            f"RingCentralPlatform.login: grant_type={grant['grant_type']}, "
            f"client_id={mask_sensitive(self.client_id)}"
        )
        spec = RequestSpec(
            method="POST",
            url=self.server + OAUTH_TOKEN_PATH,
            data=urlencode(grant),
            headers={**self._client_auth_header(), "Content-Type": FORM_CONTENT_TYPE},
        )
        response = await self._transport.send(spec)
        data = response_data(response)
        if not isinstance(data, dict):
            raise EngageVoiceError(f"Unexpected OAuth token response: {data!r}")
        self._auth_data = data
        logger.info(
            f"RingCentralPlatform.login: access_token="
            f"{mask_sensitive(self._auth_data.get('access_token'))}"
        )
        return self._auth_data

    def auth_data(self) -> Optional[Dict[str, Any]]:
        return self._auth_data

    @property
    def access_token(self) -> str:
        return (self._auth_data or {}).get("access_token") or ""

    async def close(self) -> None:
        await self._transport.close()
