"""
Authentication engine for engage_voice.

Two regimes, picked by server mode:

- legacy: username/password login, then an api token minted with the login's
  ``authToken``;
- modern: RingCentral OAuth login through the identity platform, then the
  RingCentral access token is exchanged for an Engage Voice token bundle.

Bundles land in the token store. Nothing is retried or refreshed automatically.
"""
import logging
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import urlencode

import httpx

from .constants import (
    ACCESS_TOKEN_PATH,
    FORM_CONTENT_TYPE,
    LEGACY_API_TOKEN_PATH,
    LEGACY_LOGIN_PATH,
)
from .exceptions import EngageVoiceError, TokenStateError, response_data
from .headers import LEGACY_AUTH_HEADER, mask_sensitive
from .identity import IdentityPlatform
from .token_store import TokenStore
from .types import CredentialBundle, RequestSpec, ServerMode

logger = logging.getLogger("engage_voice.auth")

Sender = Callable[[RequestSpec], Awaitable[httpx.Response]]


class AuthEngine:
    """Login / token exchange / refresh / revoke against one server.

    Args:
        server: Engage Voice server base URL
        mode: Server mode, fixed for the engine's lifetime
        store: Token store the resulting bundles are written to
        send: Raw transport call (no auth headers added)
        dispatch: Client dispatcher (auth headers added), used for revoke
        identity: Identity platform, used by the modern flow
    """

    def __init__(
        self,
        server: str,
        mode: ServerMode,
        store: TokenStore,
        send: Sender,
        dispatch: Sender,
        identity: Optional[IdentityPlatform] = None,
    ):
        self.server = server.rstrip("/")
        self.mode = mode
        self.store = store
        self._send = send
        self._dispatch = dispatch
        self.identity = identity

    async def authorize(self, **credentials: Any) -> None:
        """Log in and populate the token store according to the server mode."""
        logger.debug(f"AuthEngine.authorize: mode={self.mode.value}")
        if self.mode is ServerMode.LEGACY:
            await self.legacy_authorize(**credentials)
        else:
            if self.identity is None:
                raise EngageVoiceError("Modern authorization requires an identity platform client")
            await self.identity.login(**credentials)
            await self.get_token()
        logger.info(f"AuthEngine.authorize: authorized against {self.server} ({self.mode.value})")

    async def legacy_authorize(self, username: str, password: str) -> None:
        await self.get_legacy_token(username=username, password=password)

    async def get_legacy_token(self, username: str, password: str) -> CredentialBundle:
        """Two-step legacy login; stores ``{**login, "apiToken": api_token}``."""
        login = await self._send(
            RequestSpec(
                method="POST",
                url=self.server + LEGACY_LOGIN_PATH,
                data=urlencode({"username": username, "password": password}),
                headers={"Content-Type": FORM_CONTENT_TYPE},
            )
        )
        login_data = response_data(login)
        auth_token = ""
        if isinstance(login_data, dict):
            auth_token = login_data.get("authToken") or ""
        logger.debug(f"AuthEngine.get_legacy_token: authToken={mask_sensitive(auth_token)}")

        minted = await self._send(
            RequestSpec(
                method="POST",
                url=self.server + LEGACY_API_TOKEN_PATH,
                headers={LEGACY_AUTH_HEADER: auth_token},
            )
        )
        api_token = response_data(minted)
        if not isinstance(api_token, dict):
            api_token = "" if api_token is None else str(api_token)

        bundle = dict(login_data) if isinstance(login_data, dict) else {}
        bundle["apiToken"] = api_token
        self.store.set(bundle)
        return bundle

    def _identity_access_token(self) -> str:
        data = self.identity.auth_data() if self.identity is not None else None
        return (data or {}).get("access_token") or ""

    async def get_token(self, refresh_token: Optional[str] = None) -> CredentialBundle:
        """Exchange a RingCentral access token (or an Engage refresh token) for a bundle."""
        if refresh_token:
            body = {"refreshToken": refresh_token, "rcTokenType": "Bearer"}
        else:
            body = {"rcAccessToken": self._identity_access_token(), "rcTokenType": "Bearer"}
        logger.debug(
            f"AuthEngine.get_token: using {'refreshToken' if refresh_token else 'rcAccessToken'}="
            f"{mask_sensitive(refresh_token or body['rcAccessToken'])}"
        )

        response = await self._send(
            RequestSpec(
                method="POST",
                url=self.server + ACCESS_TOKEN_PATH,
                data=urlencode(body),
                headers={"Content-Type": FORM_CONTENT_TYPE},
            )
        )
        bundle = response_data(response)
        if not isinstance(bundle, dict):
            raise EngageVoiceError(f"Unexpected token exchange response: {bundle!r}")
        self.store.set(bundle)
        return bundle

    async def refresh(self) -> CredentialBundle:
        """Re-run the token exchange with the stored ``refreshToken``."""
        bundle = self.store.get()
        refresh_token = (bundle or {}).get("refreshToken")
        if not refresh_token:
            raise TokenStateError("No refresh token stored; authorize first")
        return await self.get_token(refresh_token)

    async def revoke_legacy_token(self) -> Optional[httpx.Response]:
        """Delete the stored legacy api token on the server; no-op without a bundle."""
        bundle = self.store.get()
        if not bundle:
            logger.debug("AuthEngine.revoke_legacy_token: no token stored, nothing to revoke")
            return None
        api_token = bundle.get("apiToken") or ""
        logger.debug(f"AuthEngine.revoke_legacy_token: apiToken={mask_sensitive(str(api_token))}")
        return await self._dispatch(
            RequestSpec(method="DELETE", url=f"{self.server}{LEGACY_API_TOKEN_PATH}/{api_token}")
        )
