"""
RingCentral Engage Voice client.

Usage:
    async with EngageVoice(client_id, client_secret) as ev:
        await ev.authorize(jwt=os.environ["RINGCENTRAL_JWT"])
        r = await ev.get("/api/v1/admin/accounts")

    legacy = EngageVoice(client_id, client_secret, server="https://portal.vacd.biz", api_prefix="")
    await legacy.authorize(username="user", password="pass")
"""
import logging
from typing import Any, Callable, Dict, Optional, Union

import httpx

from .auth import AuthEngine
from .config import ClientConfig, TimeoutConfig, validate_config
from .constants import DEFAULT_API_PREFIX, LEGACY_SERVERS, RINGCENTRAL_SERVER, SERVER
from .headers import build_request_headers
from .identity import IdentityPlatform, RingCentralPlatform
from .token_store import TokenStore
from .tracing import RequestTracer
from .transport import Transport
from .types import CredentialBundle, HttpMethod, QueryParams, RequestSpec, ServerMode, TokenListener
from .url import resolve_url

logger = logging.getLogger("engage_voice.client")

TOKEN_CHANGED = "tokenChanged"

_UNSET: Any = object()


class EngageVoice:
    """Async Engage Voice API client for both legacy and OAuth-backed servers.

    The server mode is fixed at construction from ``server``. Credentials are
    read from the token store when each request is dispatched.

    Args:
        client_id: RingCentral app client id
        client_secret: RingCentral app client secret
        server: Engage Voice server (default: https://engage.ringcentral.com)
        identity_server: RingCentral platform server used for OAuth login
        api_prefix: Path segment prepended to relative request paths
        timeout: Request timeout (seconds or TimeoutConfig)
        verify_ssl: Verify TLS certificates (default: from environment)
        trace: Print requests and responses with rich
        http_client: httpx.AsyncClient to send Engage Voice requests with
        identity: Identity platform client (default: RingCentralPlatform)
    """

    SERVER = SERVER
    LEGACY_SERVERS = LEGACY_SERVERS

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        server: str = SERVER,
        identity_server: str = RINGCENTRAL_SERVER,
        api_prefix: str = DEFAULT_API_PREFIX,
        *,
        timeout: Union[TimeoutConfig, float, None] = None,
        verify_ssl: Optional[bool] = None,
        trace: bool = False,
        http_client: Optional[httpx.AsyncClient] = None,
        identity: Optional[IdentityPlatform] = None,
    ):
        self.config = ClientConfig(
            client_id=client_id,
            client_secret=client_secret,
            server=server,
            identity_server=identity_server,
            api_prefix=api_prefix,
            timeout=timeout,
            verify_ssl=verify_ssl,
            trace=trace,
        )
        validate_config(self.config)

        self._mode = self.config.server_mode
        self._store = TokenStore()
        self._transport = Transport(
            http_client,
            timeout=self.config.resolved_timeout,
            verify_ssl=self.config.ssl_verify,
            tracer=RequestTracer() if trace else None,
        )
        if identity is None and self._mode is ServerMode.MODERN:
            identity = RingCentralPlatform(
                identity_server,
                client_id,
                client_secret,
                timeout=self.config.resolved_timeout,
                verify_ssl=self.config.ssl_verify,
            )
        self.identity = identity
        self._auth = AuthEngine(
            server=server,
            mode=self._mode,
            store=self._store,
            send=self._transport.send,
            dispatch=self.request,
            identity=identity,
        )
        logger.debug(
            f"EngageVoice.__init__: server={server}, mode={self._mode.value}, "
            f"api_prefix={api_prefix!r}"
        )

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any) -> "EngageVoice":
        """Build a client from a ``ClientConfig`` (e.g. ``ClientConfig.from_env()``)."""
        return cls(
            config.client_id,
            config.client_secret,
            server=config.server,
            identity_server=config.identity_server,
            api_prefix=config.api_prefix,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            trace=config.trace,
            **kwargs,
        )

    @property
    def server(self) -> str:
        return self.config.server

    @property
    def api_prefix(self) -> str:
        return self.config.api_prefix

    @property
    def server_mode(self) -> ServerMode:
        return self._mode

    @property
    def is_legacy(self) -> bool:
        return self._mode is ServerMode.LEGACY

    # -- token store ---------------------------------------------------------

    def token(self, bundle: Optional[CredentialBundle] = _UNSET) -> Optional[CredentialBundle]:
        """``token()`` returns the current bundle; ``token(bundle)`` replaces it."""
        if bundle is _UNSET:
            return self._store.get()
        self._store.set(bundle)
        return self._store.get()

    def on(self, event: str, listener: TokenListener) -> Callable[[], None]:
        """Subscribe to ``tokenChanged``; returns an unsubscribe callable."""
        if event != TOKEN_CHANGED:
            raise ValueError(f"Unknown event: {event!r} (supported: {TOKEN_CHANGED!r})")
        return self._store.subscribe(listener)

    def off(self, event: str, listener: TokenListener) -> None:
        if event != TOKEN_CHANGED:
            raise ValueError(f"Unknown event: {event!r} (supported: {TOKEN_CHANGED!r})")
        self._store.unsubscribe(listener)

    def on_token_changed(self, listener: TokenListener) -> Callable[[], None]:
        return self.on(TOKEN_CHANGED, listener)

    # -- authentication ------------------------------------------------------

    async def authorize(self, **credentials: Any) -> None:
        """Legacy: ``username``/``password``. Modern: any RingCentral login arguments."""
        await self._auth.authorize(**credentials)

    async def refresh(self) -> CredentialBundle:
        return await self._auth.refresh()

    async def get_token(self, refresh_token: Optional[str] = None) -> CredentialBundle:
        return await self._auth.get_token(refresh_token)

    async def revoke_legacy_token(self) -> Optional[httpx.Response]:
        return await self._auth.revoke_legacy_token()

    # -- requests ------------------------------------------------------------

    async def request(self, spec: RequestSpec) -> httpx.Response:
        """Resolve the URL, inject headers and send ``spec``."""
        composed = RequestSpec(
            method=spec.method,
            url=resolve_url(self.server, self.api_prefix, spec.url),
            data=spec.data,
            headers=build_request_headers(self._mode, self._store.get(), spec.headers),
            params=spec.params,
        )
        return await self._transport.send(composed)

    async def _verb(
        self,
        method: HttpMethod,
        url: str,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[QueryParams] = None,
    ) -> httpx.Response:
        return await self.request(RequestSpec(method=method, url=url, data=data, headers=headers, params=params))

    async def get(self, url: str, **config: Any) -> httpx.Response:
        return await self._verb("GET", url, **config)

    async def delete(self, url: str, **config: Any) -> httpx.Response:
        return await self._verb("DELETE", url, **config)

    async def post(self, url: str, data: Any = None, **config: Any) -> httpx.Response:
        return await self._verb("POST", url, data, **config)

    async def put(self, url: str, data: Any = None, **config: Any) -> httpx.Response:
        return await self._verb("PUT", url, data, **config)

    async def patch(self, url: str, data: Any = None, **config: Any) -> httpx.Response:
        return await self._verb("PATCH", url, data, **config)

    # -- lifecycle -----------------------------------------------------------

    async def close(self) -> None:
        """Close the http clients (including an injected one)."""
        await self._transport.close()
        if self.identity is not None:
            await self.identity.close()

    async def __aenter__(self) -> "EngageVoice":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
