"""
Configuration for engage_voice.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Union
from urllib.parse import urlparse

from .constants import DEFAULT_API_PREFIX, LEGACY_SERVERS, RINGCENTRAL_SERVER, SERVER
from .headers import mask_sensitive
from .types import ServerMode

logger = logging.getLogger("engage_voice.config")

ENV_PREFIX = "ENGAGE_VOICE_"


def is_ssl_verify_disabled_by_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    env = os.environ if environ is None else environ
    node_tls = env.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = env.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


@dataclass(frozen=True)
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


DEFAULT_TIMEOUT = TimeoutConfig()


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    """Client configuration.

    ``server`` decides the server mode: one of ``LEGACY_SERVERS`` selects the
    username/password flow, anything else the RingCentral OAuth flow.
    """

    client_id: str
    client_secret: str
    server: str = SERVER
    identity_server: str = RINGCENTRAL_SERVER
    api_prefix: str = DEFAULT_API_PREFIX
    timeout: Union[TimeoutConfig, float, None] = None
    verify_ssl: Optional[bool] = None
    trace: bool = False

    def __post_init__(self):
        # Detect a URL passed as client id (common argument-order mistake)
        if self.client_id and self.client_id.startswith(("http://", "https://")):
            logger.warning(
                f"ClientConfig: client_id appears to be a URL "
                f"({self.client_id[:30]}...). This is likely a misconfiguration."
            )

    @property
    def resolved_timeout(self) -> TimeoutConfig:
        return normalize_timeout(self.timeout)

    @property
    def ssl_verify(self) -> bool:
        if self.verify_ssl is not None:
            return self.verify_ssl
        return not is_ssl_verify_disabled_by_env()

    @property
    def server_mode(self) -> ServerMode:
        return detect_server_mode(self.server)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build a config from ``ENGAGE_VOICE_*`` environment variables."""
        env = os.environ if environ is None else environ

        def get(name: str, default: Optional[str] = None) -> Optional[str]:
            return env.get(ENV_PREFIX + name) or default

        timeout_raw = get("TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else None
        except ValueError as e:
            raise ValueError(f"Invalid {ENV_PREFIX}TIMEOUT: {timeout_raw!r}") from e

        config = cls(
            client_id=get("CLIENT_ID", ""),
            client_secret=get("CLIENT_SECRET", ""),
            server=get("SERVER", SERVER),
            identity_server=get("IDENTITY_SERVER", RINGCENTRAL_SERVER),
            # An explicitly empty prefix is meaningful, so don't use `or` here
            api_prefix=env.get(ENV_PREFIX + "API_PREFIX", DEFAULT_API_PREFIX),
            timeout=timeout,
            trace=(get("TRACE", "") or "").lower() in ("1", "true", "yes"),
        )
        logger.debug(
            f"ClientConfig.from_env: server={config.server}, "
            f"identity_server={config.identity_server}, api_prefix={config.api_prefix!r}, "
            f"client_id={mask_sensitive(config.client_id)}"
        )
        return config

    def __repr__(self) -> str:
        """Safe repr that masks sensitive values."""
        return (
            f"ClientConfig(client_id={mask_sensitive(self.client_id)!r}, "
            f"client_secret={mask_sensitive(self.client_secret)!r}, "
            f"server={self.server!r}, identity_server={self.identity_server!r}, "
            f"api_prefix={self.api_prefix!r}, timeout={self.timeout!r}, "
            f"verify_ssl={self.verify_ssl!r}, trace={self.trace!r})"
        )


def detect_server_mode(server: str) -> ServerMode:
    """Legacy if ``server`` is one of the deprecated hosts, modern otherwise."""
    normalized = (server or "").rstrip("/")
    if normalized in LEGACY_SERVERS:
        return ServerMode.LEGACY
    return ServerMode.MODERN


def _validate_url(name: str, value: str) -> None:
    if not value:
        raise ValueError(f"{name} is required")
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Invalid {name}: {value}")


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration."""
    _validate_url("server", config.server)
    _validate_url("identity_server", config.identity_server)
    if config.api_prefix is None:
        raise ValueError("api_prefix must be a string (use '' for no prefix)")
