"""
Async Python client for the RingCentral Engage Voice API.

Talks to both the legacy username/password servers and the RingCentral
OAuth-backed servers, normalizes request URLs, injects credentials and
classifies HTTP failures into ``HTTPError``.
"""
from .constants import LEGACY_SERVERS, RINGCENTRAL_SERVER, SERVER, VERSION
from .types import CredentialBundle, HttpMethod, RequestSpec, ServerMode
from .config import ClientConfig, TimeoutConfig, detect_server_mode
from .exceptions import EngageVoiceError, HTTPError, TokenStateError, classify_error
from .url import resolve_url
from .headers import auth_headers, build_request_headers
from .token_store import TokenStore
from .identity import IdentityPlatform, RingCentralPlatform
from .auth import AuthEngine
from .client import EngageVoice

__all__ = [
    # Constants
    "SERVER",
    "LEGACY_SERVERS",
    "RINGCENTRAL_SERVER",
    # Types
    "CredentialBundle",
    "HttpMethod",
    "RequestSpec",
    "ServerMode",
    # Config
    "ClientConfig",
    "TimeoutConfig",
    "detect_server_mode",
    # Errors
    "EngageVoiceError",
    "HTTPError",
    "TokenStateError",
    "classify_error",
    # Routing
    "resolve_url",
    "auth_headers",
    "build_request_headers",
    # Auth
    "TokenStore",
    "IdentityPlatform",
    "RingCentralPlatform",
    "AuthEngine",
    # Client
    "EngageVoice",
]

__version__ = VERSION
