"""
Type definitions for engage_voice.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Literal, Optional, Union

# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

# Token fields as returned by the login / token exchange endpoints.
# Legacy: authToken, apiToken, ...  Modern: accessToken, refreshToken, rcTokenType, ...
CredentialBundle = Dict[str, Any]

TokenListener = Callable[[Optional[CredentialBundle]], None]

QueryParams = Dict[str, Union[str, int, bool]]


class ServerMode(str, Enum):
    """Authentication regime spoken by the configured server."""

    LEGACY = "legacy"
    MODERN = "modern"


@dataclass
class RequestSpec:
    """A request as handed to the dispatcher.

    ``url`` may be absolute, or a path relative to ``server`` + ``api_prefix``.
    """

    method: HttpMethod
    url: str
    data: Optional[Any] = None
    headers: Optional[Dict[str, str]] = None
    params: Optional[QueryParams] = None

    def to_config(self) -> Dict[str, Any]:
        """Plain dict view, kept on HTTPError as the originating request config."""
        return {
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers or {}),
            "data": self.data,
            "params": dict(self.params) if self.params else None,
        }
