"""
Exceptions for engage_voice.

Transport failures that carry a response are classified into ``HTTPError``;
failures without a response (connect errors, timeouts, DNS) are re-raised
unchanged since there is no status to classify.
"""
import functools
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from .headers import mask_headers

logger = logging.getLogger("engage_voice.exceptions")

T = TypeVar("T")


class EngageVoiceError(Exception):
    """Base exception for all engage_voice errors."""


class TokenStateError(EngageVoiceError):
    """The stored credentials can't support the requested operation (e.g. refresh)."""


def _safe_config(config: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not config:
        return config
    safe = dict(config)
    if isinstance(safe.get("headers"), dict):
        safe["headers"] = mask_headers(safe["headers"])
    return safe


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, default=str)
    except (TypeError, ValueError):
        return repr(value)


class HTTPError(EngageVoiceError):
    """A request that got a response the transport rejected (non-2xx).

    All fields are kept verbatim for programmatic branching on ``status``;
    only the rendered message masks credential headers.
    """

    def __init__(
        self,
        status: int,
        status_text: str,
        data: Any,
        config: Optional[Dict[str, Any]],
        response: Optional[Any] = None,
    ):
        self.status = status
        self.status_text = status_text
        self.data = data
        self.config = config
        self.response = response
        super().__init__(
            f"status: {status}\n"
            f"statusText: {status_text}\n"
            f"data: {_dump(data)}\n"
            f"config: {_dump(_safe_config(config))}"
        )

    def __reduce__(self):
        return (self.__class__, (self.status, self.status_text, self.data, self.config))


def response_data(response: Any) -> Any:
    """Decoded body of ``response``: parsed JSON for JSON content types, text otherwise.

    A ``text/plain`` body such as ``1234567890`` stays a string.
    """
    if hasattr(response, "data") and not hasattr(response, "text"):
        return response.data
    text = getattr(response, "text", "")
    headers = getattr(response, "headers", None) or {}
    content_type = headers.get("content-type", "")
    if not text or "json" not in content_type.lower():
        return text
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return text


def classify_error(exc: BaseException, config: Optional[Dict[str, Any]] = None) -> BaseException:
    """Map a transport failure to the exception the caller should see.

    Returns an ``HTTPError`` when ``exc`` carries a response, ``exc`` itself otherwise.
    """
    response = getattr(exc, "response", None)
    if response is None or isinstance(exc, HTTPError):
        return exc

    status = getattr(response, "status_code", None)
    if status is None:
        status = getattr(response, "status", 0)
    status_text = getattr(response, "reason_phrase", None)
    if status_text is None:
        status_text = getattr(response, "status_text", None) or getattr(response, "statusText", "")
    if config is None:
        config = getattr(response, "config", None)

    error = HTTPError(
        status=status,
        status_text=status_text or "",
        data=response_data(response),
        config=config,
        response=response,
    )
    logger.debug(f"classify_error: {type(exc).__name__} -> HTTPError(status={status})")
    return error


def classify_transport_errors(
    get_config: Callable[..., Optional[Dict[str, Any]]],
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorate the transport call so response-bearing failures become ``HTTPError``.

    ``get_config`` receives the wrapped call's arguments and returns the request
    config recorded on the error.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                error = classify_error(exc, get_config(*args, **kwargs))
                if error is exc:
                    raise
                raise error from exc

        return wrapper

    return decorator
