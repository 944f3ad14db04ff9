"""
httpx-backed transport for engage_voice.

One attempt per call: no retries, no caching. Non-2xx responses are raised and
classified into ``HTTPError`` at this single call site.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from .config import DEFAULT_TIMEOUT, TimeoutConfig
from .exceptions import classify_transport_errors
from .headers import mask_headers
from .tracing import RequestTracer
from .types import RequestSpec

logger = logging.getLogger("engage_voice.transport")


def create_http_client(timeout: TimeoutConfig = DEFAULT_TIMEOUT, verify_ssl: bool = True) -> httpx.AsyncClient:
    """Default ``httpx.AsyncClient``; follows redirects so only non-2xx finals reject."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=timeout.connect,
            read=timeout.read,
            write=timeout.write,
            pool=timeout.connect,
        ),
        verify=verify_ssl,
        follow_redirects=True,
    )


def _body_kwargs(data: Any) -> Dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, (str, bytes)):
        return {"content": data}
    return {"json": data}


class Transport:
    """Sends fully composed requests (absolute URL, final headers)."""

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: TimeoutConfig = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
        tracer: Optional[RequestTracer] = None,
    ):
        if http_client is not None:
            self._client = http_client
        else:
            self._client = create_http_client(timeout, verify_ssl)
        self._tracer = tracer
        self._closed = False

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    @property
    def closed(self) -> bool:
        return self._closed

    @classify_transport_errors(lambda self, spec: spec.to_config())
    async def send(self, spec: RequestSpec) -> httpx.Response:
        """Send ``spec``; raises for non-2xx responses."""
        if self._closed:
            raise RuntimeError("Client has been closed")

        logger.debug(
            f"Transport.send: method={spec.method}, url={spec.url}, "
            f"headers={mask_headers(spec.headers or {})}"
        )
        if self._tracer:
            self._tracer.trace_request(spec)

        response = await self._client.request(
            method=spec.method,
            url=spec.url,
            headers=spec.headers,
            params=spec.params,
            **_body_kwargs(spec.data),
        )

        if self._tracer:
            self._tracer.trace_response(response)
        logger.debug(f"Transport.send: {spec.method} {spec.url} -> {response.status_code}")

        response.raise_for_status()
        return response

    async def close(self) -> None:
        """Close the underlying http client."""
        self._closed = True
        await self._client.aclose()
