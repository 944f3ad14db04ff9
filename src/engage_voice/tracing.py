"""
Request/response tracing with rich panels.

Enabled with ``trace=True`` on the client; useful when poking at the API by hand.
"""
import json
from typing import Any, Optional

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from .exceptions import response_data
from .headers import mask_headers
from .types import RequestSpec


def _format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    return str(body)


class RequestTracer:
    """Prints dispatched requests and their responses."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def _body_panel(self, body: Any, title: str) -> None:
        text = _format_body(body)
        if not text:
            return
        lexer = "json" if isinstance(body, (dict, list)) else "text"
        self.console.print(Panel(Syntax(text, lexer, theme="monokai"), title=title, expand=True))

    def trace_request(self, spec: RequestSpec) -> None:
        self.console.print(
            Panel(f"[bold cyan]{spec.method}[/bold cyan] {spec.url}", title="[bold blue]Request[/bold blue]")
        )
        self.console.print("[bold]Headers:[/bold]", mask_headers(spec.headers or {}))
        self._body_panel(spec.data, "[bold]Request Body[/bold]")

    def trace_response(self, response: httpx.Response) -> None:
        status_color = "green" if response.is_success else "red"
        self.console.print(
            Panel(
                f"[bold {status_color}]{response.status_code}[/bold {status_color}] {response.reason_phrase or ''}",
                title=f"[bold blue]Response[/bold blue] ({response.request.url})",
            )
        )
        self._body_panel(response_data(response), "[bold]Response Body[/bold]")
