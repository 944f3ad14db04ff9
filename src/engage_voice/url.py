"""
URL resolution for engage_voice.

Relative request paths are resolved against ``server`` + ``api_prefix``;
absolute URLs (anything with a hostname) pass through untouched.
"""
import logging
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger("engage_voice.url")


def join_paths(*parts: str) -> str:
    """Join path parts into one absolute path with single separators."""
    segments = [seg for part in parts if part for seg in part.split("/") if seg]
    return "/" + "/".join(segments)


def has_api_prefix(path: str, api_prefix: str) -> bool:
    """True if ``path`` already starts with ``api_prefix`` (leading slash optional).

    The match is per path segment: with prefix ``voice``, ``voice/calls`` and
    ``/voice/calls`` match while ``voicemail/calls`` does not, so a path that
    merely starts with the same letters still gets the prefix (see the API
    prefix decision in DESIGN.md).
    """
    prefix = api_prefix.strip("/")
    if not prefix:
        return True
    stripped = path.lstrip("/")
    return stripped == prefix or stripped.startswith(prefix + "/")


def resolve_url(server: str, api_prefix: str, url: str) -> str:
    """Build the absolute URL for a request target."""
    target = urlsplit(url or "")
    if target.hostname:
        return url

    prefix = "" if has_api_prefix(target.path, api_prefix) else api_prefix
    base = urlsplit(server)
    path = join_paths(base.path, prefix, target.path)
    if target.path.endswith("/") and path != "/":
        path += "/"

    resolved = urlunsplit((base.scheme, base.netloc, path, target.query, target.fragment))
    logger.debug(f"resolve_url: url={url!r}, api_prefix={api_prefix!r} -> {resolved}")
    return resolved
