"""
Token store: the single mutable credential slot of a client.
"""
import logging
from typing import Callable, List, Optional

from .headers import mask_sensitive
from .types import CredentialBundle, TokenListener

logger = logging.getLogger("engage_voice.token_store")


def _describe(bundle: Optional[CredentialBundle]) -> str:
    if bundle is None:
        return "<empty>"
    token = bundle.get("accessToken") or bundle.get("apiToken") or bundle.get("authToken")
    token = token if isinstance(token, str) else None
    return f"keys={sorted(bundle)}, token={mask_sensitive(token)}"


class TokenStore:
    """Holds at most one credential bundle and notifies listeners on change.

    Bundles are replaced wholesale, never mutated in place: callers and
    listeners only ever see copies. A ``set`` whose bundle equals the stored
    one (same object or same value) is a no-op and notifies nobody.
    """

    def __init__(self, bundle: Optional[CredentialBundle] = None):
        self._bundle: Optional[CredentialBundle] = dict(bundle) if bundle is not None else None
        self._listeners: List[TokenListener] = []

    def get(self) -> Optional[CredentialBundle]:
        """Copy of the stored bundle; editing it does not touch the store."""
        return dict(self._bundle) if self._bundle is not None else None

    def set(self, bundle: Optional[CredentialBundle]) -> bool:
        """Replace the stored bundle. Returns True if it changed."""
        if bundle is self._bundle or bundle == self._bundle:
            logger.debug("TokenStore.set: bundle unchanged, no notification")
            return False

        self._bundle = dict(bundle) if bundle is not None else None
        logger.debug(f"TokenStore.set: bundle changed ({_describe(self._bundle)})")
        for listener in list(self._listeners):
            listener(self.get())
        return True

    def subscribe(self, listener: TokenListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: TokenListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
