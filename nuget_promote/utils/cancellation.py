"""
Cooperative cancellation for promotion runs.

A CancellationToken is created by the caller and passed explicitly through
every asynchronous call. Long running loops call ``raise_if_cancelled`` at
well-defined points; nothing inside the core installs signal handlers.
"""

import asyncio
import logging
from typing import Optional

from ..exceptions import PromotionCancelledError


class CancellationToken:
    """A one-shot flag that can be awaited or polled."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "Operation cancelled") -> None:
        """Request cancellation; repeated calls keep the first reason."""
        if not self._event.is_set():
            self._reason = reason
            logging.debug("Cancellation requested: %s", reason)
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """
        Abort the current operation if cancellation was requested.

        Raises:
            PromotionCancelledError: If the token has been cancelled
        """
        if self._event.is_set():
            raise PromotionCancelledError(self._reason or "Operation cancelled")

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()


def ensure_token(token: Optional[CancellationToken]) -> CancellationToken:
    """Return the given token, or a fresh one that is never cancelled."""
    return token if token is not None else CancellationToken()


__all__ = ["CancellationToken", "ensure_token"]
