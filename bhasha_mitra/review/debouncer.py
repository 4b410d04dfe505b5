"""Coalesce hover-triggered highlight requests.

Hovering over a list of suggestions fires a request per card. Only the card
the pointer settles on should reach the document: each hover cancels the
pending highlight and reschedules with the new target, so at most one
adapter call is made per quiet period.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from ..document.adapter import DocumentAdapter

LOGGER = logging.getLogger(__name__)

HOVER_DELAY = 0.3


class HighlightDebouncer:
    def __init__(self, adapter: DocumentAdapter, *, delay: float = HOVER_DELAY) -> None:
        self._adapter = adapter
        self._delay = delay
        self._pending: asyncio.Task[None] | None = None
        self._latest: asyncio.Task[None] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def hover(self, text: str, color: str) -> None:
        """Schedule a highlight of ``text``, replacing any pending one.

        Must be called from a running event loop.
        """
        self.cancel()
        if not text.strip():
            return
        self._pending = self._latest = asyncio.get_running_loop().create_task(
            self._fire(text, color)
        )

    def cancel(self) -> None:
        """Drop the pending highlight, if any, before it reaches the document."""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> None:
        """Wait for the most recently scheduled highlight to finish."""
        task = self._latest
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _fire(self, text: str, color: str) -> None:
        await asyncio.sleep(self._delay)
        # Past this point the highlight is committed and must not be cancelled
        self._pending = None
        LOGGER.debug("Hover highlight %r in %s", text, color)
        await self._adapter.batch_highlight([(text, color)])
