"""
Loading narrator - rotates a whimsical message while a lookup is in flight

The narrator owns a single asyncio task. ``start()`` acquires it and
``stop()`` releases it; once stopped the index never advances again.
"""

import asyncio
import logging
from typing import Callable, Optional, Sequence, Tuple

from .constants import LOADING_MESSAGES, NARRATOR_INTERVAL_SECONDS

logger = logging.getLogger(__name__)

MessageCallback = Callable[[str], None]


class LoadingNarrator:
    """
    Cycles through ``messages`` every ``interval`` seconds.

    Example:
        narrator = LoadingNarrator(on_message=print)
        narrator.start()      # prints messages[0], then one every 3s
        ...
        narrator.stop()
    """

    def __init__(
        self,
        messages: Sequence[str] = LOADING_MESSAGES,
        interval: float = NARRATOR_INTERVAL_SECONDS,
        on_message: Optional[MessageCallback] = None,
    ):
        if not messages:
            raise ValueError("LoadingNarrator needs at least one message")
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.messages: Tuple[str, ...] = tuple(messages)
        self.interval = interval
        self.on_message = on_message
        self.index = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def message(self) -> str:
        return self.messages[self.index]

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Reset to the first message and start the timer. Requires a running loop."""
        self.stop()
        self.index = 0
        self._emit()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Cancel the timer. Safe to call repeatedly."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    def advance(self) -> str:
        """Move to the next message, wrapping at the end."""
        self.index = (self.index + 1) % len(self.messages)
        self._emit()
        return self.message

    async def _run(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.interval)
                self.advance()
        except asyncio.CancelledError:
            logger.debug("Narrator stopped")
            raise

    def _emit(self) -> None:
        if self.on_message is None:
            return
        try:
            self.on_message(self.message)
        except Exception as e:
            logger.warning(f"Narrator callback failed: {e}")
