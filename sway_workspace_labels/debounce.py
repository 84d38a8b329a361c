"""Debounced trigger for reconciliation passes.

Notifications re-arm a timer; when the timer expires without another
notification the action runs once. A single runner task executes the
action, so passes never overlap. Timer expiries that happen while a pass
is running collapse into one follow-up pass.

States:
    IDLE   no timer pending
    ARMED  timer pending, counting down the quiet period
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from .errors import WorkspaceLabelError

logger = logging.getLogger(__name__)

DEFAULT_QUIET_PERIOD = 0.1  # 100ms


class DebounceState(Enum):
    IDLE = "idle"
    ARMED = "armed"


class Debouncer:
    """Coalesce bursts of notifications into single action runs."""

    def __init__(
        self,
        action: Callable[[], Awaitable[object]],
        quiet_period: float = DEFAULT_QUIET_PERIOD,
    ) -> None:
        """
        Args:
            action: Coroutine function run after each quiet period
            quiet_period: Seconds without notifications before the action runs
        """
        self.action = action
        self.quiet_period = quiet_period
        self.state = DebounceState.IDLE
        self.passes = 0
        self._handle: Optional[asyncio.TimerHandle] = None
        self._fired = asyncio.Event()

    def reset(self) -> None:
        """Restart the quiet period. Must be called from the event loop thread."""
        self._arm(self.quiet_period)

    def _arm(self, delay: float) -> None:
        if self._handle is not None:
            self._handle.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire)
        self.state = DebounceState.ARMED

    def _fire(self) -> None:
        self._handle = None
        self.state = DebounceState.IDLE
        self._fired.set()

    def stop(self) -> None:
        """Cancel the pending timer, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.state = DebounceState.IDLE

    async def run(self) -> None:
        """Run the action after every quiet period, forever.

        The first pass is scheduled immediately so labels are fixed up even
        if no event ever arrives.
        """
        self._arm(0)
        while True:
            await self._fired.wait()
            self._fired.clear()
            self.passes += 1
            try:
                await self.action()
            except WorkspaceLabelError as e:
                logger.error(f"Error updating workspace labels: {e.to_dict()}")
