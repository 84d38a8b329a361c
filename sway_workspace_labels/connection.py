"""Sway IPC connection wrapper.

Handles connecting with retry, tree snapshots, command execution and the
event subscription. Transport failures are converted into the daemon's
error types so callers can tell fatal from per-pass failures.
"""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Iterable, List, Optional, Union

from i3ipc import Event, aio
from i3ipc.events import IpcBaseEvent

from .errors import CommandError, SubscriptionError, SwayConnectionError, TreeFetchError
from .models import TreeNode

logger = logging.getLogger(__name__)

EventHandler = Callable[[aio.Connection, IpcBaseEvent], Awaitable[None]]


class SwayConnection:
    """Owns the i3ipc.aio connection used by the daemon."""

    def __init__(self, socket_path: Optional[Path] = None) -> None:
        """Initialize connection manager.

        Args:
            socket_path: Sway IPC socket, or None to let i3ipc discover it
        """
        self.socket_path = socket_path
        self.conn: Optional[aio.Connection] = None
        self.is_shutting_down = False
        self.reconnect_delay = 0.1  # Initial delay: 100ms

    @property
    def is_connected(self) -> bool:
        return self.conn is not None and not self.is_shutting_down

    async def connect_with_retry(self, max_attempts: int = 10) -> aio.Connection:
        """Connect to Sway with exponential backoff retry.

        Args:
            max_attempts: Maximum connection attempts

        Returns:
            Connected i3ipc.aio.Connection

        Raises:
            SwayConnectionError: If connection fails after max attempts
        """
        attempt = 0
        delay = self.reconnect_delay
        last_error = "no attempts made"
        socket_path = str(self.socket_path) if self.socket_path else None

        while attempt < max_attempts:
            try:
                logger.info(f"Attempting to connect to Sway (attempt {attempt + 1}/{max_attempts})")

                self.conn = await aio.Connection(socket_path=socket_path).connect()

                version = await self.conn.get_version()
                logger.info(f"Connected to Sway version {version.human_readable}")
                return self.conn

            except Exception as e:
                self.conn = None
                last_error = str(e)
                logger.warning(f"Connection attempt {attempt + 1} failed: {e}")
                attempt += 1

                if attempt < max_attempts:
                    logger.debug(f"Waiting {delay:.1f}s before retry...")
                    await asyncio.sleep(delay)

                    # Exponential backoff: double delay up to 5s max
                    delay = min(delay * 2, 5.0)

        raise SwayConnectionError(max_attempts, last_error)

    async def fetch_tree(self) -> TreeNode:
        """Fetch the current Sway tree.

        Raises:
            TreeFetchError: If not connected or GET_TREE fails
        """
        if not self.conn:
            raise TreeFetchError("not connected")

        try:
            tree = await self.conn.get_tree()
            return TreeNode.model_validate(tree.ipc_data)
        except Exception as e:
            raise TreeFetchError(str(e)) from e

    async def run_command(self, command: str) -> List:
        """Run a Sway command.

        Returns:
            List of command replies, all successful

        Raises:
            CommandError: If the command could not be sent or Sway rejected it
        """
        if not self.conn:
            raise CommandError(command, "not connected")

        try:
            replies = await self.conn.command(command)
        except Exception as e:
            raise CommandError(command, str(e)) from e

        for reply in replies:
            if not reply.success:
                raise CommandError(command, reply.error or "unknown error")
        return replies

    async def subscribe(
        self,
        event_kinds: Iterable[Union[Event, str]],
        handler: EventHandler,
    ) -> None:
        """Register handler for each event kind and subscribe to them.

        Raises:
            SubscriptionError: If not connected or the subscribe request fails
        """
        if not self.conn:
            raise SubscriptionError("not connected")

        kinds = list(event_kinds)
        try:
            for kind in kinds:
                self.conn.on(kind, handler)
            # on() only schedules the subscription; make sure it is active
            # before the main loop starts.
            await self.conn.subscribe(kinds)
        except Exception as e:
            raise SubscriptionError(str(e)) from e

        logger.info(f"Subscribed to Sway events: {', '.join(_event_name(k) for k in kinds)}")

    async def main(self) -> None:
        """Run the i3ipc event loop until the connection closes.

        Raises:
            SubscriptionError: If the event stream fails or ends while not shutting down
        """
        if not self.conn:
            raise SubscriptionError("not connected")

        try:
            await self.conn.main()
        except Exception as e:
            if self.is_shutting_down:
                logger.info("Sway event loop stopped (shutdown)")
                return
            raise SubscriptionError(str(e)) from e

        if not self.is_shutting_down:
            raise SubscriptionError("event stream closed")
        logger.info("Sway event loop stopped (shutdown)")

    def close(self) -> None:
        """Stop the event loop and drop the connection."""
        self.is_shutting_down = True
        if self.conn:
            self.conn.main_quit()
            self.conn = None
            logger.info("Closed Sway connection")


def _event_name(kind: Union[Event, str]) -> str:
    return kind.value if isinstance(kind, Event) else str(kind)
