"""Main daemon entry point.

Connects to Sway, subscribes to workspace and window events and relabels
workspaces after each burst of events settles.
"""

import asyncio
import logging
import os
import signal
import sys
from typing import Optional

try:
    from systemd import journal
    SYSTEMD_AVAILABLE = True
except ImportError:
    SYSTEMD_AVAILABLE = False

from i3ipc import Event, aio
from i3ipc.events import IpcBaseEvent

from .config import DaemonConfig, load_config
from .connection import SwayConnection
from .debounce import Debouncer
from .errors import WorkspaceLabelError
from .models import UpdateResult
from .workspace_updater import WorkspaceUpdater

logger = logging.getLogger(__name__)

SUBSCRIBED_EVENTS = [Event.WORKSPACE, Event.WINDOW]


class WorkspaceLabelDaemon:
    """Ties the Sway connection, the debouncer and the label updater together."""

    def __init__(self, config: DaemonConfig) -> None:
        self.config = config
        self.connection = SwayConnection(socket_path=config.socket_path)
        self.updater = WorkspaceUpdater(self.connection)
        self.debouncer = Debouncer(self.updater.update_workspace_labels, config.quiet_period)
        self.shutdown_event = asyncio.Event()
        self._runner_task: Optional[asyncio.Task] = None

    async def initialize(self) -> None:
        """Connect to Sway.

        Raises:
            SwayConnectionError: If Sway cannot be reached
        """
        await self.connection.connect_with_retry(self.config.connect_attempts)

    async def on_change(self, conn: aio.Connection, event: IpcBaseEvent) -> None:
        """Workspace or window event: restart the quiet period."""
        logger.debug(f"Event {type(event).__name__} change={getattr(event, 'change', None)}")
        self.debouncer.reset()

    async def register_event_handlers(self) -> None:
        await self.connection.subscribe(SUBSCRIBED_EVENTS, self.on_change)

    async def run_once(self) -> UpdateResult:
        """Run a single reconciliation pass."""
        return await self.updater.update_workspace_labels()

    async def run(self) -> None:
        """Process events until the connection closes.

        Raises:
            SubscriptionError: If the event stream fails
        """
        self._runner_task = asyncio.create_task(self.debouncer.run(), name="label-pass-runner")
        main_task = asyncio.create_task(self.connection.main(), name="sway-event-loop")
        try:
            done, _ = await asyncio.wait(
                [self._runner_task, main_task], return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            if not main_task.done():
                main_task.cancel()

        for task in done:
            task.result()

    async def shutdown(self) -> None:
        """Stop the debouncer and close the Sway connection."""
        logger.info("Shutting down workspace label daemon...")
        self.debouncer.stop()

        if self._runner_task and not self._runner_task.done():
            self._runner_task.cancel()
            try:
                await self._runner_task
            except asyncio.CancelledError:
                pass

        self.connection.close()
        logger.info("Daemon shutdown complete")

    def setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        def shutdown_handler(signum, frame):
            logger.info(f"Received signal {signum}, initiating shutdown...")
            # Signal handlers must not touch asyncio objects directly
            loop.call_soon_threadsafe(self.shutdown_event.set)

        signal.signal(signal.SIGTERM, shutdown_handler)
        signal.signal(signal.SIGINT, shutdown_handler)


def setup_logging(log_level: str = "INFO") -> None:
    """Setup logging to systemd journal or stderr."""
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if SYSTEMD_AVAILABLE:
        handler = journal.JournalHandler(SYSLOG_IDENTIFIER="sway-workspace-labels")
    else:
        handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(
        "%(levelname)s [%(name)s] %(message)s"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logger.info(f"Logging configured: level={log_level}")


async def main_async(config: DaemonConfig) -> int:
    """Async main function.

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    daemon = WorkspaceLabelDaemon(config)

    try:
        await daemon.initialize()

        if config.once:
            result = await daemon.run_once()
            logger.info(f"Renamed {result.renamed} of {result.examined} workspaces")
            return 0

        daemon.setup_signal_handlers()
        await daemon.register_event_handlers()

        run_task = asyncio.create_task(daemon.run())
        shutdown_task = asyncio.create_task(daemon.shutdown_event.wait())

        # Wait for either run completion or shutdown signal
        done, pending = await asyncio.wait(
            [run_task, shutdown_task], return_when=asyncio.FIRST_COMPLETED
        )

        for task in pending:
            task.cancel()

        if run_task in done:
            run_task.result()

        return 0

    except WorkspaceLabelError as e:
        logger.critical(f"Fatal error: {e.to_dict()}")
        return 1

    finally:
        await daemon.shutdown()


def main() -> None:
    """Main entry point."""
    config = load_config()
    setup_logging(config.log_level)

    logger.info("Sway workspace label daemon starting...")
    logger.info(f"PID: {os.getpid()}")

    try:
        exit_code = asyncio.run(main_async(config))
        sys.exit(exit_code)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)

    except Exception as e:
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
