"""
Error handling for the workspace label daemon.

Errors carry a structured code so failures can be logged uniformly.
Only connection and subscription errors are fatal; tree fetch and rename
errors abort a single reconciliation pass.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for the workspace label daemon.

    - 1400-1499: Sway IPC errors
    - 1500-1599: Reconciliation pass errors
    """

    # Sway IPC errors (1400-1499)
    SWAY_NOT_RUNNING = 1400
    SUBSCRIPTION_FAILED = 1401

    # Reconciliation pass errors (1500-1599)
    TREE_FETCH_FAILED = 1500
    COMMAND_FAILED = 1501


class WorkspaceLabelError(Exception):
    """Base exception for workspace label errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize workspace label error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for structured logging.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class SwayConnectionError(WorkspaceLabelError):
    """Could not establish the Sway IPC connection."""

    def __init__(self, attempts: int, reason: str):
        super().__init__(
            code=ErrorCode.SWAY_NOT_RUNNING,
            message=f"Failed to connect to Sway after {attempts} attempts: {reason}",
            suggestion="Ensure Sway is running and SWAYSOCK points at its IPC socket",
            context={"attempts": attempts, "reason": reason}
        )


class SubscriptionError(WorkspaceLabelError):
    """The event subscription failed or the event stream ended."""

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.SUBSCRIPTION_FAILED,
            message=f"Sway event subscription failed: {reason}",
            suggestion="Restart the daemon once Sway is available again",
            context={"reason": reason}
        )


class TreeFetchError(WorkspaceLabelError):
    """GET_TREE failed during a reconciliation pass."""

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.TREE_FETCH_FAILED,
            message=f"Failed to fetch Sway tree: {reason}",
            context={"reason": reason}
        )


class CommandError(WorkspaceLabelError):
    """A command was rejected by Sway or could not be sent."""

    def __init__(self, command: str, reason: str):
        """
        Initialize command error.

        Args:
            command: Command text sent to Sway
            reason: Error reported by Sway or the transport
        """
        super().__init__(
            code=ErrorCode.COMMAND_FAILED,
            message=f"Sway rejected command {command!r}: {reason}",
            context={"command": command, "reason": reason}
        )
