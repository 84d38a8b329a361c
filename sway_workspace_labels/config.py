"""Daemon configuration.

Values come from defaults, then environment variables, then command line
flags. Naming rules are fixed and not configurable.
"""

import argparse
import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from . import __version__

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_QUIET_MS = "SWAY_WORKSPACE_LABELS_QUIET_MS"


class DaemonConfig(BaseModel):
    """Runtime settings for the workspace label daemon."""

    quiet_period_ms: int = Field(100, ge=0, description="Debounce interval in milliseconds")
    socket_path: Optional[Path] = Field(None, description="Sway IPC socket (default: discovered by i3ipc)")
    connect_attempts: int = Field(10, ge=1, description="Connection attempts before giving up")
    log_level: str = Field("INFO", description="Logging level name")
    once: bool = Field(False, description="Run a single pass and exit")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def quiet_period(self) -> float:
        """Quiet period in seconds."""
        return self.quiet_period_ms / 1000.0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sway-workspace-labels",
        description="Label Sway workspaces with the applications running on them",
    )
    parser.add_argument("--quiet-ms", type=int, dest="quiet_period_ms",
                        help="Milliseconds without events before relabeling (default: 100)")
    parser.add_argument("--socket", type=Path, dest="socket_path",
                        help="Sway IPC socket path (default: $SWAYSOCK)")
    parser.add_argument("--connect-attempts", type=int, dest="connect_attempts",
                        help="Connection attempts before giving up (default: 10)")
    parser.add_argument("--log-level", dest="log_level",
                        help="Logging level (default: $LOG_LEVEL or INFO)")
    parser.add_argument("--once", action="store_true", default=None,
                        help="Relabel workspaces once and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> DaemonConfig:
    """Build the configuration from environment and command line.

    Invalid values terminate through argparse with exit code 2.
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if environ is None:
        environ = os.environ

    values = {}
    if ENV_LOG_LEVEL in environ:
        values["log_level"] = environ[ENV_LOG_LEVEL]
    if ENV_QUIET_MS in environ:
        values["quiet_period_ms"] = environ[ENV_QUIET_MS]

    # Command line overrides environment
    for key, value in vars(args).items():
        if value is not None:
            values[key] = value

    try:
        return DaemonConfig(**values)
    except ValidationError as e:
        parser.error(str(e))
