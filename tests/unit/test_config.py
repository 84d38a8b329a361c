"""Unit tests for daemon configuration loading."""

from pathlib import Path

import pytest

from sway_workspace_labels.config import DaemonConfig, load_config


def test_defaults():
    config = load_config([], environ={})

    assert config == DaemonConfig()
    assert config.quiet_period_ms == 100
    assert config.quiet_period == pytest.approx(0.1)
    assert config.socket_path is None
    assert config.connect_attempts == 10
    assert config.log_level == "INFO"
    assert config.once is False


def test_environment():
    config = load_config([], environ={"LOG_LEVEL": "debug", "SWAY_WORKSPACE_LABELS_QUIET_MS": "250"})

    assert config.log_level == "DEBUG"
    assert config.quiet_period_ms == 250


def test_command_line_overrides_environment():
    config = load_config(
        ["--quiet-ms", "50", "--log-level", "warning", "--socket", "/run/user/1000/sway.sock",
         "--connect-attempts", "3", "--once"],
        environ={"LOG_LEVEL": "DEBUG", "SWAY_WORKSPACE_LABELS_QUIET_MS": "250"},
    )

    assert config.quiet_period_ms == 50
    assert config.log_level == "WARNING"
    assert config.socket_path == Path("/run/user/1000/sway.sock")
    assert config.connect_attempts == 3
    assert config.once is True


@pytest.mark.parametrize("argv", [
    ["--quiet-ms", "-1"],
    ["--connect-attempts", "0"],
    ["--log-level", "chatty"],
    ["--quiet-ms", "soon"],
])
def test_invalid_values_exit(argv):
    with pytest.raises(SystemExit) as exc_info:
        load_config(argv, environ={})
    assert exc_info.value.code == 2


def test_invalid_environment_exits():
    with pytest.raises(SystemExit):
        load_config([], environ={"SWAY_WORKSPACE_LABELS_QUIET_MS": "fast"})
