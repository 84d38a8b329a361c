"""Pytest configuration for sway-workspace-labels tests."""

from tests.fixtures.mock_sway_connection import mock_i3_connection, sway_connection  # noqa: F401
