"""Mock fixtures for Sway IPC connection testing."""
import pytest
from unittest.mock import AsyncMock, Mock
from i3ipc.aio import Connection

from sway_workspace_labels.connection import SwayConnection

from .sway_tree import tree, view, workspace


@pytest.fixture
def mock_i3_connection():
    """Mock i3ipc.aio connection with one labeled and one stale workspace."""
    conn = AsyncMock(spec=Connection)
    conn.get_version.return_value = Mock(human_readable="1.10")
    conn.get_tree.return_value = Mock(ipc_data=tree(
        workspace("1 firefox", nodes=[view(app_id="firefox")]),
        workspace("2", nodes=[view(app_id="org.gnome.Nautilus")]),
    ))
    conn.command.return_value = [Mock(success=True, error=None)]
    return conn


@pytest.fixture
def sway_connection(mock_i3_connection):
    """SwayConnection already connected to the mock."""
    connection = SwayConnection()
    connection.conn = mock_i3_connection
    return connection
