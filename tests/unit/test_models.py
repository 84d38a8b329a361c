"""Unit tests for tree snapshot models and workspace number parsing."""

import pytest
from pydantic import ValidationError

from sway_workspace_labels.models import (
    TreeNode,
    WorkspaceDescriptor,
    parse_workspace_number,
)

from tests.fixtures.sway_tree import snapshot, tree, view, workspace


class TestParseWorkspaceNumber:

    @pytest.mark.parametrize("name, expected", [
        ("3", 3),
        ("3 firefox slack", 3),
        ("12:web", 12),
        ("007", 7),
    ])
    def test_leading_digits(self, name, expected):
        assert parse_workspace_number(name) == expected

    @pytest.mark.parametrize("name", ["scratch", "web 3", "", None, "0", "00 firefox", "-1"])
    def test_not_eligible(self, name):
        assert parse_workspace_number(name) is None


class TestWorkspaceDescriptor:

    def test_from_numbered_workspace(self):
        descriptor = WorkspaceDescriptor.from_node(snapshot(workspace("4 code")))
        assert descriptor == WorkspaceDescriptor(num=4, name="4 code")

    def test_from_named_workspace(self):
        assert WorkspaceDescriptor.from_node(snapshot(workspace("scratch"))) is None


class TestTreeNode:

    def test_parses_sway_reply(self):
        root = snapshot(tree(workspace("1", nodes=[view(pid=7, window_class="Slack", title="general")])))

        output = root.nodes[1]
        ws = output.nodes[0]
        window = ws.nodes[0]
        assert ws.is_workspace
        assert not output.is_workspace
        assert window.pid == 7
        assert window.window_properties.window_class == "Slack"
        assert window.window_properties.title == "general"

    def test_unknown_keys_ignored(self):
        node = TreeNode.model_validate({"type": "con", "rect": {"x": 1}, "sticky": True})
        assert node.nodes == []
        assert node.pid is None

    def test_snapshot_is_read_only(self):
        node = snapshot(view(app_id="firefox"))
        with pytest.raises(ValidationError):
            node.app_id = "chromium"
