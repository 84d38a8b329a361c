"""Data models for the workspace label daemon.

TreeNode mirrors the subset of the Sway GET_TREE reply that label
computation needs. Unknown keys in the reply are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class NodeType(str, Enum):
    """Sway container types."""
    ROOT = "root"
    OUTPUT = "output"
    WORKSPACE = "workspace"
    CON = "con"
    FLOATING_CON = "floating_con"


class WindowProperties(BaseModel):
    """X11 window properties, only present for XWayland windows."""

    window_class: Optional[str] = Field(None, alias="class", description="WM_CLASS class property")
    instance: Optional[str] = Field(None, description="WM_CLASS instance property")
    title: Optional[str] = Field(None, description="WM_NAME window title")

    model_config = {"populate_by_name": True, "frozen": True}


class TreeNode(BaseModel):
    """A node of the Sway tree snapshot (output, workspace, container or view)."""

    id: Optional[int] = Field(None, description="Sway container ID")
    type: str = Field(NodeType.CON.value, description="Container type (root, output, workspace, con, floating_con)")
    name: Optional[str] = Field(None, description="Workspace label, output name or window title")
    pid: Optional[int] = Field(None, description="Process ID owning the view")
    app_id: Optional[str] = Field(None, description="Wayland app_id")
    window_properties: Optional[WindowProperties] = None
    nodes: List[TreeNode] = Field(default_factory=list)
    floating_nodes: List[TreeNode] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_workspace(self) -> bool:
        return self.type == NodeType.WORKSPACE


_LEADING_NUMBER = re.compile(r"^[0-9]+")


def parse_workspace_number(name: Optional[str]) -> Optional[int]:
    """Return the leading positive integer of a workspace name.

    Examples:
        "3" -> 3
        "3 firefox slack" -> 3
        "scratch" -> None
        "0" -> None
    """
    if not name:
        return None
    match = _LEADING_NUMBER.match(name)
    if not match:
        return None
    number = int(match.group(0))
    if number < 1:
        return None
    return number


@dataclass(frozen=True)
class WorkspaceDescriptor:
    """Workspace eligible for relabeling."""
    num: int
    name: str

    @classmethod
    def from_node(cls, node: TreeNode) -> Optional["WorkspaceDescriptor"]:
        """Build a descriptor, or None when the name has no usable index."""
        num = parse_workspace_number(node.name)
        if num is None:
            return None
        return cls(num=num, name=node.name or "")


@dataclass
class UpdateResult:
    """Outcome of one reconciliation pass."""
    examined: int = 0
    skipped: int = 0
    unchanged: int = 0
    commands: List[str] = field(default_factory=list)

    @property
    def renamed(self) -> int:
        return len(self.commands)
