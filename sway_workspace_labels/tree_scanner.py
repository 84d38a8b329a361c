"""Tree traversal over Sway tree snapshots."""

from typing import Iterator, List

from .models import TreeNode


def iter_workspaces(root: TreeNode) -> Iterator[TreeNode]:
    """Yield every workspace of every output, in tree order."""
    for output in root.nodes:
        for workspace in output.nodes:
            if not workspace.is_workspace:
                continue
            yield workspace


def find_applications(node: TreeNode) -> List[TreeNode]:
    """Collect nodes owning a process, depth-first pre-order.

    Every regular descendant with a pid is kept, containers included.
    Each floating subtree contributes only its first match so stacked
    dialogs of one application are counted once.

    Args:
        node: Subtree root, usually a workspace

    Returns:
        Matched nodes in tree order (may be empty)
    """
    nodes: List[TreeNode] = []
    if node.pid is not None:
        nodes.append(node)
    for child in node.nodes:
        nodes.extend(find_applications(child))
    for child in node.floating_nodes:
        floating = find_applications(child)
        if floating:
            nodes.append(floating[0])
    return nodes
