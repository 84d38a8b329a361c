"""Workspace label reconciliation.

One pass fetches the Sway tree, computes the desired label of every
numbered workspace and renames the ones whose label is out of date.

Label format:
    "<num>"                       no application windows
    "<num> <app1> <app2> ..."     distinct applications in tree order
"""

import logging
from typing import List, Optional, Protocol

from .dedupe import unique_stable
from .models import TreeNode, UpdateResult, WorkspaceDescriptor
from .name_formatter import application_name, format_name
from .tree_scanner import find_applications, iter_workspaces

logger = logging.getLogger(__name__)


class SwayClient(Protocol):
    """Collaborator operations needed for a pass."""

    async def fetch_tree(self) -> TreeNode: ...

    async def run_command(self, command: str) -> List: ...


def application_tokens(workspace: TreeNode) -> List[str]:
    """Distinct normalized application names of a workspace, in tree order."""
    tokens = []
    for node in find_applications(workspace):
        token = format_name(application_name(node))
        if token:
            tokens.append(token)
    return unique_stable(tokens)


def compose_label(num: int, tokens: List[str]) -> str:
    if not tokens:
        return str(num)
    return f"{num} {' '.join(tokens)}"


def desired_label(workspace: TreeNode) -> Optional[str]:
    """Label a workspace should carry, or None if it has no usable number."""
    descriptor = WorkspaceDescriptor.from_node(workspace)
    if descriptor is None:
        return None
    return compose_label(descriptor.num, application_tokens(workspace))


def rename_command(num: int, label: str) -> str:
    """Build the Sway command renaming workspace number `num` to `label`."""
    quoted = label.replace("\\", "\\\\").replace('"', '\\"')
    return f'rename workspace number {num} to "{quoted}"'


class WorkspaceUpdater:
    """Runs reconciliation passes against a Sway connection."""

    def __init__(self, client: SwayClient) -> None:
        self.client = client

    async def update_workspace_labels(self) -> UpdateResult:
        """Bring every numbered workspace label in line with its windows.

        Stops at the first failed rename; renames already issued in the
        pass are kept.

        Returns:
            Summary of the pass

        Raises:
            TreeFetchError: If the tree snapshot could not be fetched
            CommandError: If a rename was rejected or could not be sent
        """
        root = await self.client.fetch_tree()
        result = UpdateResult()

        for workspace in iter_workspaces(root):
            result.examined += 1
            descriptor = WorkspaceDescriptor.from_node(workspace)
            if descriptor is None:
                logger.debug(f"Skipping workspace without number: {workspace.name!r}")
                result.skipped += 1
                continue

            label = compose_label(descriptor.num, application_tokens(workspace))
            if label == descriptor.name:
                result.unchanged += 1
                continue

            command = rename_command(descriptor.num, label)
            await self.client.run_command(command)
            logger.info(f"Renamed workspace {descriptor.num}: {descriptor.name!r} -> {label!r}")
            result.commands.append(command)

        logger.debug(
            f"Label pass complete: examined={result.examined} renamed={result.renamed} "
            f"unchanged={result.unchanged} skipped={result.skipped}"
        )
        return result
