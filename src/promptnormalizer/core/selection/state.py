from __future__ import annotations

"""
Selection State Store.

Explicit operations over the checked state of a DirectoryNode forest:
top-down cascading toggles, pre-order traversal, and the path-keyed
snapshot/restore pair that carries a selection across a full rebuild of
the tree.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from promptnormalizer.domain.tree_models import DirectoryNode, SelectionSnapshot

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# TRAVERSAL
# -----------------------------------------------------------------------------

def iter_nodes(nodes: Iterable[DirectoryNode]) -> Iterator[DirectoryNode]:
    """
    Yield every node of a forest in pre-order (parent before children).

    Args:
        nodes: Top-level nodes.

    Yields:
        DirectoryNode: Each node, in tree order.
    """
    stack: List[DirectoryNode] = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(nodes: Iterable[DirectoryNode], full_path: str) -> Optional[DirectoryNode]:
    """Return the node whose full_path matches exactly, if any."""
    for node in iter_nodes(nodes):
        if node.full_path == full_path:
            return node
    return None

# -----------------------------------------------------------------------------
# CASCADING TOGGLE
# -----------------------------------------------------------------------------

def set_checked(node: DirectoryNode, value: bool) -> None:
    """
    Set the checked state of a node and of its whole subtree.

    Descendants' previous states are overwritten unconditionally. The change
    never propagates to ancestors.

    Args:
        node: Subtree root.
        value: New checked state.
    """
    for current in iter_nodes([node]):
        current.is_checked = value

# -----------------------------------------------------------------------------
# SNAPSHOT / RESTORE
# -----------------------------------------------------------------------------

def snapshot(nodes: Iterable[DirectoryNode]) -> SelectionSnapshot:
    """
    Capture the checked state of every node, keyed by full path.

    Args:
        nodes: Top-level nodes of the current tree.

    Returns:
        SelectionSnapshot: Mapping of full_path to is_checked.
    """
    return {node.full_path: node.is_checked for node in iter_nodes(nodes)}


def restore(nodes: Iterable[DirectoryNode], states: SelectionSnapshot) -> int:
    """
    Reapply a snapshot to a freshly built tree.

    Restoration walks parents before children. A restored directory cascades
    its value down first; each child visited afterwards is then reset to its
    own stored value, so explicit per-node states win over the inherited
    cascade. Paths absent from the snapshot keep their current state.

    Args:
        nodes: Top-level nodes of the new tree.
        states: Snapshot captured before the rebuild.

    Returns:
        int: Number of nodes whose state was restored.
    """
    restored = 0
    for node in iter_nodes(nodes):
        if node.full_path in states:
            set_checked(node, states[node.full_path])
            restored += 1

    logger.debug(f"Restored selection for {restored} of {len(states)} snapshot entries.")
    return restored
