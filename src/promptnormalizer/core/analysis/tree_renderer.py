from __future__ import annotations

"""
Tree Renderer.

Converts a DirectoryNode forest into the indented outline embedded in
prompts. Every loaded node is rendered, checked or not.
"""

from typing import Iterable, List

from promptnormalizer.domain.constants import TREE_BRANCH_GLYPH, TREE_INDENT_WIDTH
from promptnormalizer.domain.tree_models import DirectoryNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(nodes: Iterable[DirectoryNode], level: int = 0) -> str:
    """
    Render nodes depth-first as '<3*level spaces>├─ <name>' lines.

    Args:
        nodes: Nodes at the current level.
        level: Indentation depth of ``nodes``.

    Returns:
        str: Outline text, one newline-terminated line per node.
    """
    lines: List[str] = []
    _render_into(nodes, level, lines)
    return "".join(lines)


def _render_into(nodes: Iterable[DirectoryNode], level: int, lines: List[str]) -> None:
    prefix = " " * (level * TREE_INDENT_WIDTH) + TREE_BRANCH_GLYPH
    for node in nodes:
        lines.append(f"{prefix}{node.name}\n")
        if node.children:
            _render_into(node.children, level + 1, lines)
