from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the recursive node type used to mirror a scanned folder in memory,
the switches driving the skip policy and the scan lifecycle states.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Filesystem classification captured once, at build time."""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(eq=False)
class DirectoryNode:
    """
    Represents one file or directory entry in the scanned tree.

    Writing ``is_checked`` directly only affects this node. Cascading
    selection goes through ``core.selection.state.set_checked``.

    Attributes:
        name: Display name (leaf component of the path).
        full_path: Absolute path, also the join key used to restore selection.
        kind: File or directory, decided from the filesystem.
        children: Ordered child nodes. Always empty for files.
        is_checked: Inclusion flag.
    """
    name: str
    full_path: str
    kind: NodeKind
    children: List["DirectoryNode"] = field(default_factory=list)
    is_checked: bool = False

    def __post_init__(self) -> None:
        if self.kind is NodeKind.FILE and self.children:
            raise ValueError(f"File node cannot have children: {self.full_path}")

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


# Path-keyed capture of checked states, taken before a rebuild
SelectionSnapshot = Dict[str, bool]

# -----------------------------------------------------------------------------
# SCAN CONFIGURATION AND LIFECYCLE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SkipSwitches:
    """
    Toggles for the well-known build, VCS and dependency folders.

    Attributes:
        skip_bin: Skip folders named 'bin'.
        skip_obj: Skip folders named 'obj'.
        skip_vs: Skip folders named '.vs'.
        skip_git: Skip folders named '.git'.
        skip_node_modules: Skip folders named 'node_modules'.
    """
    skip_bin: bool = True
    skip_obj: bool = True
    skip_vs: bool = True
    skip_git: bool = True
    skip_node_modules: bool = True


class ScanState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
