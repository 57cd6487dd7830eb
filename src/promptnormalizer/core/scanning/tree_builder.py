from __future__ import annotations

"""
Directory Tree Builder.

Walks a root folder recursively and mirrors it as a DirectoryNode tree,
applying the skip policy. Subdirectories come before files inside each
folder, both in the order the filesystem enumerates them. An unreadable
folder becomes an empty directory node; only a missing root aborts the scan.
"""

import logging
import os
import threading
from typing import List, Optional, Set, Tuple

from promptnormalizer.core.scanning.skip_policy import should_skip_directory, should_skip_file
from promptnormalizer.domain.errors import RootNotFound, ScanCancelledError, ScanIOError
from promptnormalizer.domain.tree_models import DirectoryNode, NodeKind, SkipSwitches

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(
        root_path: str,
        switches: Optional[SkipSwitches] = None,
        cancellation_event: Optional[threading.Event] = None,
) -> Optional[DirectoryNode]:
    """
    Build the in-memory tree for a folder.

    Args:
        root_path: Folder to scan.
        switches: Skip switches. Defaults to skipping every well-known folder.
        cancellation_event: Checked before each directory is listed.

    Returns:
        Optional[DirectoryNode]: Root node, or None if the root itself is skipped.

    Raises:
        RootNotFound: If root_path is not an existing directory.
        ScanCancelledError: If the cancellation event is set mid-scan.
    """
    switches = switches or SkipSwitches()
    if not root_path or not os.path.isdir(root_path):
        raise RootNotFound(root_path)

    root_abs = os.path.abspath(root_path)
    logger.info(f"Scanning folder: {root_abs}")

    node = _load_directory(root_abs, switches, cancellation_event, set())
    if node is None:
        logger.warning(f"Root folder '{root_abs}' is excluded by the skip policy.")
    return node

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _load_directory(
        path: str,
        switches: SkipSwitches,
        cancellation_event: Optional[threading.Event],
        ancestors: Set[str],
) -> Optional[DirectoryNode]:
    """Recursively build one directory node, or None if it is skipped."""
    name = os.path.basename(path.rstrip("\\/")) or path
    if should_skip_directory(name, switches):
        return None

    if cancellation_event is not None and cancellation_event.is_set():
        raise ScanCancelledError(f"Scan cancelled before '{path}'")

    node = DirectoryNode(name=name, full_path=path, kind=NodeKind.DIRECTORY)

    # A folder resolving to one of its own ancestors is a symlink cycle
    real = os.path.realpath(path)
    if real in ancestors:
        logger.debug(f"Symlink cycle at '{path}', not descending.")
        return node
    ancestors.add(real)
    try:
        _fill_directory(node, switches, cancellation_event, ancestors)
    finally:
        ancestors.discard(real)
    return node


def _fill_directory(
        node: DirectoryNode,
        switches: SkipSwitches,
        cancellation_event: Optional[threading.Event],
        ancestors: Set[str],
) -> None:
    sub_dirs, files = _list_entries(node.full_path)

    for sub_name, sub_path in sub_dirs:
        if should_skip_directory(sub_name, switches):
            continue
        child = _load_directory(sub_path, switches, cancellation_event, ancestors)
        if child is not None:
            node.children.append(child)

    for file_name, file_path in files:
        if should_skip_file(file_name):
            continue
        node.children.append(
            DirectoryNode(name=file_name, full_path=file_path, kind=NodeKind.FILE)
        )


def _list_entries(path: str) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]:
    """
    Split a folder's entries into (subdirectories, files).

    Enumeration failures are reported as ScanIOError diagnostics and yield
    no entries.
    """
    sub_dirs: List[Tuple[str, str]] = []
    files: List[Tuple[str, str]] = []

    try:
        with os.scandir(path) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                if is_dir:
                    sub_dirs.append((entry.name, entry.path))
                else:
                    files.append((entry.name, entry.path))
    except OSError as e:
        err = ScanIOError(path, str(e))
        logger.warning(f"{err} Treating it as empty.")
        return [], []

    return sub_dirs, files
