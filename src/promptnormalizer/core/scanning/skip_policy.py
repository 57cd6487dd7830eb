from __future__ import annotations

"""
Scan Skip Policy.

Pure predicates deciding which directories and files are left out of a
folder scan. Directory exclusion is driven by named switches, one per
well-known build, VCS or dependency folder; file exclusion uses a fixed
name and extension denylist.
"""

import os
from typing import Dict

from promptnormalizer.domain.constants import (
    DENIED_FILE_EXTENSIONS,
    IGNORED_FILE_NAMES,
    SKIP_DIR_BIN,
    SKIP_DIR_GIT,
    SKIP_DIR_NODE_MODULES,
    SKIP_DIR_OBJ,
    SKIP_DIR_VS,
)
from promptnormalizer.domain.tree_models import SkipSwitches

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def should_skip_directory(name: str, switches: SkipSwitches) -> bool:
    """
    Decide whether a directory is excluded from the scan.

    Args:
        name: Directory name (leaf component only).
        switches: Active skip switches.

    Returns:
        bool: True if the name matches a well-known folder whose switch is on.
    """
    lowered = name.lower()
    for dir_name, enabled in _switch_table(switches).items():
        if enabled and lowered == dir_name:
            return True
    return False


def should_skip_file(name: str) -> bool:
    """
    Decide whether a file is excluded from the scan.

    Args:
        name: File name (leaf component only).

    Returns:
        bool: True for ignore files and denied binary/cache extensions.
    """
    lowered = name.lower()
    if lowered in IGNORED_FILE_NAMES:
        return True
    _, ext = os.path.splitext(lowered)
    # Dotfiles such as '.cache' count as pure extensions
    if not ext and lowered.startswith("."):
        ext = lowered
    return ext in DENIED_FILE_EXTENSIONS

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _switch_table(switches: SkipSwitches) -> Dict[str, bool]:
    return {
        SKIP_DIR_BIN: switches.skip_bin,
        SKIP_DIR_OBJ: switches.skip_obj,
        SKIP_DIR_VS: switches.skip_vs,
        SKIP_DIR_GIT: switches.skip_git,
        SKIP_DIR_NODE_MODULES: switches.skip_node_modules,
    }
