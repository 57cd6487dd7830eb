from __future__ import annotations

"""
Headless Prompt Pipeline.

Runs one complete prompt generation from a validated configuration: scan
the folder, apply the configured selection, assemble the prompt and
estimate its tokens. Used by the CLI and by automation.
"""

import logging
import os
from typing import Any, Dict, List

from promptnormalizer.core.analysis.tree_renderer import render_tree
from promptnormalizer.core.selection.state import find_node
from promptnormalizer.core.services.session import PromptSession
from promptnormalizer.domain.prompt_models import AssemblyOptions, PromptFields, PromptResult
from promptnormalizer.domain.tree_models import DirectoryNode, SkipSwitches
from promptnormalizer.infra.fs import normalize_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_prompt_pipeline(cfg: Dict[str, Any]) -> PromptResult:
    """
    Execute the scan → select → assemble → estimate workflow.

    Args:
        cfg: Configuration already normalized by validate_config().

    Returns:
        PromptResult: The assembled prompt and metadata.

    Raises:
        RootNotFound: If cfg['input_path'] is not an existing directory.
    """
    with create_session(cfg) as session:
        session.reload()
        apply_selection(session, cfg.get("selected_paths", []))

        return session.generate_prompt(
            fields=fields_from_config(cfg),
            options=options_from_config(cfg),
            redaction_text=cfg.get("redaction_rules", ""),
            model=cfg["target_model"],
        )


def render_structure_only(cfg: Dict[str, Any]) -> str:
    """Scan the folder and return only its outline."""
    with create_session(cfg) as session:
        return render_tree(session.reload())

# -----------------------------------------------------------------------------
# CONFIGURATION MAPPING
# -----------------------------------------------------------------------------

def create_session(cfg: Dict[str, Any]) -> PromptSession:
    """Session over cfg['input_path'] ('~' and $VARS expanded, blank means cwd)."""
    switches = SkipSwitches(
        skip_bin=cfg["skip_bin"],
        skip_obj=cfg["skip_obj"],
        skip_vs=cfg["skip_vs"],
        skip_git=cfg["skip_git"],
        skip_node_modules=cfg["skip_node_modules"],
    )
    root_folder = normalize_path(cfg.get("input_path"), os.getcwd())
    return PromptSession(root_folder, switches)


def fields_from_config(cfg: Dict[str, Any]) -> PromptFields:
    return PromptFields(
        request=cfg.get("request", ""),
        rules=cfg.get("rules", ""),
        spec=cfg.get("spec", ""),
        plan=cfg.get("plan", ""),
    )


def options_from_config(cfg: Dict[str, Any]) -> AssemblyOptions:
    return AssemblyOptions(
        chunking_enabled=cfg["chunking_enabled"],
        max_lines=cfg["max_lines"],
        line_start=cfg["line_start"],
        line_end=cfg["line_end"],
        include_structure=cfg["include_structure"],
        template=cfg["template"],
    )


def apply_selection(session: PromptSession, selected_paths: List[str]) -> List[DirectoryNode]:
    """
    Check the nodes named by ``selected_paths``.

    Relative paths resolve against the session root; '.' selects the root.
    Paths absent from the scanned tree are reported and ignored.

    Returns:
        List[DirectoryNode]: Nodes that were checked.
    """
    checked: List[DirectoryNode] = []
    for raw in selected_paths:
        full_path = raw if os.path.isabs(raw) else os.path.join(session.root_folder, raw)
        full_path = os.path.normpath(os.path.abspath(full_path))

        node = find_node(session.items, full_path)
        if node is None:
            logger.warning(f"Selected path not found in scanned tree: {raw}")
            continue

        session.toggle(node.full_path, True)
        checked.append(node)

    return checked
