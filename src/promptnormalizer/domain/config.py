from __future__ import annotations

"""
Configuration Domain Management.

Provides the default session configuration that drives a headless prompt
generation and an optional read-only JSON overlay. Selection state is never
written back to disk.
"""

import json
import logging
import os
from typing import Any, Dict

from promptnormalizer.domain.constants import (
    DEFAULT_MAX_LINES,
    DEFAULT_MODEL,
    DEFAULT_TEMPLATE,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Scan
        "input_path": os.getcwd(),
        "skip_bin": True,
        "skip_obj": True,
        "skip_vs": True,
        "skip_git": True,
        "skip_node_modules": True,

        # Selection (paths relative to input_path, or absolute)
        "selected_paths": [],

        # Prompt layout
        "template": DEFAULT_TEMPLATE,
        "include_structure": True,
        "request": "",
        "rules": "",
        "spec": "",
        "plan": "",

        # Content processing
        "chunking_enabled": False,
        "max_lines": DEFAULT_MAX_LINES,
        "line_start": 0,
        "line_end": 0,
        "redaction_rules": "",

        # Output
        "target_model": DEFAULT_MODEL,
        "output_path": "",
    }


# -----------------------------------------------------------------------------
# Loading Logic
# -----------------------------------------------------------------------------
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Merge a JSON configuration file over the defaults.

    Unknown keys are dropped. A missing or corrupt file yields the defaults.

    Args:
        path: Location of the JSON file.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()

    if not path or not os.path.exists(path):
        logger.warning(f"Config file not found: {path}. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    for key, value in data.items():
        if key in config:
            config[key] = value
        else:
            logger.debug(f"Ignoring unknown config key: {key}")

    return config
