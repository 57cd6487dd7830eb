from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a realistic project folder on disk and a complete
   configuration dictionary.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

# Models without a tiktoken encoding keep the suite offline
OFFLINE_MODEL = "offline-test-model"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small project folder.

    Structure:
    /project
      /src
        app.cs
        util.py
      /bin
        tool.dll
      /node_modules
        dep.js
      /docs                (empty)
      README.md
      .gitignore
    """
    root = tmp_path / "project"
    root.mkdir()

    src = root / "src"
    src.mkdir()
    (src / "app.cs").write_text("class App {}\n", encoding="utf-8")
    (src / "util.py").write_text("def util():\n    return 1\n", encoding="utf-8")

    (root / "bin").mkdir()
    (root / "bin" / "tool.dll").write_bytes(b"\x00\x01")

    (root / "node_modules").mkdir()
    (root / "node_modules" / "dep.js").write_text("module.exports = {};\n", encoding="utf-8")

    (root / "docs").mkdir()
    (root / "README.md").write_text("# Sample\n", encoding="utf-8")
    (root / ".gitignore").write_text("bin/\n", encoding="utf-8")

    return root


@pytest.fixture
def mock_config_dict(sample_project: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'promptnormalizer.domain.config'.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # Scan
        "input_path": str(sample_project),
        "skip_bin": True,
        "skip_obj": True,
        "skip_vs": True,
        "skip_git": True,
        "skip_node_modules": True,

        # Selection
        "selected_paths": ["src"],

        # Prompt layout
        "template": "None",
        "include_structure": True,
        "request": "Add a feature",
        "rules": "Be terse",
        "spec": "Spec text",
        "plan": "- [ ] Step 1",

        # Content processing
        "chunking_enabled": False,
        "max_lines": 300,
        "line_start": 0,
        "line_end": 0,
        "redaction_rules": "",

        # Output
        "target_model": OFFLINE_MODEL,
        "output_path": "",
    }
