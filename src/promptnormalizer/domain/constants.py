from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to application-wide constants: skip-policy
denylists, code fence language mappings, prompt template identifiers
and default session values.
"""

from typing import Dict, FrozenSet

APP_NAME = "Prompt Normalizer"
APP_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# SCAN POLICY
# -----------------------------------------------------------------------------

# Well-known directory names, each gated by its own SkipSwitches flag
SKIP_DIR_BIN = "bin"
SKIP_DIR_OBJ = "obj"
SKIP_DIR_VS = ".vs"
SKIP_DIR_GIT = ".git"
SKIP_DIR_NODE_MODULES = "node_modules"

IGNORED_FILE_NAMES: FrozenSet[str] = frozenset({".gitignore"})
DENIED_FILE_EXTENSIONS: FrozenSet[str] = frozenset({
    ".exe", ".pdb", ".dll", ".obj", ".cache",
})

# -----------------------------------------------------------------------------
# OUTPUT FORMATTING
# -----------------------------------------------------------------------------

TREE_BRANCH_GLYPH = "├─ "
TREE_INDENT_WIDTH = 3

REDACTION_SEPARATOR = " => "

CODE_FENCE_LANGUAGES: Dict[str, str] = {
    ".cs": "csharp",
    ".cshtml": "cshtml",
    ".js": "js",
    ".jsx": "jsx",
    ".ts": "ts",
    ".tsx": "tsx",
    ".md": "md",
    ".txt": "txt",
    ".log": "log",
    ".json": "json",
    ".css": "css",
    ".scss": "scss",
    ".py": "python",
    ".html": "html",
    ".xml": "xml",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".sh": "bash",
    ".sql": "sql",
    ".toml": "toml",
}

# -----------------------------------------------------------------------------
# PROMPT TEMPLATES AND SESSION DEFAULTS
# -----------------------------------------------------------------------------

TEMPLATE_CODEGEN = "Codegen"
TEMPLATE_REVIEW = "Review"
TEMPLATE_NONE = "None"

TEMPLATE_ALIASES: Dict[str, str] = {
    "codegen": TEMPLATE_CODEGEN,
    "codegen prompt": TEMPLATE_CODEGEN,
    "review": TEMPLATE_REVIEW,
    "review prompt": TEMPLATE_REVIEW,
    "none": TEMPLATE_NONE,
    "default": TEMPLATE_NONE,
}

DEFAULT_TEMPLATE = TEMPLATE_CODEGEN
DEFAULT_MAX_LINES = 300
DEFAULT_MODEL = "gpt-4"
