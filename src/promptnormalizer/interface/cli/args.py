from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides understood by the
validator.
"""

import argparse
from typing import Any, Dict, List

from promptnormalizer.domain.constants import APP_NAME
from promptnormalizer.domain.errors import FileReadError

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the Prompt Normalizer CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="prompt-normalizer",
        description=f"{APP_NAME}: assemble an LLM prompt from selected project files.",
    )

    # --- Scan and Selection ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Root folder to scan (default: current directory).",
    )
    p.add_argument(
        "-s", "--select",
        dest="selected_paths",
        action="append",
        default=None,
        help="File or folder to include, relative to the root. Repeatable; '.' selects everything.",
    )
    p.add_argument("--include-bin", action="store_true", help="Do not skip 'bin' folders.")
    p.add_argument("--include-obj", action="store_true", help="Do not skip 'obj' folders.")
    p.add_argument("--include-vs", action="store_true", help="Do not skip '.vs' folders.")
    p.add_argument("--include-git", action="store_true", help="Do not skip '.git' folders.")
    p.add_argument(
        "--include-node-modules",
        action="store_true",
        help="Do not skip 'node_modules' folders.",
    )

    # --- Prompt Fields ---
    p.add_argument(
        "--template",
        default=None,
        help="Prompt layout: Codegen, Review or None.",
    )
    for name in ("request", "rules", "spec", "plan"):
        p.add_argument(
            f"--{name}",
            dest=name,
            default=None,
            help=f"Text for the {name} section, or @path to read it from a file.",
        )
    p.add_argument(
        "--no-structure",
        action="store_true",
        help="Omit the directory structure section.",
    )

    # --- Content Processing ---
    p.add_argument(
        "--redact",
        action="append",
        default=None,
        help="Redaction rule '<regex> => <replacement>'. Repeatable.",
    )
    p.add_argument(
        "--redact-file",
        default=None,
        help="File with one redaction rule per line.",
    )
    p.add_argument(
        "--chunk",
        dest="chunking_enabled",
        action="store_true",
        help="Split long files into numbered chunks.",
    )
    p.add_argument("--max-lines", type=int, default=None, help="Lines per chunk.")
    p.add_argument("--line-start", type=int, default=None, help="First line to include (1-based).")
    p.add_argument("--line-end", type=int, default=None, help="Last line to include (inclusive).")

    # --- Output ---
    p.add_argument(
        "--model",
        dest="target_model",
        default=None,
        help="Model used for the token estimate.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the prompt to this file instead of stdout.",
    )
    p.add_argument(
        "--tree-only",
        action="store_true",
        help="Print only the directory outline.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file merged over the defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )
    p.add_argument(
        "--log-file",
        nargs="?",
        const="",
        default=None,
        help="Also write diagnostics to a rotating log file (default location if no path).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only options given on the command line appear in the result.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.

    Raises:
        FileReadError: If an '@file' argument or --redact-file cannot be read.
    """
    overrides: Dict[str, Any] = {}

    if args.input_path is not None:
        overrides["input_path"] = args.input_path
    if args.selected_paths:
        overrides["selected_paths"] = [p.strip() for p in args.selected_paths if p.strip()]

    # Skip switch overrides
    if args.include_bin:
        overrides["skip_bin"] = False
    if args.include_obj:
        overrides["skip_obj"] = False
    if args.include_vs:
        overrides["skip_vs"] = False
    if args.include_git:
        overrides["skip_git"] = False
    if args.include_node_modules:
        overrides["skip_node_modules"] = False

    # Prompt fields
    if args.template is not None:
        overrides["template"] = args.template
    for name in ("request", "rules", "spec", "plan"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = _read_text_arg(value)
    if args.no_structure:
        overrides["include_structure"] = False

    # Redaction: file rules first, then inline rules
    rule_lines: List[str] = []
    if args.redact_file:
        rule_lines.append(_read_file(args.redact_file))
    if args.redact:
        rule_lines.extend(args.redact)
    if rule_lines:
        overrides["redaction_rules"] = "\n".join(rule_lines)

    # Extraction
    if args.chunking_enabled:
        overrides["chunking_enabled"] = True
    if args.max_lines is not None:
        overrides["max_lines"] = args.max_lines
    if args.line_start is not None:
        overrides["line_start"] = args.line_start
    if args.line_end is not None:
        overrides["line_end"] = args.line_end

    # Output
    if args.target_model is not None:
        overrides["target_model"] = args.target_model
    if args.output_path is not None:
        overrides["output_path"] = args.output_path

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _read_text_arg(value: str) -> str:
    """Resolve '@path' to the file's content; any other value is literal."""
    if value.startswith("@") and len(value) > 1:
        return _read_file(value[1:])
    return value


def _read_file(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise FileReadError(path, str(e)) from e
