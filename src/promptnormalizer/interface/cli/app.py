from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, optional JSON file, command-line overrides),
pipeline execution and result rendering. The prompt goes to stdout or the
--output file; diagnostics and the token estimate go to stderr.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from promptnormalizer.core.pipeline.engine import render_structure_only, run_prompt_pipeline
from promptnormalizer.core.pipeline.validator import validate_config
from promptnormalizer.domain.config import get_default_config, load_config_file
from promptnormalizer.domain.errors import PromptNormalizerError, RootNotFound
from promptnormalizer.domain.prompt_models import PromptResult
from promptnormalizer.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from promptnormalizer.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 missing folder,
            130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_file = None
    if args.log_file is not None:
        log_file = args.log_file or get_default_log_path()
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve configuration: defaults -> config file -> overrides
    if args.config_file:
        base_conf = load_config_file(args.config_file)
    else:
        base_conf = get_default_config()

    try:
        overrides = cli_args.args_to_overrides(args)
    except PromptNormalizerError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    raw_conf = _merge_config(base_conf, overrides)

    # 4. Validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 5. Pipeline execution phase
    logger.info(f"Targeting input directory: {clean_conf['input_path']}")
    try:
        if args.tree_only:
            print(render_structure_only(clean_conf), end="")
            return 0
        result = run_prompt_pipeline(clean_conf)
    except RootNotFound as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130
    except PromptNormalizerError as e:
        logger.error(f"Prompt generation failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.critical(f"Prompt generation failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
        return 0

    return _emit_prompt(result, clean_conf.get("output_path", ""))

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only keys known to the default schema are merged.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _emit_prompt(result: PromptResult, output_path: str) -> int:
    if output_path:
        try:
            target_dir = os.path.dirname(os.path.abspath(output_path))
            os.makedirs(target_dir, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(result.text)
        except OSError as e:
            logger.error(f"Failed to write prompt to '{output_path}': {e}")
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        print(f"Prompt written to: {output_path}", file=sys.stderr)
    else:
        sys.stdout.write(result.text)
        sys.stdout.flush()

    print(
        f"Files included: {len(result.files_emitted)} | "
        f"Estimated tokens ({result.model}): {result.token_count:,}",
        file=sys.stderr,
    )
    return 0

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
