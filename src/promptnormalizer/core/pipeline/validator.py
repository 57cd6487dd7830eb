from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (CLI, JSON files) and
the prompt pipeline. Coerces field types, clamps numeric ranges,
canonicalizes the template name and fills missing keys with defaults.
"""

import logging
from typing import Any, Dict, List, Tuple

from promptnormalizer.core.assembly.templates import normalize_template_name
from promptnormalizer.domain.config import get_default_config

logger = logging.getLogger(__name__)

_STRING_FIELDS = [
    "input_path", "template", "request", "rules", "spec", "plan",
    "redaction_rules", "target_model", "output_path",
]

_BOOL_FIELDS = [
    "skip_bin", "skip_obj", "skip_vs", "skip_git", "skip_node_modules",
    "include_structure", "chunking_enabled",
]

_INT_FIELDS = ["max_lines", "line_start", "line_end"]

# Free-text fields may legitimately be blank
_BLANK_ALLOWED = {"request", "rules", "spec", "plan", "redaction_rules", "output_path"}


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on invalid values instead of falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, on a type mismatch.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in _INT_FIELDS:
        merged[field] = _as_int(merged.get(field), defaults[field], field, warnings, strict)

    merged["selected_paths"] = _as_list_str(
        merged.get("selected_paths"), [], "selected_paths", warnings, strict
    )

    if merged["max_lines"] < 1:
        msg = f"Invalid field 'max_lines': must be >= 1, received {merged['max_lines']}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using {defaults['max_lines']}.")
        merged["max_lines"] = defaults["max_lines"]

    merged["template"] = normalize_template_name(merged["template"])

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        if field in _BLANK_ALLOWED:
            return value
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "0", "no", "off"):
        return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Accept ints and numeric strings, mirroring text-box input."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass

    msg = f"Invalid field '{field}': expected int, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(
        value: Any,
        fallback: List[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> List[str]:
    if value is None:
        return list(fallback)
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        out = [str(x) for x in value if x is not None and str(x).strip()]
        if len(out) != len(value):
            warnings.append(f"Field '{field}' contained empty items that were removed.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)
