from __future__ import annotations

"""
Regex Redaction Rules.

Parses user-written '<pattern> => <replacement>' lines into compiled rules
and applies them, in order, to single lines of extracted content.
Replacement strings use the '$1' back-reference family ($1, ${name}, $&,
$$). Backslashes in a replacement are kept literal.
"""

import functools
import logging
import re
from typing import Callable, Iterable, List, Optional

from promptnormalizer.domain.constants import REDACTION_SEPARATOR
from promptnormalizer.domain.errors import PatternCompileError
from promptnormalizer.domain.prompt_models import RedactionRule

logger = logging.getLogger(__name__)

_REFERENCE_RX = re.compile(r"\$(?:(\$)|(&)|\{(\w+)\}|(\d+))")
_RULE_LINE_BREAK_RX = re.compile(r"\r\n|\n")

# -----------------------------------------------------------------------------
# PARSING API
# -----------------------------------------------------------------------------

def parse_redaction_rules(text: Optional[str]) -> List[RedactionRule]:
    """
    Parse a multi-line rule definition into compiled redaction rules.

    Each non-blank line must contain the separator ' => ' exactly once.
    Malformed lines and patterns that fail to compile are reported and
    dropped. The remaining rules keep their input order.

    Args:
        text: Rule lines, e.g. '(ApiKey=)(\\S+) => $1[REDACTED]'.

    Returns:
        List[RedactionRule]: Valid rules in declaration order.
    """
    rules: List[RedactionRule] = []
    if not text or not text.strip():
        return rules

    for line_no, line in enumerate(_RULE_LINE_BREAK_RX.split(text), start=1):
        if not line.strip():
            continue

        parts = line.split(REDACTION_SEPARATOR)
        if len(parts) != 2:
            logger.warning(
                f"Redaction rule line {line_no} skipped: expected '<pattern>{REDACTION_SEPARATOR}<replacement>'."
            )
            continue

        try:
            rules.append(compile_rule(parts[0], parts[1]))
        except PatternCompileError as e:
            logger.warning(f"Redaction rule line {line_no} skipped: {e}")

    return rules


def compile_rule(pattern: str, replacement: str) -> RedactionRule:
    """
    Compile a single pattern/replacement pair.

    Raises:
        PatternCompileError: If the pattern is not a valid regular expression.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise PatternCompileError(pattern, str(e)) from e
    return RedactionRule(pattern=compiled, replacement=replacement)

# -----------------------------------------------------------------------------
# APPLICATION API
# -----------------------------------------------------------------------------

def apply_redactions(line: str, rules: Iterable[RedactionRule]) -> str:
    """
    Run every rule over a line, each rule consuming the previous output.

    Args:
        line: A single line of text.
        rules: Ordered redaction rules.

    Returns:
        str: The redacted line.
    """
    for rule in rules:
        line = rule.pattern.sub(_replacement_expander(rule.replacement), line)
    return line

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

@functools.lru_cache(maxsize=256)
def _replacement_expander(replacement: str) -> Callable[[re.Match], str]:
    """
    Build a re.sub callback that expands '$'-style references for one match.

    References to groups the pattern does not define are emitted literally.
    """
    def expand(match: re.Match) -> str:
        def resolve(ref: re.Match) -> str:
            if ref.group(1):
                return "$"
            if ref.group(2):
                return match.group(0)
            key = ref.group(3) or ref.group(4)
            try:
                value = match.group(int(key) if key.isdigit() else key)
            except IndexError:
                return ref.group(0)
            return value or ""

        return _REFERENCE_RX.sub(resolve, replacement)

    return expand
