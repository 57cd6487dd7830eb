from __future__ import annotations

"""
File Content Extractor.

Loads a selected file, cuts the requested 1-based inclusive line range and
runs every redaction rule over each remaining line. Decoding uses the
'replace' error strategy so that stray binary bytes never abort assembly.
"""

from typing import Iterable, List, Tuple

from promptnormalizer.core.processing.redaction import apply_redactions
from promptnormalizer.domain.errors import FileReadError
from promptnormalizer.domain.prompt_models import RedactionRule

LINE_SEPARATOR = "\n"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def extract_content(
        file_path: str,
        rules: Iterable[RedactionRule] = (),
        line_start: int = 0,
        line_end: int = 0,
) -> str:
    """
    Return the processed text of a file.

    Args:
        file_path: Absolute path to the file.
        rules: Ordered redaction rules applied to every selected line.
        line_start: First line (1-based, inclusive). <= 0 means line 1.
        line_end: Last line (1-based, inclusive). <= 0 means the last line.

    Returns:
        str: Selected, redacted lines joined by newlines. Empty when the
             clamped start lies after the clamped end.

    Raises:
        FileReadError: If the file cannot be opened or read.
    """
    lines = read_lines(file_path)
    start, end = resolve_line_range(len(lines), line_start, line_end)

    rule_list = list(rules)
    subset = [apply_redactions(line, rule_list) for line in lines[start - 1:end]]
    return LINE_SEPARATOR.join(subset)


def read_lines(file_path: str) -> List[str]:
    """
    Read a whole file as a list of lines without terminators.

    Raises:
        FileReadError: Wrapping the underlying OSError.
    """
    try:
        # Universal newlines: '\r\n' and '\r' arrive as '\n'
        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
    except OSError as e:
        raise FileReadError(file_path, str(e)) from e

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def resolve_line_range(total: int, line_start: int, line_end: int) -> Tuple[int, int]:
    """
    Clamp a user line range to a file of ``total`` lines.

    Returns:
        Tuple[int, int]: 1-based (start, end). end < start denotes an empty slice.
    """
    start = min(line_start, total) if line_start > 0 else 1
    end = min(line_end, total) if line_end > 0 else total
    return start, end
