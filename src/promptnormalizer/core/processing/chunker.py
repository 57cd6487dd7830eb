from __future__ import annotations

"""
Fenced Block Formatter and Line Chunker.

Wraps processed file content into Markdown code fences tagged with a
language inferred from the file extension, splitting content that exceeds
a line budget into sequentially numbered chunks.

Block format (bit-exact):
    ```<lang>
    // FILE: <path>[ (Chunk #<n>)]
    <content>
    ```
    <blank line>
"""

import math
import os
import re
from typing import List, Mapping, Optional

from promptnormalizer.domain.constants import CODE_FENCE_LANGUAGES

_LINE_BREAK_RX = re.compile(r"\r\n|\n")

# -----------------------------------------------------------------------------
# LANGUAGE DETECTION
# -----------------------------------------------------------------------------

def code_block_language(file_path: str, table: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve the code fence language tag for a file.

    Args:
        file_path: Path whose extension is looked up (case-insensitive).
        table: Extension to tag mapping. Defaults to CODE_FENCE_LANGUAGES.

    Returns:
        str: Language tag, or "" for unknown extensions.
    """
    mapping = CODE_FENCE_LANGUAGES if table is None else table
    _, ext = os.path.splitext(file_path)
    return mapping.get(ext.lower(), "")

# -----------------------------------------------------------------------------
# BLOCK FORMATTING
# -----------------------------------------------------------------------------

def format_code_block(
        file_path: str,
        content: str,
        language: str,
        chunk_index: Optional[int] = None,
) -> str:
    label = f"// FILE: {file_path}"
    if chunk_index is not None:
        label += f" (Chunk #{chunk_index})"
    return f"```{language}\n{label}\n{content}\n```\n\n"


def chunk_content(
        file_path: str,
        processed_text: str,
        max_lines: int,
        table: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Emit one or more fenced blocks for a file's processed text.

    Content with at most ``max_lines`` lines yields a single unnumbered
    block holding the original text. Longer content yields
    ceil(lines / max_lines) blocks numbered from 1, each holding up to
    ``max_lines`` consecutive lines.

    Args:
        file_path: Path shown in each block label.
        processed_text: Extracted and redacted content.
        max_lines: Line budget per block.
        table: Optional extension to language mapping.

    Returns:
        str: Concatenated blocks.

    Raises:
        ValueError: If max_lines is lower than 1.
    """
    if max_lines < 1:
        raise ValueError(f"max_lines must be >= 1, received {max_lines}")

    language = code_block_language(file_path, table)
    lines = split_lines(processed_text)

    if len(lines) <= max_lines:
        return format_code_block(file_path, processed_text, language)

    blocks: List[str] = []
    total_chunks = math.ceil(len(lines) / max_lines)
    for index in range(total_chunks):
        chunk = lines[index * max_lines:(index + 1) * max_lines]
        blocks.append(format_code_block(file_path, "\n".join(chunk), language, index + 1))
    return "".join(blocks)


def split_lines(text: str) -> List[str]:
    """Split on CRLF/LF, keeping empty segments (''.split gives [''])."""
    return _LINE_BREAK_RX.split(text)
