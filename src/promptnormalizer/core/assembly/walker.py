from __future__ import annotations

"""
Selection Walker.

Turns the checked nodes of a tree into the concatenated fenced-block
section of the prompt. A checked directory pulls in every file below it,
whatever those files' own flags say; an unchecked directory is searched
for deeper selections. Files that vanished or cannot be read are left out
without interrupting the walk.
"""

import logging
import os
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence

from promptnormalizer.core.processing.chunker import (
    chunk_content,
    code_block_language,
    format_code_block,
)
from promptnormalizer.core.processing.extractor import extract_content
from promptnormalizer.domain.errors import FileReadError
from promptnormalizer.domain.prompt_models import RedactionRule
from promptnormalizer.domain.tree_models import DirectoryNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_selected_files_section(
        nodes: Iterable[DirectoryNode],
        rules: Sequence[RedactionRule],
        chunking_enabled: bool,
        max_lines: int,
        line_start: int = 0,
        line_end: int = 0,
        language_table: Optional[Mapping[str, str]] = None,
        emitted: Optional[List[str]] = None,
) -> str:
    """
    Render the content of every selected file as fenced blocks.

    Args:
        nodes: Top-level nodes to walk.
        rules: Redaction rules applied to each extracted line.
        chunking_enabled: Split content longer than max_lines into chunks.
        max_lines: Lines per chunk when chunking is enabled.
        line_start: 1-based first line to extract (<= 0 for the top).
        line_end: 1-based last line to extract (<= 0 for the end).
        language_table: Optional extension to fence language mapping.
        emitted: Optional accumulator receiving the paths actually rendered.

    Returns:
        str: Concatenated blocks in tree order.
    """
    parts: List[str] = []

    for node in _iter_in_scope_files(nodes):
        file_path = node.full_path
        if not os.path.isfile(file_path):
            logger.debug(f"Selected file no longer exists, skipping: {file_path}")
            continue

        try:
            content = extract_content(file_path, rules, line_start, line_end)
        except FileReadError as e:
            logger.warning(f"{e} Omitted from prompt.")
            continue

        if chunking_enabled:
            parts.append(chunk_content(file_path, content, max_lines, language_table))
        else:
            language = code_block_language(file_path, language_table)
            parts.append(format_code_block(file_path, content, language))

        if emitted is not None:
            emitted.append(file_path)

    return "".join(parts)

# -----------------------------------------------------------------------------
# TRAVERSAL POLICY
# -----------------------------------------------------------------------------

def _iter_in_scope_files(nodes: Iterable[DirectoryNode]) -> Iterator[DirectoryNode]:
    for node in nodes:
        if node.is_directory:
            if node.is_checked:
                yield from _iter_all_files(node.children)
            else:
                yield from _iter_in_scope_files(node.children)
        elif node.is_checked:
            yield node


def _iter_all_files(nodes: Iterable[DirectoryNode]) -> Iterator[DirectoryNode]:
    for node in nodes:
        if node.is_directory:
            yield from _iter_all_files(node.children)
        else:
            yield node
