from __future__ import annotations

"""
Unit tests for the Fenced Block Formatter and Line Chunker.

Verifies:
1. Exact block layout and language tags.
2. Single block vs numbered chunks around the line budget.
3. Chunk contents reconstruct the original lines.
"""

import pytest

from promptnormalizer.core.processing.chunker import (
    chunk_content,
    code_block_language,
    format_code_block,
    split_lines,
)


def _lines(n: int) -> str:
    return "\n".join(f"L{i}" for i in range(1, n + 1))


def test_language_lookup_is_case_insensitive() -> None:
    assert code_block_language("/p/App.CS") == "csharp"
    assert code_block_language("/p/x.py") == "python"
    assert code_block_language("/p/Makefile") == ""
    assert code_block_language("/p/x.weird") == ""


def test_custom_language_table() -> None:
    assert code_block_language("/p/x.weird", {".weird": "w"}) == "w"
    assert code_block_language("/p/x.cs", {}) == ""


def test_format_code_block_layout() -> None:
    block = format_code_block("/p/a.cs", "body", "csharp")
    assert block == "```csharp\n// FILE: /p/a.cs\nbody\n```\n\n"


def test_format_code_block_with_chunk_label() -> None:
    block = format_code_block("/p/a.cs", "body", "csharp", 2)
    assert block == "```csharp\n// FILE: /p/a.cs (Chunk #2)\nbody\n```\n\n"


def test_content_within_budget_is_one_unnumbered_block() -> None:
    out = chunk_content("/p/a.txt", _lines(3), 3)
    assert out == f"```txt\n// FILE: /p/a.txt\n{_lines(3)}\n```\n\n"
    assert "Chunk #" not in out


def test_chunk_count_and_labels() -> None:
    out = chunk_content("/p/a.py", _lines(7), 3)

    assert out.count("```python\n") == 3
    for n in (1, 2, 3):
        assert f"// FILE: /p/a.py (Chunk #{n})" in out
    assert "(Chunk #4)" not in out


def test_chunks_reconstruct_original() -> None:
    text = _lines(10)
    out = chunk_content("/p/a.py", text, 4)

    bodies = []
    for block in out.split("```\n\n")[:-1]:
        body_lines = block.split("\n")[2:]
        bodies.append("\n".join(body_lines).rstrip("\n"))

    assert [len(b.split("\n")) for b in bodies] == [4, 4, 2]
    assert "\n".join(bodies) == text


def test_single_block_keeps_original_line_breaks() -> None:
    text = "a\r\nb"
    out = chunk_content("/p/a.txt", text, 5)
    assert "a\r\nb" in out


def test_chunking_splits_on_crlf() -> None:
    out = chunk_content("/p/a.txt", "a\r\nb\r\nc", 2)
    assert "(Chunk #1)\na\nb\n```" in out
    assert "(Chunk #2)\nc\n```" in out


def test_invalid_budget_raises() -> None:
    with pytest.raises(ValueError):
        chunk_content("/p/a.txt", "x", 0)


def test_split_lines_keeps_empty_segments() -> None:
    assert split_lines("") == [""]
    assert split_lines("a\n\nb") == ["a", "", "b"]
