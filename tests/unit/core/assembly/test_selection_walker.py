from __future__ import annotations

"""
Unit tests for the Selection Walker.

Verifies the in-scope file rules against a real folder:
1. A checked directory pulls in every file below it.
2. An unchecked directory is searched for checked descendants.
3. Vanished and unreadable files are omitted without aborting.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from promptnormalizer.core.assembly.walker import build_selected_files_section
from promptnormalizer.core.processing.redaction import parse_redaction_rules
from promptnormalizer.core.scanning.tree_builder import build_tree
from promptnormalizer.core.selection.state import find_node, set_checked
from promptnormalizer.domain.errors import FileReadError


@pytest.fixture
def tree(sample_project: Path):
    return [build_tree(str(sample_project))]


def _path(tree, *parts: str) -> str:
    return os.path.join(tree[0].full_path, *parts)


def _emitted(tree) -> list:
    emitted: list = []
    build_selected_files_section(tree, [], False, 300, emitted=emitted)
    return emitted


def test_nothing_checked_yields_nothing(tree) -> None:
    assert _emitted(tree) == []
    assert build_selected_files_section(tree, [], False, 300) == ""


def test_checked_directory_includes_all_descendants(tree) -> None:
    src = find_node(tree, _path(tree, "src"))
    set_checked(src, True)
    # Explicitly unchecked child is still in scope through its parent
    find_node(tree, _path(tree, "src", "app.cs")).is_checked = False

    assert sorted(_emitted(tree)) == sorted([
        _path(tree, "src", "app.cs"),
        _path(tree, "src", "util.py"),
    ])


def test_unchecked_directory_descends_to_checked_file(tree) -> None:
    find_node(tree, _path(tree, "src", "util.py")).is_checked = True

    assert _emitted(tree) == [_path(tree, "src", "util.py")]


def test_checked_root_includes_everything(tree) -> None:
    set_checked(tree[0], True)

    files = _emitted(tree)
    assert _path(tree, "README.md") in files
    assert len(files) == 3


def test_section_layout(tree) -> None:
    find_node(tree, _path(tree, "src", "app.cs")).is_checked = True

    section = build_selected_files_section(tree, [], False, 300)
    assert section == f"```csharp\n// FILE: {_path(tree, 'src', 'app.cs')}\nclass App {{}}\n```\n\n"


def test_empty_checked_directory_contributes_nothing(tree) -> None:
    set_checked(find_node(tree, _path(tree, "docs")), True)
    assert build_selected_files_section(tree, [], False, 300) == ""


def test_redaction_and_chunking_applied(tree, sample_project: Path) -> None:
    (sample_project / "src" / "util.py").write_text(
        "a = 1\nApiKey=secret\nb = 2\n", encoding="utf-8"
    )
    find_node(tree, _path(tree, "src", "util.py")).is_checked = True
    rules = parse_redaction_rules(r"(ApiKey=)(\S+) => $1[REDACTED]")

    section = build_selected_files_section(tree, rules, True, 2)
    assert "(Chunk #1)\na = 1\nApiKey=[REDACTED]\n```" in section
    assert "(Chunk #2)\nb = 2\n```" in section
    assert "secret" not in section


def test_deleted_file_is_skipped(tree, sample_project: Path) -> None:
    set_checked(find_node(tree, _path(tree, "src")), True)
    os.remove(str(sample_project / "src" / "app.cs"))

    emitted = []
    section = build_selected_files_section(tree, [], False, 300, emitted=emitted)
    assert "app.cs" not in section
    assert emitted == [_path(tree, "src", "util.py")]


def test_unreadable_file_is_skipped(tree) -> None:
    set_checked(find_node(tree, _path(tree, "src")), True)
    real_extract = "promptnormalizer.core.assembly.walker.extract_content"
    target = _path(tree, "src", "app.cs")

    def flaky(path, *args, **kwargs):
        if path == target:
            raise FileReadError(path, "locked")
        return "ok"

    with patch(real_extract, side_effect=flaky):
        section = build_selected_files_section(tree, [], False, 300)

    assert target not in section
    assert "util.py" in section


def test_line_range_is_forwarded(tree) -> None:
    find_node(tree, _path(tree, "src", "util.py")).is_checked = True
    section = build_selected_files_section(tree, [], False, 300, line_start=2, line_end=2)
    assert "\n    return 1\n```" in section
    assert "def util" not in section


def test_folder_check_overrides_individual_file_flags(tmp_path: Path) -> None:
    root_dir = tmp_path / "root"
    (root_dir / "src").mkdir(parents=True)
    (root_dir / "src" / "a.txt").write_text("a1\na2\na3\n", encoding="utf-8")
    (root_dir / "src" / "b.txt").write_text("b1\n", encoding="utf-8")
    tree = [build_tree(str(root_dir))]

    find_node(tree, _path(tree, "src", "a.txt")).is_checked = True
    section = build_selected_files_section(tree, [], False, 300)
    assert "a1\na2\na3" in section
    assert "b1" not in section

    # Direct flag write: children keep their own flags
    find_node(tree, _path(tree, "src")).is_checked = True
    section = build_selected_files_section(tree, [], False, 300)
    assert "a1\na2\na3" in section
    assert "b1" in section
