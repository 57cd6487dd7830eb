from __future__ import annotations

"""
Unit tests for domain models and the error taxonomy.
"""

import dataclasses

import pytest

from promptnormalizer.domain.errors import (
    FileReadError,
    PatternCompileError,
    PromptNormalizerError,
    RootNotFound,
    ScanIOError,
)
from promptnormalizer.domain.prompt_models import AssemblyOptions, PromptFields
from promptnormalizer.domain.tree_models import DirectoryNode, NodeKind, SkipSwitches


def test_directory_node_defaults() -> None:
    node = DirectoryNode("src", "/p/src", NodeKind.DIRECTORY)
    assert node.children == []
    assert node.is_checked is False
    assert node.is_directory and not node.is_file


def test_nodes_compare_by_identity() -> None:
    a = DirectoryNode("x", "/x", NodeKind.FILE)
    b = DirectoryNode("x", "/x", NodeKind.FILE)
    assert a != b


def test_option_defaults() -> None:
    opts = AssemblyOptions()
    assert opts.chunking_enabled is False
    assert opts.max_lines == 300
    assert (opts.line_start, opts.line_end) == (0, 0)
    assert opts.include_structure is True
    assert opts.template == "Codegen"
    assert PromptFields() == PromptFields("", "", "", "")


def test_value_models_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        SkipSwitches().skip_bin = False  # type: ignore[misc]


@pytest.mark.parametrize(
    "error",
    [
        ScanIOError("/p", "denied"),
        FileReadError("/p/a.txt", "locked"),
        PatternCompileError("(", "unbalanced"),
        RootNotFound("/p"),
    ],
)
def test_errors_share_base(error: Exception) -> None:
    assert isinstance(error, PromptNormalizerError)


def test_root_not_found_message() -> None:
    assert str(RootNotFound("/missing")) == "Folder not found: /missing"
