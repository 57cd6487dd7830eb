from __future__ import annotations

"""
Unit tests for the Prompt Session service.

Verifies:
1. Reload builds the tree and preserves selection across re-scans.
2. The IDLE/SCANNING state machine rejects overlapping operations.
3. Background reloads, cancellation and missing folders.
4. Prompt generation end to end over a real folder.
"""

import os
import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from promptnormalizer.core.scanning import tree_builder
from promptnormalizer.core.selection.state import find_node
from promptnormalizer.core.services.session import PromptSession
from promptnormalizer.domain.errors import RootNotFound, ScanCancelledError, ScanInProgressError
from promptnormalizer.domain.prompt_models import AssemblyOptions, PromptFields
from promptnormalizer.domain.tree_models import ScanState

OFFLINE_MODEL = "offline-test-model"


@pytest.fixture
def session(sample_project: Path):
    s = PromptSession(os.path.abspath(str(sample_project)))
    yield s
    s.shutdown()


def _path(session: PromptSession, *parts: str) -> str:
    return os.path.join(session.root_folder, *parts)


# -----------------------------------------------------------------------------
# Reload & Selection
# -----------------------------------------------------------------------------
def test_reload_builds_single_root(session: PromptSession) -> None:
    items = session.reload()

    assert len(items) == 1
    assert items[0].full_path == session.root_folder
    assert session.items is items
    assert session.state is ScanState.IDLE


def test_reload_preserves_selection(session: PromptSession, sample_project: Path) -> None:
    session.reload()
    session.toggle(_path(session, "src"), True)
    session.toggle(_path(session, "src", "app.cs"), False)

    (sample_project / "src" / "new.py").write_text("x = 1\n", encoding="utf-8")
    session.reload()

    assert find_node(session.items, _path(session, "src")).is_checked is True
    assert find_node(session.items, _path(session, "src", "app.cs")).is_checked is False
    assert find_node(session.items, _path(session, "src", "util.py")).is_checked is True
    # New file under a restored checked folder inherits the cascade
    assert find_node(session.items, _path(session, "src", "new.py")).is_checked is True


def test_toggle_unknown_path_raises(session: PromptSession) -> None:
    session.reload()
    with pytest.raises(KeyError):
        session.toggle(_path(session, "missing.txt"), True)


def test_missing_root_clears_tree(session: PromptSession, tmp_path: Path) -> None:
    session.reload()
    session.root_folder = str(tmp_path / "gone")

    with pytest.raises(RootNotFound):
        session.reload()
    assert session.items == []
    assert session.state is ScanState.IDLE


def test_clear_resets_session(session: PromptSession) -> None:
    session.reload()
    session.clear()
    assert session.items == []
    assert session.root_folder == ""
    assert session.window_title == "Prompt Normalizer"


def test_window_title_uses_folder_name(session: PromptSession) -> None:
    assert session.window_title == "project | Prompt Normalizer"


# -----------------------------------------------------------------------------
# State Machine & Background Scans
# -----------------------------------------------------------------------------
def test_operations_rejected_while_scanning(session: PromptSession) -> None:
    session.reload()
    started = threading.Event()
    release = threading.Event()
    real_build = tree_builder.build_tree

    def slow_build(*args, **kwargs):
        started.set()
        release.wait(5)
        return real_build(*args, **kwargs)

    with patch("promptnormalizer.core.services.session.build_tree", side_effect=slow_build):
        future = session.start_reload()
        assert started.wait(5)

        assert session.is_scanning
        with pytest.raises(ScanInProgressError):
            session.start_reload()
        with pytest.raises(ScanInProgressError):
            session.reload()
        with pytest.raises(ScanInProgressError):
            session.toggle(session.root_folder, True)
        with pytest.raises(ScanInProgressError):
            session.generate_prompt(PromptFields(), model=OFFLINE_MODEL)

        release.set()
        items = future.result(timeout=5)

    assert len(items) == 1
    assert session.state is ScanState.IDLE


def test_start_reload_returns_items(session: PromptSession) -> None:
    items = session.start_reload().result(timeout=5)
    assert items[0].name == "project"
    assert session.items is items


def test_context_manager_releases_worker(sample_project: Path) -> None:
    with PromptSession(os.path.abspath(str(sample_project))) as s:
        s.start_reload().result(timeout=5)
        worker = s._executor

    assert s._executor is None
    assert s.state is ScanState.IDLE
    with pytest.raises(RuntimeError):
        worker.submit(lambda: None)


def test_cancel_keeps_previous_tree(session: PromptSession) -> None:
    old_items = session.reload()
    started = threading.Event()
    release = threading.Event()
    real_build = tree_builder.build_tree

    def gated_build(*args, **kwargs):
        started.set()
        release.wait(5)
        return real_build(*args, **kwargs)

    with patch("promptnormalizer.core.services.session.build_tree", side_effect=gated_build):
        future = session.start_reload()
        assert started.wait(5)
        session.cancel_reload()
        release.set()

        with pytest.raises(ScanCancelledError):
            future.result(timeout=5)

    assert session.items is old_items
    assert session.state is ScanState.IDLE


def test_cancel_when_idle_is_noop(session: PromptSession) -> None:
    session.cancel_reload()
    assert session.reload()


# -----------------------------------------------------------------------------
# Prompt Generation
# -----------------------------------------------------------------------------
def test_generate_prompt(session: PromptSession) -> None:
    session.reload()
    session.toggle(_path(session, "src", "util.py"), True)

    result = session.generate_prompt(
        PromptFields(request="Do it", plan="- [ ] one"),
        AssemblyOptions(template="None", include_structure=True),
        redaction_text="util => UTIL",
        model=OFFLINE_MODEL,
    )

    assert result.template == "None"
    assert result.model == OFFLINE_MODEL
    assert result.files_emitted == [_path(session, "src", "util.py")]
    assert "PROJECT REQUEST:\nDo it" in result.text
    assert "DIRECTORY STRUCTURE:\n├─ project\n" in result.text
    assert "def UTIL():" in result.text
    assert result.token_count == len(result.text) // 4


def test_generate_prompt_without_structure(session: PromptSession) -> None:
    session.reload()
    result = session.generate_prompt(
        PromptFields(),
        AssemblyOptions(template="Codegen", include_structure=False),
        model=OFFLINE_MODEL,
    )
    assert result.files_emitted == []
    assert "├─" not in result.text
    assert "<existing_code>\n\n</existing_code>" in result.text
