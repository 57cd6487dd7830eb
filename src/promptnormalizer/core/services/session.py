from __future__ import annotations

"""
Prompt Session Service.

Owns the loaded folder tree of one working session and gates every
mutating operation behind an explicit IDLE/SCANNING state machine. A
re-scan runs as a single background unit of work: the previous selection
is snapshotted, a new tree is built off to the side and restored, and only
then swapped in. At most one re-scan is ever in flight.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from promptnormalizer.core.analysis.tree_renderer import render_tree
from promptnormalizer.core.assembly.templates import assemble_prompt, normalize_template_name
from promptnormalizer.core.assembly.walker import build_selected_files_section
from promptnormalizer.core.processing.redaction import parse_redaction_rules
from promptnormalizer.core.processing.tokenizer import count_tokens
from promptnormalizer.core.scanning.tree_builder import build_tree
from promptnormalizer.core.selection.state import find_node, restore, set_checked, snapshot
from promptnormalizer.domain.constants import APP_NAME, DEFAULT_MODEL
from promptnormalizer.domain.errors import RootNotFound, ScanInProgressError
from promptnormalizer.domain.prompt_models import AssemblyOptions, PromptFields, PromptResult
from promptnormalizer.domain.tree_models import DirectoryNode, ScanState, SkipSwitches
from promptnormalizer.infra.fs import folder_display_name

logger = logging.getLogger(__name__)


class PromptSession:
    """
    Folder session: tree ownership, selection and prompt generation.

    start_reload() runs scans on a lazily created worker thread. Call
    shutdown(), or use the session as a context manager, to release it.

    Attributes:
        root_folder: Folder scanned by reload().
        switches: Skip switches applied on every scan.
        items: Top-level nodes of the current tree (zero or one root).
    """

    def __init__(self, root_folder: str = "", switches: Optional[SkipSwitches] = None):
        self.root_folder = root_folder
        self.switches = switches or SkipSwitches()
        self.items: List[DirectoryNode] = []

        self._state = ScanState.IDLE
        self._state_lock = threading.Lock()
        self._cancellation_event = threading.Event()
        self._executor: Optional[ThreadPoolExecutor] = None

    # -------------------------------------------------------------------------
    # STATE MACHINE
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def is_scanning(self) -> bool:
        return self._state is ScanState.SCANNING

    @property
    def window_title(self) -> str:
        if self.root_folder:
            return f"{folder_display_name(self.root_folder)} | {APP_NAME}"
        return APP_NAME

    def _ensure_idle(self, operation: str) -> None:
        if self._state is ScanState.SCANNING:
            raise ScanInProgressError(f"Cannot {operation} while a folder scan is in progress.")

    def _enter_scanning(self) -> None:
        with self._state_lock:
            self._ensure_idle("start a re-scan")
            self._state = ScanState.SCANNING
            self._cancellation_event.clear()

    def _leave_scanning(self) -> None:
        with self._state_lock:
            self._state = ScanState.IDLE

    # -------------------------------------------------------------------------
    # SCANNING
    # -------------------------------------------------------------------------

    def reload(self) -> List[DirectoryNode]:
        """
        Re-scan the root folder synchronously, preserving checked states.

        Returns:
            List[DirectoryNode]: The new top-level nodes.

        Raises:
            ScanInProgressError: If another scan is running.
            RootNotFound: If the root folder does not exist. The tree is cleared.
            ScanCancelledError: If cancel_reload() was called; the old tree stays.
        """
        self._enter_scanning()
        try:
            return self._reload_locked()
        finally:
            self._leave_scanning()

    def start_reload(self) -> Future:
        """
        Re-scan the root folder on a background worker.

        The session enters SCANNING before this returns, so a concurrent
        second request is rejected immediately. Wrap the returned future
        with asyncio.wrap_future() to await it from an event loop.

        Returns:
            Future: Resolves to the new top-level nodes.

        Raises:
            ScanInProgressError: If another scan is running.
        """
        self._enter_scanning()
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="FolderScan")

        def task() -> List[DirectoryNode]:
            try:
                return self._reload_locked()
            finally:
                self._leave_scanning()

        try:
            return self._executor.submit(task)
        except RuntimeError:
            self._leave_scanning()
            raise

    def cancel_reload(self) -> None:
        """Ask the running scan to stop at the next directory boundary."""
        if self.is_scanning and not self._cancellation_event.is_set():
            logger.info("Folder scan cancellation requested.")
            self._cancellation_event.set()

    def shutdown(self) -> None:
        """Release the background worker, waiting for a running scan."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "PromptSession":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.cancel_reload()
        self.shutdown()

    def _reload_locked(self) -> List[DirectoryNode]:
        states = snapshot(self.items)

        try:
            root = build_tree(self.root_folder, self.switches, self._cancellation_event)
        except RootNotFound:
            logger.error(f"Folder not found: {self.root_folder}")
            self.items = []
            raise

        new_items = [root] if root is not None else []
        restore(new_items, states)

        self.items = new_items
        logger.info(f"Reload complete! Folder: {self.root_folder}")
        return new_items

    # -------------------------------------------------------------------------
    # SELECTION
    # -------------------------------------------------------------------------

    def toggle(self, full_path: str, value: bool) -> DirectoryNode:
        """
        Check or uncheck a node and its whole subtree.

        Raises:
            ScanInProgressError: If a scan is running.
            KeyError: If no node has this full path.
        """
        self._ensure_idle("change the selection")
        node = find_node(self.items, full_path)
        if node is None:
            raise KeyError(full_path)
        set_checked(node, value)
        return node

    def clear(self) -> None:
        """Drop the loaded tree and forget the root folder."""
        self._ensure_idle("clear the session")
        self.items = []
        self.root_folder = ""

    # -------------------------------------------------------------------------
    # PROMPT GENERATION
    # -------------------------------------------------------------------------

    def generate_prompt(
            self,
            fields: PromptFields,
            options: Optional[AssemblyOptions] = None,
            redaction_text: str = "",
            model: str = DEFAULT_MODEL,
    ) -> PromptResult:
        """
        Assemble the prompt for the current selection and estimate its tokens.

        Args:
            fields: Free-text prompt sections.
            options: Chunking, line range, structure and template settings.
            redaction_text: Rule lines in '<pattern> => <replacement>' form.
            model: Model used for the token estimate.

        Returns:
            PromptResult: Prompt text and metadata.

        Raises:
            ScanInProgressError: If a scan is running.
        """
        self._ensure_idle("generate a prompt")
        options = options or AssemblyOptions()

        rules = parse_redaction_rules(redaction_text)
        emitted: List[str] = []
        code_section = build_selected_files_section(
            self.items,
            rules,
            options.chunking_enabled,
            options.max_lines,
            options.line_start,
            options.line_end,
            emitted=emitted,
        )

        structure = render_tree(self.items) if options.include_structure else ""
        template = normalize_template_name(options.template)
        text = assemble_prompt(template, fields, code_section, structure)

        tokens = count_tokens(text, model)
        logger.info(f"Prompt generated: {len(emitted)} file(s), est. tokens ({model}): {tokens}")

        return PromptResult(
            text=text,
            token_count=tokens,
            model=model,
            template=template,
            files_emitted=emitted,
        )
