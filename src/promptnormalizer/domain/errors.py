from __future__ import annotations

"""
Domain Error Taxonomy.

Every recoverable failure of the scan and assembly flow maps to one of these
types. Only RootNotFound aborts a scan. Per-entry failures (directory, file,
rule) are logged by the component that meets them and the work continues.
"""


class PromptNormalizerError(Exception):
    """Base class for all application errors."""


class ScanIOError(PromptNormalizerError):
    """A directory could not be enumerated during a scan."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read directory '{path}': {reason}")
        self.path = path
        self.reason = reason


class FileReadError(PromptNormalizerError):
    """A selected file could not be opened for extraction."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read file '{path}': {reason}")
        self.path = path
        self.reason = reason


class PatternCompileError(PromptNormalizerError):
    """A redaction rule pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid redaction pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class RootNotFound(PromptNormalizerError):
    """The scan root does not exist or is not a directory."""

    def __init__(self, path: str):
        super().__init__(f"Folder not found: {path}")
        self.path = path


class ScanInProgressError(PromptNormalizerError):
    """A mutating operation was requested while a re-scan is running."""


class ScanCancelledError(PromptNormalizerError):
    """A re-scan was cancelled cooperatively before completion."""
