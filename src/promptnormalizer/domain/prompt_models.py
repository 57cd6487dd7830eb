from __future__ import annotations

"""
Prompt Domain Data Models.

Defines the data structures exchanged between the assembly pipeline and the
interface layer: redaction rules, free-text prompt fields, assembly options
and the final prompt result.
"""

import re
from dataclasses import dataclass, field
from typing import List

from promptnormalizer.domain.constants import DEFAULT_MAX_LINES, DEFAULT_TEMPLATE

# -----------------------------------------------------------------------------
# CONTENT TRANSFORMATION MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RedactionRule:
    """
    Ordered pattern/replacement pair applied to every extracted line.

    Attributes:
        pattern: Compiled regular expression.
        replacement: Replacement text using '$1' style back-references.
    """
    pattern: re.Pattern
    replacement: str

# -----------------------------------------------------------------------------
# PROMPT INPUT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PromptFields:
    """
    Free-text sections substituted into the prompt templates.

    Attributes:
        request: Project request / overview.
        rules: Project rules and constraints.
        spec: Technical specification.
        plan: Implementation plan.
    """
    request: str = ""
    rules: str = ""
    spec: str = ""
    plan: str = ""


@dataclass(frozen=True)
class AssemblyOptions:
    """
    Caller-supplied switches for content assembly.

    Attributes:
        chunking_enabled: Split files longer than max_lines into chunks.
        max_lines: Maximum lines per chunk.
        line_start: 1-based first line to extract (<= 0 means from the top).
        line_end: 1-based last line to extract (<= 0 means to the end).
        include_structure: Render the directory outline into the prompt.
        template: Prompt layout identifier (Codegen, Review, None).
    """
    chunking_enabled: bool = False
    max_lines: int = DEFAULT_MAX_LINES
    line_start: int = 0
    line_end: int = 0
    include_structure: bool = True
    template: str = DEFAULT_TEMPLATE

# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PromptResult:
    """
    Outcome of a prompt generation.

    Attributes:
        text: Fully assembled prompt.
        token_count: Estimated token count for the target model.
        model: Model name used for the estimate.
        template: Template actually applied.
        files_emitted: Paths of files whose content was included, in order.
    """
    text: str
    token_count: int
    model: str
    template: str
    files_emitted: List[str] = field(default_factory=list)
