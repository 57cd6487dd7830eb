from __future__ import annotations

"""
Token Counting Engine.

Estimates the token footprint of an assembled prompt for a target model.
OpenAI-family model names are routed to a local tiktoken BPE encoder;
unrecognized models, and any encoder failure, fall back to a
characters-per-token heuristic.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import tiktoken

from promptnormalizer.domain.constants import DEFAULT_MODEL

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN_AVG = 4

# Ordered prefix table: the first matching prefix wins
_ENCODING_BY_PREFIX: List[Tuple[str, str]] = [
    ("o3-mini-high", "cl100k_base"),
    ("gpt-4o", "o200k_base"),
    ("o1", "o200k_base"),
    ("o3", "o200k_base"),
    ("o4", "o200k_base"),
    ("gpt-4", "cl100k_base"),
    ("gpt-3.5", "cl100k_base"),
]

# -----------------------------------------------------------------------------
# STRATEGY INTERFACES
# -----------------------------------------------------------------------------

class TokenizerStrategy(ABC):
    """Model-family specific token counting algorithm."""

    @abstractmethod
    def count(self, text: str, encoding_name: str) -> int:
        """
        Calculate the token count for a given text.

        Args:
            text: Input string.
            encoding_name: Encoding identifier, ignored by heuristic strategies.

        Returns:
            int: Token count.
        """


class HeuristicStrategy(TokenizerStrategy):
    """Character density estimate used for unknown models."""

    def count(self, text: str, encoding_name: str = "") -> int:
        return len(text) // CHARS_PER_TOKEN_AVG


class TiktokenStrategy(TokenizerStrategy):
    """Local BPE encoding through tiktoken."""

    def count(self, text: str, encoding_name: str) -> int:
        encoding = tiktoken.get_encoding(encoding_name)
        return len(encoding.encode(text, disallowed_special=()))

# -----------------------------------------------------------------------------
# SERVICE ORCHESTRATION (FACADE)
# -----------------------------------------------------------------------------

def resolve_encoding_name(model: str) -> Optional[str]:
    """
    Map a model display name to a tiktoken encoding.

    Args:
        model: Model name, e.g. 'GPT-4', 'o1 Pro', 'o3-mini-high'.

    Returns:
        Optional[str]: Encoding name, or None when the model is not recognized.
    """
    model_lower = (model or "").strip().lower()
    for prefix, encoding_name in _ENCODING_BY_PREFIX:
        if model_lower.startswith(prefix):
            return encoding_name
    return None


class TokenizerService:
    """
    Centralized model-aware token estimation.

    Selects the counting strategy for the target model and degrades to
    the heuristic instead of failing prompt generation.
    """

    def __init__(self) -> None:
        self.heuristic = HeuristicStrategy()
        self._tiktoken: Optional[TokenizerStrategy] = TiktokenStrategy()

    def count(self, text: str, model: str) -> int:
        """
        Estimate the token count of ``text`` for ``model``.

        Args:
            text: Raw input text.
            model: Target model name.

        Returns:
            int: Token estimate, 0 for empty input.
        """
        if not text:
            return 0

        encoding_name = resolve_encoding_name(model)
        if encoding_name is None or self._tiktoken is None:
            logger.debug(f"No encoder for model '{model}'. Using heuristic estimate.")
            return self.heuristic.count(text)

        try:
            return self._tiktoken.count(text, encoding_name)
        except Exception as e:
            # tiktoken may need to download its BPE ranks on first use
            logger.warning(f"Tokenizer '{encoding_name}' failed: {e}. Using heuristic fallback.")
            return self.heuristic.count(text)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

_SERVICE_INSTANCE = TokenizerService()


def count_tokens(text: str, model: str = DEFAULT_MODEL) -> int:
    """
    Estimate the number of tokens for the target model.

    Args:
        text: Input string content.
        model: Target model name.

    Returns:
        int: Total token count.
    """
    return _SERVICE_INSTANCE.count(text, model)
