"""
Text normalization utilities for service requests and news texts.

This module implements the token scan shared by every normalizer and the
stopword filter:

- tokenization on a fixed delimiter set
- stopword removal driven by a newline-delimited stopword list
- composition of several normalizers in a caller-specified order

Replacement is substring based: once a token is recognized, every
occurrence of that exact character sequence is rewritten anywhere in the
text, including inside longer words. Whitespace is never collapsed.
"""

from __future__ import annotations

import os
import re
from typing import Any, Dict, Iterable, FrozenSet, List, Optional, Protocol, Sequence, Tuple


# Characters that separate tokens: space , ; - / ( ) % . ? !
TOKEN_DELIMITERS = " ,;-/()%.?!"

_TOKEN_SPLIT_RE = re.compile("[" + re.escape(TOKEN_DELIMITERS) + "]")

COMMENT_PREFIX = ";"


class Normalizer(Protocol):
    """Anything that rewrites a text string via ``standardize``."""

    def standardize(self, text: str) -> str:
        ...


# ---------------------------------------------------------------------------
# Tokenization
# ---------------------------------------------------------------------------


def tokenize_text(text: str) -> List[str]:
    """
    Split ``text`` on the delimiter set.

    Consecutive delimiters produce empty tokens, which never match a
    stopword or synonym entry.

    Parameters
    ----------
    text : str
        Raw input text.

    Returns
    -------
    List[str]
        Tokens in scan order.
    """
    return _TOKEN_SPLIT_RE.split(text)


# ---------------------------------------------------------------------------
# Stopwords
# ---------------------------------------------------------------------------


def load_stopwords(path: str, encoding: str = "utf-8") -> FrozenSet[str]:
    """
    Read a stopword list from a newline-delimited text file.

    Lines starting with ';' are comments; empty lines are ignored. No other
    trimming is done, so comparison stays exact and case-sensitive.

    Parameters
    ----------
    path : str
        Path to the stopword file.
    encoding : str
        File encoding.

    Returns
    -------
    FrozenSet[str]
        The stopwords.

    Raises
    ------
    FileNotFoundError
        If the stopword file does not exist.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Stopword file not found: {path}")

    stopwords = set()
    with open(path, "r", encoding=encoding) as f:
        for line in f:
            word = line.rstrip("\r\n")
            if not word or word.startswith(COMMENT_PREFIX):
                continue
            stopwords.add(word)

    return frozenset(stopwords)


class StopwordFilter:
    """
    Removes stopwords from text.

    Parameters
    ----------
    path : Optional[str]
        Path to a newline-delimited stopword list (see :func:`load_stopwords`).
    encoding : str
        File encoding.
    words : Optional[Iterable[str]]
        In-memory stopwords, used instead of ``path``. Empty entries are
        ignored.

    Raises
    ------
    ValueError
        Unless exactly one of ``path`` and ``words`` is given.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        encoding: str = "utf-8",
        words: Optional[Iterable[str]] = None,
    ) -> None:
        if (path is None) == (words is None):
            raise ValueError("Pass exactly one of path or words.")

        if words is not None:
            self._stopwords = frozenset(w for w in words if w)
        else:
            self._stopwords = load_stopwords(path, encoding=encoding)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "StopwordFilter":
        """Build a filter from an in-memory word list."""
        return cls(words=words)

    @property
    def stopwords(self) -> FrozenSet[str]:
        return self._stopwords

    def __contains__(self, token: object) -> bool:
        return token in self._stopwords

    def __len__(self) -> int:
        return len(self._stopwords)

    def standardize(self, text: str) -> str:
        """
        Remove stopwords from ``text``.

        Every token of the original text that is a stopword has all of its
        occurrences removed from the running result.
        """
        for token in tokenize_text(text):
            if token in self._stopwords:
                text = text.replace(token, "")
        return text


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def apply_normalizers(text: str, normalizers: Sequence[Normalizer]) -> str:
    """Run ``text`` through each normalizer in order."""
    for normalizer in normalizers:
        text = normalizer.standardize(text)
    return text


def build_normalizers(preprocessing_cfg: Dict[str, Any]) -> Tuple[Normalizer, ...]:
    """
    Build the ordered normalizer chain from the 'preprocessing' section
    of config/data.yaml.

    Expected keys::

        stopwords:
          enabled: true
          path: resources/german_stopwords.txt
          encoding: utf-8
        synonyms:
          enabled: true
        order: [stopwords, synonyms]

    Parameters
    ----------
    preprocessing_cfg : Dict[str, Any]
        The 'preprocessing' section.

    Returns
    -------
    Tuple[Normalizer, ...]
        Normalizers in the configured order; empty if none are enabled.

    Raises
    ------
    ValueError
        If 'order' names an unknown stage.
    """
    from textprep.features.synonyms import SynonymCanonicalizer

    sw_cfg = preprocessing_cfg.get("stopwords", {}) or {}
    syn_cfg = preprocessing_cfg.get("synonyms", {}) or {}
    order = preprocessing_cfg.get("order") or ["stopwords", "synonyms"]

    normalizers: List[Normalizer] = []
    for stage in order:
        if stage == "stopwords":
            if bool(sw_cfg.get("enabled", False)):
                normalizers.append(
                    StopwordFilter(
                        sw_cfg["path"],
                        encoding=sw_cfg.get("encoding", "utf-8"),
                    )
                )
        elif stage == "synonyms":
            if bool(syn_cfg.get("enabled", False)):
                normalizers.append(SynonymCanonicalizer())
        else:
            raise ValueError(
                f"Unknown preprocessing stage '{stage}'. "
                "Expected 'stopwords' or 'synonyms'."
            )

    return tuple(normalizers)
