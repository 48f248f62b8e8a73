"""
Train/test splitting utilities for the BBC news dataset.

This module provides:
- extraction of a document's text (its first two non-empty lines)
- loading a category-per-directory news corpus
- a per-category stratified split into training and test sets
- writing both sets as ``text<TAB>label`` files

The number of training documents per category is
``(count // 100) * 80``. For counts that are not a multiple of 100 this
is smaller than 80% of the category (99 documents give 0 training
documents); the formula is kept as is so that previously generated
splits stay reproducible.

Shuffling uses scikit-learn's ``check_random_state``, so ``random_state``
accepts None, an int seed or a ``numpy.random.RandomState``.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
from sklearn.utils import check_random_state

from textprep.data.records import LabeledText
from textprep.utils.pipeline_utils import ensure_dir_exists


NEWS_CATEGORIES: Tuple[str, ...] = (
    "business",
    "entertainment",
    "politics",
    "sport",
    "tech",
)

RandomStateLike = Optional[Union[int, np.random.RandomState]]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Document extraction
# ---------------------------------------------------------------------------


def extract_document_text(raw: str) -> str:
    """
    Build the sample text of a news document.

    The first two non-empty lines (headline and lead) are joined with a
    space, remaining line-break characters become spaces and runs of three
    spaces are collapsed to one.

    Parameters
    ----------
    raw : str
        Full file content.

    Returns
    -------
    str
        Document text.

    Raises
    ------
    ValueError
        If the document has fewer than two non-empty lines.
    """
    parts = [p for p in raw.split("\n") if p]
    if len(parts) < 2:
        raise ValueError(
            f"Expected at least two non-empty lines, found {len(parts)}."
        )

    text = parts[0] + " " + parts[1]
    text = text.replace(os.linesep, " ")
    text = text.replace("\n", " ")
    text = text.replace("\r", " ")
    text = text.replace("   ", " ")
    return text


def load_news_corpus(
    base_path: str,
    categories: Sequence[str] = NEWS_CATEGORIES,
    encoding: str = "utf-8",
) -> Dict[str, List[str]]:
    """
    Read a category-per-directory news corpus.

    Every regular file in ``base_path/<category>/`` is one document. Files
    are read in sorted name order.

    Parameters
    ----------
    base_path : str
        Root directory of the corpus.
    categories : Sequence[str]
        Category sub-directories to read, in output order.
    encoding : str
        File encoding.

    Returns
    -------
    Dict[str, List[str]]
        Mapping of category to extracted document texts.

    Raises
    ------
    FileNotFoundError
        If a category directory does not exist.
    ValueError
        If a document has fewer than two non-empty lines.
    """
    corpus: Dict[str, List[str]] = {}

    for category in categories:
        category_dir = os.path.join(base_path, category)
        if not os.path.isdir(category_dir):
            raise FileNotFoundError(f"Category directory not found: {category_dir}")

        texts = []
        for filename in sorted(os.listdir(category_dir)):
            file_path = os.path.join(category_dir, filename)
            if not os.path.isfile(file_path):
                continue

            # newline="" keeps '\r' so extraction sees the raw line breaks.
            with open(file_path, "r", encoding=encoding, newline="") as f:
                raw = f.read()

            try:
                texts.append(extract_document_text(raw))
            except ValueError as exc:
                raise ValueError(f"{file_path}: {exc}") from None

        logger.debug("Loaded %d documents for category '%s'.", len(texts), category)
        corpus[category] = texts

    return corpus


# ---------------------------------------------------------------------------
# Splitting
# ---------------------------------------------------------------------------


def compute_train_count(total: int) -> int:
    """Return the number of training documents for a category of ``total``."""
    return (total // 100) * 80


def write_labeled_texts(records: Iterable[LabeledText], path: str) -> int:
    """
    Write ``text<TAB>label`` lines to ``path``, replacing any previous file.

    The data is written to ``path + ".tmp"`` first and moved into place
    once complete, so ``path`` never holds a partially written split.

    Returns
    -------
    int
        Number of lines written.
    """
    ensure_dir_exists(os.path.dirname(path))
    tmp_path = path + ".tmp"

    count = 0
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as f:
            for record in records:
                f.write(record.to_line())
                f.write("\n")
                count += 1
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    return count


class DatasetSplitter:
    """
    Per-category train/test splitter.

    Parameters
    ----------
    random_state : None, int or numpy.random.RandomState
        Source of randomness for the per-category shuffles. A fixed int
        makes splits deterministic.
    """

    def __init__(self, random_state: RandomStateLike = None) -> None:
        self.random_state = random_state

    def split(
        self,
        corpus: Mapping[str, Sequence[str]],
    ) -> Tuple[List[LabeledText], List[LabeledText]]:
        """
        Shuffle each category and cut it into training and test samples.

        Parameters
        ----------
        corpus : Mapping[str, Sequence[str]]
            Category label to document texts.

        Returns
        -------
        Tuple[List[LabeledText], List[LabeledText]]
            (train, test), each in category iteration order.
        """
        rng = check_random_state(self.random_state)

        train: List[LabeledText] = []
        test: List[LabeledText] = []

        for label, texts in corpus.items():
            texts = list(texts)
            shuffled = [texts[i] for i in rng.permutation(len(texts))]

            train_count = compute_train_count(len(shuffled))
            train.extend(LabeledText(text=t, label=label) for t in shuffled[:train_count])
            test.extend(LabeledText(text=t, label=label) for t in shuffled[train_count:])

            logger.info(
                "Category '%s': %d documents, %d train, %d test.",
                label,
                len(shuffled),
                train_count,
                len(shuffled) - train_count,
            )

        return train, test

    def prepare(
        self,
        corpus: Mapping[str, Sequence[str]],
        train_path: str,
        test_path: str,
    ) -> Tuple[List[LabeledText], List[LabeledText]]:
        """
        Split ``corpus`` and write the training and test files.

        Both target files are removed before splitting, so a failed run
        leaves no stale split behind.

        Returns
        -------
        Tuple[List[LabeledText], List[LabeledText]]
            (train, test) as written.
        """
        for path in (train_path, test_path):
            if os.path.exists(path):
                os.remove(path)

        train, test = self.split(corpus)

        write_labeled_texts(test, test_path)
        write_labeled_texts(train, train_path)
        logger.info(
            "Wrote %d training samples to %s and %d test samples to %s.",
            len(train),
            train_path,
            len(test),
            test_path,
        )
        return train, test
