"""
Record types and the tab-separated service request parser.

RecordParser streams Open311 service requests from a TSV file:

- the header line is skipped
- lines with the wrong number of fields are dropped
- lines whose code is not numeric are dropped
- lines whose code is not in the Vocabulary are dropped and their raw
  code is quarantined in ``unknown_codes``
- accepted lines have their text normalized and are yielded as
  ServiceRecord objects

Parsing is lazy and never raises on bad input lines. Only errors opening
or reading the file itself propagate.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from textprep.data.vocabulary import Vocabulary
from textprep.features.preprocessing import Normalizer, apply_normalizers


FIELD_DELIMITER = "\t"


@dataclass(frozen=True)
class ServiceRecord:
    """A validated service request: vocabulary code plus normalized text."""

    code: float
    text: str


@dataclass(frozen=True)
class LabeledText:
    """A text sample with its category label (news dataset)."""

    text: str
    label: str

    def to_line(self) -> str:
        return f"{self.text}{FIELD_DELIMITER}{self.label}"


# ASCII digits only: no "_" separators, no non-ASCII digits, no nan/inf.
_CODE_RE = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)


def _parse_code(raw: str) -> Optional[float]:
    if _CODE_RE.fullmatch(raw) is None:
        return None
    return float(raw)


class RecordParser:
    """
    Lazy, restartable reader of service requests from a TSV file.

    Each iteration reopens the file and resets the per-pass statistics,
    so ``unknown_codes`` always describes the most recent pass. The file
    is closed when the pass finishes or when the iterator is closed or
    garbage collected early.

    Parameters
    ----------
    path : str
        Path to the tab-separated input file (first line is a header).
    vocabulary : Vocabulary
        Accepted category codes.
    expected_columns : int
        Number of tab-separated fields a data line must have.
    code_index : int
        0-based index of the category code field.
    text_index : int
        0-based index of the free-text field.
    normalizers : Sequence[Normalizer]
        Applied to the text field in the given order.
    encoding : str
        File encoding.
    logger : Optional[logging.Logger]
        Logger for pass summaries; defaults to this module's logger.
    """

    def __init__(
        self,
        path: str,
        vocabulary: Vocabulary,
        expected_columns: int = 3,
        code_index: int = 0,
        text_index: int = 2,
        normalizers: Sequence[Normalizer] = (),
        encoding: str = "utf-8",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        for name, index in (("code_index", code_index), ("text_index", text_index)):
            if not 0 <= index < expected_columns:
                raise ValueError(
                    f"{name}={index} is out of range for "
                    f"expected_columns={expected_columns}"
                )

        self.path = path
        self.vocabulary = vocabulary
        self.expected_columns = expected_columns
        self.code_index = code_index
        self.text_index = text_index
        self.normalizers = tuple(normalizers)
        self.encoding = encoding
        self.logger = logger or logging.getLogger(__name__)

        self.unknown_codes: Set[str] = set()
        self.lines_read = 0
        self.malformed_count = 0
        self.accepted_count = 0

    @property
    def unknown_count(self) -> int:
        """Number of distinct unknown codes seen in the last pass."""
        return len(self.unknown_codes)

    def _reset_stats(self) -> None:
        self.unknown_codes = set()
        self.lines_read = 0
        self.malformed_count = 0
        self.accepted_count = 0

    def __iter__(self) -> Iterator[ServiceRecord]:
        self._reset_stats()

        with open(self.path, "r", encoding=self.encoding) as f:
            # Header
            f.readline()

            for line in f:
                self.lines_read += 1
                fields = line.rstrip("\n").split(FIELD_DELIMITER)
                if len(fields) != self.expected_columns:
                    self.malformed_count += 1
                    continue

                raw_code = fields[self.code_index]
                code = _parse_code(raw_code)
                if code is None:
                    self.malformed_count += 1
                    continue

                if not self.vocabulary.is_known(code):
                    self.unknown_codes.add(raw_code)
                    continue

                text = apply_normalizers(fields[self.text_index], self.normalizers)
                self.accepted_count += 1
                yield ServiceRecord(code=code, text=text)

        self.logger.debug(
            "Read %d lines from %s: %d accepted, %d malformed.",
            self.lines_read,
            self.path,
            self.accepted_count,
            self.malformed_count,
        )
        if self.unknown_codes:
            self.logger.warning("%d unknown service types!", self.unknown_count)


def parse_records(
    path: str,
    vocabulary: Vocabulary,
    expected_columns: int = 3,
    code_index: int = 0,
    text_index: int = 2,
    normalizers: Sequence[Normalizer] = (),
    encoding: str = "utf-8",
) -> Tuple[List[ServiceRecord], Set[str]]:
    """
    Parse a whole TSV file eagerly.

    Returns
    -------
    Tuple[List[ServiceRecord], Set[str]]
        (accepted records, distinct unknown raw codes)
    """
    parser = RecordParser(
        path,
        vocabulary,
        expected_columns=expected_columns,
        code_index=code_index,
        text_index=text_index,
        normalizers=normalizers,
        encoding=encoding,
    )
    records = list(parser)
    return records, set(parser.unknown_codes)
