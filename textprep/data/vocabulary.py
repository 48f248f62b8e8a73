"""
Closed vocabulary of Open311 service categories.

A Vocabulary maps numeric category codes to human-readable names and
answers membership and lookup queries. It is fixed at construction and
exposes no mutation API, so a single instance can be shared by every
parser and report that needs it.

Codes are compared numerically: ``2``, ``2.0`` and the parsed value of
the string ``"2"`` all address the same entry.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple, Union


Code = Union[int, float]

# Service types published by the city of Bonn.
#
# Code 21 is assigned to both "Graffiti" and "Gully/ Bachablauf verstopft"
# in the published data. Both entries are disabled, so 21 is not a member
# and lines carrying it are quarantined as unknown.
BONN_SERVICE_TYPES: Tuple[Tuple[Code, str], ...] = (
    (1, "Ampel defekt (Taste/Licht)"),
    (2, "Glassplitter"),
    # (21, "Graffiti"),
    (5, "Grünpate werden"),
    (6, "Grünüberwuchs Verkehrsraum"),
    # (21, "Gully/ Bachablauf verstopft"),
    (9, "Herrenlose Fahrräder, Fahrzeuge (Schrott)"),
    (8, "Laterne defekt"),
    (24, "Poller umgefahren"),
    (25, "Sammelcontainer Altpapier voll"),
    (26, "Sammelcontainer Grünschnitt voll"),
    (22, "Straßenkanaldeckel defekt"),
    (23, "Straßenschild defekt"),
    (10, "Wilde Müllkippe, Sperrmüllreste"),
)


class UnknownCodeError(KeyError):
    """Raised by :meth:`Vocabulary.name_of` for a code that is not registered."""


class Vocabulary:
    """
    Immutable mapping of category codes to display names.

    Parameters
    ----------
    entries : Iterable[Tuple[Code, str]] or Mapping[Code, str]
        (code, name) pairs. If a code is repeated, the last registration
        wins.
    """

    def __init__(
        self,
        entries: Union[Iterable[Tuple[Code, str]], Mapping[Code, str]],
    ) -> None:
        if isinstance(entries, Mapping):
            entries = entries.items()

        names = {}
        for code, name in entries:
            names[float(code)] = str(name)

        self._names = MappingProxyType(names)

    @classmethod
    def bonn(cls) -> "Vocabulary":
        """Build the vocabulary of Bonn Open311 service types."""
        return cls(BONN_SERVICE_TYPES)

    def is_known(self, code: Code) -> bool:
        """Return True iff ``code`` is a registered category code."""
        return float(code) in self._names

    def name_of(self, code: Code) -> str:
        """
        Return the display name registered for ``code``.

        Raises
        ------
        UnknownCodeError
            If ``code`` is not a member. Callers are expected to check
            :meth:`is_known` first; reaching this error is a caller bug.
        """
        try:
            return self._names[float(code)]
        except KeyError:
            raise UnknownCodeError(f"Unknown category code: {code!r}") from None

    def get(self, code: Code, default: Optional[str] = None) -> Optional[str]:
        """Return the name for ``code`` or ``default`` when it is unknown."""
        return self._names.get(float(code), default)

    def codes(self) -> Tuple[float, ...]:
        """Return all registered codes in registration order."""
        return tuple(self._names)

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, (int, float)):
            return False
        return self.is_known(code)

    def __iter__(self) -> Iterator[float]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} codes)"
