"""
Synonym canonicalization for German municipal service requests.

Variant tokens (e.g. "Drahtesel", "Zweirad") are mapped onto one
canonical token ("Fahrrad"). The canonicalizer can either rewrite a text
in place or only report which canonical concepts it contains (tagging).

Lookups are single-hop: a canonical value that is itself a key is not
resolved further.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from textprep.features.preprocessing import tokenize_text


TAG_SEPARATOR = "|"

GERMAN_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "Verkehrsampel": "Ampel",
        "Glassplitter": "Glas",
        "Glasscherbe": "Glas",
        "Grünpate": "Pate",
        "Grünüberwuchs": "Überwuchs",
        "Verkehrsraum": "Verkehr",
        "Straßenverkehr": "Verkehr",
        "unüberwacht": "herrenlos",
        "unbewacht": "herrenlos",
        "ungesichert": "herrenlos",
        "unbehütet": "herrenlos",
        "Drahtesel": "Fahrrad",
        "Vehikel": "Fahrrad",
        "Zweirad": "Fahrrad",
        "Rad": "Fahrrad",
        "Fahrzeug": "Auto",
        "Wagen": "Auto",
        "Karre": "Auto",
        "Kraftfahrzeug": "Auto",
        "KFZ": "Auto",
        "Personenkraftwagen": "Auto",
        "PKW": "Auto",
        "Verkehrsmittel": "Auto",
        "Gefährt": "Auto",
        "Schlitten": "Auto",
        "Gerümpel": "Schrott",
        "Schund": "Schrott",
        "Ramsch": "Schrott",
        "Kram": "Schrott",
        "Straßenlaterne": "Laterne",
        "Beleuchtung": "Laterne",
        "Beleuchtungskörper": "Laterne",
        "Straßenbeleuchtung": "Laterne",
        "Lampe": "Laterne",
        "Straßenlampe": "Laterne",
        "Leuchte": "Laterne",
        "Pfosten": "Poller",
        "Pfeiler": "Poller",
        "Pfahl": "Poller",
        "Altpapier": "Papier",
        "Papiercontainer": "Papier",
        "Papiertonne": "Papier",
        "Straßenkanaldeckel": "Kanaldeckel",
        "Verkehrsschild": "Straßenschild",
        "Verkehrszeichen": "Straßenschild",
        "Müllkippe": "Müll",
        "Müllabladeplatz": "Müll",
        "Abladeplatz": "Müll",
        "Deponie": "Müll",
        "Müllhalde": "Müll",
        "Abfall": "Müll",
        "Abfallberg": "Müll",
        "Abfallhaufen": "Müll",
        "Sperrmüll": "Müll",
    }
)


class SynonymCanonicalizer:
    """
    Rewrites or tags text using a fixed token -> canonical-token map.

    Parameters
    ----------
    synonyms : Optional[Mapping[str, str]]
        Source token to canonical token. Matching is exact and
        case-sensitive. Defaults to :data:`GERMAN_SYNONYMS`.
    """

    def __init__(self, synonyms: Optional[Mapping[str, str]] = None) -> None:
        if synonyms is None:
            synonyms = GERMAN_SYNONYMS
        table: Dict[str, str] = {str(k): str(v) for k, v in synonyms.items() if k}
        self._synonyms = MappingProxyType(table)

    @property
    def synonyms(self) -> Mapping[str, str]:
        return self._synonyms

    def __len__(self) -> int:
        return len(self._synonyms)

    def canonical_of(self, token: str) -> Optional[str]:
        """Return the canonical form of ``token`` (single hop) or None."""
        return self._synonyms.get(token)

    def standardize(self, text: str) -> str:
        """
        Replace every known token with its canonical value.

        Tokens come from a single scan of the original text; each match
        rewrites all substring occurrences in the running result.
        """
        for token in tokenize_text(text):
            canonical = self._synonyms.get(token)
            if canonical is not None:
                text = text.replace(token, canonical)
        return text

    def tags(self, text: str) -> List[str]:
        """Return the canonical value of each matched token, in scan order."""
        return [
            self._synonyms[token]
            for token in tokenize_text(text)
            if token in self._synonyms
        ]

    def tag(self, text: str) -> str:
        """
        Return the '|'-joined canonical tags found in ``text``.

        Repeated matches are kept. The text itself is not modified; an
        empty string means no token matched.
        """
        return TAG_SEPARATOR.join(self.tags(text))
