"""Name-pattern filter removing regional variants and special forms.

Two marker families make up the canonical list:

* regional markers match on word boundaries (``raichu-alola``, ``meowth-galar``)
* form markers match anywhere in the name (``charizard-mega-x``,
  ``pikachu-starter``, ``zacian-crowned``)

Form markers are plain substrings, so a species whose own name contains one
(``meganium``, ``yanmega``) is excluded too. Pass a custom list to
:class:`ExclusionFilter` to change that.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

REGIONAL_MARKERS: tuple[str, ...] = (
    "kanto",
    "johto",
    "hoenn",
    "sinnoh",
    "hisui",
    "unova",
    "kalos",
    "alola",
    "galar",
    "paldea",
)

FORM_MARKERS: tuple[str, ...] = (
    "mega",
    "gmax",
    "totem",
    "starter",
    "alola",
    "galar",
    "hisui",
    "paldea",
    "crowned",
    "origin",
    "other",
)


def _alternation(markers: Sequence[str]) -> str:
    return "|".join(re.escape(m) for m in markers)


class ExclusionFilter:
    """Case-insensitive variant / form exclusion over creature names."""

    def __init__(
        self,
        regional: Sequence[str] = REGIONAL_MARKERS,
        forms: Sequence[str] = FORM_MARKERS,
    ):
        self.regional = tuple(m.lower() for m in regional)
        self.forms = tuple(m.lower() for m in forms)
        self._regional_re = (
            re.compile(rf"\b({_alternation(self.regional)})\b", re.IGNORECASE)
            if self.regional
            else None
        )
        self._forms_re = (
            re.compile(f"({_alternation(self.forms)})", re.IGNORECASE)
            if self.forms
            else None
        )

    def matched_marker(self, name: str) -> str | None:
        """Return the first marker found in ``name``, or None if it is allowed."""
        for pattern in (self._regional_re, self._forms_re):
            if pattern is None:
                continue
            match = pattern.search(name)
            if match:
                return match.group(1).lower()
        return None

    def is_excluded(self, name: str) -> bool:
        return self.matched_marker(name) is not None

    def partition(self, names: Iterable[str]) -> tuple[list[str], list[str]]:
        """Split names into (kept, excluded), preserving input order."""
        kept, excluded = [], []
        for name in names:
            (excluded if self.is_excluded(name) else kept).append(name)
        return kept, excluded


DEFAULT_EXCLUSION_FILTER = ExclusionFilter()
