"""Lookup functions over the fixed vocabulary tables.

Every function is case and whitespace insensitive and returns ``None`` for
input it does not recognise.
"""

import re
from typing import Final

from rxquant.vocabulary.models import FrequencyMatch, UnitClass
from rxquant.vocabulary.tables import (
    COUNT_UNITS,
    DOSAGE_FORMS,
    FREQUENCY_PHRASES,
    ROUTES,
    UNITS,
    VOLUME_UNITS,
)

_WHITESPACE_RE: Final = re.compile(r"\s+")


def _clean(value: str | None) -> str:
    if not value:
        return ""
    return _WHITESPACE_RE.sub(" ", value).strip().lower()


def normalize_unit(value: str | None) -> str | None:
    """Return the canonical unit for ``value`` (``"tabs"`` -> ``"tablet"``)."""
    return UNITS.get(_clean(value))


def normalize_dosage_form(value: str | None) -> str | None:
    """Return the canonical dosage form for ``value`` (``"caps"`` -> ``"capsule"``)."""
    return DOSAGE_FORMS.get(_clean(value))


def normalize_route(value: str | None) -> str | None:
    """Return the canonical route for ``value`` (``"po"`` -> ``"oral"``)."""
    return ROUTES.get(_clean(value))


def parse_frequency_token(value: str | None) -> FrequencyMatch | None:
    """Look up an exact frequency phrase.

    The as-needed family resolves to a match whose ``times_per_day`` is
    ``None``; unknown phrases resolve to ``None``.
    """
    phrase = _clean(value)
    if phrase not in FREQUENCY_PHRASES:
        return None
    return FrequencyMatch(times_per_day=FREQUENCY_PHRASES[phrase], phrase=phrase)


def classify_unit(value: str | None) -> UnitClass:
    """Classify a unit into the rounding family used by the quantity calculator.

    Raw spellings are accepted: the unit is normalized first and, when the
    vocabulary does not know it, classified as written.
    """
    cleaned = _clean(value)
    unit = UNITS.get(cleaned, cleaned)
    if unit in COUNT_UNITS:
        return UnitClass.COUNT_BASED
    if unit in VOLUME_UNITS:
        return UnitClass.VOLUME_BASED
    return UnitClass.OTHER
