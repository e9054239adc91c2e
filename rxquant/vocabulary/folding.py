"""Text folding for prescription directions.

Directions arrive from pharmacy systems, scanned labels and free-typed
forms, so the same instruction can show up as ``"Take ½ TAB p.o. B.I.D."``
or ``"take 1/2 tab po bid"``. Folding brings both to the second form:

1. Normalize Unicode (NFC) to ensure precomposed characters.
2. Transliterate to Latin-ASCII-lowercase via ICU (``½`` becomes ``1/2``).
3. Drop the dots of dotted abbreviations (``b.i.d.`` becomes ``bid``).
4. Collapse whitespace.
5. Join mixed fractions (``1 1/2`` becomes ``1.5``).
"""

import re
import unicodedata
from typing import Final

import icu  # type: ignore[import-untyped]

from rxquant.vocabulary.tables import NUMBER_WORDS

_ICU_TRANSFORM: Final = "Any-Latin; Latin-ASCII; Lower"

_TRANSLITERATOR: Final = icu.Transliterator.createInstance(_ICU_TRANSFORM)

# A dot between two letters, or after a single letter that follows a dot.
_ABBREVIATION_DOT_RE: Final = re.compile(r"(?<=\b[a-z])\.(?=[a-z]\b|\s|$)")
_WHITESPACE_RE: Final = re.compile(r"\s+")
_DECIMAL_RE: Final = re.compile(r"^\d+(?:\.\d+)?$|^\.\d+$")
_FRACTION_RE: Final = re.compile(r"^(\d+)/(\d+)$")
_MIXED_FRACTION_RE: Final = re.compile(r"(\d+)\s+(\d+)/(\d+)")


def fold_text(text: str) -> str:
    """Fold directions text into lowercase ASCII with single spaces."""
    normalized = unicodedata.normalize("NFC", text)
    folded = _TRANSLITERATOR.transliterate(normalized)
    folded = _ABBREVIATION_DOT_RE.sub("", folded)
    folded = _WHITESPACE_RE.sub(" ", folded).strip()
    return _MIXED_FRACTION_RE.sub(_join_mixed_fraction, folded)


def parse_dose_token(token: str) -> float | None:
    """Read a dose from one token.

    Accepts decimals (``"2"``, ``"0.5"``, ``".5"``), simple fractions
    (``"1/2"``) and number words (``"one"`` .. ``"ten"``, ``"half"``).
    Returns ``None`` for anything else, including zero and negative values.
    """
    cleaned = token.strip().lower()
    if not cleaned:
        return None

    value: float | None
    if _DECIMAL_RE.match(cleaned):
        value = float(cleaned)
    elif (fraction := _FRACTION_RE.match(cleaned)) is not None:
        denominator = int(fraction.group(2))
        if denominator == 0:
            return None
        value = int(fraction.group(1)) / denominator
    else:
        value = NUMBER_WORDS.get(cleaned)

    if value is None or value <= 0:
        return None
    return value


def _join_mixed_fraction(match: re.Match[str]) -> str:
    # "1 1/2" reads as one and a half, kept as a single decimal token.
    whole = int(match.group(1))
    denominator = int(match.group(3))
    if denominator == 0:
        return match.group(0)
    value = whole + int(match.group(2)) / denominator
    return f"{value:g}"
