"""Frequency-phrase resolution shared by every parsing strategy.

Resolution order:
1. Exact lookup in the phrase table.
2. Whole-word containment against the same table, longest phrase first.
3. Regex extraction of numeric forms ("3 times a day", "every 5 hours",
   "q6h", "2 times weekly", "every 3 days").

An as-needed phrase found by containment only wins when no explicit
frequency can be read from the text: "every 6 hours as needed" is six
times a day.
"""

import re
from collections.abc import Callable
from typing import Final

from rxquant.vocabulary.models import FrequencyMatch
from rxquant.vocabulary.normalizer import parse_frequency_token
from rxquant.vocabulary.tables import FREQUENCY_PHRASES, FREQUENCY_PHRASES_BY_LENGTH

_WHITESPACE_RE: Final = re.compile(r"\s+")

_PHRASE_PATTERNS: Final = tuple(
    (phrase, re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)"))
    for phrase in FREQUENCY_PHRASES_BY_LENGTH
)

# "3 times daily" must not resolve through the bare "daily" entry.
_COUNTED_PREFIX_RE: Final = re.compile(r"\d+\s*(?:times?|x)\s+$")

_NUMERIC_PATTERNS: Final[tuple[tuple[re.Pattern[str], Callable[[int], float]], ...]] = (
    (re.compile(r"(\d+)\s*(?:times?|x)\s+(?:a|per)\s+day\b"), lambda n: float(n)),
    (re.compile(r"(\d+)\s*(?:times?|x)\s+daily\b"), lambda n: float(n)),
    (re.compile(r"(\d+)\s*(?:times?|x)\s+(?:a|per)\s+week\b"), lambda n: n / 7),
    (re.compile(r"(\d+)\s*(?:times?|x)\s+weekly\b"), lambda n: n / 7),
    (re.compile(r"every\s+(\d+)\s+(?:hours?|hrs?)\b"), lambda n: 24 / n),
    (re.compile(r"\bq\s*(\d+)\s*(?:h|hr|hrs|hours?)\b"), lambda n: 24 / n),
    (re.compile(r"every\s+(\d+)\s+days?\b"), lambda n: 1 / n),
)


def resolve_frequency(text: str | None) -> FrequencyMatch | None:
    """Resolve a frequency phrase to times per day.

    Returns ``None`` when nothing in ``text`` reads as a frequency. The
    as-needed family resolves to a match with ``times_per_day=None``.
    """
    if not text:
        return None
    cleaned = _WHITESPACE_RE.sub(" ", text).strip().lower()
    if not cleaned:
        return None

    exact = parse_frequency_token(cleaned)
    if exact is not None:
        return exact

    contained = _match_contained_phrase(cleaned)
    if contained is not None and not contained.is_as_needed:
        return contained

    numeric = _match_numeric_pattern(cleaned)
    if numeric is not None:
        return numeric
    return contained


def _match_contained_phrase(text: str) -> FrequencyMatch | None:
    as_needed: FrequencyMatch | None = None
    for phrase, pattern in _PHRASE_PATTERNS:
        for match in pattern.finditer(text):
            if _COUNTED_PREFIX_RE.search(text[: match.start()]):
                continue
            found = FrequencyMatch(times_per_day=FREQUENCY_PHRASES[phrase], phrase=phrase)
            if not found.is_as_needed:
                return found
            if as_needed is None:
                as_needed = found
            break
    return as_needed


def _match_numeric_pattern(text: str) -> FrequencyMatch | None:
    for pattern, to_times_per_day in _NUMERIC_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        count = int(match.group(1))
        if count <= 0:
            continue
        return FrequencyMatch(times_per_day=to_times_per_day(count), phrase=match.group(0))
    return None
