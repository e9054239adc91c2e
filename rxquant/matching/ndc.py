"""National Drug Code parsing and formatting.

A 10-digit NDC is written in one of four hyphenation layouts (6-3-1, 5-4-1,
5-3-2, 4-4-2). The 11-digit form is the 10-digit code left-padded with a
zero. Layouts are checked on the padded code in the order 6-3-1, 5-4-1,
5-3-2, 4-4-2.
"""

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Final


class NdcLayout(StrEnum):
    SIX_THREE_ONE = "6-3-1"
    FIVE_FOUR_ONE = "5-4-1"
    FIVE_THREE_TWO = "5-3-2"
    FOUR_FOUR_TWO = "4-4-2"

    @property
    def segments(self) -> tuple[int, int, int]:
        first, second, third = (int(part) for part in self.value.split("-"))
        return first, second, third

    @property
    def padded_segments(self) -> tuple[int, int, int]:
        first, second, third = self.segments
        return first + 1, second, third


_LAYOUT_ORDER: Final = (
    NdcLayout.SIX_THREE_ONE,
    NdcLayout.FIVE_FOUR_ONE,
    NdcLayout.FIVE_THREE_TWO,
    NdcLayout.FOUR_FOUR_TWO,
)

_NDC_CHARS_RE: Final = re.compile(r"^[\d-]+$")
_DIGITS_RE: Final = re.compile(r"^\d{10,11}$")


@dataclass(frozen=True)
class NdcCode:
    """A validated NDC.

    ``layout`` is ``None`` when the input carried no hyphens.
    """

    digits: str
    padded: str
    layout: NdcLayout | None

    @property
    def ten_digit(self) -> str:
        return self.padded[1:]


def parse_ndc(value: str | None) -> NdcCode | None:
    """Validate an NDC string; returns ``None`` for anything malformed."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    if not cleaned or not _NDC_CHARS_RE.match(cleaned):
        return None

    digits = cleaned.replace("-", "")
    if not _DIGITS_RE.match(digits):
        return None
    padded = digits if len(digits) == 11 else f"0{digits}"
    if not padded.startswith("0"):
        return None

    if "-" not in cleaned:
        return NdcCode(digits=digits, padded=padded, layout=None)

    layout = _detect_layout(cleaned.split("-"), padded_input=len(digits) == 11)
    if layout is None:
        return None
    return NdcCode(digits=digits, padded=padded, layout=layout)


def is_valid_ndc(value: str | None) -> bool:
    return parse_ndc(value) is not None


def format_ndc(value: str | None) -> str | None:
    """Render an NDC hyphenated in its detected layout.

    Codes given without hyphens are rendered in the 11-digit 5-4-2 form.
    """
    code = parse_ndc(value)
    if code is None:
        return None
    if code.layout is None:
        return _hyphenate(code.padded, (5, 4, 2))
    return _hyphenate(code.ten_digit, code.layout.segments)


def format_in_layout(code: NdcCode, layout: NdcLayout) -> str:
    return _hyphenate(code.ten_digit, layout.segments)


def to_billing_ndc(value: str | None) -> str | None:
    """Return the unhyphenated 11-digit form used for billing."""
    code = parse_ndc(value)
    return code.padded if code is not None else None


def _detect_layout(segments: list[str], *, padded_input: bool) -> NdcLayout | None:
    if len(segments) != 3 or not all(segment.isdigit() for segment in segments):
        return None
    first, second, third = (len(segment) for segment in segments)
    shape = (first if padded_input else first + 1, second, third)
    for layout in _LAYOUT_ORDER:
        if shape == layout.padded_segments:
            return layout
    return None


def _hyphenate(digits: str, segments: tuple[int, int, int]) -> str:
    first, second, _ = segments
    return f"{digits[:first]}-{digits[first:first + second]}-{digits[first + second:]}"
