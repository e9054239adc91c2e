from dataclasses import dataclass
from enum import StrEnum


class ParseStrategyName(StrEnum):
    STRUCTURED = "structured"
    ABBREVIATED = "abbreviated"
    SIMPLE = "simple"
    COMPLEX_FALLBACK = "complex_fallback"


@dataclass(frozen=True)
class ParsedDirective:
    """Dose, frequency and unit extracted from prescription directions.

    A successful parse with ``frequency=None`` is an as-needed (PRN)
    directive: recognised, but not computable into a fixed quantity.
    A failed parse carries ``parse_success=False`` and a ``parse_error``.
    """

    dose: float | None
    frequency: float | None
    unit: str | None
    original_text: str
    parse_success: bool
    parse_error: str | None = None
    strategy: ParseStrategyName | None = None

    @property
    def is_as_needed(self) -> bool:
        return self.parse_success and self.frequency is None


@dataclass(frozen=True)
class ParseFailure:
    """Why a single strategy could not read the directions."""

    strategy: ParseStrategyName
    reason: str


ParseOutcome = ParsedDirective | ParseFailure
