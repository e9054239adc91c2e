from dataclasses import dataclass, field
from enum import StrEnum

from rxquant.common.models import CalculationWarning


class QuantityFailureKind(StrEnum):
    PARSE_FAILURE = "parse_failure"
    VALIDATION = "validation"
    UNSUPPORTED_FREQUENCY = "unsupported_frequency"


@dataclass(frozen=True)
class DirectiveOverrides:
    """Manual substitutions applied on top of a parsed directive."""

    dose: float | None = None
    frequency: float | None = None
    unit: str | None = None

    def is_empty(self) -> bool:
        return self.dose is None and self.frequency is None and self.unit is None


@dataclass(frozen=True)
class QuantityResult:
    """Outcome of a quantity computation.

    ``quantity`` is an ``int`` for units rounded up to whole units and a
    ``float`` for volume/weight units below ten.
    """

    quantity: int | float | None
    unit: str | None
    success: bool
    error: str | None = None
    failure: QuantityFailureKind | None = None
    breakdown: str | None = None
    overrides: DirectiveOverrides | None = None
    overrides_applied: bool = False


@dataclass(frozen=True)
class ReasonablenessCheck:
    """Advisory review of a computed quantity; issues never block dispensing."""

    is_reasonable: bool
    issues: list[CalculationWarning] = field(default_factory=list)
