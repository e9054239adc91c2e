from dataclasses import dataclass, field
from enum import StrEnum

from rxquant.common.models import CalculationWarning
from rxquant.directory.models import NormalizationResult
from rxquant.matching.models import Combination, MatchQuality, PackageRecord
from rxquant.sig.models import ParsedDirective


class CalculationStatus(StrEnum):
    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


class ErrorType(StrEnum):
    """The stage that aborted a calculation."""

    INVALID_INPUT = "invalid_input"
    NORMALIZATION_FAILED = "normalization_failed"
    SIG_PARSING_FAILED = "sig_parsing_failed"
    QUANTITY_CALCULATION_FAILED = "quantity_calculation_failed"
    PACKAGE_FETCH_FAILED = "package_fetch_failed"
    UNEXPECTED_ERROR = "unexpected_error"


class QuantitySource(StrEnum):
    CALCULATED = "calculated"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class CalculationInput:
    """What the caller asked for. Either ``drug_name`` or ``ndc`` is required."""

    drug_name: str | None = None
    ndc: str | None = None
    directions: str | None = None
    days_supply: int | None = None
    quantity: float | None = None


@dataclass(frozen=True)
class CalculationError:
    type: ErrorType
    message: str
    context: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class CalculationSummary:
    """Where the dispense quantity came from and how it was derived."""

    source: QuantitySource
    parsed_directive: ParsedDirective | None = None
    calculated_quantity: int | float | None = None
    unit: str | None = None
    breakdown: str | None = None


@dataclass(frozen=True)
class Recommendation:
    """A matched combination in the shape handed to the caller.

    ``ndc`` is the package dispensed in the largest count; ``ndcs`` lists
    every code when the combination mixes packages.
    """

    ndc: str
    ndcs: tuple[str, ...]
    package_count: int
    total_quantity: int
    overfill_percent: float
    match_quality: MatchQuality
    score: float
    breakdown: str

    @classmethod
    def from_combination(cls, combination: Combination) -> "Recommendation":
        primary = max(combination.packages, key=lambda item: item.count)
        return cls(
            ndc=primary.package.code,
            ndcs=combination.codes,
            package_count=combination.package_count,
            total_quantity=combination.total_quantity,
            overfill_percent=combination.overfill_percent,
            match_quality=combination.match_quality,
            score=combination.score,
            breakdown=combination.breakdown,
        )


@dataclass(frozen=True)
class CalculationResult:
    """The single auditable record produced for one calculation request."""

    id: str
    timestamp: str
    status: CalculationStatus
    inputs: CalculationInput
    normalization: NormalizationResult | None = None
    calculation: CalculationSummary | None = None
    active_packages: list[PackageRecord] = field(default_factory=list)
    inactive_packages: list[PackageRecord] = field(default_factory=list)
    recommendation: Recommendation | None = None
    alternatives: list[Recommendation] = field(default_factory=list)
    warnings: list[CalculationWarning] = field(default_factory=list)
    error: CalculationError | None = None
