from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

from rxquant.common.models import CalculationWarning

MAX_OVERFILL_PERCENT: Final = 10.0
MAX_UNDERFILL_PERCENT: Final = 5.0
PREFERRED_OVERFILL_PERCENT: Final = 5.0


class PackageStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class MatchQuality(StrEnum):
    """How closely a combination's total matches the target quantity."""

    EXACT = "exact"
    SLIGHT_OVERFILL = "slight_overfill"
    MODERATE_OVERFILL = "moderate_overfill"
    EXCESSIVE_OVERFILL = "excessive_overfill"
    SLIGHT_UNDERFILL = "slight_underfill"
    SIGNIFICANT_UNDERFILL = "significant_underfill"


@dataclass(frozen=True)
class PackageRecord:
    """One manufacturer package of a drug product, identified by its NDC."""

    code: str
    manufacturer: str
    package_size: int
    dosage_form: str
    strength: str
    status: PackageStatus
    marketing_start: str | None = None
    marketing_end: str | None = None
    description: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == PackageStatus.ACTIVE


@dataclass(frozen=True)
class ToleranceConfig:
    max_overfill_percent: float = MAX_OVERFILL_PERCENT
    max_underfill_percent: float = MAX_UNDERFILL_PERCENT
    preferred_overfill_percent: float = PREFERRED_OVERFILL_PERCENT


@dataclass(frozen=True)
class MatcherConfig:
    """Options for a single matching run.

    ``relax_tolerance_when_unmatched`` admits the closest whole-package
    options, labelled as excessive overfill, when nothing falls inside the
    tolerance window. It is off by default.
    """

    max_alternatives: int = 5
    allow_multiple_packages: bool = True
    relax_tolerance_when_unmatched: bool = False


@dataclass(frozen=True)
class PackageCount:
    package: PackageRecord
    count: int

    @property
    def quantity(self) -> int:
        return self.package.package_size * self.count


@dataclass(frozen=True)
class Combination:
    """A set of packages dispensed together, scored against the target."""

    packages: tuple[PackageCount, ...]
    total_quantity: int
    overfill_percent: float
    score: float
    match_quality: MatchQuality
    breakdown: str

    @property
    def package_count(self) -> int:
        return sum(item.count for item in self.packages)

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(item.package.code for item in self.packages)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching a target quantity to candidate packages."""

    success: bool
    recommendation: Combination | None = None
    alternatives: list[Combination] = field(default_factory=list)
    warnings: list[CalculationWarning] = field(default_factory=list)
    error: str | None = None
