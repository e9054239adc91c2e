"""Package matching: choose the NDC packages to dispense for a target quantity.

Combinations are generated per active candidate, largest package first:

* the candidate repeated 1..ceil(target / size) + 2 times;
* when multiple packages are allowed, as many whole candidate packages as
  fit under the target, topped up with enough packages of one other active
  candidate to close the gap.

A combination is admitted when its overfill lies inside
[-MAX_UNDERFILL_PERCENT, +MAX_OVERFILL_PERCENT]. Admitted combinations are
ranked by score (lower wins):

    fill penalty (0 exact, overfill %, or 2 x underfill %)
    + 0.1 per package unit
    + 0.05 per distinct NDC
    - 0.001 x average package size

Ties fall back to larger average package size, fewer package units
and finally the NDC codes, so the order never depends on input order.
"""

import math
from collections.abc import Iterable, Sequence
from typing import Final

from rxquant.common.models import CalculationWarning, Severity, WarningType
from rxquant.logging.logger import Log
from rxquant.matching.models import (
    MAX_OVERFILL_PERCENT,
    MAX_UNDERFILL_PERCENT,
    PREFERRED_OVERFILL_PERCENT,
    Combination,
    MatchQuality,
    MatcherConfig,
    MatchResult,
    PackageCount,
    PackageRecord,
    ToleranceConfig,
)

_UNIT_PENALTY: Final = 0.1
_NDC_PENALTY: Final = 0.05
_SIZE_BONUS_RATE: Final = 0.001
_EXTRA_PACKAGES: Final = 2
_SCORE_PRECISION: Final = 4
_PERCENT_PRECISION: Final = 2

_RankedCombination = tuple[tuple[float, float, int, tuple[str, ...]], Combination]


def match_packages(
    target: float,
    candidates: Sequence[PackageRecord],
    config: MatcherConfig | None = None,
) -> MatchResult:
    """Select the best package combination and ranked alternatives."""
    config = config or MatcherConfig()

    if not _is_positive_number(target):
        return MatchResult(success=False, error="Invalid quantity: must be a positive number")
    if not candidates:
        return MatchResult(success=False, error="No NDCs available for matching")

    warnings = _inactive_warnings(candidates)
    active = _active_by_size(candidates)
    if not active:
        return MatchResult(success=False, warnings=warnings, error="No active NDCs available")

    ranked = _rank(_generate(target, active, config.allow_multiple_packages), target)
    if not ranked and config.relax_tolerance_when_unmatched:
        ranked = _rank(_whole_package_options(target, active), target)
        if ranked:
            warnings.append(_excessive_overfill_warning(ranked[0][1], target))

    if not ranked:
        Log.debug(f"No package combination within tolerance for target {target}")
        return MatchResult(
            success=False,
            warnings=warnings,
            error="No suitable NDC combinations found within tolerance",
        )

    combinations = [combination for _, combination in ranked]
    recommendation = combinations[0]
    Log.debug(
        "Packages matched",
        target=target,
        recommendation=recommendation.breakdown,
        admitted=len(combinations),
    )
    return MatchResult(
        success=True,
        recommendation=recommendation,
        alternatives=combinations[1:1 + max(0, config.max_alternatives)],
        warnings=warnings,
    )


def calculate_overfill_percent(actual: float, target: float) -> float:
    """Percentage by which ``actual`` exceeds ``target``; negative for underfill."""
    if target == 0:
        return 0.0
    return (actual - target) / target * 100


def is_within_tolerance(overfill_percent: float) -> bool:
    return -MAX_UNDERFILL_PERCENT <= overfill_percent <= MAX_OVERFILL_PERCENT


def tolerance_config() -> ToleranceConfig:
    return ToleranceConfig()


def match_quality(overfill_percent: float) -> MatchQuality:
    if overfill_percent == 0:
        return MatchQuality.EXACT
    if overfill_percent > 0:
        if overfill_percent <= PREFERRED_OVERFILL_PERCENT:
            return MatchQuality.SLIGHT_OVERFILL
        if overfill_percent <= MAX_OVERFILL_PERCENT:
            return MatchQuality.MODERATE_OVERFILL
        return MatchQuality.EXCESSIVE_OVERFILL
    if -overfill_percent <= MAX_UNDERFILL_PERCENT:
        return MatchQuality.SLIGHT_UNDERFILL
    return MatchQuality.SIGNIFICANT_UNDERFILL


def find_best_single_package(
    target: float,
    candidates: Sequence[PackageRecord],
) -> Combination | None:
    """Lowest-overfill option using whole packages of a single active NDC.

    Returns ``None`` when no NDC reaches the target within MAX_OVERFILL_PERCENT.
    """
    if not _is_positive_number(target) or not candidates:
        return None
    best: Combination | None = None
    best_overfill = math.inf
    for package in _active_by_size(candidates):
        count = math.ceil(target / package.package_size)
        overfill = calculate_overfill_percent(count * package.package_size, target)
        if overfill <= MAX_OVERFILL_PERCENT and overfill < best_overfill:
            best = _ranked((PackageCount(package, count),), target)[1]
            best_overfill = overfill
    return best


def _generate(
    target: float,
    active: list[PackageRecord],
    allow_multiple_packages: bool,
) -> list[tuple[PackageCount, ...]]:
    seen: set[tuple[tuple[str, int], ...]] = set()
    admitted: list[tuple[PackageCount, ...]] = []

    def admit(items: tuple[PackageCount, ...]) -> None:
        key = tuple(sorted((item.package.code, item.count) for item in items))
        if key in seen:
            return
        total = sum(item.quantity for item in items)
        if not is_within_tolerance(calculate_overfill_percent(total, target)):
            return
        seen.add(key)
        admitted.append(items)

    for package in active:
        size = package.package_size
        for count in range(1, math.ceil(target / size) + _EXTRA_PACKAGES + 1):
            admit((PackageCount(package, count),))

        if not allow_multiple_packages:
            continue
        base_count = math.floor(target / size)
        gap = target - base_count * size
        if base_count == 0 or gap <= 0:
            continue
        for other in active:
            if other.code == package.code:
                continue
            top_up = math.ceil(gap / other.package_size)
            admit((PackageCount(package, base_count), PackageCount(other, top_up)))

    return admitted


def _whole_package_options(
    target: float,
    active: list[PackageRecord],
) -> list[tuple[PackageCount, ...]]:
    return [
        (PackageCount(package, math.ceil(target / package.package_size)),)
        for package in active
    ]


def _rank(
    options: Iterable[tuple[PackageCount, ...]],
    target: float,
) -> list[_RankedCombination]:
    ranked = [_ranked(items, target) for items in options]
    ranked.sort(key=lambda entry: entry[0])
    return ranked


def _ranked(items: tuple[PackageCount, ...], target: float) -> _RankedCombination:
    total = sum(item.quantity for item in items)
    unit_count = sum(item.count for item in items)
    distinct = len({item.package.code for item in items})
    average_size = total / unit_count
    overfill = calculate_overfill_percent(total, target)

    if overfill == 0:
        fill_penalty = 0.0
    elif overfill > 0:
        fill_penalty = overfill
    else:
        fill_penalty = abs(overfill) * 2
    score = (
        fill_penalty
        + _UNIT_PENALTY * unit_count
        + _NDC_PENALTY * distinct
        - _SIZE_BONUS_RATE * average_size
    )

    combination = Combination(
        packages=items,
        total_quantity=total,
        overfill_percent=round(overfill, _PERCENT_PRECISION),
        score=round(score, _SCORE_PRECISION),
        match_quality=match_quality(overfill),
        breakdown=_breakdown(items, total),
    )
    sort_key = (score, -average_size, unit_count, tuple(item.package.code for item in items))
    return sort_key, combination


def _breakdown(items: tuple[PackageCount, ...], total: int) -> str:
    parts = [
        f"{item.count} × {item.package.package_size}-count "
        f"{item.package.dosage_form or 'package'}"
        for item in items
    ]
    return f"{' + '.join(parts)} = {total} units"


def _active_by_size(candidates: Iterable[PackageRecord]) -> list[PackageRecord]:
    active = [
        package
        for package in candidates
        if package.is_active and package.package_size > 0
    ]
    return sorted(active, key=lambda package: (-package.package_size, package.code))


def _inactive_warnings(candidates: Iterable[PackageRecord]) -> list[CalculationWarning]:
    return [
        CalculationWarning(
            id=f"inactive_ndc_{package.code}",
            type=WarningType.INACTIVE_NDC,
            severity=Severity.WARNING,
            message=(
                f"NDC {package.code} ({package.manufacturer}) is inactive "
                "and should not be used"
            ),
            data={
                "ndc": package.code,
                "manufacturer": package.manufacturer,
                "marketing_end": package.marketing_end,
            },
        )
        for package in candidates
        if not package.is_active
    ]


def _excessive_overfill_warning(
    recommendation: Combination,
    target: float,
) -> CalculationWarning:
    return CalculationWarning(
        id="excessive_overfill",
        type=WarningType.EXCESSIVE_OVERFILL,
        severity=Severity.WARNING,
        message=(
            f"No package combination is within {MAX_OVERFILL_PERCENT:g}% of the "
            f"target quantity; closest option overfills by "
            f"{recommendation.overfill_percent:g}%"
        ),
        data={
            "target": target,
            "total_quantity": recommendation.total_quantity,
            "overfill_percent": recommendation.overfill_percent,
        },
    )


def _is_positive_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0
