"""Dispense-quantity arithmetic over parsed directives.

Every function here returns a result object; invalid input is reported as
``success=False`` with a message and a ``QuantityFailureKind``.
"""

import math
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from rxquant.common.models import CalculationWarning, Severity, WarningType
from rxquant.logging.logger import Log
from rxquant.quantity.models import (
    DirectiveOverrides,
    QuantityFailureKind,
    QuantityResult,
    ReasonablenessCheck,
)
from rxquant.sig.models import ParsedDirective
from rxquant.vocabulary.models import UnitClass
from rxquant.vocabulary.normalizer import classify_unit

MIN_DAYS_SUPPLY: Final = 1
MAX_DAYS_SUPPLY: Final = 365

MAX_COUNT_PER_DAY: Final = 20
MAX_VOLUME_PER_DAY: Final = 1000

# Products like dose * (1/7) * 28 carry float noise that would push a
# whole number over the next ceiling.
_RAW_PRECISION: Final = 6

AS_NEEDED_MESSAGE: Final = (
    'Cannot calculate quantity for "as needed" directions. '
    "Specify a frequency or enter the quantity manually."
)


def calculate(directive: ParsedDirective, days_supply: int) -> QuantityResult:
    """Compute ``dose * frequency * days_supply`` rounded for the unit class."""
    checked = _check_directive(directive)
    if isinstance(checked, QuantityResult):
        return checked
    dose, unit = checked
    if not is_valid_days_supply(days_supply):
        return _failed(
            QuantityFailureKind.VALIDATION,
            f"Days supply must be a whole number between {MIN_DAYS_SUPPLY} "
            f"and {MAX_DAYS_SUPPLY}",
            unit=unit,
        )
    if directive.frequency is None:
        return _failed(QuantityFailureKind.UNSUPPORTED_FREQUENCY, AS_NEEDED_MESSAGE, unit=unit)

    raw = round(dose * directive.frequency * days_supply, _RAW_PRECISION)
    quantity = round_quantity(raw, unit)
    breakdown = (
        f"{_format_number(dose)} × {_format_number(directive.frequency)} "
        f"× {days_supply} = {_format_number(quantity)}"
    )
    Log.debug(f"Quantity calculated: {breakdown} {unit}")
    return QuantityResult(quantity=quantity, unit=unit, success=True, breakdown=breakdown)


def round_quantity(raw: float, unit: str) -> int | float:
    """Round a raw quantity the way its unit class is dispensed.

    Count and other units round up to whole units. Volume/weight units keep
    two decimals below 1, one decimal below 10 and none from 10 up,
    rounding half up.
    """
    if classify_unit(unit) != UnitClass.VOLUME_BASED:
        return math.ceil(raw)
    value = Decimal(str(raw))
    if value < 1:
        return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    if value < 10:
        return float(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_with_overrides(
    directive: ParsedDirective,
    days_supply: int,
    overrides: DirectiveOverrides | None = None,
) -> QuantityResult:
    """Recompute after substituting a manually entered dose, frequency or unit."""
    if overrides is None or overrides.is_empty():
        return calculate(directive, days_supply)

    modified = replace(
        directive,
        dose=overrides.dose if overrides.dose is not None else directive.dose,
        frequency=(
            overrides.frequency if overrides.frequency is not None else directive.frequency
        ),
        unit=overrides.unit if overrides.unit is not None else directive.unit,
    )
    result = calculate(modified, days_supply)
    return replace(result, overrides=overrides, overrides_applied=True)


def estimate_days_supply(quantity: float, directive: ParsedDirective) -> QuantityResult:
    """Estimate how many days ``quantity`` lasts, to one decimal place."""
    checked = _check_directive(directive)
    if isinstance(checked, QuantityResult):
        return checked
    dose, _ = checked
    if directive.frequency is None:
        return _failed(
            QuantityFailureKind.UNSUPPORTED_FREQUENCY,
            'Cannot estimate days supply for "as needed" directions',
        )
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)) or quantity <= 0:
        return _failed(QuantityFailureKind.VALIDATION, "Quantity must be a positive number")

    days = quantity / (dose * directive.frequency)
    rounded = float(Decimal(str(days)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    return QuantityResult(
        quantity=rounded,
        unit="days",
        success=True,
        breakdown=(
            f"{_format_number(quantity)} ÷ ({_format_number(dose)} × "
            f"{_format_number(directive.frequency)}) = {_format_number(rounded)}"
        ),
    )


def check_reasonableness(
    quantity: float,
    unit: str,
    days_supply: int,
) -> ReasonablenessCheck:
    """Flag quantities that look like a data-entry or parsing mistake."""
    issues: list[CalculationWarning] = []
    unit_class = classify_unit(unit)

    if unit_class == UnitClass.COUNT_BASED:
        if quantity > MAX_COUNT_PER_DAY * days_supply:
            issues.append(_review_issue(
                "excessive_quantity",
                f"Calculated quantity ({_format_number(quantity)}) seems unusually "
                f"high for {days_supply} days",
                quantity=quantity,
                days_supply=days_supply,
            ))
        if quantity < 1:
            issues.append(_review_issue(
                "very_small_quantity",
                "Calculated quantity is less than 1 unit",
                quantity=quantity,
            ))

    if unit_class == UnitClass.VOLUME_BASED and quantity > MAX_VOLUME_PER_DAY * days_supply:
        issues.append(_review_issue(
            "excessive_volume",
            f"Calculated volume ({_format_number(quantity)} {unit}) seems unusually "
            f"high for {days_supply} days",
            quantity=quantity,
            days_supply=days_supply,
        ))

    return ReasonablenessCheck(is_reasonable=not issues, issues=issues)


def format_quantity(quantity: float | None, unit: str) -> str:
    """Render a quantity with the precision its unit class is dispensed in."""
    if quantity is None or isinstance(quantity, bool) or math.isnan(quantity):
        return "Invalid quantity"

    unit_class = classify_unit(unit)
    if unit_class == UnitClass.COUNT_BASED:
        count = int(Decimal(str(quantity)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return f"{count} {unit}{'' if count == 1 else 's'}"
    if unit_class == UnitClass.VOLUME_BASED:
        if quantity < 1:
            return f"{quantity:.2f} {unit}"
        if quantity < 10:
            return f"{quantity:.1f} {unit}"
        return f"{round(quantity)} {unit}"
    return f"{_format_number(quantity)} {unit}"


def _check_directive(directive: ParsedDirective) -> tuple[float, str] | QuantityResult:
    """Return the validated ``(dose, unit)`` pair or the failure to report."""
    if not directive.parse_success:
        return _failed(
            QuantityFailureKind.PARSE_FAILURE,
            directive.parse_error or "Directions could not be parsed",
        )
    if directive.dose is None or directive.dose <= 0:
        return _failed(
            QuantityFailureKind.VALIDATION,
            "Dose must be a positive number",
            unit=directive.unit,
        )
    if directive.frequency is not None and directive.frequency <= 0:
        return _failed(
            QuantityFailureKind.VALIDATION,
            "Frequency must be a positive number",
            unit=directive.unit,
        )
    if not directive.unit:
        return _failed(QuantityFailureKind.VALIDATION, "Unit is required for calculation")
    return directive.dose, directive.unit


def is_valid_days_supply(days_supply: object) -> bool:
    if isinstance(days_supply, bool) or not isinstance(days_supply, int):
        return False
    return MIN_DAYS_SUPPLY <= days_supply <= MAX_DAYS_SUPPLY


def _failed(
    kind: QuantityFailureKind,
    message: str,
    unit: str | None = None,
) -> QuantityResult:
    return QuantityResult(quantity=None, unit=unit, success=False, error=message, failure=kind)


def _review_issue(issue: str, message: str, **data: object) -> CalculationWarning:
    return CalculationWarning(
        id=f"quantity_{issue}",
        type=WarningType.QUANTITY_REVIEW,
        severity=Severity.WARNING,
        message=message,
        data={"issue": issue, **data},
    )


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.6g}"
