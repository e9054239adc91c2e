"""Assembles the final ``CalculationResult`` from a pipeline context.

Status is derived from warnings only: any error-severity warning makes the
result an Error, any other warning makes it Partial. Aborted calculations
carry an ``error_<type>`` warning so the same rule applies to them.
"""

import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from rxquant.calculation.exceptions import StageFailure
from rxquant.calculation.models import (
    CalculationError,
    CalculationResult,
    CalculationStatus,
    CalculationSummary,
    QuantitySource,
    Recommendation,
)
from rxquant.calculation.pipeline import CalculationContext
from rxquant.common.models import CalculationWarning, Severity, WarningType


def determine_status(warnings: list[CalculationWarning]) -> CalculationStatus:
    if any(warning.severity == Severity.ERROR for warning in warnings):
        return CalculationStatus.ERROR
    if warnings:
        return CalculationStatus.PARTIAL
    return CalculationStatus.SUCCESS


def build_result(context: CalculationContext) -> CalculationResult:
    """Build the result of a pipeline that ran to completion."""
    match = context.match_result
    recommendation = None
    alternatives: list[Recommendation] = []
    if match is not None and match.success and match.recommendation is not None:
        recommendation = Recommendation.from_combination(match.recommendation)
        alternatives = [Recommendation.from_combination(item) for item in match.alternatives]

    packages = context.packages
    warnings = list(context.warnings)
    return CalculationResult(
        id=_new_id(),
        timestamp=_now(),
        status=determine_status(warnings),
        inputs=context.inputs,
        normalization=context.normalization,
        calculation=_summary(context),
        active_packages=list(packages.active) if packages else [],
        inactive_packages=list(packages.inactive) if packages else [],
        recommendation=recommendation,
        alternatives=alternatives,
        warnings=warnings,
    )


def build_error_result(context: CalculationContext, failure: StageFailure) -> CalculationResult:
    """Build the result of a pipeline aborted by ``failure``."""
    error = CalculationError(
        type=failure.error_type,
        message=failure.message,
        context=dict(failure.context),
    )
    warnings = [
        *context.warnings,
        CalculationWarning(
            id=f"error_{failure.error_type}",
            type=WarningType.STAGE_FAILED,
            severity=Severity.ERROR,
            message=failure.message,
            data=dict(failure.context),
        ),
    ]
    return CalculationResult(
        id=_new_id(),
        timestamp=_now(),
        status=determine_status(warnings),
        inputs=context.inputs,
        normalization=context.normalization,
        calculation=_summary(context) if context.parsed_directive is not None else None,
        warnings=warnings,
        error=error,
    )


def result_payload(result: CalculationResult) -> dict[str, Any]:
    """Convert a result into plain JSON-serialisable data."""
    return _plain(asdict(result))


def _summary(context: CalculationContext) -> CalculationSummary:
    if context.quantity_source == QuantitySource.EXPLICIT:
        return CalculationSummary(
            source=QuantitySource.EXPLICIT,
            calculated_quantity=context.target_quantity,
        )
    directive = context.parsed_directive
    quantity = context.quantity_result
    return CalculationSummary(
        source=QuantitySource.CALCULATED,
        parsed_directive=directive,
        calculated_quantity=quantity.quantity if quantity else None,
        unit=quantity.unit if quantity else (directive.unit if directive else None),
        breakdown=quantity.breakdown if quantity else None,
    )


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def _new_id() -> str:
    return f"calc_{uuid.uuid4().hex}"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
