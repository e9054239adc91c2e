from rxquant.calculation.exceptions import StageFailure
from rxquant.calculation.models import (
    CalculationError,
    CalculationInput,
    CalculationResult,
    CalculationStatus,
    CalculationSummary,
    ErrorType,
    QuantitySource,
    Recommendation,
)
from rxquant.calculation.orchestrator import CalculationOrchestrator, build_orchestrator
from rxquant.calculation.result_builder import result_payload

__all__ = [
    "CalculationError",
    "CalculationInput",
    "CalculationOrchestrator",
    "CalculationResult",
    "CalculationStatus",
    "CalculationSummary",
    "ErrorType",
    "QuantitySource",
    "Recommendation",
    "StageFailure",
    "build_orchestrator",
    "result_payload",
]
