from rxquant.quantity.calculator import (
    calculate,
    calculate_with_overrides,
    check_reasonableness,
    estimate_days_supply,
    format_quantity,
    round_quantity,
)
from rxquant.quantity.models import (
    DirectiveOverrides,
    QuantityFailureKind,
    QuantityResult,
    ReasonablenessCheck,
)

__all__ = [
    "DirectiveOverrides",
    "QuantityFailureKind",
    "QuantityResult",
    "ReasonablenessCheck",
    "calculate",
    "calculate_with_overrides",
    "check_reasonableness",
    "estimate_days_supply",
    "format_quantity",
    "round_quantity",
]
