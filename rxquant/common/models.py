from dataclasses import dataclass, field
from enum import StrEnum


class Severity(StrEnum):
    """How strongly a warning affects the overall calculation status."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class WarningType(StrEnum):
    """Machine-readable warning categories."""

    INACTIVE_NDC = "inactive_ndc"
    SIG_PARSE_ERROR = "sig_parse_error"
    QUANTITY_REVIEW = "quantity_review"
    NO_QUANTITY = "no_quantity"
    NO_PACKAGES_FOUND = "no_packages_found"
    MATCHING_FAILED = "matching_failed"
    EXCESSIVE_OVERFILL = "excessive_overfill"
    STAGE_FAILED = "stage_failed"


@dataclass(frozen=True)
class CalculationWarning:
    """A single actionable issue attached to a result."""

    id: str
    type: WarningType
    severity: Severity
    message: str
    data: dict[str, object] = field(default_factory=dict)
