from rxquant.matching.matcher import (
    calculate_overfill_percent,
    find_best_single_package,
    is_within_tolerance,
    match_packages,
    match_quality,
    tolerance_config,
)
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
    PackageStatus,
    ToleranceConfig,
)
from rxquant.matching.ndc import NdcCode, NdcLayout, format_ndc, is_valid_ndc, parse_ndc, to_billing_ndc

__all__ = [
    "MAX_OVERFILL_PERCENT",
    "MAX_UNDERFILL_PERCENT",
    "PREFERRED_OVERFILL_PERCENT",
    "Combination",
    "MatchQuality",
    "MatchResult",
    "MatcherConfig",
    "NdcCode",
    "NdcLayout",
    "PackageCount",
    "PackageRecord",
    "PackageStatus",
    "ToleranceConfig",
    "calculate_overfill_percent",
    "find_best_single_package",
    "format_ndc",
    "is_valid_ndc",
    "match_packages",
    "match_quality",
    "parse_ndc",
    "to_billing_ndc",
    "tolerance_config",
]
