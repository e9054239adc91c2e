from rxquant.vocabulary.folding import fold_text, parse_dose_token
from rxquant.vocabulary.models import FrequencyMatch, UnitClass
from rxquant.vocabulary.normalizer import (
    classify_unit,
    normalize_dosage_form,
    normalize_route,
    normalize_unit,
    parse_frequency_token,
)

__all__ = [
    "FrequencyMatch",
    "UnitClass",
    "classify_unit",
    "fold_text",
    "normalize_dosage_form",
    "normalize_route",
    "normalize_unit",
    "parse_dose_token",
    "parse_frequency_token",
]
