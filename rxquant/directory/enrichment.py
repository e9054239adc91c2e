"""Derives dosage form and strength from RxNorm concept names.

RxNorm clinical drug names follow "<ingredient> <strength> <dose form>",
e.g. "amoxicillin 400 MG/5ML Oral Suspension".
"""

import re
from typing import Final

from rxquant.directory.models import NormalizationResult, NormalizationSource, ResolvedDrug
from rxquant.vocabulary.folding import fold_text
from rxquant.vocabulary.normalizer import normalize_dosage_form

_STRENGTH_UNITS: Final = r"(?:mg|mcg|g|ml|meq|unt|units?|iu|%)"
_STRENGTH_RE: Final = re.compile(
    rf"(\d+(?:\.\d+)?)\s*({_STRENGTH_UNITS})"
    rf"(?:\s*/\s*(\d+(?:\.\d+)?)?\s*({_STRENGTH_UNITS}))?(?![a-z])"
)


def extract_strength(name: str) -> str | None:
    """Return the first strength in a concept name ("10 MG" -> "10 mg")."""
    match = _STRENGTH_RE.search(fold_text(name))
    if match is None:
        return None
    amount, unit, per_amount, per_unit = match.groups()
    strength = f"{amount} {unit}"
    if per_unit:
        strength += f"/{per_amount or ''}{per_unit}"
    return strength


def extract_dosage_form(name: str) -> str | None:
    """Return the canonical dosage form named at the end of a concept name."""
    words = fold_text(name).replace("[", " ").replace("]", " ").split()
    for index in range(len(words) - 1, -1, -1):
        for width in (2, 1):
            start = index - width + 1
            if start < 0:
                continue
            form = normalize_dosage_form(" ".join(words[start:index + 1]))
            if form is not None:
                return form
    return None


def build_normalization_result(drug: ResolvedDrug) -> NormalizationResult:
    return NormalizationResult(
        source=NormalizationSource.RXNORM,
        identifier=drug.rxcui,
        resolved_name=drug.name,
        dosage_form=extract_dosage_form(drug.name),
        strength=extract_strength(drug.name),
    )


def direct_ndc_result(ndc: str) -> NormalizationResult:
    return NormalizationResult(
        source=NormalizationSource.DIRECT_NDC,
        identifier=ndc,
        ndc=ndc,
    )
