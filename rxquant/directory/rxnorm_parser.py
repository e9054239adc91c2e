"""Builds a ResolvedDrug from an RxNorm ``drugs.json`` payload."""

from typing import Any, Final

from rxquant.directory.exceptions import DirectoryValidationError
from rxquant.directory.models import ResolvedDrug

# Clinical drug first, then branded drug, then any group with concepts.
_PREFERRED_TERM_TYPES: Final = ("SCD", "SBD")


def extract_resolved_drug(payload: dict[str, Any]) -> ResolvedDrug | None:
    """Pick the best concept from a ``drugs.json`` response.

    Returns None when RxNorm knows no concept for the name.

    Raises:
        DirectoryValidationError: when the payload is malformed.
    """
    drug_group = payload.get("drugGroup")
    if drug_group is None:
        return None
    if not isinstance(drug_group, dict):
        raise DirectoryValidationError("'drugGroup' must be an object")

    groups = _build_concept_groups(drug_group.get("conceptGroup"))
    for term_type in _PREFERRED_TERM_TYPES:
        for group in groups:
            if group.get("tty") == term_type and group["conceptProperties"]:
                return _build_concept(group["conceptProperties"][0])
    for group in groups:
        if group["conceptProperties"]:
            return _build_concept(group["conceptProperties"][0])
    return None


def _build_concept_groups(raw: Any) -> list[dict[str, Any]]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise DirectoryValidationError("'drugGroup.conceptGroup' must be a list")
    groups: list[dict[str, Any]] = []
    for index, group in enumerate(raw):
        if not isinstance(group, dict):
            raise DirectoryValidationError(f"Concept group at index {index} must be an object")
        properties = group.get("conceptProperties") or []
        if not isinstance(properties, list):
            raise DirectoryValidationError(
                f"Concept group at index {index}: 'conceptProperties' must be a list"
            )
        groups.append({**group, "conceptProperties": properties})
    return groups


def _build_concept(raw: Any) -> ResolvedDrug:
    if not isinstance(raw, dict):
        raise DirectoryValidationError("Concept properties must be an object")
    rxcui = raw.get("rxcui")
    if not rxcui or not isinstance(rxcui, str):
        raise DirectoryValidationError("'rxcui' must be a non-empty string")
    name = raw.get("name")
    if not name or not isinstance(name, str):
        raise DirectoryValidationError("'name' must be a non-empty string")
    synonym = raw.get("synonym") or ""
    term_type = raw.get("tty") or ""
    if not isinstance(synonym, str) or not isinstance(term_type, str):
        raise DirectoryValidationError("'synonym' and 'tty' must be strings")
    return ResolvedDrug(rxcui=rxcui, name=name, synonym=synonym, term_type=term_type)
