"""Builds PackageRecords from an openFDA ``drug/ndc.json`` payload.

Every product in ``results`` and every entry of its ``packaging`` list is
validated. Sample packages and packages without a whole-unit count are
skipped. A package is inactive once its marketing end date (package level,
falling back to product level) is on or before the reference date.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Final

from rxquant.directory.exceptions import DirectoryValidationError
from rxquant.logging.logger import Log
from rxquant.matching.models import PackageRecord, PackageStatus
from rxquant.vocabulary.normalizer import normalize_dosage_form

_LEADING_COUNT_RE: Final = re.compile(r"^\s*(\d+(?:\.\d+)?)\s+\S")
_FDA_DATE_FORMAT: Final = "%Y%m%d"


def build_package_records(
    payload: dict[str, Any],
    *,
    as_of: date | None = None,
) -> list[PackageRecord]:
    """Validate an openFDA NDC payload and flatten it into package records.

    Raises:
        DirectoryValidationError: on any malformed product or package.
    """
    reference_date = as_of or date.today()
    results = payload.get("results", [])
    if not isinstance(results, list):
        raise DirectoryValidationError("'results' must be a list")

    records: list[PackageRecord] = []
    seen_codes: set[str] = set()
    for index, product in enumerate(results):
        for record in _build_product_packages(product, index, reference_date):
            if record.code in seen_codes:
                continue
            seen_codes.add(record.code)
            records.append(record)
    return records


def extract_package_size(description: str) -> int | None:
    """Count of dispensable units in a package description.

    ``"30 TABLET in 1 BOTTLE"`` holds 30. Nested descriptions multiply their
    levels: ``"10 BLISTER PACK in 1 CARTON > 10 TABLET in 1 BLISTER PACK"``
    holds 100. Returns None when a level has no leading count or the total
    is not a positive whole number.
    """
    total = 1.0
    levels = [level for level in description.split(">") if level.strip()]
    if not levels:
        return None
    for level in levels:
        match = _LEADING_COUNT_RE.match(level)
        if match is None:
            return None
        total *= float(match.group(1))
    if total <= 0 or not math.isclose(total, round(total)):
        return None
    return round(total)


def _build_product_packages(
    raw: Any,
    index: int,
    reference_date: date,
) -> list[PackageRecord]:
    if not isinstance(raw, dict):
        raise DirectoryValidationError(f"Product at index {index} must be an object")
    product_ndc = raw.get("product_ndc")
    if not product_ndc or not isinstance(product_ndc, str):
        raise DirectoryValidationError(
            f"Product at index {index}: 'product_ndc' must be a non-empty string"
        )
    manufacturer = _optional_string(raw, "labeler_name", product_ndc)
    dosage_form = _build_dosage_form(_optional_string(raw, "dosage_form", product_ndc))
    strength = _build_strength(raw, product_ndc)
    product_start = _optional_string(raw, "marketing_start_date", product_ndc) or None
    product_end = _optional_string(raw, "marketing_end_date", product_ndc) or None

    packaging = raw.get("packaging") or []
    if not isinstance(packaging, list):
        raise DirectoryValidationError(f"Product {product_ndc}: 'packaging' must be a list")

    records: list[PackageRecord] = []
    for package_index, package in enumerate(packaging):
        if not isinstance(package, dict):
            raise DirectoryValidationError(
                f"Product {product_ndc}: package at index {package_index} must be an object"
            )
        if package.get("sample") is True:
            continue
        code = package.get("package_ndc")
        if not code or not isinstance(code, str):
            raise DirectoryValidationError(
                f"Product {product_ndc}: package at index {package_index} "
                "'package_ndc' must be a non-empty string"
            )
        description = package.get("description")
        if not isinstance(description, str):
            raise DirectoryValidationError(f"Package {code}: 'description' must be a string")
        size = extract_package_size(description)
        if size is None:
            Log.debug(f"Skipping package {code}: no unit count in '{description}'")
            continue

        start = _optional_string(package, "marketing_start_date", code) or product_start
        end = _optional_string(package, "marketing_end_date", code) or product_end
        records.append(PackageRecord(
            code=code,
            manufacturer=manufacturer,
            package_size=size,
            dosage_form=dosage_form,
            strength=strength,
            status=_build_status(end, code, reference_date),
            marketing_start=start,
            marketing_end=end,
            description=description,
        ))
    return records


def _optional_string(raw: dict[str, Any], key: str, owner: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DirectoryValidationError(f"{owner}: '{key}' must be a string or null")
    return value


def _build_dosage_form(raw: str) -> str:
    # openFDA qualifies forms ("TABLET, FILM COATED"); the first part is the form.
    base = raw.split(",")[0].strip()
    return normalize_dosage_form(base) or raw.strip().lower()


def _build_strength(raw: dict[str, Any], owner: str) -> str:
    ingredients = raw.get("active_ingredients")
    if ingredients is not None:
        if not isinstance(ingredients, list):
            raise DirectoryValidationError(f"{owner}: 'active_ingredients' must be a list")
        strengths = [
            item["strength"]
            for item in ingredients
            if isinstance(item, dict) and isinstance(item.get("strength"), str)
        ]
        if strengths:
            return "; ".join(_clean_strength(value) for value in strengths)

    legacy = raw.get("strength")
    if isinstance(legacy, list) and legacy and isinstance(legacy[0], str):
        return _clean_strength(legacy[0])
    if isinstance(legacy, str):
        return _clean_strength(legacy)
    return ""


def _clean_strength(value: str) -> str:
    # "10 mg/1" is per one unit; the "/1" adds nothing.
    return value.removesuffix("/1").strip()


def _build_status(end: str | None, code: str, reference_date: date) -> PackageStatus:
    if end is None:
        return PackageStatus.ACTIVE
    try:
        end_date = datetime.strptime(end, _FDA_DATE_FORMAT).date()
    except ValueError as exc:
        raise DirectoryValidationError(
            f"Package {code}: 'marketing_end_date' must be YYYYMMDD, got {end!r}"
        ) from exc
    if end_date <= reference_date:
        return PackageStatus.INACTIVE
    return PackageStatus.ACTIVE
