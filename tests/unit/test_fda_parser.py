from datetime import date
from typing import Any

import pytest

from rxquant.directory.exceptions import DirectoryValidationError
from rxquant.directory.fda_parser import build_package_records, extract_package_size
from rxquant.matching.models import PackageStatus

_AS_OF = date(2025, 1, 1)


def _make_product(**overrides: Any) -> dict[str, Any]:
    product: dict[str, Any] = {
        "product_ndc": "0009-0054",
        "dosage_form": "TABLET",
        "labeler_name": "Merck Sharp & Dohme Corp.",
        "active_ingredients": [{"name": "LISINOPRIL", "strength": "10 mg/1"}],
        "marketing_start_date": "19880101",
        "packaging": [
            {
                "package_ndc": "0009-0054-30",
                "description": "30 TABLET in 1 BOTTLE (0009-0054-30)",
                "sample": False,
            },
        ],
    }
    product.update(overrides)
    return product


class TestExtractPackageSize:
    @pytest.mark.parametrize(
        ("description", "expected"),
        [
            ("30 TABLET in 1 BOTTLE (0009-0054-30)", 30),
            ("100 mL in 1 BOTTLE", 100),
            ("10 BLISTER PACK in 1 CARTON > 10 TABLET in 1 BLISTER PACK", 100),
            ("1 BOTTLE in 1 CARTON > 60 CAPSULE in 1 BOTTLE", 60),
        ],
    )
    def test_sizes(self, description: str, expected: int) -> None:
        assert extract_package_size(description) == expected

    @pytest.mark.parametrize(
        "description",
        ["", "BOTTLE of tablets", "2.5 mL in 1 VIAL", "1 KIT in 1 CARTON > PACKET", "0 TABLET in 1 BOTTLE"],
    )
    def test_unreadable(self, description: str) -> None:
        assert extract_package_size(description) is None


class TestBuildPackageRecords:
    def test_builds_record(self) -> None:
        records = build_package_records({"results": [_make_product()]}, as_of=_AS_OF)
        assert len(records) == 1
        record = records[0]
        assert record.code == "0009-0054-30"
        assert record.manufacturer == "Merck Sharp & Dohme Corp."
        assert record.package_size == 30
        assert record.dosage_form == "tablet"
        assert record.strength == "10 mg"
        assert record.status == PackageStatus.ACTIVE
        assert record.marketing_start == "19880101"
        assert record.marketing_end is None

    def test_qualified_dosage_form_uses_first_part(self) -> None:
        product = _make_product(dosage_form="TABLET, FILM COATED")
        records = build_package_records({"results": [product]}, as_of=_AS_OF)
        assert records[0].dosage_form == "tablet"

    def test_unknown_dosage_form_kept_lowercase(self) -> None:
        product = _make_product(dosage_form="KIT")
        records = build_package_records({"results": [product]}, as_of=_AS_OF)
        assert records[0].dosage_form == "kit"

    def test_multiple_ingredients_joined(self) -> None:
        product = _make_product(active_ingredients=[
            {"name": "LISINOPRIL", "strength": "20 mg/1"},
            {"name": "HYDROCHLOROTHIAZIDE", "strength": "12.5 mg/1"},
        ])
        records = build_package_records({"results": [product]}, as_of=_AS_OF)
        assert records[0].strength == "20 mg; 12.5 mg"

    def test_product_end_date_marks_inactive(self) -> None:
        product = _make_product(marketing_end_date="20231231")
        records = build_package_records({"results": [product]}, as_of=_AS_OF)
        assert records[0].status == PackageStatus.INACTIVE
        assert records[0].marketing_end == "20231231"

    def test_future_end_date_is_active(self) -> None:
        product = _make_product(marketing_end_date="20301231")
        records = build_package_records({"results": [product]}, as_of=_AS_OF)
        assert records[0].status == PackageStatus.ACTIVE

    def test_end_date_on_reference_day_is_inactive(self) -> None:
        product = _make_product(marketing_end_date="20250101")
        records = build_package_records({"results": [product]}, as_of=_AS_OF)
        assert records[0].status == PackageStatus.INACTIVE

    def test_package_end_date_overrides_product(self) -> None:
        product = _make_product(packaging=[{
            "package_ndc": "0009-0054-30",
            "description": "30 TABLET in 1 BOTTLE",
            "marketing_end_date": "20200101",
        }])
        records = build_package_records({"results": [product]}, as_of=_AS_OF)
        assert records[0].status == PackageStatus.INACTIVE

    def test_samples_are_skipped(self) -> None:
        product = _make_product(packaging=[
            {"package_ndc": "0009-0054-02", "description": "2 TABLET in 1 POUCH", "sample": True},
        ])
        assert build_package_records({"results": [product]}, as_of=_AS_OF) == []

    def test_packages_without_count_are_skipped(self) -> None:
        product = _make_product(packaging=[
            {"package_ndc": "0009-0054-99", "description": "BULK"},
        ])
        assert build_package_records({"results": [product]}, as_of=_AS_OF) == []

    def test_duplicate_codes_kept_once(self) -> None:
        payload = {"results": [_make_product(), _make_product()]}
        assert len(build_package_records(payload, as_of=_AS_OF)) == 1

    def test_empty_payload(self) -> None:
        assert build_package_records({}, as_of=_AS_OF) == []


class TestBuildPackageRecordsValidation:
    def test_results_must_be_list(self) -> None:
        with pytest.raises(DirectoryValidationError, match="'results' must be a list"):
            build_package_records({"results": {}})

    def test_product_must_be_object(self) -> None:
        with pytest.raises(DirectoryValidationError, match="index 0 must be an object"):
            build_package_records({"results": ["0009-0054"]})

    def test_product_ndc_required(self) -> None:
        with pytest.raises(DirectoryValidationError, match="'product_ndc'"):
            build_package_records({"results": [_make_product(product_ndc="")]})

    def test_package_ndc_required(self) -> None:
        product = _make_product(packaging=[{"description": "30 TABLET in 1 BOTTLE"}])
        with pytest.raises(DirectoryValidationError, match="'package_ndc'"):
            build_package_records({"results": [product]})

    def test_description_must_be_string(self) -> None:
        product = _make_product(packaging=[{"package_ndc": "0009-0054-30", "description": 30}])
        with pytest.raises(DirectoryValidationError, match="'description' must be a string"):
            build_package_records({"results": [product]})

    def test_bad_end_date(self) -> None:
        product = _make_product(marketing_end_date="2023-12-31")
        with pytest.raises(DirectoryValidationError, match="YYYYMMDD"):
            build_package_records({"results": [product]})

    def test_labeler_must_be_string(self) -> None:
        with pytest.raises(DirectoryValidationError, match="'labeler_name'"):
            build_package_records({"results": [_make_product(labeler_name=42)]})
