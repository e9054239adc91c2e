import pytest

from rxquant.directory.enrichment import (
    build_normalization_result,
    direct_ndc_result,
    extract_dosage_form,
    extract_strength,
)
from rxquant.directory.models import NormalizationSource, ResolvedDrug


class TestExtractStrength:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("lisinopril 10 MG Oral Tablet", "10 mg"),
            ("amoxicillin 400 MG/5ML Oral Suspension", "400 mg/5ml"),
            ("levothyroxine sodium 0.025 MG Oral Tablet", "0.025 mg"),
            ("insulin glargine 100 UNT/ML Injectable Solution", "100 unt/ml"),
        ],
    )
    def test_strengths(self, name: str, expected: str) -> None:
        assert extract_strength(name) == expected

    def test_no_strength(self) -> None:
        assert extract_strength("lisinopril") is None


class TestExtractDosageForm:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("lisinopril 10 MG Oral Tablet", "tablet"),
            ("lisinopril 10 MG Oral Tablet [Prinivil]", "tablet"),
            ("amoxicillin 500 MG Oral Capsule", "capsule"),
            ("amoxicillin 400 MG/5ML Oral Suspension", "suspension"),
            ("amoxicillin 400 MG/5ML Powder for Suspension", "suspension"),
        ],
    )
    def test_forms(self, name: str, expected: str) -> None:
        assert extract_dosage_form(name) == expected

    def test_no_form(self) -> None:
        assert extract_dosage_form("lisinopril 10 MG") is None


class TestNormalizationResults:
    def test_from_resolved_drug(self) -> None:
        drug = ResolvedDrug(rxcui="197884", name="lisinopril 10 MG Oral Tablet", term_type="SCD")
        result = build_normalization_result(drug)
        assert result.source == NormalizationSource.RXNORM
        assert result.identifier == "197884"
        assert result.resolved_name == "lisinopril 10 MG Oral Tablet"
        assert result.dosage_form == "tablet"
        assert result.strength == "10 mg"
        assert result.ndc is None

    def test_direct_ndc(self) -> None:
        result = direct_ndc_result("0009-0054-30")
        assert result.source == NormalizationSource.DIRECT_NDC
        assert result.identifier == "0009-0054-30"
        assert result.ndc == "0009-0054-30"
        assert result.resolved_name is None
