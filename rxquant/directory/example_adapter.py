"""Example directory adapters backed by bundled fixtures.

No network calls. The fixtures are stored in the RxNorm ``drugs.json`` and
openFDA ``drug/ndc.json`` response shapes and go through the same parsers
as the live adapters, so these adapters double as a reference for new
providers: implement BaseDrugNormalizer / BasePackageDirectory and register
the provider in DirectoryFactory.
"""

from datetime import date
from pathlib import Path
from typing import Any, ClassVar

from rxquant.directory.base import BaseDrugNormalizer, BasePackageDirectory
from rxquant.directory.exceptions import DirectoryValidationError
from rxquant.directory.fda_parser import build_package_records
from rxquant.directory.fixture_loader import load_fixture
from rxquant.directory.models import PackageLookupResult, ResolvedDrug
from rxquant.directory.rxnorm_parser import extract_resolved_drug
from rxquant.matching.ndc import to_billing_ndc
from rxquant.vocabulary.folding import fold_text


class ExampleDrugNormalizer(BaseDrugNormalizer):
    """Resolves the handful of drugs present in the bundled RxNorm fixture."""

    FIXTURE_NAME: ClassVar[str] = "rxnorm_drugs.json"

    def __init__(self, fixture_path: Path | None = None) -> None:
        data = load_fixture(self.FIXTURE_NAME, fixture_path)
        self._aliases: dict[str, str] = data.get("aliases", {})
        self._responses: dict[str, Any] = data.get("responses", {})
        if not isinstance(self._aliases, dict) or not isinstance(self._responses, dict):
            raise DirectoryValidationError("'aliases' and 'responses' must be objects")

    async def resolve(self, drug_name: str) -> ResolvedDrug | None:
        key = fold_text(drug_name)
        key = self._aliases.get(key, key)
        payload = self._responses.get(key)
        if payload is None:
            return None
        return extract_resolved_drug(payload)


class ExamplePackageDirectory(BasePackageDirectory):
    """Serves packages from the bundled openFDA fixture."""

    FIXTURE_NAME: ClassVar[str] = "fda_products.json"

    def __init__(
        self,
        *,
        include_inactive: bool = True,
        fixture_path: Path | None = None,
        as_of: date | None = None,
    ) -> None:
        data = load_fixture(self.FIXTURE_NAME, fixture_path)
        products = data.get("results", [])
        if not isinstance(products, list):
            raise DirectoryValidationError("'results' must be a list")
        self._products: list[dict[str, Any]] = products
        self._include_inactive = include_inactive
        self._as_of = as_of

    async def packages_by_identifier(self, rxcui: str) -> PackageLookupResult:
        matching = [
            product
            for product in self._products
            if rxcui in (product.get("openfda") or {}).get("rxcui", [])
        ]
        return self._lookup(matching)

    async def packages_by_ndc(self, ndc: str) -> PackageLookupResult:
        billing = to_billing_ndc(ndc)
        matching = [
            product
            for product in self._products
            if billing is not None and billing in self._billing_codes(product)
        ]
        return self._lookup(matching)

    def _lookup(self, products: list[dict[str, Any]]) -> PackageLookupResult:
        records = build_package_records({"results": products}, as_of=self._as_of)
        return PackageLookupResult.from_records(records, include_inactive=self._include_inactive)

    @staticmethod
    def _billing_codes(product: dict[str, Any]) -> set[str]:
        codes = (
            to_billing_ndc(package.get("package_ndc"))
            for package in product.get("packaging") or []
            if isinstance(package, dict)
        )
        return {code for code in codes if code is not None}
