from abc import ABC, abstractmethod

from rxquant.directory.models import PackageLookupResult, ResolvedDrug


class BaseDrugNormalizer(ABC):
    """Contract for drug-name resolution adapters."""

    @abstractmethod
    async def resolve(self, drug_name: str) -> ResolvedDrug | None:
        """Resolve a free-text drug name to a clinical drug concept.

        Args:
            drug_name: Name as entered by the prescriber or pharmacist.

        Returns:
            The best matching concept, or None when the drug is unknown.

        Raises:
            DirectoryError: when the directory cannot be queried.
        """

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""


class BasePackageDirectory(ABC):
    """Contract for NDC package directory adapters."""

    @abstractmethod
    async def packages_by_identifier(self, rxcui: str) -> PackageLookupResult:
        """Return the packages marketed for a drug concept.

        Raises:
            DirectoryError: when the directory cannot be queried.
        """

    @abstractmethod
    async def packages_by_ndc(self, ndc: str) -> PackageLookupResult:
        """Return the packages of the product a caller-supplied NDC belongs to.

        Raises:
            DirectoryError: when the directory cannot be queried.
        """

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""
