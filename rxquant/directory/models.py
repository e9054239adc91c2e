from dataclasses import dataclass, field
from enum import StrEnum

from rxquant.matching.models import PackageRecord


class NormalizationSource(StrEnum):
    RXNORM = "rxnorm"
    DIRECT_NDC = "direct_ndc"


@dataclass(frozen=True)
class ResolvedDrug:
    """A drug concept returned by the name resolver."""

    rxcui: str
    name: str
    synonym: str = ""
    term_type: str = ""


@dataclass(frozen=True)
class NormalizationResult:
    """How the requested drug was identified for package lookup."""

    source: NormalizationSource
    identifier: str | None = None
    resolved_name: str | None = None
    dosage_form: str | None = None
    strength: str | None = None
    ndc: str | None = None


@dataclass(frozen=True)
class PackageLookupResult:
    """Packages known for one identifier, split by marketing status."""

    active: list[PackageRecord] = field(default_factory=list)
    inactive: list[PackageRecord] = field(default_factory=list)

    @classmethod
    def from_records(
        cls,
        records: list[PackageRecord],
        *,
        include_inactive: bool = True,
    ) -> "PackageLookupResult":
        active = [record for record in records if record.is_active]
        inactive = [record for record in records if not record.is_active]
        return cls(active=active, inactive=inactive if include_inactive else [])

    @property
    def all_packages(self) -> list[PackageRecord]:
        return [*self.active, *self.inactive]

    @property
    def is_empty(self) -> bool:
        return not self.active and not self.inactive
