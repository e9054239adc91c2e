import pytest

from rxquant.matching.models import PackageRecord, PackageStatus


def make_package(
    code: str,
    size: int,
    *,
    active: bool = True,
    manufacturer: str = "Acme Pharma",
    dosage_form: str = "tablet",
    marketing_end: str | None = None,
) -> PackageRecord:
    return PackageRecord(
        code=code,
        manufacturer=manufacturer,
        package_size=size,
        dosage_form=dosage_form,
        strength="10 mg",
        status=PackageStatus.ACTIVE if active else PackageStatus.INACTIVE,
        marketing_end=marketing_end,
    )


@pytest.fixture()
def lisinopril_packages() -> list[PackageRecord]:
    """Three active bottles of different sizes plus one discontinued bottle."""
    return [
        make_package("0009-0054-30", 30, manufacturer="Merck"),
        make_package("0009-0054-90", 90, manufacturer="Merck"),
        make_package("00143-9835-01", 100, manufacturer="West-Ward"),
        make_package(
            "0071-0525-23",
            30,
            active=False,
            manufacturer="Parke-Davis",
            marketing_end="20231231",
        ),
    ]
