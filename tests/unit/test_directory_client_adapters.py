"""Tests for the RxNorm and openFDA adapters over httpx.MockTransport."""

import asyncio
from datetime import date
from typing import Any

import httpx
import pytest

from rxquant.directory.exceptions import DirectoryNetworkError
from rxquant.directory.fda_client_adapter import FdaClientAdapter
from rxquant.directory.rxnorm_client_adapter import RxNormClientAdapter

_RXNORM_PAYLOAD: dict[str, Any] = {
    "drugGroup": {
        "name": "lisinopril",
        "conceptGroup": [
            {
                "tty": "SCD",
                "conceptProperties": [
                    {"rxcui": "197884", "name": "lisinopril 10 MG Oral Tablet", "tty": "SCD"},
                ],
            },
        ],
    },
}

_FDA_PAYLOAD: dict[str, Any] = {
    "results": [
        {
            "product_ndc": "0009-0054",
            "dosage_form": "TABLET",
            "labeler_name": "Merck",
            "packaging": [
                {"package_ndc": "0009-0054-30", "description": "30 TABLET in 1 BOTTLE"},
                {"package_ndc": "0009-0054-90", "description": "90 TABLET in 1 BOTTLE"},
            ],
        },
        {
            "product_ndc": "0071-0525",
            "dosage_form": "TABLET",
            "labeler_name": "Parke-Davis",
            "marketing_end_date": "20231231",
            "packaging": [
                {"package_ndc": "0071-0525-23", "description": "30 TABLET in 1 BOTTLE"},
            ],
        },
    ],
}


def _recording_client(
    response: httpx.Response,
    seen: list[httpx.Request],
) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _make_fda(
    response: httpx.Response,
    seen: list[httpx.Request],
    include_inactive: bool = True,
) -> FdaClientAdapter:
    return FdaClientAdapter(
        base_url="https://api.fda.test/drug/ndc.json",
        timeout_seconds=5,
        result_limit=25,
        include_inactive=include_inactive,
        client=_recording_client(response, seen),
        as_of=date(2025, 1, 1),
    )


class TestRxNormClientAdapter:
    def test_resolves_drug(self) -> None:
        seen: list[httpx.Request] = []
        adapter = RxNormClientAdapter(
            base_url="https://rxnav.test/REST/",
            timeout_seconds=5,
            client=_recording_client(httpx.Response(200, json=_RXNORM_PAYLOAD), seen),
        )
        drug = asyncio.run(adapter.resolve("  lisinopril "))

        assert drug is not None
        assert drug.rxcui == "197884"
        assert seen[0].url.path == "/REST/drugs.json"
        assert seen[0].url.params["name"] == "lisinopril"

    def test_unknown_drug(self) -> None:
        seen: list[httpx.Request] = []
        adapter = RxNormClientAdapter(
            base_url="https://rxnav.test/REST",
            timeout_seconds=5,
            client=_recording_client(httpx.Response(200, json={"drugGroup": {"name": "x"}}), seen),
        )
        assert asyncio.run(adapter.resolve("xyzzy")) is None

    def test_http_error_raises(self) -> None:
        seen: list[httpx.Request] = []
        adapter = RxNormClientAdapter(
            base_url="https://rxnav.test/REST",
            timeout_seconds=5,
            client=_recording_client(httpx.Response(500), seen),
        )
        with pytest.raises(DirectoryNetworkError, match="RxNorm API error: HTTP 500"):
            asyncio.run(adapter.resolve("lisinopril"))


class TestFdaClientAdapter:
    def test_packages_by_identifier(self) -> None:
        seen: list[httpx.Request] = []
        adapter = _make_fda(httpx.Response(200, json=_FDA_PAYLOAD), seen)
        result = asyncio.run(adapter.packages_by_identifier("197884"))

        assert [record.code for record in result.active] == ["0009-0054-30", "0009-0054-90"]
        assert [record.code for record in result.inactive] == ["0071-0525-23"]
        assert seen[0].url.params["search"] == 'openfda.rxcui:"197884"'
        assert seen[0].url.params["limit"] == "25"

    def test_inactive_excluded_when_disabled(self) -> None:
        seen: list[httpx.Request] = []
        adapter = _make_fda(httpx.Response(200, json=_FDA_PAYLOAD), seen, include_inactive=False)
        result = asyncio.run(adapter.packages_by_identifier("197884"))
        assert result.inactive == []
        assert len(result.active) == 2

    def test_packages_by_ndc_searches_product_code(self) -> None:
        seen: list[httpx.Request] = []
        adapter = _make_fda(httpx.Response(200, json=_FDA_PAYLOAD), seen)
        asyncio.run(adapter.packages_by_ndc("0009-0054-30"))
        assert seen[0].url.params["search"] == 'product_ndc:"0009-0054"'

    def test_unhyphenated_ndc_searches_every_package_layout(self) -> None:
        seen: list[httpx.Request] = []
        adapter = _make_fda(httpx.Response(200, json=_FDA_PAYLOAD), seen)
        asyncio.run(adapter.packages_by_ndc(" 0009005430 "))

        assert seen[0].url.params["search"] == (
            'packaging.package_ndc:"000900-543-0"'
            ' OR packaging.package_ndc:"00090-0543-0"'
            ' OR packaging.package_ndc:"00090-054-30"'
            ' OR packaging.package_ndc:"0009-0054-30"'
        )
        assert b"+OR+" in seen[0].url.query

    def test_eleven_digit_ndc_searches_ten_digit_layouts(self) -> None:
        seen: list[httpx.Request] = []
        adapter = _make_fda(httpx.Response(200, json=_FDA_PAYLOAD), seen)
        asyncio.run(adapter.packages_by_ndc("00009005430"))
        assert 'packaging.package_ndc:"0009-0054-30"' in seen[0].url.params["search"]

    def test_not_found_is_empty(self) -> None:
        seen: list[httpx.Request] = []
        adapter = _make_fda(httpx.Response(404, json={"error": {"code": "NOT_FOUND"}}), seen)
        result = asyncio.run(adapter.packages_by_identifier("000"))
        assert result.is_empty

    def test_server_error_raises(self) -> None:
        seen: list[httpx.Request] = []
        adapter = _make_fda(httpx.Response(500), seen)
        with pytest.raises(DirectoryNetworkError, match="openFDA API error"):
            asyncio.run(adapter.packages_by_identifier("197884"))
