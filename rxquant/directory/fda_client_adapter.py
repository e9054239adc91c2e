from datetime import date

import httpx

from rxquant.directory.base import BasePackageDirectory
from rxquant.directory.fda_parser import build_package_records
from rxquant.directory.http_client import JsonHttpClient
from rxquant.directory.models import PackageLookupResult
from rxquant.logging.logger import Log
from rxquant.matching.ndc import NdcLayout, format_in_layout, parse_ndc


class FdaClientAdapter(BasePackageDirectory):
    """Looks up NDC packages through the openFDA drug/ndc endpoint.

    openFDA answers HTTP 404 when a search has no matches; that is reported
    as an empty lookup, not an error.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int,
        result_limit: int = 100,
        include_inactive: bool = True,
        client: httpx.AsyncClient | None = None,
        as_of: date | None = None,
    ) -> None:
        self._base_url = base_url
        self._result_limit = result_limit
        self._include_inactive = include_inactive
        self._as_of = as_of
        self._http = JsonHttpClient(
            service="openFDA",
            timeout_seconds=timeout_seconds,
            client=client,
        )

    async def packages_by_identifier(self, rxcui: str) -> PackageLookupResult:
        return await self._search(f'openfda.rxcui:"{rxcui}"')

    async def packages_by_ndc(self, ndc: str) -> PackageLookupResult:
        return await self._search(self._ndc_query(ndc))

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _search(self, query: str) -> PackageLookupResult:
        payload = await self._http.get_json(
            self._base_url,
            params={"search": query, "limit": self._result_limit},
            not_found_is_empty=True,
        )
        if payload is None:
            return PackageLookupResult()
        records = build_package_records(payload, as_of=self._as_of)
        result = PackageLookupResult.from_records(
            records,
            include_inactive=self._include_inactive,
        )
        Log.debug(
            f"openFDA returned {len(result.active)} active and "
            f"{len(result.inactive)} inactive packages for {query}"
        )
        return result

    @staticmethod
    def _ndc_query(ndc: str) -> str:
        # openFDA only indexes hyphenated codes; bare digits are tried in every layout.
        cleaned = ndc.strip()
        code = parse_ndc(cleaned)
        if code is None:
            return f'product_ndc:"{cleaned}"'
        if code.layout is not None:
            return f'product_ndc:"{cleaned.rsplit("-", 1)[0]}"'
        candidates = dict.fromkeys(format_in_layout(code, layout) for layout in NdcLayout)
        return " OR ".join(f'packaging.package_ndc:"{candidate}"' for candidate in candidates)
