import httpx

from rxquant.directory.base import BaseDrugNormalizer
from rxquant.directory.http_client import JsonHttpClient
from rxquant.directory.models import ResolvedDrug
from rxquant.directory.rxnorm_parser import extract_resolved_drug
from rxquant.logging.logger import Log


class RxNormClientAdapter(BaseDrugNormalizer):
    """Resolves drug names through the RxNav REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = JsonHttpClient(
            service="RxNorm",
            timeout_seconds=timeout_seconds,
            client=client,
        )

    async def resolve(self, drug_name: str) -> ResolvedDrug | None:
        payload = await self._http.get_json(
            f"{self._base_url}/drugs.json",
            params={"name": drug_name.strip()},
        )
        drug = extract_resolved_drug(payload or {})
        if drug is None:
            Log.info(f"RxNorm has no concept for '{drug_name}'")
        else:
            Log.debug(f"RxNorm resolved '{drug_name}' to {drug.rxcui} ({drug.name})")
        return drug

    async def aclose(self) -> None:
        await self._http.aclose()
