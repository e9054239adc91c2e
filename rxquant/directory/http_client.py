from typing import Any, ClassVar

import httpx

from rxquant.directory.exceptions import DirectoryNetworkError, DirectoryValidationError
from rxquant.logging.logger import Log


class JsonHttpClient:
    """Thin async GET-JSON client shared by the directory adapters.

    An injected ``httpx.AsyncClient`` is used as-is and left open; a client
    created here is closed by ``aclose``.
    """

    DEFAULT_HEADERS: ClassVar[dict[str, str]] = {
        "Accept": "application/json",
        "User-Agent": "rxquant/0.1",
    }

    def __init__(
        self,
        *,
        service: str,
        timeout_seconds: int,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._service = service
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout_seconds,
            headers=self.DEFAULT_HEADERS,
        )

    async def get_json(
        self,
        url: str,
        params: dict[str, str | int],
        *,
        not_found_is_empty: bool = False,
    ) -> dict[str, Any] | None:
        """GET ``url`` and decode a JSON object.

        Returns None for HTTP 404 when ``not_found_is_empty`` is set.

        Raises:
            DirectoryNetworkError: on transport failures and non-2xx statuses.
            DirectoryValidationError: when the body is not a JSON object.
        """
        Log.debug(f"{self._service} request: GET {url}", params=params)
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            Log.error(f"{self._service} network error: {exc}")
            raise DirectoryNetworkError(f"{self._service} network error: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND and not_found_is_empty:
            Log.debug(f"{self._service} returned no results for {url}")
            return None
        if not response.is_success:
            Log.error(f"{self._service} API error: HTTP {response.status_code}")
            raise DirectoryNetworkError(
                f"{self._service} API error: HTTP {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise DirectoryValidationError(
                f"{self._service} returned invalid JSON: {exc}"
            ) from exc
        if not isinstance(payload, dict):
            raise DirectoryValidationError(f"{self._service} response must be a JSON object")
        return payload

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
