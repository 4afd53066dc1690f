from __future__ import annotations

import logging
from typing import Any

import httpx

LOGGER = logging.getLogger("places_service")


class PlacesUpstreamError(RuntimeError):
    pass


class PlacesAutocompleteClient:
    def __init__(
        self,
        *,
        api_key: str,
        endpoint_url: str,
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._endpoint_url = endpoint_url
        self._timeout_s = timeout_s
        self._transport = transport

    async def autocomplete(self, query: str) -> dict[str, Any]:
        text = (query or "").strip()
        if not text:
            raise ValueError("Input query is required")

        try:
            async with httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport) as client:
                response = await client.get(
                    self._endpoint_url,
                    params={"input": text, "key": self._api_key},
                )
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.error("Places API error for input=%r: %s", text, exc)
            raise PlacesUpstreamError("Failed to fetch place suggestions") from exc

        if not isinstance(payload, dict):
            raise PlacesUpstreamError("Failed to fetch place suggestions")
        return payload
