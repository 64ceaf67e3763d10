"""Async client for Relay's public bridge API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from ..core.errors import HttpError


class RelayProvider:
    """Thin wrapper around https://api.relay.link endpoints.

    ``is_testnet`` picks between the testnet and mainnet hosts; an explicit
    ``base_url`` wins over both.
    """

    def __init__(
        self,
        *,
        is_testnet: bool = False,
        base_url: Optional[str] = None,
        timeout_s: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        configured = base_url or settings.relay_base_url(is_testnet)
        self.base_url = configured.rstrip("/")
        self.is_testnet = is_testnet
        self.timeout_s = timeout_s if timeout_s is not None else settings.request_timeout_seconds
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "accept": "application/json, text/plain, */*",
            "content-type": "application/json",
            "user-agent": f"{settings.relay_source}/1.0",
            "origin": "https://relay.link",
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_s,
            transport=self._transport,
        ) as client:
            response = await client.request(method, path, json=json, params=params, headers=self._headers())
        if response.is_error:
            raise HttpError(response.status_code, str(response.request.url), response.text)
        return response

    async def get_chains(self) -> List[Dict[str, Any]]:
        """Return the raw chain list from ``/chains``."""

        resp = await self._request("GET", "/chains")
        data = resp.json()
        return list(data.get("chains") or [])

    async def quote(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Request a bridge quote from Relay.

        `payload` should follow the schema documented at
        https://docs.relay.link/ (e.g. originChainId, destinationChainId, amount, etc.).
        """

        resp = await self._request("POST", "/quote", json=payload)
        return resp.json()

    async def get_status(self, request_id: str) -> Dict[str, Any]:
        """Fetch the settlement status for a bridge request."""

        resp = await self._request("GET", "/intents/status/v2", params={"requestId": request_id})
        return resp.json()

