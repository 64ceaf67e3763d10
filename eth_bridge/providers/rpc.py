"""
JSON-RPC access to EVM chains.

``JsonRpcProvider`` speaks the handful of ``eth_*`` methods the bridge flow
needs over httpx; ``ProviderResolver`` picks the first candidate endpoint
that answers a network identity probe.
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx

from ..config import settings
from ..core.bridge.constants import CHAIN_RPCS
from ..core.errors import NoProviderAvailable, RpcError
from ..logging_config import BridgeLog


def _to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    raise ValueError(f"Cannot interpret {value!r} as an integer")


class JsonRpcProvider:
    """Minimal async JSON-RPC client bound to one endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self._client = httpx.AsyncClient(
            timeout=timeout_s if timeout_s is not None else settings.rpc_timeout_seconds,
            transport=transport,
        )
        self._ids = itertools.count(1)

    async def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make an RPC call and return its ``result``."""
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids),
        }

        response = await self._client.post(self.url, json=payload)
        response.raise_for_status()
        result = response.json()

        if "error" in result:
            raise RpcError(method, result["error"])

        return result.get("result")

    async def get_chain_id(self) -> int:
        return _to_int(await self.call("eth_chainId"))

    async def get_balance(self, address: str) -> int:
        return _to_int(await self.call("eth_getBalance", [address, "latest"]))

    async def get_transaction_count(self, address: str) -> int:
        return _to_int(await self.call("eth_getTransactionCount", [address, "pending"]))

    async def get_gas_price(self) -> int:
        return _to_int(await self.call("eth_gasPrice"))

    async def get_max_priority_fee(self) -> int:
        return _to_int(await self.call("eth_maxPriorityFeePerGas"))

    async def estimate_gas(self, tx: Dict[str, Any]) -> int:
        return _to_int(await self.call("eth_estimateGas", [tx]))

    async def send_raw_transaction(self, raw_tx: str) -> str:
        return await self.call("eth_sendRawTransaction", [raw_tx])

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        return await self.call("eth_getTransactionReceipt", [tx_hash])

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "JsonRpcProvider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"JsonRpcProvider({self.url!r})"


def candidate_rpcs(chain_id: int, chain: Optional[Dict[str, Any]] = None) -> List[str]:
    """Ordered, de-duplicated RPC candidates for a chain.

    Settings overrides come first, then the built-in list, then the
    ``httpRpcUrl`` advertised by Relay's chain metadata.
    """
    sources: List[Iterable[str]] = [
        settings.extra_rpcs.get(chain_id, []),
        CHAIN_RPCS.get(chain_id, []),
    ]
    if chain and chain.get("httpRpcUrl"):
        sources.append([chain["httpRpcUrl"]])

    urls: List[str] = []
    for url in itertools.chain.from_iterable(sources):
        if url and url not in urls:
            urls.append(url)
    return urls


class ProviderResolver:
    """Returns the first RPC endpoint that responds for a chain."""

    def __init__(
        self,
        log: BridgeLog,
        *,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._log = log
        self._timeout_s = timeout_s
        self._transport = transport

    async def resolve(self, chain_id: int, candidate_urls: Sequence[str]) -> JsonRpcProvider:
        if not candidate_urls:
            raise NoProviderAvailable(chain_id, f"No RPC configured for chain {chain_id}")

        for rpc_url in candidate_urls:
            self._log.debug(f"Attempting connection to RPC: {rpc_url}")
            provider = JsonRpcProvider(rpc_url, timeout_s=self._timeout_s, transport=self._transport)
            try:
                await provider.get_chain_id()
                return provider
            except Exception as exc:
                self._log.debug(f"RPC {rpc_url} failed: {exc}")
                await provider.close()

        raise NoProviderAvailable(chain_id)
