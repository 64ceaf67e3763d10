"""
Quote and execute operations against Relay.

``BridgeClient`` is the seam the orchestrator depends on; ``RelayBridgeClient``
fulfils it by quoting over Relay's REST API and submitting each transaction
step item with the wallet's local signer.
"""

from __future__ import annotations

import asyncio
import copy
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol
from urllib.parse import parse_qs, urlparse

from ...config import settings
from ...providers.relay import RelayProvider
from ..errors import ExecutionFailed, QuoteFailed
from ..execution.tx_builder import TransactionBuilder
from ..execution.wallet import Wallet
from .constants import NATIVE_PLACEHOLDER, TRADE_TYPE

Quote = Dict[str, Any]
ProgressCallback = Callable[[Dict[str, Any]], None]


class BridgeClient(Protocol):
    async def get_quote(
        self,
        source_chain_id: int,
        destination_chain_id: int,
        amount_wei: int,
        wallet: Wallet,
    ) -> Quote:
        ...

    async def execute(self, quote: Quote, wallet: Wallet, on_progress: ProgressCallback) -> None:
        ...


def _request_id_for(step: Dict[str, Any], item: Dict[str, Any]) -> Optional[str]:
    if step.get("requestId"):
        return str(step["requestId"])
    check = item.get("check")
    endpoint = check.get("endpoint") if isinstance(check, dict) else None
    if not endpoint:
        return None
    values = parse_qs(urlparse(endpoint).query).get("requestId")
    return values[0] if values else None


class RelayBridgeClient:
    """Relay-backed ``BridgeClient``."""

    def __init__(
        self,
        relay: RelayProvider,
        *,
        receipt_timeout_seconds: Optional[float] = None,
        receipt_poll_interval: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._relay = relay
        self._receipt_timeout = (
            receipt_timeout_seconds if receipt_timeout_seconds is not None else settings.receipt_timeout_seconds
        )
        self._receipt_poll_interval = receipt_poll_interval
        self._sleep = sleep

    async def get_quote(
        self,
        source_chain_id: int,
        destination_chain_id: int,
        amount_wei: int,
        wallet: Wallet,
    ) -> Quote:
        payload = {
            "user": wallet.address,
            "recipient": wallet.address,
            "originChainId": source_chain_id,
            "destinationChainId": destination_chain_id,
            "originCurrency": NATIVE_PLACEHOLDER,
            "destinationCurrency": NATIVE_PLACEHOLDER,
            "amount": str(amount_wei),
            "tradeType": TRADE_TYPE,
            "referrer": settings.relay_source,
        }
        try:
            quote = await self._relay.quote(payload)
        except Exception as exc:
            raise QuoteFailed(f"Failed to get quote: {exc}") from exc
        if not quote.get("steps"):
            raise QuoteFailed("Quote returned no executable steps")
        return quote

    async def execute(self, quote: Quote, wallet: Wallet, on_progress: ProgressCallback) -> None:
        """Submit every incomplete transaction item in order.

        ``on_progress`` receives the whole (mutated) quote after each item is
        broadcast and again once its receipt confirms.
        """
        progress = copy.deepcopy(quote)
        try:
            for step in progress.get("steps") or []:
                for item in step.get("items") or []:
                    if item.get("status") == "complete":
                        continue
                    if step.get("kind") != "transaction":
                        raise ExecutionFailed(f"Unsupported step kind: {step.get('kind')}")
                    await self._execute_item(step, item, wallet, progress, on_progress)
        except ExecutionFailed:
            raise
        except Exception as exc:
            raise ExecutionFailed(f"Bridge execution failed: {exc}") from exc

    async def _execute_item(
        self,
        step: Dict[str, Any],
        item: Dict[str, Any],
        wallet: Wallet,
        progress: Quote,
        on_progress: ProgressCallback,
    ) -> None:
        request_id = _request_id_for(step, item)
        if request_id:
            check = item.get("check") if isinstance(item.get("check"), dict) else {}
            check.setdefault("requestId", request_id)
            item["check"] = check

        tx = await TransactionBuilder.build_from_item(
            item.get("data") or {},
            from_address=wallet.address,
            provider=wallet.provider,
        )
        tx_hash = await wallet.send_transaction(tx)
        item["internalTxHashes"] = [{"txHash": tx_hash, "chainId": tx["chainId"]}]
        item["progressState"] = "confirming"
        on_progress(progress)

        receipt = await wallet.wait_for_receipt(
            tx_hash,
            timeout_seconds=self._receipt_timeout,
            poll_interval=self._receipt_poll_interval,
            sleep=self._sleep,
        )
        if receipt is None:
            raise ExecutionFailed(f"Timed out waiting for receipt of {tx_hash}")
        if int(str(receipt.get("status", "0x1")), 16) == 0:
            raise ExecutionFailed(f"Transaction {tx_hash} reverted")

        item["progressState"] = "validating"
        item["status"] = "complete"
        on_progress(progress)
