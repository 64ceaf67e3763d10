"""
Local signing wallet bound to an RPC provider.

Signing is delegated to ``eth_account``; this class only glues an account
to the provider it submits through.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

from eth_account import Account
from eth_utils import to_hex

from ...providers.rpc import JsonRpcProvider
from ..bridge.constants import KEY_PREVIEW_CHARS


def mask_key(private_key: str) -> str:
    """Prefix of a private key that is safe to show in logs."""
    return f"{private_key[:KEY_PREVIEW_CHARS]}..."


class Wallet:
    """An EOA that signs locally and broadcasts through ``provider``."""

    def __init__(self, private_key: str, provider: JsonRpcProvider) -> None:
        self._account = Account.from_key(private_key)
        self.key_preview = mask_key(private_key)
        self.provider = provider

    @property
    def address(self) -> str:
        return self._account.address

    async def get_balance(self) -> int:
        return await self.provider.get_balance(self.address)

    def sign_transaction(self, tx: Dict[str, Any]) -> str:
        signed = self._account.sign_transaction(tx)
        return to_hex(signed.raw_transaction)

    async def send_transaction(self, tx: Dict[str, Any]) -> str:
        return await self.provider.send_raw_transaction(self.sign_transaction(tx))

    async def wait_for_receipt(
        self,
        tx_hash: str,
        *,
        timeout_seconds: float,
        poll_interval: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> Optional[Dict[str, Any]]:
        """Poll for a receipt; ``None`` once ``timeout_seconds`` worth of polls found nothing.

        Elapsed time is counted in ``poll_interval`` steps so it follows ``sleep``.
        """
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        waited = 0.0
        while True:
            receipt = await self.provider.get_transaction_receipt(tx_hash)
            if receipt:
                return receipt
            if waited >= timeout_seconds:
                return None
            await sleep(poll_interval)
            waited += poll_interval

    def __repr__(self) -> str:
        return f"Wallet({self.address})"
