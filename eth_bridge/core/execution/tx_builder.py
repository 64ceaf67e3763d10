"""
Transaction builder for Relay step items.
"""

from typing import Any, Dict, Optional

from eth_utils import to_checksum_address

from ...providers.rpc import JsonRpcProvider
from ..errors import ExecutionFailed


def _to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Relay sends numbers as decimal strings, hex strings or ints."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    text = str(value)
    return int(text, 16) if text.startswith("0x") else int(text)


class TransactionBuilder:
    """
    Builds signable transaction dicts from the ``data`` of a Relay step item.

    Fee fields supplied by Relay are used as-is; missing gas and fee values
    are filled from the source chain's RPC.
    """

    @staticmethod
    async def build_from_item(
        item_data: Dict[str, Any],
        *,
        from_address: str,
        provider: JsonRpcProvider,
    ) -> Dict[str, Any]:
        """
        Build a transaction for one step item.

        Args:
            item_data: The item's ``data`` block (to, value, data, chainId, fees)
            from_address: Sender address
            provider: RPC provider for the item's chain

        Returns:
            Transaction dict ready for ``Account.sign_transaction``

        Raises:
            ExecutionFailed: The item's ``chainId`` is not the provider's chain
        """
        if not item_data.get("to"):
            raise ValueError("Step item has no transaction target")

        # Nonce, gas and broadcast all go through this provider
        provider_chain_id = await provider.get_chain_id()
        chain_id = _to_int(item_data.get("chainId"), provider_chain_id)
        if chain_id != provider_chain_id:
            raise ExecutionFailed(
                f"Step item targets chain {chain_id} but the RPC provider is on chain {provider_chain_id}"
            )

        tx: Dict[str, Any] = {
            "chainId": chain_id,
            "to": to_checksum_address(item_data["to"]),
            "value": _to_int(item_data.get("value"), 0),
            "data": item_data.get("data") or "0x",
            "nonce": await provider.get_transaction_count(from_address),
        }

        gas = _to_int(item_data.get("gas"))
        if gas is None:
            gas = await provider.estimate_gas(
                {
                    "from": from_address,
                    "to": tx["to"],
                    "value": hex(tx["value"]),
                    "data": tx["data"],
                }
            )
        tx["gas"] = gas

        max_fee = _to_int(item_data.get("maxFeePerGas"))
        if max_fee is not None:
            tx["maxFeePerGas"] = max_fee
            tx["maxPriorityFeePerGas"] = _to_int(item_data.get("maxPriorityFeePerGas"), 0)
        else:
            gas_price = _to_int(item_data.get("gasPrice"))
            tx["gasPrice"] = gas_price if gas_price is not None else await provider.get_gas_price()

        return tx
