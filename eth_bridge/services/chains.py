"""
Chain catalogue service - queries Relay's /chains endpoint.

Supplies the chain choices shown at the source/destination prompts.
"""

from typing import Any, Dict, List

from ..core.bridge.models import ChainInfo
from ..providers.relay import RelayProvider


def _is_bridgeable(chain: Dict[str, Any]) -> bool:
    if chain.get("id") is None or chain.get("disabled", False):
        return False
    # Only EVM chains can be signed for with a private key from the key file
    vm_type = chain.get("vmType")
    return vm_type in (None, "evm")


async def fetch_chains(relay: RelayProvider) -> List[ChainInfo]:
    """Bridgeable chains in the order Relay lists them."""
    try:
        raw_chains = await relay.get_chains()
    except Exception as exc:
        raise RuntimeError(f"Failed to fetch chain data: {exc}") from exc
    return [ChainInfo.from_api(chain) for chain in raw_chains if _is_bridgeable(chain)]

