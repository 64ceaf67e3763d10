"""Constants and metadata for bridge orchestration."""

from typing import Dict, FrozenSet, List

# Known-good public RPC candidates, tried in listed order before the chain's
# own httpRpcUrl from Relay's /chains endpoint.
CHAIN_RPCS: Dict[int, List[str]] = {
    11155111: [
        'https://eth-sepolia.public.blastapi.io',
        'https://ethereum-sepolia.blockpi.network/v1/rpc/public',
        'https://rpc.ankr.com/eth_sepolia',
    ],
    84532: ['https://sepolia.base.org'],
}

NATIVE_PLACEHOLDER = '0x0000000000000000000000000000000000000000'
TRADE_TYPE = 'EXACT_INPUT'

STATUS_PENDING = 'PENDING'
STATUS_SUCCESS = 'SUCCESS'
STATUS_FAILURE = 'FAILURE'
STATUS_REFUND = 'REFUND'
TERMINAL_STATUSES: FrozenSet[str] = frozenset({STATUS_SUCCESS, STATUS_FAILURE, STATUS_REFUND})

NETWORK_TESTNET = 'testnet'
NETWORK_MAINNET = 'mainnet'

# Characters of a private key shown in logs
KEY_PREVIEW_CHARS = 6
# Characters of a tx hash shown in progress lines
HASH_PREVIEW_CHARS = 10
