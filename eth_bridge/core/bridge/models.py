"""Typed models used by the bridge subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .constants import NETWORK_TESTNET, TERMINAL_STATUSES

if TYPE_CHECKING:  # pragma: no cover
    from ..execution.wallet import Wallet


@dataclass(frozen=True)
class ChainInfo:
    """Chain metadata as served by Relay's ``/chains`` endpoint."""

    id: int
    name: str
    display_name: str
    explorer_url: str = ""
    http_rpc_url: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, chain: Dict[str, Any]) -> "ChainInfo":
        name = chain.get("name") or ""
        return cls(
            id=int(chain["id"]),
            name=name,
            display_name=chain.get("displayName") or name or f"Chain {chain['id']}",
            explorer_url=(chain.get("explorerUrl") or "").rstrip("/"),
            http_rpc_url=chain.get("httpRpcUrl"),
            raw=chain,
        )


@dataclass(frozen=True)
class BridgeConfig:
    """What the user picked at the prompts; shared by every wallet in the run."""

    network: str
    source_chain: ChainInfo
    destination_chain: ChainInfo
    amount: str

    @property
    def is_testnet(self) -> bool:
        return self.network == NETWORK_TESTNET

    @property
    def explorer_tx_url(self) -> str:
        return f"{self.source_chain.explorer_url}/tx/"


@dataclass(frozen=True)
class BridgeRequest:
    source_chain_id: int
    destination_chain_id: int
    amount_wei: int
    wallet: "Wallet"


@dataclass
class ProgressEvent:
    """Fields of interest pulled from one step item of a progress payload."""

    step_index: int
    item_index: int
    progress_state: Optional[str] = None
    internal_tx_hash: Optional[str] = None
    destination_tx_hash: Optional[str] = None
    request_id: Optional[str] = None


@dataclass
class StatusResult:
    """Parsed ``/intents/status/v2`` payload."""

    status: str
    tx_hashes: List[str] = field(default_factory=list)
    in_tx_hashes: List[str] = field(default_factory=list)
    details: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "StatusResult":
        return cls(
            status=str(data["status"]).upper(),
            tx_hashes=list(data.get("txHashes") or []),
            in_tx_hashes=list(data.get("inTxHashes") or []),
            details=data.get("details"),
            raw=data,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass
class BatchSummary:
    """Outcome counts for one run over all wallets."""

    succeeded: int = 0
    failed: int = 0
    failures: Dict[str, int] = field(default_factory=dict)

    def record_failure(self, category: str) -> None:
        self.failed += 1
        self.failures[category] = self.failures.get(category, 0) + 1

    @property
    def total(self) -> int:
        return self.succeeded + self.failed
