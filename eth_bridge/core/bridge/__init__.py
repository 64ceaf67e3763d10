"""Bridge orchestration components."""

from typing import TYPE_CHECKING

from .models import BatchSummary, BridgeConfig, BridgeRequest, ChainInfo, StatusResult

if TYPE_CHECKING:  # pragma: no cover
    from .manager import BridgeManager

__all__ = [
    "BatchSummary",
    "BridgeConfig",
    "BridgeManager",
    "BridgeRequest",
    "ChainInfo",
    "StatusResult",
]


def __getattr__(name: str):  # pragma: no cover - simple thunk
    if name == "BridgeManager":
        from .manager import BridgeManager as _BridgeManager

        return _BridgeManager
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
