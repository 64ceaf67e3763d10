"""
Progress extraction for bridge execution callbacks.

A progress payload looks like ``{"steps": [{"items": [item, ...]}, ...]}``.
The request id is searched across every item, while the human-readable line
only ever describes the first item of the first step (the origin deposit).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from ...logging_config import BridgeLog
from ...services.amounts import format_ether
from .constants import HASH_PREVIEW_CHARS, STATUS_PENDING
from .models import ProgressEvent


@dataclass
class ProgressState:
    request_id: Optional[str] = None


@dataclass
class ProgressUpdate:
    request_id: Optional[str] = None
    display_status: Optional[str] = None
    event: Optional[ProgressEvent] = None
    completed: bool = False


def _short(tx_hash: str) -> str:
    return f"{tx_hash[:HASH_PREVIEW_CHARS]}..."


def _iter_items(payload: Any) -> Iterator[Tuple[int, int, Dict[str, Any]]]:
    steps = payload.get("steps") if isinstance(payload, dict) else None
    if not isinstance(steps, list):
        return
    for step_index, step in enumerate(steps):
        items = step.get("items") if isinstance(step, dict) else None
        if not isinstance(items, list):
            continue
        for item_index, item in enumerate(items):
            if isinstance(item, dict):
                yield step_index, item_index, item


def _first_hash(entries: Any) -> Optional[str]:
    if isinstance(entries, list) and entries:
        first = entries[0]
        if isinstance(first, dict):
            tx_hash = first.get("txHash")
            return tx_hash if isinstance(tx_hash, str) and tx_hash else None
    return None


def find_request_id(payload: Any) -> Optional[str]:
    """First ``check.requestId`` found in any step item."""
    for _, _, item in _iter_items(payload):
        check = item.get("check")
        if isinstance(check, dict) and check.get("requestId"):
            return str(check["requestId"])
    return None


def primary_item(payload: Any) -> Optional[Dict[str, Any]]:
    """``steps[0].items[0]`` when present and well-formed."""
    steps = payload.get("steps") if isinstance(payload, dict) else None
    if not isinstance(steps, list) or not steps or not isinstance(steps[0], dict):
        return None
    items = steps[0].get("items")
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None
    return items[0]


def _ether_amount(item: Dict[str, Any]) -> str:
    data = item.get("data")
    value = data.get("value") if isinstance(data, dict) else None
    if value in (None, ""):
        return ""
    try:
        return format_ether(value)
    except (TypeError, ValueError):
        return ""


def extract(payload: Any, state: ProgressState) -> ProgressUpdate:
    """Pull the request id and a display line out of one progress payload.

    ``state.request_id`` is only filled when still empty. Malformed payloads
    produce an update with nothing set.
    """
    if state.request_id is None:
        state.request_id = find_request_id(payload)

    item = primary_item(payload)
    if item is None:
        return ProgressUpdate(request_id=state.request_id)

    progress_state = item.get("progressState")
    status = progress_state.upper() if isinstance(progress_state, str) and progress_state else STATUS_PENDING
    tx_hash = _first_hash(item.get("internalTxHashes"))
    dest_tx_hash = _first_hash(item.get("txHashes"))

    display = f"Depositing {_ether_amount(item)} ETH | Status: {status}"
    if tx_hash:
        display += f" | TX: {_short(tx_hash)}"
    if dest_tx_hash:
        display += f" | Dest: {_short(dest_tx_hash)}"

    check = item.get("check")
    event = ProgressEvent(
        step_index=0,
        item_index=0,
        progress_state=progress_state if isinstance(progress_state, str) else None,
        internal_tx_hash=tx_hash,
        destination_tx_hash=dest_tx_hash,
        request_id=check.get("requestId") if isinstance(check, dict) else None,
    )
    return ProgressUpdate(
        request_id=state.request_id,
        display_status=display,
        event=event,
        completed=item.get("status") == "complete",
    )


class ProgressTracker:
    """``on_progress`` callback for one execution; logs each update."""

    def __init__(self, log: BridgeLog, source_chain: str, destination_chain: str) -> None:
        self._log = log
        self._source_chain = source_chain
        self._destination_chain = destination_chain
        self.state = ProgressState()
        self._completion_logged = False

    @property
    def request_id(self) -> Optional[str]:
        return self.state.request_id

    def __call__(self, payload: Dict[str, Any]) -> None:
        update = extract(payload, self.state)
        if update.display_status is None:
            return

        self._log.info(update.display_status)

        if update.completed and not self._completion_logged:
            item = primary_item(payload) or {}
            tx_hash = update.event.internal_tx_hash if update.event else None
            self._log.success(
                f"Bridge completed | Amount: {_ether_amount(item)} ETH | "
                f"From: {self._source_chain} to {self._destination_chain}"
                + (f" | TX: {_short(tx_hash)}" if tx_hash else "")
            )
            self._completion_logged = True
