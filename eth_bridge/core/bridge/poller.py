"""
Bridge status poller.

Polls ``/intents/status/v2`` at a fixed interval until the request settles
(SUCCESS, FAILURE or REFUND) or the attempt budget runs out. Transport and
HTTP errors count as attempts and are retried after the same delay.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Awaitable, Callable, Optional

from ...config import settings
from ...logging_config import BridgeLog
from ...providers.relay import RelayProvider
from ..errors import StatusPollTimeout
from .constants import HASH_PREVIEW_CHARS, STATUS_SUCCESS
from .models import StatusResult

SleepFn = Callable[[float], Awaitable[None]]


class PollState(str, Enum):
    """Poller lifecycle."""

    POLLING = "polling"
    SUCCESS = "success"
    FAILURE = "failure"
    REFUND = "refund"
    TIMED_OUT = "timed_out"


class StatusPoller:
    """Tracks one bridge request until it reaches a terminal status."""

    def __init__(
        self,
        log: BridgeLog,
        *,
        is_testnet: bool = False,
        relay: Optional[RelayProvider] = None,
        interval_seconds: Optional[float] = None,
        max_attempts: Optional[int] = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._log = log
        self._relay = relay or RelayProvider(is_testnet=is_testnet)
        self.interval_seconds = (
            interval_seconds if interval_seconds is not None else settings.status_poll_interval_seconds
        )
        self.max_attempts = max_attempts if max_attempts is not None else settings.status_poll_max_attempts
        self._sleep = sleep
        self.state = PollState.POLLING
        self.attempts = 0

    async def poll(self, request_id: str) -> StatusResult:
        """Block until ``request_id`` settles; raises ``StatusPollTimeout`` otherwise."""
        self.state = PollState.POLLING
        self.attempts = 0
        last_status = ""

        while self.attempts < self.max_attempts:
            self.attempts += 1
            try:
                result = StatusResult.from_api(await self._relay.get_status(request_id))
            except Exception as exc:
                self._log.debug(f"Status check error: {exc}")
            else:
                if result.status != last_status:
                    dest_tx = result.tx_hashes[0] if result.tx_hashes else None
                    self._log.info(
                        f"Bridge status: {result.status}"
                        + (f" | Dest TX: {dest_tx[:HASH_PREVIEW_CHARS]}..." if dest_tx else "")
                    )
                    last_status = result.status

                if result.is_terminal:
                    self.state = PollState(result.status.lower())
                    self._report_terminal(result)
                    return result

            if self.attempts < self.max_attempts:
                await self._sleep(self.interval_seconds)

        self.state = PollState.TIMED_OUT
        raise StatusPollTimeout(request_id, self.attempts, self.interval_seconds)

    def _report_terminal(self, result: StatusResult) -> None:
        if result.status == STATUS_SUCCESS:
            dest_tx = result.tx_hashes[0] if result.tx_hashes else "unknown"
            self._log.success(
                f"Bridge transfer successful | Destination TX: {dest_tx[:HASH_PREVIEW_CHARS]}..."
            )
        else:
            self._log.error(
                f"Bridge {result.status.lower()} | "
                f"Details: {result.details or 'No details available'}"
            )
