"""BridgeManager runs the quote → execute → track flow for each wallet."""

from __future__ import annotations

from typing import Iterable, Optional

from ...logging_config import BridgeLog
from ...providers.relay import RelayProvider
from ...providers.rpc import ProviderResolver, candidate_rpcs
from ...services.amounts import format_ether, parse_ether
from ..errors import ExecutionFailed, InsufficientBalance, classify_error
from ..execution.wallet import Wallet, mask_key
from .client import BridgeClient, RelayBridgeClient
from .constants import STATUS_SUCCESS
from .models import BatchSummary, BridgeConfig, BridgeRequest, StatusResult
from .poller import StatusPoller
from .progress import ProgressTracker


class BridgeManager:
    """Bridges ``config.amount`` ETH for a batch of wallets, one at a time.

    A failure for one wallet is logged and the batch moves on to the next;
    nothing is rolled back since every wallet's transfer is independent.
    """

    def __init__(
        self,
        log: BridgeLog,
        config: BridgeConfig,
        *,
        relay: Optional[RelayProvider] = None,
        resolver: Optional[ProviderResolver] = None,
        client: Optional[BridgeClient] = None,
        poller: Optional[StatusPoller] = None,
    ) -> None:
        self._log = log
        self.config = config
        relay = relay or RelayProvider(is_testnet=config.is_testnet)
        self._resolver = resolver or ProviderResolver(log)
        self._client: BridgeClient = client or RelayBridgeClient(relay)
        self._poller = poller or StatusPoller(log, relay=relay)

    async def process_wallet(self, private_key: str) -> StatusResult:
        """Bridge for one wallet and return the settled status."""
        config = self.config
        source, destination = config.source_chain, config.destination_chain
        self._log.info(f"Processing wallet: {mask_key(private_key)}")

        provider = await self._resolver.resolve(source.id, candidate_rpcs(source.id, source.raw))
        try:
            wallet = Wallet(private_key, provider)
            request = BridgeRequest(
                source_chain_id=source.id,
                destination_chain_id=destination.id,
                amount_wei=parse_ether(config.amount),
                wallet=wallet,
            )

            balance = await wallet.get_balance()
            if balance < request.amount_wei:
                raise InsufficientBalance(config.amount, format_ether(balance))
            self._log.info(f"Current wallet balance: {format_ether(balance)} ETH")

            quote = await self._client.get_quote(
                request.source_chain_id,
                request.destination_chain_id,
                request.amount_wei,
                request.wallet,
            )

            tracker = ProgressTracker(self._log, source.display_name, destination.display_name)
            await self._client.execute(quote, wallet, tracker)
            if not tracker.request_id:
                raise ExecutionFailed("No requestId received from bridge execution")

            final_status = await self._poller.poll(tracker.request_id)
        finally:
            await provider.close()

        self._report(final_status)
        return final_status

    def _report(self, final_status: StatusResult) -> None:
        if final_status.status == STATUS_SUCCESS:
            source_tx = final_status.in_tx_hashes[0] if final_status.in_tx_hashes else "unknown"
            dest_tx = final_status.tx_hashes[0] if final_status.tx_hashes else "unknown"
            self._log.success(
                "Bridge completed successfully!\n"
                f"Source Transaction: {source_tx}\n"
                f"Destination Transaction: {dest_tx}\n"
                f"Explorer: {self.config.explorer_tx_url}{source_tx}"
            )
        else:
            self._log.error(
                f"Bridge {final_status.status}\n"
                f"Details: {final_status.details or 'No details available'}"
            )

    async def run(self, private_keys: Iterable[str]) -> BatchSummary:
        """Process every wallet in order; never raises for a single wallet's failure."""
        summary = BatchSummary()
        for private_key in private_keys:
            try:
                final_status = await self.process_wallet(private_key)
            except Exception as exc:
                self._log.error(f"Error processing wallet {mask_key(private_key)}: {exc}")
                summary.record_failure(classify_error(exc).value)
                continue

            if final_status.status == STATUS_SUCCESS:
                summary.succeeded += 1
            else:
                summary.record_failure(final_status.status.lower())
        return summary
