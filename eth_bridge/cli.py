#!/usr/bin/env python3
"""Interactive CLI for bridging ETH from every wallet in the key file"""

import asyncio
import sys
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .config import Settings, settings
from .core.bridge.constants import NETWORK_MAINNET, NETWORK_TESTNET
from .core.bridge.manager import BridgeManager
from .core.bridge.models import BridgeConfig, ChainInfo
from .core.errors import ConfigLoadError
from .logging_config import BridgeLog
from .providers.relay import RelayProvider
from .services.amounts import (
    get_random_amount,
    parse_decimals,
    parse_max_amount,
    parse_positive_amount,
)
from .services.chains import fetch_chains
from .services.keys import load_private_keys

Validator = Callable[[str], Optional[str]]


class Prompter:
    """Numbered-menu and free-text prompts on top of ``input()``."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._output = output_fn

    def choose(self, message: str, choices: Sequence[Tuple[str, Any]]) -> Any:
        if not choices:
            raise ValueError(f"No choices available for: {message}")
        self._output(f"\n? {message}")
        for index, (label, _) in enumerate(choices, 1):
            self._output(f"  {index:2d}. {label}")
        while True:
            answer = self._input("  Enter number: ").strip()
            if answer.isdigit() and 1 <= int(answer) <= len(choices):
                return choices[int(answer) - 1][1]
            self._output(f"  Please enter a number between 1 and {len(choices)}.")

    def ask(self, message: str, validate: Validator, default: Optional[str] = None) -> str:
        suffix = f" ({default})" if default is not None else ""
        while True:
            answer = self._input(f"? {message}{suffix} ").strip()
            if not answer and default is not None:
                answer = default
            error = validate(answer)
            if error is None:
                return answer
            self._output(f"  {error}")


def _chain_choices(chains: List[ChainInfo]) -> List[Tuple[str, ChainInfo]]:
    return [(f"▫️ {chain.display_name}", chain) for chain in chains]


def get_amount(prompter: Prompter, amount_type: str, log: BridgeLog) -> str:
    if amount_type == "fixed":
        return prompter.ask("Enter ETH amount to bridge (e.g., 0.00005):", parse_positive_amount)

    minimum = prompter.ask("Enter minimum ETH amount:", parse_positive_amount)
    maximum = prompter.ask("Enter maximum ETH amount:", lambda value: parse_max_amount(value, minimum))
    decimals = prompter.ask("Enter number of decimals (1-18):", parse_decimals, default="5")

    amount = get_random_amount(minimum, maximum, int(decimals))
    log.info(f"Generated random amount: {amount} ETH")
    return amount


async def get_bridge_configuration(
    prompter: Prompter,
    log: BridgeLog,
    *,
    relay_factory: Callable[[bool], RelayProvider] = lambda is_testnet: RelayProvider(is_testnet=is_testnet),
) -> BridgeConfig:
    network = prompter.choose(
        "Select network:",
        [("Testnet", NETWORK_TESTNET), ("Mainnet", NETWORK_MAINNET)],
    )

    chains = await fetch_chains(relay_factory(network == NETWORK_TESTNET))
    source_chain = prompter.choose("Select source chain:", _chain_choices(chains))
    destination_chain = prompter.choose("Select destination chain:", _chain_choices(chains))
    amount_type = prompter.choose(
        "Select amount type:",
        [("Fixed Amount", "fixed"), ("Random Range", "range")],
    )

    return BridgeConfig(
        network=network,
        source_chain=source_chain,
        destination_chain=destination_chain,
        amount=get_amount(prompter, amount_type, log),
    )


async def main(
    cfg: Settings = settings,
    prompter: Optional[Prompter] = None,
    manager_factory: Callable[[BridgeLog, BridgeConfig], BridgeManager] = BridgeManager,
) -> int:
    """Run one interactive bridge session; returns the process exit code."""
    prompter = prompter or Prompter()

    with BridgeLog(cfg.log_dir, level=cfg.log_level) as log:
        try:
            private_keys = load_private_keys(cfg.keys_file)
        except ConfigLoadError as exc:
            log.error(str(exc))
            return 1
        log.info(f"Loaded {len(private_keys)} private keys")

        try:
            config = await get_bridge_configuration(prompter, log)
            log.info(
                f"Bridging {config.amount} ETH from "
                f"{config.source_chain.display_name} (ChainId: {config.source_chain.id}) to "
                f"{config.destination_chain.display_name} (ChainId: {config.destination_chain.id})"
            )

            summary = await manager_factory(log, config).run(private_keys)
        except Exception as exc:
            log.error(f"Operation failed: {exc}")
            return 1

        log.info(f"Finished {summary.total} wallets: {summary.succeeded} succeeded, {summary.failed} failed")
        if summary.failures:
            log.info(
                "Failures by cause: "
                + ", ".join(f"{cause}={count}" for cause, count in sorted(summary.failures.items()))
            )
    return 0


def run() -> None:
    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        print("\nGoodbye! 👋")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    run()
