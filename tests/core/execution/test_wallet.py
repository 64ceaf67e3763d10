from unittest.mock import AsyncMock

import pytest
from eth_utils import to_checksum_address

from eth_bridge.core.execution.wallet import Wallet, mask_key


# Well-known local development key (anvil/hardhat account #0)
DEV_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
TARGET = to_checksum_address("0xa5f565650890fba1824ee0f21ebbbf660a179934")


def test_address_derived_from_key():
    wallet = Wallet(DEV_KEY, AsyncMock())

    assert wallet.address == DEV_ADDRESS
    assert wallet.key_preview == "0xac09..."


def test_mask_key_only_shows_prefix():
    assert mask_key(DEV_KEY) == "0xac09..."


def test_invalid_key_is_rejected():
    with pytest.raises(ValueError):
        Wallet("0x1234", AsyncMock())


def test_sign_eip1559_transaction():
    wallet = Wallet(DEV_KEY, AsyncMock())

    raw = wallet.sign_transaction(
        {
            "chainId": 11155111,
            "to": TARGET,
            "value": 10**15,
            "data": "0x",
            "nonce": 0,
            "gas": 21000,
            "maxFeePerGas": 2_000_000_000,
            "maxPriorityFeePerGas": 1_000_000,
        }
    )

    assert raw.startswith("0x02")


@pytest.mark.asyncio
async def test_send_transaction_broadcasts_signed_payload():
    provider = AsyncMock()
    provider.send_raw_transaction.return_value = "0xhash"
    wallet = Wallet(DEV_KEY, provider)

    tx_hash = await wallet.send_transaction(
        {
            "chainId": 1,
            "to": TARGET,
            "value": 1,
            "data": "0x",
            "nonce": 3,
            "gas": 21000,
            "gasPrice": 1_000_000_000,
        }
    )

    assert tx_hash == "0xhash"
    raw = provider.send_raw_transaction.await_args.args[0]
    assert raw.startswith("0x")


@pytest.mark.asyncio
async def test_get_balance_uses_wallet_address():
    provider = AsyncMock()
    provider.get_balance.return_value = 42
    wallet = Wallet(DEV_KEY, provider)

    assert await wallet.get_balance() == 42
    provider.get_balance.assert_awaited_once_with(DEV_ADDRESS)


@pytest.mark.asyncio
async def test_wait_for_receipt_polls_until_available():
    provider = AsyncMock()
    provider.get_transaction_receipt.side_effect = [None, None, {"status": "0x1"}]
    sleep = AsyncMock()
    wallet = Wallet(DEV_KEY, provider)

    receipt = await wallet.wait_for_receipt("0xhash", timeout_seconds=60, sleep=sleep)

    assert receipt == {"status": "0x1"}
    assert sleep.await_count == 2


@pytest.mark.asyncio
async def test_wait_for_receipt_gives_up_after_timeout():
    provider = AsyncMock()
    provider.get_transaction_receipt.return_value = None
    wallet = Wallet(DEV_KEY, provider)

    receipt = await wallet.wait_for_receipt("0xhash", timeout_seconds=0, sleep=AsyncMock())

    assert receipt is None


@pytest.mark.asyncio
async def test_wait_for_receipt_timeout_follows_injected_sleep():
    provider = AsyncMock()
    provider.get_transaction_receipt.return_value = None
    sleep = AsyncMock()
    wallet = Wallet(DEV_KEY, provider)

    receipt = await wallet.wait_for_receipt("0xhash", timeout_seconds=300, poll_interval=2.0, sleep=sleep)

    assert receipt is None
    assert sleep.await_count == 150
    assert provider.get_transaction_receipt.await_count == 151
    sleep.assert_awaited_with(2.0)
