"""
Execution module for on-chain transactions.

Builds transactions from Relay step items and signs them with a local key.
"""

from .tx_builder import TransactionBuilder
from .wallet import Wallet, mask_key

__all__ = ["TransactionBuilder", "Wallet", "mask_key"]
