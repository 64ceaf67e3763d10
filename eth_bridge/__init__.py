"""Interactive ETH bridging across EVM chains via Relay."""

__version__ = "1.0.0"
