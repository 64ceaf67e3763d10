from .relay import RelayProvider
from .rpc import JsonRpcProvider, ProviderResolver, candidate_rpcs

__all__ = ["RelayProvider", "JsonRpcProvider", "ProviderResolver", "candidate_rpcs"]
