"""Ethereum chain client."""
from .client import EthereumClient, RpcError

__all__ = ["EthereumClient", "RpcError"]
