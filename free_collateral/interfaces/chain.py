"""Chain client protocol — EVM JSON-RPC abstraction."""
from typing import Protocol


class ChainClient(Protocol):
    """Abstract interface for read-only contract calls."""

    async def eth_call(self, to: str, data: str, block: str = "latest") -> str: ...

    async def chain_id(self) -> int: ...
