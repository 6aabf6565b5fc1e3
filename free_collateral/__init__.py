"""Notional V2 free collateral notification plugin."""
from __future__ import annotations

from .chains.ethereum import EthereumClient
from .config import AppConfig
from .oracles import PythOracle
from .plugin import FreeCollateralPlugin
from .protocols.notional import NotionalAdapter

__all__ = ["FreeCollateralPlugin", "build_plugin"]


def build_plugin(config: AppConfig) -> FreeCollateralPlugin:
    """Wire chain client, price oracle and Notional adapter into a plugin."""
    client = EthereumClient(config.chain)
    oracle = PythOracle(config.price_oracle.pyth)
    adapter = NotionalAdapter(client, oracle, config.notional)
    return FreeCollateralPlugin(adapter)
