"""Protocol interfaces for the free collateral plugin."""
from .chain import ChainClient
from .plugin import NotificationPlugin
from .price_oracle import PriceOracle
from .snapshot_source import FreeCollateralSource

__all__ = ["ChainClient", "FreeCollateralSource", "NotificationPlugin", "PriceOracle"]
