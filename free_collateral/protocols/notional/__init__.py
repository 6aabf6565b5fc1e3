"""Notional V2 free collateral adapter."""
from .adapter import NotionalAdapter

__all__ = ["NotionalAdapter"]
