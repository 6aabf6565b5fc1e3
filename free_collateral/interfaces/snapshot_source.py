"""Free collateral source — the external valuation capability."""
from typing import Protocol

from ..models import FreeCollateralSnapshot


class FreeCollateralSource(Protocol):
    """Computes an account's free collateral in USD."""

    async def fetch_snapshot(self, account_id: str) -> FreeCollateralSnapshot: ...
