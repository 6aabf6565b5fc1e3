"""Free Collateral notification plugin.

Get notified when free collateral on a Notional V2 account drops below a set
threshold, ahead of liquidation. The host platform calls the lifecycle hooks;
valuation is delegated to a ``FreeCollateralSource``.
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar

from .formatting import format_usd
from .interfaces.snapshot_source import FreeCollateralSource
from .models import FormField, FreeCollateralSnapshot

logger = logging.getLogger(__name__)

THRESHOLD_FIELD = "free-collateral"
DEFAULT_THRESHOLD = 1000


class FreeCollateralPlugin:
    """Alert when an account's free collateral goes under its subscription threshold."""

    display_name: ClassVar[str] = "Free Collateral"
    description: ClassVar[str] = (
        "Get notified when free collateral in your account goes under set threshold."
    )

    def __init__(self, source: FreeCollateralSource) -> None:
        self._source = source

    async def on_init(self, args: dict[str, Any]) -> None:
        """Runs when the plugin is loaded by the host."""

    async def get_free_collateral(self, account_id: str) -> FreeCollateralSnapshot:
        """Fetch a fresh free collateral snapshot for ``account_id``."""
        return await self._source.fetch_snapshot(account_id)

    async def on_subscribe_form(self, args: dict[str, Any]) -> list[dict[str, Any]]:
        """Populate the subscription form, hinting the account's current free collateral."""
        snapshot = await self.get_free_collateral(args["address"])

        field = FormField(
            field_type="input-number",
            field_id=THRESHOLD_FIELD,
            label="Free Collateral",
            default=DEFAULT_THRESHOLD,
            description=(
                "Notify me when account free collateral drops under X USD. "
                f"(Currently: {format_usd(snapshot.free_collateral)})"
            ),
        )
        return [field.as_dict()]

    @staticmethod
    def build_notification(snapshot: FreeCollateralSnapshot) -> dict[str, str]:
        return {
            "notification": (
                "Your account is low in free collateral and is at risk of getting "
                f"liquidated. Free collateral: {format_usd(snapshot.free_collateral)}"
                f" | Collateral: {format_usd(snapshot.collateral)}"
                f" | Debt: {format_usd(snapshot.debt)}"
            )
        }

    async def on_blocks(
        self, args: dict[str, Any]
    ) -> dict[str, str] | list[dict[str, str]]:
        """Runs on new mainnet blocks; returns a notification or an empty list."""
        subscription = args.get("subscription")
        if not subscription:
            return []

        threshold = float(subscription[THRESHOLD_FIELD])
        snapshot = await self.get_free_collateral(args["address"])

        if snapshot.free_collateral < threshold:
            logger.info(
                "Free collateral %.2f USD under threshold %.2f USD for %s",
                snapshot.free_collateral, threshold, args["address"],
            )
            return self.build_notification(snapshot)
        return []
