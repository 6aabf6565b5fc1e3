"""Pyth Network price oracle service."""
import logging
import ssl

import aiohttp
import certifi

from ..config import PythConfig

logger = logging.getLogger(__name__)


def _normalize_feed_id(feed_id: str) -> str:
    return feed_id.lower().removeprefix("0x")


class PythOracle:
    """Fetch USD prices from the Pyth Network Hermes API."""

    def __init__(self, config: PythConfig) -> None:
        self.hermes_url = config.hermes_url
        self.price_feeds = dict(config.feeds)

    async def fetch_prices(self, symbols: list[str] | None = None) -> dict[str, float]:
        """Fetch current prices from Pyth Network.

        Args:
            symbols: Optional list of symbols to fetch. If None, fetches all
                     configured feeds.

        Raises:
            RuntimeError: Hermes answered with a non-200 status.
        """
        prices: dict[str, float] = {}

        feeds = self.price_feeds
        if symbols is not None:
            feeds = {k: v for k, v in self.price_feeds.items() if k in symbols}

        # Reverse mapping from feed ID to asset names
        id_to_assets: dict[str, list[str]] = {}
        for asset, feed_id in feeds.items():
            id_to_assets.setdefault(_normalize_feed_id(feed_id), []).append(asset)

        if not id_to_assets:
            return prices

        query_params = "&".join([f"ids[]={fid}" for fid in sorted(id_to_assets)])
        url = f"{self.hermes_url}?{query_params}"

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.get(url) as response:
                if response.status != 200:
                    raise RuntimeError(
                        f"Error fetching prices from Pyth: HTTP {response.status}"
                    )
                data = await response.json()

        for item in data.get("parsed", []):
            feed_id = _normalize_feed_id(item.get("id", ""))
            price_data = item.get("price", {})
            price_raw = int(price_data.get("price", 0))
            expo = int(price_data.get("expo", 0))

            price = price_raw * (10**expo)

            for asset in id_to_assets.get(feed_id, []):
                prices[asset] = price

        for asset, price in sorted(prices.items()):
            logger.debug("Pyth price %s: $%.4f", asset, price)

        return prices
