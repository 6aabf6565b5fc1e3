"""Notional V2 adapter — values an account's free collateral in USD."""
from __future__ import annotations

import logging

from ...config import NotionalConfig
from ...interfaces.chain import ChainClient
from ...interfaces.price_oracle import PriceOracle
from ...models import FreeCollateralSnapshot
from . import abi

logger = logging.getLogger(__name__)


class NotionalAdapter:
    """Query Notional V2 on Ethereum mainnet for buffered debt and haircut collateral."""

    def __init__(
        self,
        chain_client: ChainClient,
        oracle: PriceOracle,
        config: NotionalConfig,
    ) -> None:
        self._client = chain_client
        self._oracle = oracle
        self._router = config.router_address
        self._chain_id = config.chain_id
        self._network_checked = False

    async def _call(self, data: str) -> str:
        return await self._client.eth_call(self._router, data)

    async def _get_currency_rates(self, currency_id: int) -> abi.CurrencyRates:
        raw = await self._call(abi.currency_and_rates_call(currency_id))
        return abi.decode_currency_and_rates(currency_id, raw)

    async def _ensure_network(self) -> None:
        """Refuse to read the router from any chain other than the configured one."""
        if self._network_checked:
            return
        chain_id = await self._client.chain_id()
        if chain_id != self._chain_id:
            raise ValueError(
                f"RPC endpoint serves chain {chain_id}, expected {self._chain_id}"
            )
        self._network_checked = True

    async def _get_eth_usd_price(self) -> float:
        prices = await self._oracle.fetch_prices(["ETH"])
        price = prices.get("ETH", 0.0)
        if price <= 0:
            raise ValueError("ETH/USD price unavailable")
        return price

    async def fetch_snapshot(self, account_id: str) -> FreeCollateralSnapshot:
        """Fetch free collateral for ``account_id`` converted to USD."""
        logger.info("Checking Notional free collateral for account: %s", account_id)
        await self._ensure_network()

        context_raw = await self._call(abi.account_context_call(account_id))
        currency_ids = abi.decode_active_currencies(context_raw)

        fc_raw = await self._call(abi.free_collateral_call(account_id))
        net_eth_value, net_local = abi.decode_free_collateral(fc_raw)

        # The router pads netLocal with zeros past the active currencies
        if len(net_local) < len(currency_ids):
            raise ValueError(
                f"Account {account_id} reports {len(net_local)} local balances "
                f"for {len(currency_ids)} active currencies"
            )
        net_local = net_local[: len(currency_ids)]

        collateral_eth = 0
        debt_eth = 0
        for currency_id, net_asset in zip(currency_ids, net_local):
            if net_asset == 0:
                continue
            rates = await self._get_currency_rates(currency_id)
            underlying = abi.convert_to_underlying(rates.asset_rate, net_asset)
            eth_value = abi.convert_to_eth(rates.eth_rate, underlying)
            logger.debug(
                "Currency %d: net asset %d -> underlying %d -> ETH %d",
                currency_id, net_asset, underlying, eth_value,
            )
            if eth_value > 0:
                collateral_eth += eth_value
            else:
                debt_eth -= eth_value

        eth_usd = await self._get_eth_usd_price()
        snapshot = FreeCollateralSnapshot.from_valuations(
            collateral=abi.internal_to_float(collateral_eth) * eth_usd,
            debt=abi.internal_to_float(debt_eth) * eth_usd,
        )

        logger.info(
            "Account %s — Collateral: $%.2f  Debt: $%.2f  Free collateral: $%.2f"
            "  (on-chain net %.6f ETH)",
            account_id,
            snapshot.collateral,
            snapshot.debt,
            snapshot.free_collateral,
            abi.internal_to_float(net_eth_value),
        )
        return snapshot
