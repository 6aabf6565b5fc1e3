"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from free_collateral.config import (
    AppConfig,
    ChainConfig,
    NotionalConfig,
    PriceOracleConfig,
    PythConfig,
)
from free_collateral.models import FreeCollateralSnapshot
from free_collateral.plugin import FreeCollateralPlugin


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_notional_config() -> NotionalConfig:
    return NotionalConfig(chain_id=1, router_address="0xROUTER")


@pytest.fixture()
def sample_pyth_config() -> PythConfig:
    return PythConfig(
        hermes_url="https://hermes.example.com/v2/updates/price/latest",
        feeds={"ETH": "eeee"},
    )


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig,
    sample_notional_config: NotionalConfig,
    sample_pyth_config: PythConfig,
) -> AppConfig:
    return AppConfig(
        chain=sample_chain_config,
        notional=sample_notional_config,
        price_oracle=PriceOracleConfig(provider="pyth", pyth=sample_pyth_config),
    )


# ---------------------------------------------------------------------------
# Model / plugin fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def healthy_snapshot() -> FreeCollateralSnapshot:
    return FreeCollateralSnapshot.from_valuations(collateral=20000.0, debt=10900.0)


@pytest.fixture()
def underwater_snapshot() -> FreeCollateralSnapshot:
    return FreeCollateralSnapshot.from_valuations(collateral=1500.0, debt=2000.0)


@pytest.fixture()
def mock_source(healthy_snapshot: FreeCollateralSnapshot) -> AsyncMock:
    source = AsyncMock()
    source.fetch_snapshot.return_value = healthy_snapshot
    return source


@pytest.fixture()
def plugin(mock_source: AsyncMock) -> FreeCollateralPlugin:
    return FreeCollateralPlugin(mock_source)


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    chain:
      rpc_endpoints: ["https://rpc.example.com"]
      rpc_timeout: 10
    notional:
      chain_id: 1
      router_address: "0x1344A36A1B56144C3Bc62E7757377D288fDE0369"
    price_oracle:
      provider: pyth
      pyth:
        hermes_url: "https://hermes.example.com"
        feeds: {ETH: "eeee"}
    accounts:
      - label: main
        address: "0xACCOUNT"
        threshold: 500
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample on-chain return data
# ---------------------------------------------------------------------------


def word(value: int) -> str:
    """Encode a signed integer as one 32-byte two's complement word."""
    return f"{value & ((1 << 256) - 1):064x}"


def account_context_data(bitmap_currency_id: int, active: list[int]) -> str:
    packed = "".join(f"{c:04x}" for c in active).ljust(64, "0")
    return "0x" + word(0) + word(0) + word(0) + word(bitmap_currency_id) + packed


def free_collateral_data(
    net_eth_value: int, net_local: list[int], length: int | None = None
) -> str:
    """Encode ``getFreeCollateral`` output, zero-padded to ``length`` entries."""
    net_local = net_local + [0] * ((length or 0) - len(net_local))
    return (
        "0x"
        + word(net_eth_value)
        + word(0x40)
        + word(len(net_local))
        + "".join(word(v) for v in net_local)
    )


def currency_and_rates_data(
    eth_rate: int,
    buffer: int,
    haircut: int,
    asset_rate: int = 10**28,
    underlying_decimals: int = 10**18,
    rate_decimals: int = 10**18,
) -> str:
    tokens = "".join(word(0) for _ in range(10))
    eth = word(rate_decimals) + word(eth_rate) + word(buffer) + word(haircut) + word(105)
    asset = word(0xABC) + word(asset_rate) + word(underlying_decimals)
    return "0x" + tokens + eth + asset
