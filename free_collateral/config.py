"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

NOTIONAL_V2_ROUTER = "0x1344A36A1B56144C3Bc62E7757377D288fDE0369"
PYTH_ETH_USD_FEED = "ff61491a931112ddf1bd8147cd1b641375f79f5825126d665480874634fd0ace"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    rpc_endpoints: tuple[str, ...] = ()
    rpc_timeout: int = 30


@dataclass(frozen=True)
class NotionalConfig:
    chain_id: int = 1
    router_address: str = NOTIONAL_V2_ROUTER


@dataclass(frozen=True)
class PythConfig:
    hermes_url: str = "https://hermes.pyth.network/v2/updates/price/latest"
    feeds: dict[str, str] = field(default_factory=lambda: {"ETH": PYTH_ETH_USD_FEED})


@dataclass(frozen=True)
class PriceOracleConfig:
    provider: str = "pyth"
    pyth: PythConfig = field(default_factory=PythConfig)


@dataclass(frozen=True)
class AccountConfig:
    label: str = ""
    address: str = ""
    threshold: float = 1000.0


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    notional: NotionalConfig = field(default_factory=NotionalConfig)
    price_oracle: PriceOracleConfig = field(default_factory=PriceOracleConfig)
    accounts: tuple[AccountConfig, ...] = ()


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    return ChainConfig(
        rpc_endpoints=tuple(e for e in raw.get("rpc_endpoints", []) if e),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
    )


def _build_notional(raw: dict[str, Any]) -> NotionalConfig:
    return NotionalConfig(
        chain_id=int(raw.get("chain_id", 1)),
        router_address=raw.get("router_address", NOTIONAL_V2_ROUTER),
    )


def _build_price_oracle(raw: dict[str, Any]) -> PriceOracleConfig:
    pyth_raw = raw.get("pyth", {})
    feeds = pyth_raw.get("feeds")
    return PriceOracleConfig(
        provider=raw.get("provider", "pyth"),
        pyth=PythConfig(
            hermes_url=pyth_raw.get("hermes_url", PythConfig.hermes_url),
            feeds=dict(feeds) if feeds is not None else {"ETH": PYTH_ETH_USD_FEED},
        ),
    )


def _build_accounts(raw: list[dict[str, Any]]) -> tuple[AccountConfig, ...]:
    accounts: list[AccountConfig] = []
    for a in raw:
        accounts.append(
            AccountConfig(
                label=a.get("label", ""),
                address=a.get("address", ""),
                threshold=float(a.get("threshold", 1000.0)),
            )
        )
    return tuple(accounts)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chain=_build_chain(raw.get("chain", {})),
        notional=_build_notional(raw.get("notional", {})),
        price_oracle=_build_price_oracle(raw.get("price_oracle", {})),
        accounts=_build_accounts(raw.get("accounts", [])),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.chain.rpc_endpoints:
        raise ValueError("At least one RPC endpoint must be configured")

    if cfg.notional.chain_id != 1:
        raise ValueError(
            f"Notional V2 is only deployed on chain 1, got {cfg.notional.chain_id}"
        )
    if not cfg.notional.router_address:
        raise ValueError("Notional router address is not configured")

    if cfg.price_oracle.provider != "pyth":
        raise ValueError(f"Unknown price oracle '{cfg.price_oracle.provider}'")
    if "ETH" not in cfg.price_oracle.pyth.feeds:
        raise ValueError("Price oracle must define an ETH feed")

    for account in cfg.accounts:
        if not account.address:
            raise ValueError(f"Account '{account.label}' has no address")
