"""Pure ABI helpers for Notional V2 router views — no I/O."""
from __future__ import annotations

from dataclasses import dataclass

# First four bytes of keccak256 of each view signature
GET_ACCOUNT_CONTEXT = "0xb0de2217"  # getAccountContext(address)
GET_FREE_COLLATERAL = "0xc3999444"  # getFreeCollateral(address)
GET_CURRENCY_AND_RATES = "0x88a73eb7"  # getCurrencyAndRates(uint16)

INTERNAL_TOKEN_PRECISION = 10**8
ASSET_RATE_DECIMAL_DIFFERENCE = 10**10
PERCENTAGE_DECIMALS = 100

_WORD_HEX = 64
_UNMASK_FLAGS = 0x3FFF


@dataclass(frozen=True)
class ETHRate:
    rate_decimals: int
    rate: int
    buffer: int
    haircut: int


@dataclass(frozen=True)
class AssetRate:
    rate: int
    underlying_decimals: int


@dataclass(frozen=True)
class CurrencyRates:
    currency_id: int
    eth_rate: ETHRate
    asset_rate: AssetRate


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode_address(address: str) -> str:
    """Left-pad a 20-byte hex address to one 32-byte word."""
    value = int(address, 16)
    if value >= 1 << 160:
        raise ValueError(f"Not a 20-byte address: {address}")
    return f"{value:064x}"


def encode_uint16(value: int) -> str:
    if not 0 <= value < 1 << 16:
        raise ValueError(f"uint16 out of range: {value}")
    return f"{value:064x}"


def account_context_call(address: str) -> str:
    return GET_ACCOUNT_CONTEXT + encode_address(address)


def free_collateral_call(address: str) -> str:
    return GET_FREE_COLLATERAL + encode_address(address)


def currency_and_rates_call(currency_id: int) -> str:
    return GET_CURRENCY_AND_RATES + encode_uint16(currency_id)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def split_words(data: str) -> list[str]:
    """Split hex return data into 32-byte words."""
    body = data[2:] if data.startswith("0x") else data
    if len(body) % _WORD_HEX:
        raise ValueError(f"Return data is not word aligned ({len(body)} hex chars)")
    return [body[i : i + _WORD_HEX] for i in range(0, len(body), _WORD_HEX)]


def to_int256(word: str) -> int:
    value = int(word, 16)
    if value >= 1 << 255:
        value -= 1 << 256
    return value


def to_uint(word: str) -> int:
    return int(word, 16)


def _require_words(words: list[str], count: int, what: str) -> None:
    if len(words) < count:
        raise ValueError(f"{what}: expected {count} words, got {len(words)}")


def decode_active_currencies(data: str) -> list[int]:
    """Currency ids in free collateral order: bitmap currency, then active ones.

    ``activeCurrencies`` is a left-aligned bytes18 holding up to nine packed
    uint16 ids whose two top bits are portfolio/balance flags.
    """
    words = split_words(data)
    _require_words(words, 5, "getAccountContext")

    currency_ids: list[int] = []
    bitmap_currency_id = to_uint(words[3])
    if bitmap_currency_id:
        currency_ids.append(bitmap_currency_id)

    packed = words[4][:36]
    for i in range(0, len(packed), 4):
        chunk = int(packed[i : i + 4], 16)
        if chunk == 0:
            break
        currency_ids.append(chunk & _UNMASK_FLAGS)
    return currency_ids


def decode_free_collateral(data: str) -> tuple[int, list[int]]:
    """Decode ``(int256 netETHValue, int256[] netLocal)``."""
    words = split_words(data)
    _require_words(words, 3, "getFreeCollateral")

    net_eth_value = to_int256(words[0])
    start = to_uint(words[1]) // 32
    _require_words(words, start + 1, "getFreeCollateral")
    length = to_uint(words[start])
    _require_words(words, start + 1 + length, "getFreeCollateral")
    net_local = [to_int256(w) for w in words[start + 1 : start + 1 + length]]
    return net_eth_value, net_local


def decode_currency_and_rates(currency_id: int, data: str) -> CurrencyRates:
    """Decode the ETH and asset rates out of ``getCurrencyAndRates``.

    Layout: two Token structs (5 words each), ETHRate (5, liquidation discount
    last), AssetRateParameters (3, rate oracle first).
    """
    words = split_words(data)
    _require_words(words, 18, "getCurrencyAndRates")
    return CurrencyRates(
        currency_id=currency_id,
        eth_rate=ETHRate(
            rate_decimals=to_int256(words[10]),
            rate=to_int256(words[11]),
            buffer=to_int256(words[12]),
            haircut=to_int256(words[13]),
        ),
        asset_rate=AssetRate(
            rate=to_int256(words[16]),
            underlying_decimals=to_int256(words[17]),
        ),
    )


# ---------------------------------------------------------------------------
# Rate conversions (integer math, truncating like the contracts)
# ---------------------------------------------------------------------------


def _div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("division by zero in rate conversion")
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def convert_to_underlying(asset_rate: AssetRate, asset_balance: int) -> int:
    """Asset cash to underlying, both in internal precision."""
    return _div(
        _div(asset_rate.rate * asset_balance, ASSET_RATE_DECIMAL_DIFFERENCE),
        asset_rate.underlying_decimals,
    )


def convert_to_eth(eth_rate: ETHRate, balance: int) -> int:
    """Underlying to ETH; haircut applies to collateral, buffer to debt."""
    multiplier = eth_rate.haircut if balance > 0 else eth_rate.buffer
    return _div(
        _div(balance * eth_rate.rate * multiplier, PERCENTAGE_DECIMALS),
        eth_rate.rate_decimals,
    )


def internal_to_float(value: int) -> float:
    return value / INTERNAL_TOKEN_PRECISION
