"""Liquidity venue integration."""

from memelaunch.services.liquidity.sqrt_price import (
    MAX_SQRT_RATIO,
    MIN_SQRT_RATIO,
    Q96,
    decode_price_sqrt,
    encode_price_sqrt,
    validate_price_range,
)
from memelaunch.services.liquidity.venue import LiquidityVenue, SimulatedLiquidityVenue

__all__ = [
    "MAX_SQRT_RATIO",
    "MIN_SQRT_RATIO",
    "Q96",
    "LiquidityVenue",
    "SimulatedLiquidityVenue",
    "decode_price_sqrt",
    "encode_price_sqrt",
    "validate_price_range",
]
