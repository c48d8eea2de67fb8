"""Q64.96 sqrt-price helpers for concentrated-liquidity ranges."""

import math
from decimal import ROUND_FLOOR, Decimal, localcontext

Q96 = 2**96

# sqrt(1.0001^-887272) * 2^96 and sqrt(1.0001^887272) * 2^96
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342

_PRECISION = 80


def encode_price_sqrt(reserve1: int | str | Decimal, reserve0: int | str | Decimal) -> int:
    """Encode reserve1/reserve0 as a Q64.96 sqrt price, rounded down.

    Raises:
        ValueError: If either reserve is not positive.
    """
    r1 = Decimal(str(reserve1))
    r0 = Decimal(str(reserve0))
    if r1 <= 0 or r0 <= 0:
        raise ValueError("Reserves must be positive")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        scaled = (r1 / r0).sqrt() * Q96
        return int(scaled.to_integral_value(rounding=ROUND_FLOOR))


def decode_price_sqrt(sqrt_price_x96: int) -> Decimal:
    """Price (token1 per token0) for a Q64.96 sqrt price."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        root = Decimal(sqrt_price_x96) / Q96
        return root * root


def is_valid_sqrt_price(sqrt_price_x96: int) -> bool:
    """Check a sqrt price lies inside the venue's tick range."""
    return MIN_SQRT_RATIO <= sqrt_price_x96 <= MAX_SQRT_RATIO


def validate_price_range(sqrt_price_lower: int, sqrt_price_upper: int) -> None:
    """
    Validate a sqrt-price range for pool seeding.

    Raises:
        ValueError: If a bound is outside the tick range or the range is empty
    """
    for label, value in (("lower", sqrt_price_lower), ("upper", sqrt_price_upper)):
        if not is_valid_sqrt_price(value):
            raise ValueError(
                f"sqrt price {label} bound {value} outside "
                f"[{MIN_SQRT_RATIO}, {MAX_SQRT_RATIO}]"
            )
    if sqrt_price_lower >= sqrt_price_upper:
        raise ValueError("sqrt price lower bound must be below the upper bound")


def geometric_mid(sqrt_price_lower: int, sqrt_price_upper: int) -> int:
    """Sqrt price halfway between the bounds in log space."""
    return math.isqrt(sqrt_price_lower * sqrt_price_upper)
