"""Native value units.

Payments and custody balances are integer wei. Ether amounts from users
and tests go through Decimal so "0.2" never becomes a binary float.
"""

from decimal import Decimal, InvalidOperation, localcontext

WEI_PER_ETHER = 10**18


def parse_ether(value: str | int | Decimal) -> int:
    """Convert an ether amount to wei.

    Raises:
        ValueError: If the amount is not a number or has sub-wei precision.
    """
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid ether amount: {value!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Invalid ether amount: {value!r}")

    with localcontext() as ctx:
        ctx.prec = 80
        wei = amount * WEI_PER_ETHER
    if wei != wei.to_integral_value():
        raise ValueError(f"Ether amount {value} is below 1 wei precision")
    return int(wei)


def format_ether(wei: int) -> str:
    """Render wei as a plain ether string without trailing zeros."""
    with localcontext() as ctx:
        ctx.prec = 80
        amount = Decimal(wei) / WEI_PER_ETHER
        return format(amount.normalize(), "f")
