"""Manager custody records and liquidity seeding models."""

from datetime import UTC, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ManagerRecord(BaseModel):
    """
    Custody record the manager keeps per ledger.

    pool_balance mirrors the manager's balance on the ledger until the
    presale is finalized; funds is the bootstrap value plus every mint
    payment.
    """

    ledger_address: str
    pool_balance: int = Field(ge=0)
    funds: int = Field(ge=0)
    sqrt_price_lower: int
    sqrt_price_upper: int

    finalized: bool = False
    pool_address: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    finalized_at: Optional[datetime] = None


class LiquiditySeed(BaseModel):
    """What the manager hands the venue when trading opens."""

    model_config = ConfigDict(frozen=True)

    token_address: str
    token_amount: int = Field(ge=0)
    funds: int = Field(ge=0)
    sqrt_price_lower: int
    sqrt_price_upper: int


class LiquidityPosition(BaseModel):
    """Pool created by the venue for a seed."""

    pool_address: str
    token_address: str
    token_amount: int
    funds: int
    sqrt_price_lower: int
    sqrt_price_upper: int
    sqrt_price_initial: int
    fee_tier: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
