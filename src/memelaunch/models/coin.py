"""Meme coin models with presale state machine.

Creation parameters as accepted by the factory, the ledger's state
transitions, and read-only snapshots of a ledger.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from memelaunch.services.liquidity.sqrt_price import validate_price_range


class CoinState(str, Enum):
    """Ledger lifecycle state."""

    PRESALE = "presale"  # Mint open, transfers blocked
    TRADING = "trading"  # Mint closed, transfers open


# Valid state transitions
COIN_TRANSITIONS: dict[CoinState, list[CoinState]] = {
    CoinState.PRESALE: [CoinState.TRADING],
    CoinState.TRADING: [],  # Terminal state
}


class CoinTransitionError(Exception):
    """Invalid coin state transition."""

    pass


class CreationParams(BaseModel):
    """
    Parameters for a new meme coin.

    reserved <= total_supply is deliberately not checked here; the
    factory reports it as ReservedTooMuch.
    """

    model_config = ConfigDict(frozen=True)

    creator: str = Field(min_length=1)
    total_supply: int = Field(gt=0)
    reserved: int = Field(ge=0)
    max_per_wallet: int = Field(gt=0)
    price: int = Field(ge=0, description="Wei per unit")
    pre_sale_deadline: int = Field(ge=0, description="Unix seconds")
    sqrt_price_lower: int = Field(gt=0, description="Q64.96 lower bound")
    sqrt_price_upper: int = Field(gt=0, description="Q64.96 upper bound")
    name: str = Field(min_length=1)
    symbol: str = Field(min_length=1)

    @model_validator(mode="after")
    def check_price_range(self) -> CreationParams:
        """Reject sqrt bounds the venue could never seed."""
        validate_price_range(self.sqrt_price_lower, self.sqrt_price_upper)
        return self

    @computed_field
    @property
    def sale_supply(self) -> int:
        """Units offered in the public mint."""
        return max(self.total_supply - self.reserved, 0)


class CoinInfo(BaseModel):
    """Snapshot of a ledger for API responses."""

    address: str
    creator: str
    name: str
    symbol: str
    total_supply: int
    reserved: int
    max_per_wallet: int
    price: int
    pre_sale_deadline: int
    sqrt_price_lower: int
    sqrt_price_upper: int
    manager_address: str
    minted_so_far: int
    state: CoinState

    @computed_field
    @property
    def sale_supply(self) -> int:
        """Units offered in the public mint."""
        return self.total_supply - self.reserved

    @computed_field
    @property
    def remaining_supply(self) -> int:
        """Units still mintable."""
        return self.sale_supply - self.minted_so_far

    @computed_field
    @property
    def trading_enabled(self) -> bool:
        """Check if transfers are open."""
        return self.state == CoinState.TRADING
