"""Liquidity venue collaborators.

The manager only talks to a venue through ``LiquidityVenue.create_pool``.
``SimulatedLiquidityVenue`` stands in for the on-chain concentrated
liquidity protocol when running locally and in tests.
"""

import hashlib
from typing import Protocol

import structlog

from memelaunch.core.exceptions import LiquidityVenueError
from memelaunch.models.manager import LiquidityPosition, LiquiditySeed
from memelaunch.services.liquidity.sqrt_price import geometric_mid, validate_price_range

log = structlog.get_logger(__name__)


class LiquidityVenue(Protocol):
    """Creates a bounded-range pool from a liquidity seed."""

    def create_pool(self, seed: LiquiditySeed) -> LiquidityPosition: ...


class SimulatedLiquidityVenue:
    """
    In-process venue that records the pools it would have created.

    Pools start at the geometric midpoint of the seeded sqrt range.
    """

    service_name = "simulated"

    def __init__(
        self,
        router_address: str,
        position_manager_address: str,
        fee_tier: int = 3000,
    ) -> None:
        """Initialize with the venue's contract addresses."""
        self.router_address = router_address
        self.position_manager_address = position_manager_address
        self.fee_tier = fee_tier
        self._positions: dict[str, LiquidityPosition] = {}

    def pool_address_for(self, token_address: str) -> str:
        """Deterministic pool address for a token at this fee tier."""
        digest = hashlib.sha3_256(
            f"{self.position_manager_address}:{token_address}:{self.fee_tier}".encode()
        ).hexdigest()
        return "0x" + digest[-40:]

    def create_pool(self, seed: LiquiditySeed) -> LiquidityPosition:
        """
        Create a pool for the seed.

        Raises:
            LiquidityVenueError: If the range is invalid or the pool exists
        """
        try:
            validate_price_range(seed.sqrt_price_lower, seed.sqrt_price_upper)
        except ValueError as e:
            raise LiquidityVenueError(service=self.service_name, message=str(e)) from e

        pool_address = self.pool_address_for(seed.token_address)
        if pool_address in self._positions:
            raise LiquidityVenueError(
                service=self.service_name,
                message=f"Pool already exists for {seed.token_address}",
            )

        if seed.token_amount == 0 and seed.funds == 0:
            log.warning("liquidity_seed_empty", token_address=seed.token_address)

        position = LiquidityPosition(
            pool_address=pool_address,
            token_address=seed.token_address,
            token_amount=seed.token_amount,
            funds=seed.funds,
            sqrt_price_lower=seed.sqrt_price_lower,
            sqrt_price_upper=seed.sqrt_price_upper,
            sqrt_price_initial=geometric_mid(seed.sqrt_price_lower, seed.sqrt_price_upper),
            fee_tier=self.fee_tier,
        )
        self._positions[pool_address] = position

        log.info(
            "liquidity_pool_created",
            pool_address=pool_address,
            token_address=seed.token_address,
            token_amount=seed.token_amount,
            funds=seed.funds,
            fee_tier=self.fee_tier,
        )

        return position

    def get_position(self, pool_address: str) -> LiquidityPosition | None:
        """Get a created pool by address."""
        return self._positions.get(pool_address)

    @property
    def positions(self) -> list[LiquidityPosition]:
        """All pools created so far."""
        return list(self._positions.values())
