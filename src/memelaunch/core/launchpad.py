"""Launchpad: wires the chain, manager, factory and venue together."""

import structlog

from memelaunch.config.settings import Settings, get_settings
from memelaunch.core.chain import Chain
from memelaunch.core.clock import Clock, SystemClock
from memelaunch.core.exceptions import ConfigurationError
from memelaunch.core.factory import MemeCoinFactory
from memelaunch.core.manager import MemeCoinManager
from memelaunch.models.coin import CoinInfo, CreationParams
from memelaunch.models.manager import ManagerRecord
from memelaunch.services.liquidity.venue import LiquidityVenue, SimulatedLiquidityVenue

log = structlog.get_logger(__name__)


class Launchpad:
    """Entry point for every external operation on meme coins."""

    def __init__(
        self,
        settings: Settings,
        venue: LiquidityVenue | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Build the components from settings."""
        if settings.manager_address == settings.factory_address:
            raise ConfigurationError("Manager and factory must have distinct addresses")

        self.settings = settings
        self.clock = clock or SystemClock()
        self.venue = venue or SimulatedLiquidityVenue(
            router_address=settings.venue_router_address,
            position_manager_address=settings.venue_position_manager_address,
            fee_tier=settings.venue_fee_tier,
        )
        self.chain = Chain()
        self.manager = MemeCoinManager(
            address=settings.manager_address,
            chain=self.chain,
            venue=self.venue,
            clock=self.clock,
            operators=(settings.factory_owner,),
        )
        self.factory = MemeCoinFactory(
            address=settings.factory_address,
            chain=self.chain,
            manager=self.manager,
            clock=self.clock,
            creation_fee=settings.creation_fee_wei,
        )

        log.info(
            "launchpad_initialized",
            factory=settings.factory_address,
            manager=settings.manager_address,
            creation_fee=settings.creation_fee_wei,
        )

    def create_meme_coin(self, caller: str, params: CreationParams, value: int = 0) -> str:
        return self.factory.create_meme_coin(params, value=value, caller=caller)

    def resolve(self, creator: str, name: str) -> str:
        return self.factory.resolve(creator, name)

    def coin_info(self, address: str) -> CoinInfo:
        return self.chain.get_coin(address).info()

    def mint(self, caller: str, address: str, amount: int, payment: int) -> None:
        self.chain.get_coin(address).mint(caller, amount, payment)

    def transfer(self, caller: str, address: str, to: str, amount: int) -> None:
        self.chain.get_coin(address).transfer(caller, to, amount)

    def approve(self, caller: str, address: str, spender: str, amount: int) -> None:
        self.chain.get_coin(address).approve(caller, spender, amount)

    def transfer_from(
        self, caller: str, address: str, owner: str, to: str, amount: int
    ) -> None:
        self.chain.get_coin(address).transfer_from(caller, owner, to, amount)

    def balance_of(self, address: str, holder: str) -> int:
        return self.chain.get_coin(address).balance_of(holder)

    def finalize(self, caller: str, address: str) -> ManagerRecord:
        return self.manager.finalize(address, caller)

    def manager_record(self, address: str) -> ManagerRecord:
        return self.manager.get_record(address)

    def native_balance(self, address: str) -> int:
        return self.chain.native_balance(address)


# Singleton instance
_launchpad: Launchpad | None = None


def get_launchpad() -> Launchpad:
    """Get or create the launchpad singleton."""
    global _launchpad

    if _launchpad is None:
        _launchpad = Launchpad(get_settings())

    return _launchpad


def reset_launchpad() -> None:
    """Reset the singleton for testing."""
    global _launchpad
    _launchpad = None
