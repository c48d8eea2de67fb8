"""Meme coin factory: creation, uniqueness and supply allocation."""

import structlog

from memelaunch.core.chain import Chain
from memelaunch.core.clock import Clock
from memelaunch.core.exceptions import (
    ContractAlreadyExist,
    InvaildParam,
    NotFound,
    ReservedTooMuch,
)
from memelaunch.core.manager import MemeCoinManager
from memelaunch.core.meme_coin import MemeCoin
from memelaunch.models.coin import CreationParams

log = structlog.get_logger(__name__)


class MemeCoinFactory:
    """
    Creates at most one meme coin per (creator, name).

    The registry is insertion-only. Creation runs entirely inside the
    chain lock so the uniqueness check and the insert cannot interleave
    with another creation.
    """

    def __init__(
        self,
        address: str,
        chain: Chain,
        manager: MemeCoinManager,
        clock: Clock,
        creation_fee: int = 0,
    ) -> None:
        """Initialize with the arena and the manager that takes custody."""
        if creation_fee < 0:
            raise ValueError("Creation fee must not be negative")
        self.address = address
        self.creation_fee = creation_fee
        self._chain = chain
        self._manager = manager
        self._clock = clock
        self._registry: dict[tuple[str, str], str] = {}

    def create_meme_coin(
        self,
        params: CreationParams,
        value: int = 0,
        caller: str | None = None,
    ) -> str:
        """
        Deploy a meme coin and hand its sale pool to the manager.

        The attached value, minus the creation fee, is forwarded in full
        as the ledger's bootstrap funds.

        Args:
            params: Validated creation parameters
            value: Wei attached to the call
            caller: Identity submitting the call, for the audit log

        Returns:
            Address of the new ledger

        Raises:
            ReservedTooMuch: If reserved exceeds total supply
            ContractAlreadyExist: If (creator, name) is already registered
            InvaildParam: If value is negative or below the creation fee,
                or the creator is the manager
        """
        key = (params.creator, params.name)

        with self._chain.atomic():
            if params.reserved > params.total_supply:
                log.warning(
                    "create_rejected",
                    creator=params.creator,
                    name=params.name,
                    reason="ReservedTooMuch",
                )
                raise ReservedTooMuch(params.reserved, params.total_supply)

            if key in self._registry:
                log.warning(
                    "create_rejected",
                    creator=params.creator,
                    name=params.name,
                    reason="ContractAlreadyExist",
                )
                raise ContractAlreadyExist(
                    f"{params.name} already created by {params.creator} "
                    f"at {self._registry[key]}"
                )

            if value < 0:
                raise InvaildParam(f"Attached value must not be negative, got {value}")
            if value < self.creation_fee:
                raise InvaildParam(
                    f"Attached value {value} below creation fee {self.creation_fee}"
                )
            if params.creator == self._manager.address:
                raise InvaildParam("Manager cannot be a creator")

            address = self._chain.next_address(self.address)
            if self._chain.has_coin(address):
                raise InvaildParam(f"Address {address} already deployed")
            coin = MemeCoin(
                address=address,
                params=params,
                manager=self._manager,
                chain=self._chain,
                clock=self._clock,
            )
            bootstrap = value - self.creation_fee

            # Registration and deposits cannot fail once the record exists
            self._manager.record_creation(
                ledger_address=address,
                pool_amount=coin.sale_supply,
                bootstrap_funds=bootstrap,
                sqrt_price_lower=params.sqrt_price_lower,
                sqrt_price_upper=params.sqrt_price_upper,
            )
            self._chain.register(coin)
            self._chain.deposit(self.address, self.creation_fee)
            self._chain.deposit(address, bootstrap)
            self._registry[key] = address

        log.info(
            "meme_coin_created",
            address=address,
            creator=params.creator,
            caller=caller,
            name=params.name,
            symbol=params.symbol,
            total_supply=params.total_supply,
            reserved=params.reserved,
            bootstrap=bootstrap,
        )

        return address

    def resolve(self, creator: str, name: str) -> str:
        """
        Look up the ledger created by creator under name.

        Raises:
            NotFound: If no such coin exists
        """
        address = self._registry.get((creator, name))
        if address is None:
            raise NotFound(f"No meme coin {name!r} by {creator}")
        return address

    def coins_by_creator(self, creator: str) -> list[str]:
        """Addresses of every coin a creator launched, oldest first."""
        return [
            address
            for (coin_creator, _name), address in self._registry.items()
            if coin_creator == creator
        ]

    def all_coins(self) -> list[str]:
        """Addresses of every coin, oldest first."""
        return list(self._registry.values())
