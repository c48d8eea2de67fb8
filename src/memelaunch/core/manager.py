"""Manager: custodian of unsold supply and presale proceeds."""

from datetime import UTC, datetime

import structlog

from memelaunch.core.chain import Chain
from memelaunch.core.clock import Clock
from memelaunch.core.exceptions import (
    ContractAlreadyExist,
    InsufficientBalance,
    InvaildParam,
    NotFound,
    PreSaleActive,
    Unauthorized,
)
from memelaunch.models.manager import LiquiditySeed, ManagerRecord
from memelaunch.services.liquidity.venue import LiquidityVenue

log = structlog.get_logger(__name__)


class MemeCoinManager:
    """
    Holds every ledger's sale pool and funds until trading opens.

    The manager is the only address allowed to flip a ledger from
    PRESALE to TRADING. Finalizing seeds the liquidity venue with the
    accumulated funds and the unsold pool inside the stored price range.
    """

    def __init__(
        self,
        address: str,
        chain: Chain,
        venue: LiquidityVenue,
        clock: Clock,
        operators: tuple[str, ...] = (),
    ) -> None:
        """Initialize with the arena, venue and time source.

        Args:
            operators: Addresses besides the manager allowed to finalize
        """
        self.address = address
        self.operators = operators
        self._chain = chain
        self._venue = venue
        self._clock = clock
        self._records: dict[str, ManagerRecord] = {}

    def get_record(self, ledger_address: str) -> ManagerRecord:
        """
        Get the custody record for a ledger.

        Raises:
            NotFound: If the ledger was never recorded
        """
        record = self._records.get(ledger_address)
        if record is None:
            raise NotFound(f"Manager has no record for {ledger_address}")
        return record

    def records(self) -> list[ManagerRecord]:
        """All custody records, oldest first."""
        return list(self._records.values())

    def record_creation(
        self,
        ledger_address: str,
        pool_amount: int,
        bootstrap_funds: int,
        sqrt_price_lower: int,
        sqrt_price_upper: int,
    ) -> ManagerRecord:
        """
        Start custody of a new ledger's sale pool. Called once by the factory.

        Raises:
            ContractAlreadyExist: If the ledger is already recorded
            InvaildParam: If an amount is negative
        """
        if pool_amount < 0 or bootstrap_funds < 0:
            raise InvaildParam("Pool amount and bootstrap funds must not be negative")

        with self._chain.atomic():
            if ledger_address in self._records:
                raise ContractAlreadyExist(f"Manager already records {ledger_address}")

            record = ManagerRecord(
                ledger_address=ledger_address,
                pool_balance=pool_amount,
                funds=bootstrap_funds,
                sqrt_price_lower=sqrt_price_lower,
                sqrt_price_upper=sqrt_price_upper,
            )
            self._records[ledger_address] = record

        log.info(
            "manager_record_created",
            ledger=ledger_address,
            pool_balance=pool_amount,
            funds=bootstrap_funds,
        )

        return record

    def on_mint(self, ledger_address: str, amount: int, payment: int) -> None:
        """Account for a mint: the pool shrinks and funds grow."""
        with self._chain.atomic():
            record = self.get_record(ledger_address)
            if amount > record.pool_balance:
                raise InvaildParam(
                    f"Mint of {amount} exceeds pool {record.pool_balance} of {ledger_address}"
                )
            record.pool_balance -= amount
            record.funds += payment

    def can_finalize(self, ledger_address: str) -> bool:
        """Check if the presale is sold out or past its deadline."""
        record = self.get_record(ledger_address)
        if record.finalized:
            return False
        coin = self._chain.get_coin(ledger_address)
        sold_out = record.pool_balance == 0
        expired = self._clock.now() > coin.pre_sale_deadline
        return sold_out or expired

    def can_operate(self, caller: str) -> bool:
        """Check if caller may finalize presales."""
        return caller == self.address or caller in self.operators

    def finalize(self, ledger_address: str, caller: str) -> ManagerRecord:
        """
        Seed the liquidity venue and open trading on a ledger.

        A ledger that is already finalized is returned unchanged.

        Raises:
            Unauthorized: If caller is neither the manager nor an operator
            NotFound: If the ledger is unknown
            PreSaleActive: If the pool is not sold out and the deadline has not passed
            LiquidityVenueError: If the venue rejects the seed
        """
        if not self.can_operate(caller):
            log.warning("finalize_unauthorized", ledger=ledger_address, caller=caller)
            raise Unauthorized(f"{caller} cannot finalize {ledger_address}")

        with self._chain.atomic():
            record = self.get_record(ledger_address)
            if record.finalized:
                log.info("finalize_skipped_already_finalized", ledger=ledger_address)
                return record

            coin = self._chain.get_coin(ledger_address)
            if not self.can_finalize(ledger_address):
                log.warning(
                    "finalize_rejected",
                    ledger=ledger_address,
                    pool_balance=record.pool_balance,
                    deadline=coin.pre_sale_deadline,
                )
                raise PreSaleActive(
                    f"{coin.symbol} presale runs until {coin.pre_sale_deadline} "
                    f"with {record.pool_balance} units unsold"
                )

            custody = self._chain.native_balance(ledger_address)
            if custody < record.funds:
                raise InsufficientBalance(ledger_address, custody, record.funds)

            seed = LiquiditySeed(
                token_address=ledger_address,
                token_amount=record.pool_balance,
                funds=record.funds,
                sqrt_price_lower=record.sqrt_price_lower,
                sqrt_price_upper=record.sqrt_price_upper,
            )
            # Nothing is mutated until the venue accepts the seed
            position = self._venue.create_pool(seed)

            coin.enable_trading(self.address)
            if record.pool_balance:
                coin.transfer(self.address, position.pool_address, record.pool_balance)
            self._chain.move_native(ledger_address, position.pool_address, record.funds)

            record.pool_balance = 0
            record.pool_address = position.pool_address
            record.finalized = True
            record.finalized_at = datetime.now(UTC)

        log.info(
            "presale_finalized",
            ledger=ledger_address,
            caller=caller,
            pool_address=position.pool_address,
            token_amount=seed.token_amount,
            funds=seed.funds,
        )

        return record
