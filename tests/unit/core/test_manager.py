"""Unit tests for MemeCoinManager custody and finalization."""

from unittest.mock import MagicMock

import pytest

from memelaunch.core.chain import Chain
from memelaunch.core.clock import ManualClock
from memelaunch.core.exceptions import (
    ContractAlreadyExist,
    LiquidityVenueError,
    NotFound,
    PreSaleActive,
    TradingNotEnable,
    Unauthorized,
)
from memelaunch.core.launchpad import Launchpad
from memelaunch.core.manager import MemeCoinManager
from memelaunch.core.units import parse_ether
from memelaunch.models.coin import CoinState
from tests.factories.coin import (
    FACTORY_OWNER,
    MANAGER,
    MINT_PRICE,
    ONE_DAY,
    OWNER,
    USER,
    USER_TWO,
    CreationParamsFactory,
)


@pytest.fixture
def address(launchpad: Launchpad) -> str:
    """Coin with a 200-unit sale pool and 1 ether bootstrap."""
    return launchpad.create_meme_coin(
        OWNER,
        CreationParamsFactory(total_supply=300, reserved=100, max_per_wallet=100),
        value=parse_ether("1"),
    )


def sell_out(launchpad: Launchpad, address: str) -> None:
    launchpad.mint(USER, address, 100, 100 * MINT_PRICE)
    launchpad.mint(USER_TWO, address, 100, 100 * MINT_PRICE)


class TestRecords:
    """Test custody record bookkeeping."""

    def test_record_creation_twice_rejected(self, clock: ManualClock) -> None:
        manager = MemeCoinManager("0xmanager", Chain(), MagicMock(), clock)
        manager.record_creation("0xcoin", 10, 0, 1, 2)

        with pytest.raises(ContractAlreadyExist):
            manager.record_creation("0xcoin", 10, 0, 1, 2)

    def test_unknown_record_raises(self, launchpad: Launchpad) -> None:
        with pytest.raises(NotFound):
            launchpad.manager_record("0xdeadbeef")

    def test_on_mint_updates_pool_and_funds(self, launchpad: Launchpad, address: str) -> None:
        launchpad.mint(USER, address, 10, parse_ether("0.5"))

        record = launchpad.manager_record(address)
        assert record.pool_balance == 190
        assert record.funds == parse_ether("1.5")


class TestFinalizeConditions:
    """Test when a presale may be finalized."""

    def test_active_presale_rejected(self, launchpad: Launchpad, address: str) -> None:
        launchpad.mint(USER, address, 10, 10 * MINT_PRICE)

        assert launchpad.manager.can_finalize(address) is False
        with pytest.raises(PreSaleActive):
            launchpad.finalize(MANAGER, address)

        assert launchpad.coin_info(address).state == CoinState.PRESALE
        assert launchpad.manager_record(address).finalized is False

    def test_sold_out_finalizes(self, launchpad: Launchpad, address: str) -> None:
        sell_out(launchpad, address)

        assert launchpad.manager.can_finalize(address) is True
        record = launchpad.finalize(MANAGER, address)

        assert record.finalized is True
        assert launchpad.coin_info(address).state == CoinState.TRADING

    def test_deadline_finalizes(
        self, launchpad: Launchpad, address: str, clock: ManualClock
    ) -> None:
        clock.advance(ONE_DAY + 1)

        record = launchpad.finalize(MANAGER, address)

        assert record.finalized is True

    def test_deadline_second_is_not_expired(
        self, launchpad: Launchpad, address: str, clock: ManualClock
    ) -> None:
        clock.advance(ONE_DAY)

        with pytest.raises(PreSaleActive):
            launchpad.finalize(MANAGER, address)

    def test_unknown_ledger_rejected(self, launchpad: Launchpad) -> None:
        with pytest.raises(NotFound):
            launchpad.finalize(MANAGER, "0xdeadbeef")


class TestFinalizeEffects:
    """Test pool seeding and trading activation."""

    def test_unsold_pool_and_funds_go_to_venue(
        self, launchpad: Launchpad, address: str, clock: ManualClock, venue
    ) -> None:
        launchpad.mint(USER, address, 50, parse_ether("1"))
        clock.advance(ONE_DAY + 1)

        record = launchpad.finalize(MANAGER, address)

        position = venue.get_position(record.pool_address)
        assert position is not None
        assert position.token_amount == 150
        assert position.funds == parse_ether("2")
        assert position.sqrt_price_lower == record.sqrt_price_lower
        assert position.sqrt_price_upper == record.sqrt_price_upper

        assert launchpad.balance_of(address, launchpad.manager.address) == 0
        assert launchpad.balance_of(address, record.pool_address) == 150
        assert launchpad.native_balance(address) == 0
        assert launchpad.native_balance(record.pool_address) == parse_ether("2")
        assert record.pool_balance == 0
        assert record.finalized_at is not None

    def test_transfers_open_after_finalize(self, launchpad: Launchpad, address: str) -> None:
        sell_out(launchpad, address)
        with pytest.raises(TradingNotEnable):
            launchpad.transfer(USER, address, USER_TWO, 1)

        launchpad.finalize(MANAGER, address)
        launchpad.transfer(USER, address, USER_TWO, 1)
        launchpad.transfer(OWNER, address, USER_TWO, 100)

        assert launchpad.balance_of(address, USER_TWO) == 201

    def test_double_finalize_is_noop(
        self, launchpad: Launchpad, address: str, venue
    ) -> None:
        sell_out(launchpad, address)

        first = launchpad.finalize(MANAGER, address)
        second = launchpad.finalize(MANAGER, address)

        assert second is first
        assert len(venue.positions) == 1
        assert launchpad.manager.can_finalize(address) is False

    def test_venue_failure_leaves_presale_intact(
        self, launchpad: Launchpad, address: str, clock: ManualClock
    ) -> None:
        failing = MagicMock()
        failing.create_pool.side_effect = LiquidityVenueError(service="mock", message="down")
        launchpad.manager._venue = failing
        clock.advance(ONE_DAY + 1)

        with pytest.raises(LiquidityVenueError):
            launchpad.finalize(MANAGER, address)

        record = launchpad.manager_record(address)
        assert record.finalized is False
        assert record.pool_balance == 200
        assert launchpad.coin_info(address).state == CoinState.PRESALE
        assert launchpad.native_balance(address) == parse_ether("1")


class TestFinalizeAuthorization:
    """Test who may finalize a presale."""

    @pytest.mark.parametrize("caller", [USER, OWNER, ""])
    def test_other_callers_rejected(
        self, launchpad: Launchpad, address: str, clock: ManualClock, venue, caller: str
    ) -> None:
        """The creator or a buyer cannot finalize, even once the deadline has passed."""
        clock.advance(ONE_DAY + 1)

        with pytest.raises(Unauthorized):
            launchpad.finalize(caller, address)

        record = launchpad.manager_record(address)
        assert record.finalized is False
        assert record.pool_balance == 200
        assert venue.positions == []
        assert launchpad.coin_info(address).state == CoinState.PRESALE

    def test_authorization_checked_before_condition(
        self, launchpad: Launchpad, address: str
    ) -> None:
        with pytest.raises(Unauthorized):
            launchpad.finalize(USER, address)

    def test_factory_owner_may_finalize(
        self, launchpad: Launchpad, address: str, clock: ManualClock
    ) -> None:
        clock.advance(ONE_DAY + 1)

        record = launchpad.finalize(FACTORY_OWNER, address)

        assert record.finalized is True

    def test_can_operate(self, launchpad: Launchpad) -> None:
        assert launchpad.manager.can_operate(MANAGER) is True
        assert launchpad.manager.can_operate(FACTORY_OWNER) is True
        assert launchpad.manager.can_operate(USER) is False

    def test_manager_without_operators(self, clock: ManualClock) -> None:
        manager = MemeCoinManager("0xmanager", Chain(), MagicMock(), clock)

        assert manager.can_operate("0xmanager") is True
        assert manager.can_operate(FACTORY_OWNER) is False
