"""Meme coin ledger with presale/trading state machine.

A coin starts in PRESALE: the manager holds the sale pool and anyone may
mint from it at the fixed price, up to the per-wallet cap. Transfers stay
blocked for every holder, the creator's reserve included, until the
manager enables trading. Each public operation checks everything first
and only then mutates, under the chain lock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from memelaunch.core.chain import Chain
from memelaunch.core.clock import Clock
from memelaunch.core.exceptions import (
    InsufficientAllowance,
    InsufficientBalance,
    InvaildParam,
    PreSaleEnded,
    ReachMaxPerMint,
    TradingNotEnable,
    Unauthorized,
)
from memelaunch.models.coin import (
    COIN_TRANSITIONS,
    CoinInfo,
    CoinState,
    CoinTransitionError,
    CreationParams,
)

if TYPE_CHECKING:
    from memelaunch.core.manager import MemeCoinManager

log = structlog.get_logger(__name__)


class MemeCoin:
    """
    Token ledger for one meme coin.

    Genesis allocation credits the creator with the reserve and the
    manager with the rest, so sum(balances) == total_supply from the
    first moment on.
    """

    def __init__(
        self,
        address: str,
        params: CreationParams,
        manager: MemeCoinManager,
        chain: Chain,
        clock: Clock,
    ) -> None:
        """Initialize the ledger and its genesis balances."""
        self.address = address
        self.creator = params.creator
        self.name = params.name
        self.symbol = params.symbol
        self.total_supply = params.total_supply
        self.reserved = params.reserved
        self.max_per_wallet = params.max_per_wallet
        self.price = params.price
        self.pre_sale_deadline = params.pre_sale_deadline
        self.sqrt_price_lower = params.sqrt_price_lower
        self.sqrt_price_upper = params.sqrt_price_upper

        self._manager = manager
        self._chain = chain
        self._clock = clock

        self.minted_so_far = 0
        self.state = CoinState.PRESALE
        self._balances: dict[str, int] = {}
        self._allowances: dict[str, dict[str, int]] = {}

        if params.reserved:
            self._balances[params.creator] = params.reserved
        if self.sale_supply:
            self._balances[manager.address] = self.sale_supply

    @property
    def manager_address(self) -> str:
        return self._manager.address

    @property
    def sale_supply(self) -> int:
        """Units offered in the public mint."""
        return self.total_supply - self.reserved

    @property
    def remaining_supply(self) -> int:
        """Units still mintable."""
        return self.sale_supply - self.minted_so_far

    @property
    def trading_enabled(self) -> bool:
        return self.state == CoinState.TRADING

    def balance_of(self, holder: str) -> int:
        """Units held by an address."""
        return self._balances.get(holder, 0)

    def allowance(self, owner: str, spender: str) -> int:
        """Units spender may still move on behalf of owner."""
        return self._allowances.get(owner, {}).get(spender, 0)

    def holders(self) -> dict[str, int]:
        """Copy of every non-zero balance."""
        return {holder: amount for holder, amount in self._balances.items() if amount}

    # Presale

    def mint(self, caller: str, amount: int, payment: int) -> None:
        """
        Buy units from the sale pool at the fixed price.

        Overpayment is kept by the manager; there is no refund.

        Raises:
            PreSaleEnded: If trading is enabled or the deadline has passed
            InvaildParam: If amount is not positive or payment is short
            ReachMaxPerMint: If the pool or the caller's wallet cap would overflow
        """
        with self._chain.atomic():
            self._check_mint(caller, amount, payment)
            # Raises NotFound before any mutation if the record is missing
            self._manager.get_record(self.address)

            manager_address = self._manager.address
            self._balances[manager_address] -= amount
            self._balances[caller] = self.balance_of(caller) + amount
            self.minted_so_far += amount
            self._chain.deposit(self.address, payment)
            self._manager.on_mint(self.address, amount, payment)

        log.info(
            "meme_coin_minted",
            coin=self.address,
            caller=caller,
            amount=amount,
            payment=payment,
            minted_so_far=self.minted_so_far,
        )

    def _check_mint(self, caller: str, amount: int, payment: int) -> None:
        """Validate a mint without touching state."""
        if self.trading_enabled:
            self._reject_mint(PreSaleEnded(f"{self.symbol} is already trading"), caller, amount)
        if self._clock.now() > self.pre_sale_deadline:
            self._reject_mint(
                PreSaleEnded(f"{self.symbol} presale ended at {self.pre_sale_deadline}"),
                caller,
                amount,
            )
        if amount <= 0:
            self._reject_mint(
                InvaildParam(f"Mint amount must be positive, got {amount}"), caller, amount
            )

        required = amount * self.price
        if payment < required:
            self._reject_mint(
                InvaildParam(f"Payment {payment} below required {required}"), caller, amount
            )
        if caller == self._manager.address:
            self._reject_mint(InvaildParam("Manager cannot mint from its own pool"), caller, amount)

        if self.minted_so_far + amount > self.sale_supply:
            self._reject_mint(
                ReachMaxPerMint(
                    f"Mint of {amount} exceeds remaining pool {self.remaining_supply}",
                    requested=amount,
                    available=self.remaining_supply,
                ),
                caller,
                amount,
            )

        wallet_room = max(self.max_per_wallet - self.balance_of(caller), 0)
        if amount > wallet_room:
            self._reject_mint(
                ReachMaxPerMint(
                    f"Mint of {amount} exceeds wallet cap {self.max_per_wallet}",
                    requested=amount,
                    available=wallet_room,
                ),
                caller,
                amount,
            )

    def _reject_mint(self, error: Exception, caller: str, amount: int) -> None:
        log.warning(
            "mint_rejected",
            coin=self.address,
            caller=caller,
            amount=amount,
            reason=type(error).__name__,
        )
        raise error

    def enable_trading(self, caller: str) -> None:
        """
        Open transfers. Only the manager may call; repeat calls are no-ops.

        Raises:
            Unauthorized: If caller is not the manager
        """
        with self._chain.atomic():
            if caller != self._manager.address:
                raise Unauthorized(f"{caller} cannot enable trading on {self.symbol}")
            if self.trading_enabled:
                return
            self._transition_to(CoinState.TRADING)

        log.info("meme_coin_trading_enabled", coin=self.address, symbol=self.symbol)

    def _transition_to(self, new_state: CoinState) -> None:
        valid_next = COIN_TRANSITIONS.get(self.state, [])
        if new_state not in valid_next:
            raise CoinTransitionError(
                f"Invalid transition: {self.state.value} -> {new_state.value}"
            )
        self.state = new_state

    # Transfers

    def transfer(self, caller: str, to: str, amount: int) -> None:
        """
        Move units from caller to another holder.

        Raises:
            TradingNotEnable: If the presale has not been finalized
            InvaildParam: If amount is negative or to is empty
            InsufficientBalance: If caller holds less than amount
        """
        with self._chain.atomic():
            self._check_transfer(caller, to, amount)
            self._move(caller, to, amount)

        log.debug("meme_coin_transferred", coin=self.address, src=caller, dst=to, amount=amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """Set spender's allowance over owner's units. Allowed in any state."""
        if amount < 0:
            raise InvaildParam(f"Allowance must not be negative, got {amount}")
        if not spender:
            raise InvaildParam("Spender is required")
        with self._chain.atomic():
            self._allowances.setdefault(owner, {})[spender] = amount

        log.debug(
            "meme_coin_approved",
            coin=self.address,
            owner=owner,
            spender=spender,
            amount=amount,
        )

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """
        Move owner's units using spender's allowance.

        Raises:
            TradingNotEnable: If the presale has not been finalized
            InsufficientAllowance: If the allowance is below amount
            InsufficientBalance: If owner holds less than amount
        """
        with self._chain.atomic():
            self._check_transfer(owner, to, amount)
            allowed = self.allowance(owner, spender)
            if allowed < amount:
                raise InsufficientAllowance(
                    f"{spender} may move {allowed} of {owner}'s units, needs {amount}"
                )
            self._allowances.setdefault(owner, {})[spender] = allowed - amount
            self._move(owner, to, amount)

    def _check_transfer(self, src: str, to: str, amount: int) -> None:
        if not self.trading_enabled:
            log.warning("transfer_rejected", coin=self.address, src=src, reason="TradingNotEnable")
            raise TradingNotEnable(f"{self.symbol} is still in presale")
        if amount < 0:
            raise InvaildParam(f"Transfer amount must not be negative, got {amount}")
        if not to:
            raise InvaildParam("Recipient is required")
        balance = self.balance_of(src)
        if balance < amount:
            raise InsufficientBalance(src, balance, amount)

    def _move(self, src: str, dst: str, amount: int) -> None:
        self._balances[src] = self.balance_of(src) - amount
        self._balances[dst] = self.balance_of(dst) + amount

    def info(self) -> CoinInfo:
        """Snapshot of the ledger."""
        return CoinInfo(
            address=self.address,
            creator=self.creator,
            name=self.name,
            symbol=self.symbol,
            total_supply=self.total_supply,
            reserved=self.reserved,
            max_per_wallet=self.max_per_wallet,
            price=self.price,
            pre_sale_deadline=self.pre_sale_deadline,
            sqrt_price_lower=self.sqrt_price_lower,
            sqrt_price_upper=self.sqrt_price_upper,
            manager_address=self._manager.address,
            minted_so_far=self.minted_so_far,
            state=self.state,
        )
