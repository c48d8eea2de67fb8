"""Ledger arena and native-value custody.

The chain owns every deployed meme coin by address and the wei balances
held at each address. All public operations on the factory, the manager
and the coins run inside ``Chain.atomic()``, one re-entrant lock for the
whole arena, so they are totally ordered and never interleave.
"""

from __future__ import annotations

import hashlib
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

from memelaunch.core.exceptions import InsufficientBalance, InvaildParam, NotFound

if TYPE_CHECKING:
    from memelaunch.core.meme_coin import MemeCoin

log = structlog.get_logger(__name__)


class Chain:
    """Arena of meme coin ledgers indexed by address."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._coins: dict[str, MemeCoin] = {}
        self._native: dict[str, int] = {}
        self._nonces: dict[str, int] = {}

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Hold the arena lock for the duration of one operation."""
        with self._lock:
            yield

    def next_address(self, deployer: str) -> str:
        """Derive a fresh contract address from the deployer and its nonce."""
        with self._lock:
            nonce = self._nonces.get(deployer, 0)
            self._nonces[deployer] = nonce + 1
        digest = hashlib.sha3_256(f"{deployer.lower()}:{nonce}".encode()).hexdigest()
        return "0x" + digest[-40:]

    # Coins

    def register(self, coin: MemeCoin) -> None:
        """Add a deployed coin to the arena."""
        with self._lock:
            if coin.address in self._coins:
                raise InvaildParam(f"Address {coin.address} already deployed")
            self._coins[coin.address] = coin

    def get_coin(self, address: str) -> MemeCoin:
        """Get a coin by address.

        Raises:
            NotFound: If nothing is deployed at the address.
        """
        coin = self._coins.get(address)
        if coin is None:
            raise NotFound(f"No meme coin at {address}")
        return coin

    def has_coin(self, address: str) -> bool:
        return address in self._coins

    @property
    def coin_addresses(self) -> list[str]:
        return list(self._coins)

    # Native value

    def native_balance(self, address: str) -> int:
        """Wei held at an address."""
        return self._native.get(address, 0)

    def deposit(self, address: str, amount: int) -> None:
        """Credit wei arriving from outside the arena (attached call value)."""
        if amount < 0:
            raise InvaildParam(f"Negative deposit {amount}")
        if amount == 0:
            return
        with self._lock:
            self._native[address] = self._native.get(address, 0) + amount

    def move_native(self, src: str, dst: str, amount: int) -> None:
        """Move wei between two addresses in the arena.

        Raises:
            InsufficientBalance: If src holds less than amount.
        """
        if amount < 0:
            raise InvaildParam(f"Negative transfer {amount}")
        with self._lock:
            balance = self._native.get(src, 0)
            if balance < amount:
                raise InsufficientBalance(src, balance, amount)
            if amount == 0:
                return
            self._native[src] = balance - amount
            self._native[dst] = self._native.get(dst, 0) + amount

        log.debug("native_moved", src=src, dst=dst, amount=amount)
