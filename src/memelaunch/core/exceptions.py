"""MemeLaunch exception hierarchy.

Every precondition failure in the factory, the token ledgers and the
manager raises one of these before any state is touched. The class name
is the error kind reported to callers.
"""


class MemeLaunchError(Exception):
    """Base exception for all MemeLaunch errors.

    All custom exceptions in MemeLaunch should inherit from this class
    to enable consistent error handling and logging.
    """

    pass


class ConfigurationError(MemeLaunchError):
    """Raised when configuration is invalid or missing.

    Example:
        raise ConfigurationError("Manager address equals factory address")
    """

    pass


class ReservedTooMuch(MemeLaunchError):
    """Raised when the creator reserve exceeds the total supply.

    Attributes:
        reserved: Requested creator reserve.
        total_supply: Total supply of the coin.
    """

    def __init__(self, reserved: int, total_supply: int) -> None:
        self.reserved = reserved
        self.total_supply = total_supply
        super().__init__(f"Reserved {reserved} exceeds total supply {total_supply}")


class ContractAlreadyExist(MemeLaunchError):
    """Raised when a coin already exists for the same creator and name.

    Example:
        raise ContractAlreadyExist("MoMo already created by 0xabc...")
    """

    pass


class InvaildParam(MemeLaunchError):
    """Raised for a zero or negative amount, or a payment below the price."""

    pass


class ReachMaxPerMint(MemeLaunchError):
    """Raised when a mint would overdraw the sale pool or the wallet cap.

    Attributes:
        requested: Units asked for.
        available: Units the caller could still mint.
    """

    def __init__(self, message: str, requested: int, available: int) -> None:
        super().__init__(message)
        self.requested = requested
        self.available = available


class TradingNotEnable(MemeLaunchError):
    """Raised when tokens move before the presale is finalized."""

    pass


class InsufficientBalance(MemeLaunchError):
    """Raised when a holder moves more than it holds.

    Attributes:
        holder: Address being debited.
        balance: Its current balance.
        required: Amount the operation needed.
    """

    def __init__(self, holder: str, balance: int, required: int) -> None:
        self.holder = holder
        self.balance = balance
        self.required = required
        super().__init__(f"{holder} holds {balance}, needs {required}")


class InsufficientAllowance(MemeLaunchError):
    """Raised when a spender moves more than it was approved for."""

    pass


class NotFound(MemeLaunchError):
    """Raised when a coin, record or registry entry does not exist."""

    pass


class Unauthorized(MemeLaunchError):
    """Raised when a caller invokes an operation reserved to another role."""

    pass


class PreSaleEnded(MemeLaunchError):
    """Raised when minting after the deadline or once trading is enabled."""

    pass


class PreSaleActive(MemeLaunchError):
    """Raised when finalizing a presale that is neither sold out nor expired."""

    pass


class LiquidityVenueError(MemeLaunchError):
    """Raised when the liquidity venue rejects a pool seed.

    Attributes:
        service: Name of the venue that failed.

    Example:
        raise LiquidityVenueError(service="simulated", message="Empty price range")
    """

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(f"{service}: {message}")
