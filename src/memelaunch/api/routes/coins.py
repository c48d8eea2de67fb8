"""Meme coin API routes."""

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from memelaunch.api.dependencies import CallerDep, LaunchpadDep
from memelaunch.models.coin import CoinInfo, CreationParams
from memelaunch.models.manager import ManagerRecord

router = APIRouter(prefix="/coins", tags=["coins"])


class CreateCoinRequest(BaseModel):
    """Request to create a meme coin."""

    params: CreationParams
    value: int = Field(default=0, ge=0, description="Wei attached to the call")


class CreateCoinResponse(BaseModel):
    """Response for coin creation."""

    address: str


class ResolveResponse(BaseModel):
    """Response for registry lookup."""

    creator: str
    name: str
    address: str


class MintRequest(BaseModel):
    """Request to mint from the presale pool."""

    amount: int
    payment: int = Field(default=0, ge=0, description="Wei attached to the call")


class TransferRequest(BaseModel):
    """Request to transfer units."""

    to: str
    amount: int


class ApproveRequest(BaseModel):
    """Request to set an allowance."""

    spender: str
    amount: int


class TransferFromRequest(BaseModel):
    """Request to move units under an allowance."""

    owner: str
    to: str
    amount: int


class BalanceResponse(BaseModel):
    """Response for balance lookup."""

    address: str
    holder: str
    balance: int


@router.post("", response_model=CreateCoinResponse, status_code=status.HTTP_201_CREATED)
async def create_coin(
    request: CreateCoinRequest,
    caller: CallerDep,
    launchpad: LaunchpadDep,
) -> CreateCoinResponse:
    """Create a meme coin and hand its sale pool to the manager."""
    address = launchpad.create_meme_coin(caller, request.params, value=request.value)
    return CreateCoinResponse(address=address)


@router.get("/resolve/{creator}/{name}", response_model=ResolveResponse)
async def resolve_coin(creator: str, name: str, launchpad: LaunchpadDep) -> ResolveResponse:
    """Look up a coin by creator and name."""
    address = launchpad.resolve(creator, name)
    return ResolveResponse(creator=creator, name=name, address=address)


@router.get("/{address}", response_model=CoinInfo)
async def get_coin(address: str, launchpad: LaunchpadDep) -> CoinInfo:
    """Get a coin snapshot."""
    return launchpad.coin_info(address)


@router.post("/{address}/mint", response_model=CoinInfo)
async def mint(
    address: str,
    request: MintRequest,
    caller: CallerDep,
    launchpad: LaunchpadDep,
) -> CoinInfo:
    """Mint units from the presale pool."""
    launchpad.mint(caller, address, request.amount, request.payment)
    return launchpad.coin_info(address)


@router.post("/{address}/transfer", response_model=BalanceResponse)
async def transfer(
    address: str,
    request: TransferRequest,
    caller: CallerDep,
    launchpad: LaunchpadDep,
) -> BalanceResponse:
    """Transfer units once trading is enabled."""
    launchpad.transfer(caller, address, request.to, request.amount)
    return BalanceResponse(
        address=address,
        holder=caller,
        balance=launchpad.balance_of(address, caller),
    )


@router.post("/{address}/approve")
async def approve(
    address: str,
    request: ApproveRequest,
    caller: CallerDep,
    launchpad: LaunchpadDep,
) -> dict:
    """Set an allowance for a spender."""
    launchpad.approve(caller, address, request.spender, request.amount)
    return {"owner": caller, "spender": request.spender, "allowance": request.amount}


@router.post("/{address}/transfer-from", response_model=BalanceResponse)
async def transfer_from(
    address: str,
    request: TransferFromRequest,
    caller: CallerDep,
    launchpad: LaunchpadDep,
) -> BalanceResponse:
    """Move an owner's units under the caller's allowance."""
    launchpad.transfer_from(caller, address, request.owner, request.to, request.amount)
    return BalanceResponse(
        address=address,
        holder=request.owner,
        balance=launchpad.balance_of(address, request.owner),
    )


@router.get("/{address}/balances/{holder}", response_model=BalanceResponse)
async def balance_of(address: str, holder: str, launchpad: LaunchpadDep) -> BalanceResponse:
    """Get a holder's balance."""
    return BalanceResponse(
        address=address,
        holder=holder,
        balance=launchpad.balance_of(address, holder),
    )


@router.post("/{address}/finalize", response_model=ManagerRecord)
async def finalize(address: str, caller: CallerDep, launchpad: LaunchpadDep) -> ManagerRecord:
    """Finalize a sold-out or expired presale and open trading.

    Only the manager and the factory owner may call this.
    """
    return launchpad.finalize(caller, address)


@router.get("/{address}/manager", response_model=ManagerRecord)
async def manager_record(address: str, launchpad: LaunchpadDep) -> ManagerRecord:
    """Get the manager's custody record for a coin."""
    return launchpad.manager_record(address)
