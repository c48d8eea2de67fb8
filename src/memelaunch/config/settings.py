"""Application settings using pydantic-settings."""

import re
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

# Fee tiers accepted by the concentrated-liquidity venue (hundredths of a bip)
VENUE_FEE_TIERS = (100, 500, 3000, 10000)


class Settings(BaseSettings):
    """MemeLaunch configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MEMELAUNCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Application
    app_name: str = Field(default="MemeLaunch", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Log level"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Launchpad identities
    factory_address: str = Field(
        default="0x00000000000000000000000000000000000fac70",
        description="Address the factory derives ledger addresses from",
    )
    manager_address: str = Field(
        default="0x000000000000000000000000000000000000a11c",
        description="Address holding unsold supply for every ledger",
    )
    factory_owner: str = Field(
        default="0x0000000000000000000000000000000000000001",
        description="Owner of the factory",
    )
    creation_fee_wei: int = Field(
        default=0, ge=0, description="Value kept by the factory on each creation"
    )

    # Liquidity venue
    venue_router_address: str = Field(
        default="0x2626664c2603336E57B271c5C0b26F421741e481",
        description="Swap router of the liquidity venue",
    )
    venue_position_manager_address: str = Field(
        default="0x03a520b32C04BF3bEEf7BEb72E919cf822Ed34f1",
        description="Position manager of the liquidity venue",
    )
    venue_fee_tier: int = Field(default=3000, description="Pool fee tier")

    @field_validator(
        "factory_address",
        "manager_address",
        "factory_owner",
        "venue_router_address",
        "venue_position_manager_address",
    )
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Validate 0x-prefixed 20-byte hex address."""
        if not _ADDRESS_RE.match(v):
            raise ValueError("Address must be 0x followed by 40 hex characters")
        return v

    @field_validator("venue_fee_tier")
    @classmethod
    def validate_fee_tier(cls, v: int) -> int:
        """Validate fee tier against the venue's supported tiers."""
        if v not in VENUE_FEE_TIERS:
            raise ValueError(f"Fee tier must be one of {VENUE_FEE_TIERS}")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
