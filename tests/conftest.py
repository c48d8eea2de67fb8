"""Shared pytest fixtures for MemeLaunch tests.

This module provides fixtures for:
- Settings isolated from the developer's .env
- A manual clock and a fresh launchpad per test
- Test data factories

Usage:
    def test_something(launchpad, params_factory):
        address = launchpad.create_meme_coin(OWNER, params_factory())
        assert launchpad.balance_of(address, OWNER) == 1000
"""

import os
from collections.abc import Generator

import pytest

from memelaunch.config.settings import Settings
from memelaunch.core.clock import ManualClock
from memelaunch.core.launchpad import Launchpad, reset_launchpad
from memelaunch.services.liquidity.venue import SimulatedLiquidityVenue
from tests.factories.coin import START_TIME, CreationParamsFactory

# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Set up test environment variables.

    Loads .env file first, then sets defaults for any missing variables.
    """
    from dotenv import load_dotenv

    original_env = os.environ.copy()

    # Load .env file if it exists (won't override existing env vars)
    load_dotenv()

    os.environ.setdefault("MEMELAUNCH_LOG_LEVEL", "DEBUG")

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Drop the process-wide launchpad between tests."""
    reset_launchpad()
    yield
    reset_launchpad()


# =============================================================================
# Launchpad Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring .env."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def clock() -> ManualClock:
    """Clock frozen at START_TIME until a test advances it."""
    return ManualClock(START_TIME)


@pytest.fixture
def venue(settings: Settings) -> SimulatedLiquidityVenue:
    """Simulated liquidity venue."""
    return SimulatedLiquidityVenue(
        router_address=settings.venue_router_address,
        position_manager_address=settings.venue_position_manager_address,
        fee_tier=settings.venue_fee_tier,
    )


@pytest.fixture
def launchpad(
    settings: Settings, venue: SimulatedLiquidityVenue, clock: ManualClock
) -> Launchpad:
    """Fresh launchpad wired to the manual clock and simulated venue."""
    return Launchpad(settings, venue=venue, clock=clock)


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def params_factory() -> type[CreationParamsFactory]:
    """Provide creation params factory."""
    return CreationParamsFactory
