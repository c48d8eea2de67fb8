"""Factory for generating test CreationParams instances."""

import factory
from faker import Faker

from memelaunch.config.settings import Settings
from memelaunch.core.units import parse_ether
from memelaunch.models.coin import CreationParams
from memelaunch.services.liquidity.sqrt_price import encode_price_sqrt

fake = Faker()

# Unix time every ManualClock in the suite starts at
START_TIME = 1_700_000_000
ONE_DAY = 24 * 3600

OWNER = "0x00000000000000000000000000000000000000a1"
USER = "0x00000000000000000000000000000000000000b2"
USER_TWO = "0x00000000000000000000000000000000000000c3"

# Launchpad roles as configured by default Settings
MANAGER = Settings.model_fields["manager_address"].default
FACTORY_OWNER = Settings.model_fields["factory_owner"].default

MINT_PRICE = parse_ether("0.01")
SQRT_PRICE_LOWER = encode_price_sqrt(parse_ether("0.01"), parse_ether("1"))
SQRT_PRICE_UPPER = encode_price_sqrt(parse_ether("1"), parse_ether("0.01"))


def generate_address() -> str:
    """Generate a random 0x-prefixed 20-byte address."""
    return fake.hexify(text="0x" + "^" * 40)


class CreationParamsFactory(factory.Factory):
    """Factory for CreationParams model.

    Usage:
        # The canonical 10000 supply / 1000 reserved coin
        params = CreationParamsFactory()

        # A free mint owned by a random creator
        params = CreationParamsFactory(price=0, creator=generate_address())
    """

    class Meta:
        model = CreationParams

    creator = OWNER
    total_supply = 10000
    reserved = 1000
    max_per_wallet = 100
    price = MINT_PRICE
    pre_sale_deadline = START_TIME + ONE_DAY
    sqrt_price_lower = SQRT_PRICE_LOWER
    sqrt_price_upper = SQRT_PRICE_UPPER
    name = factory.Sequence(lambda n: f"MemeCoin{n}")
    symbol = factory.LazyFunction(
        lambda: fake.lexify(text="????", letters="ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    )
