"""Test data factories using factory_boy.

These factories generate realistic test data for MemeLaunch models.
"""

from tests.factories.coin import CreationParamsFactory, generate_address

__all__ = [
    "CreationParamsFactory",
    "generate_address",
]
