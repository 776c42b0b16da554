"""Pytest configuration for the OPI simulator test suite."""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from calc.simulator import OPISimulator
from model.RewardData import RewardParams


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test"
    )


@pytest.fixture(scope="session")
def simulator():
    """Simulator built from the project's reference files."""
    return OPISimulator.from_reference()


@pytest.fixture
def example_params():
    """1.5억 salary, 25% OPI, 55,000 base price, 65,000 expected price."""
    return RewardParams(
        annual_salary=150_000_000,
        opi_rate=25,
        base_stock_price=55_000,
        future_stock_price=65_000,
    )
