"""
Shared fixtures for pyfishery tests.
"""

import pytest

from pyfishery.core.age_structured import equilibrium_numbers
from pyfishery.core.params import (
    AgeFisheryParams,
    AgeIndustryParams,
    DelayFisheryParams,
    DelayIndustryParams,
    LogisticFisheryParams,
    LogisticIndustryParams,
)


@pytest.fixture
def logistic_params():
    """Reference simple-model parameters (r=1, K=12000, N0=10000, H=2000)."""
    fishery = LogisticFisheryParams(
        reproduction_rate=1.0,
        carrying_capacity=12000.0,
        initial_stock=10000.0,
    )
    industry = LogisticIndustryParams(harvest_rate=2000.0)
    return fishery, industry


@pytest.fixture
def delay_params():
    """Reference bioeconomic delay-model parameters."""
    fishery = DelayFisheryParams(
        reproduction_rate=1.0,
        catchability=2.0,
        initial_stock=0.4,
    )
    industry = DelayIndustryParams(
        effort=0.4,
        market_stock=0.1,
        catch_stocking_rate=0.5,
        stock_return_rate=2.0,
        fish_price=7.0,
        fishing_cost=1.0,
    )
    return fishery, industry


AGE_BIOLOGY = dict(
    max_age=10,
    natural_mortality=0.2,
    vb_linf=100.0,
    vb_k=0.2,
    vb_t0=-0.5,
    lw_a=0.00001,
    lw_b=3.0,
    maturity_a50=3.0,
    maturity_k=1.5,
    constant_recruitment=1000.0,
)


@pytest.fixture
def age_params():
    """Age-structured parameters starting from the unfished equilibrium."""
    unfished = AgeFisheryParams(initial_numbers=[0.0] * 11, **AGE_BIOLOGY)
    fishery = AgeFisheryParams(initial_numbers=equilibrium_numbers(unfished), **AGE_BIOLOGY)
    industry = AgeIndustryParams(
        fishing_mortality=0.3,
        selectivity_a50=2.5,
        selectivity_k=2.0,
    )
    return fishery, industry


@pytest.fixture
def age_biology():
    """Age-structured biology without initial numbers, as keyword arguments."""
    return dict(AGE_BIOLOGY)
