"""Shared test fixtures — a single-component site and a small mixed inventory."""

from __future__ import annotations

import pytest

from reserve_study.config import (
    Component,
    ComponentCategory,
    FinancialParameters,
    ReserveStudyInput,
    SolverConfig,
)


@pytest.fixture
def params() -> FinancialParameters:
    """Zero-rate assumptions used by the worked single-component example."""
    return FinancialParameters(
        beginning_year=2025,
        projection_years=30,
        inflation_rate=0.0,
        interest_rate=0.0,
        beginning_reserve_balance=2_000,
        current_annual_contribution=500,
    )


@pytest.fixture
def paving() -> Component:
    return Component(
        id="paving",
        name="Asphalt Paving",
        category=ComponentCategory.SITEWORK,
        quantity=1,
        cost_per_unit=10_000,
        typical_useful_life=10,
        estimated_remaining_life=5,
    )


@pytest.fixture
def inflated_params() -> FinancialParameters:
    return FinancialParameters(
        beginning_year=2025,
        projection_years=30,
        inflation_rate=0.03,
        interest_rate=0.01,
        beginning_reserve_balance=60_000,
        current_annual_contribution=12_000,
    )


@pytest.fixture
def inventory() -> list[Component]:
    return [
        Component(
            id="roof", name="Roof - EPDM", category="Building",
            quantity=12_000, cost_per_unit=12, measurement="SF",
            typical_useful_life=25, estimated_remaining_life=10,
        ),
        Component(
            id="hvac", name="Rooftop HVAC", category="Mechanical",
            quantity=4, cost_per_unit=18_000, measurement="Each",
            typical_useful_life=20, estimated_remaining_life=8,
        ),
        Component(
            id="carpet", name="Hallway Carpet", category="Interior",
            quantity=2_800, cost_per_unit=32, measurement="SY",
            typical_useful_life=10, estimated_remaining_life=4,
        ),
        Component(
            id="gutters", name="Gutters", category="Building Exterior",
            quantity=450, cost_per_unit=18, measurement="LF",
            typical_useful_life=20, estimated_remaining_life=12,
        ),
        Component(
            id="pumps", name="Sump Pumps", category="Plumbing",
            quantity=2, cost_per_unit=2_500, measurement="Each",
            typical_useful_life=12, estimated_remaining_life=0,
        ),
        Component(
            id="paint", name="Exterior Paint", category="Preventive Maintenance",
            quantity=8_500, cost_per_unit=4.5, measurement="SF",
            typical_useful_life=8, estimated_remaining_life=3,
        ),
    ]


@pytest.fixture
def study(inflated_params: FinancialParameters, inventory: list[Component]) -> ReserveStudyInput:
    return ReserveStudyInput(
        financial=inflated_params,
        components=inventory,
        solver=SolverConfig(),
    )
