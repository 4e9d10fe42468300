"""Scenario cash-flow simulator — constant contribution with cyclic replacement.

Unlike the primary projection, components here are replaced every time
their remaining life reaches 0 and then restart at their typical useful
life, so long horizons see recurring expenditures.

Each year follows this sequence:
  per-component inflated cost + FFB from the *current* lifecycle state
  → expenditure for components due this year
  → beginning + contribution + interest − expenditures = ending balance
  → advance every lifecycle state (reset if replaced, else age one year)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from reserve_study.config.component import Component
from reserve_study.config.financial import FinancialParameters
from reserve_study.engine.component_model import (
    component_total_cost,
    full_funding_balance,
    inflation_schedule,
)
from reserve_study.engine.replacement import ComponentState, CyclicReplacementModel
from reserve_study.models.results import CashFlowYear


@dataclass(frozen=True)
class CycledComponentYear:
    """One component's cost position in one simulated year."""

    component: Component
    state: ComponentState
    total_cost: float
    full_funding_balance: float

    @property
    def expenditure(self) -> float:
        return self.total_cost if self.state.is_due else 0.0


def iter_cycled_years(
    params: FinancialParameters,
    components: list[Component],
) -> Iterator[tuple[int, list[CycledComponentYear]]]:
    """Yield ``(year, per-component positions)`` for years 1..projection_years + 1.

    Lifecycle states are advanced by value between years; nothing on the
    input components is mutated.
    """
    multipliers = inflation_schedule(params.inflation_rate, params.total_years)
    caf = params.cost_adjustment_factor
    states = CyclicReplacementModel.initial_states(components)

    for year in range(1, params.total_years + 1):
        multiplier = multipliers[year - 1]
        positions: list[CycledComponentYear] = []
        for comp, state in zip(components, states):
            total_cost = component_total_cost(comp, multiplier, caf)
            positions.append(CycledComponentYear(
                component=comp,
                state=state,
                total_cost=total_cost,
                full_funding_balance=full_funding_balance(
                    total_cost, state.useful_life, state.remaining_life,
                ),
            ))
        yield year, positions
        states = CyclicReplacementModel.advance(states)


def simulate_cash_flow(
    contribution: float,
    params: FinancialParameters,
    components: list[Component],
) -> list[CashFlowYear]:
    """Simulate the reserve fund under a constant annual ``contribution``."""
    years: list[CashFlowYear] = []
    balance = params.beginning_reserve_balance

    for year, positions in iter_cycled_years(params, components):
        expenditures = sum(p.expenditure for p in positions)
        interest = balance * params.interest_rate
        ending = balance + contribution + interest - expenditures

        years.append(CashFlowYear(
            year=year,
            fiscal_year=params.fiscal_year(year),
            beginning_balance=balance,
            contributions=contribution,
            interest=interest,
            expenditures=expenditures,
            ending_balance=ending,
            total_ffb=sum(p.full_funding_balance for p in positions),
            total_cost=sum(p.total_cost for p in positions),
        ))
        balance = ending

    return years


def minimum_ending_balance(years: list[CashFlowYear]) -> float:
    """Lowest ending balance in a simulated series (0 for an empty series)."""
    return min((y.ending_balance for y in years), default=0.0)
