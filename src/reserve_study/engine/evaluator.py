"""Single-year evaluator — one projection year under the status-quo contribution.

Sequence for year Y:
  inflation multiplier → per-component cost, remaining life, FFB,
  funds needed, annual funding, scheduled replacement
  → category totals → reserve balance recurrence

The beginning reserve is distributed to components (by FFB share) in
year 1 only.  Later years carry no per-component reserve, so their
``funds_needed`` is the full inflated cost.
"""

from __future__ import annotations

from reserve_study.config.component import Component
from reserve_study.config.financial import FinancialParameters
from reserve_study.engine.aggregator import aggregate_by_category
from reserve_study.engine.component_model import (
    adjusted_unit_cost,
    annual_funding,
    component_total_cost,
    distribute_reserve,
    full_funding_balance,
    inflation_multiplier,
)
from reserve_study.engine.replacement import SingleReplacementModel
from reserve_study.models.results import (
    OVERALL_KEY,
    ComponentYearState,
    ReplacedComponent,
    ReserveBalance,
    YearEntry,
)


def year_one_reserve_distribution(
    params: FinancialParameters,
    components: list[Component],
) -> list[float]:
    """Beginning reserve balance split by each component's share of year-1 FFB.

    Uses the initial ``estimated_remaining_life`` (no decay yet).
    """
    ffbs = [
        full_funding_balance(
            component_total_cost(c, 1.0, params.cost_adjustment_factor),
            c.typical_useful_life,
            c.estimated_remaining_life,
        )
        for c in components
    ]
    return distribute_reserve(params.beginning_reserve_balance, ffbs)


def evaluate_year(
    year: int,
    params: FinancialParameters,
    components: list[Component],
    beginning_balance: float,
    reserve_distribution: list[float] | None = None,
    multiplier: float | None = None,
) -> YearEntry:
    """Evaluate one 1-based projection year.

    Parameters
    ----------
    year : int
        Projection year, 1-based.
    params : FinancialParameters
        Run-wide financial assumptions.
    components : list[Component]
        Full inventory, in caller order.
    beginning_balance : float
        Prior year's ending balance (the initial reserve for year 1).
    reserve_distribution : list[float] | None
        Per-component reserve aligned with ``components``; only meaningful
        for year 1.  None = no per-component reserve.
    multiplier : float | None
        Precomputed inflation multiplier for this year.  None = compute it.

    Returns
    -------
    YearEntry
        Component states, category totals and reserve balance for the year.
    """
    fiscal_year = params.fiscal_year(year)
    if multiplier is None:
        multiplier = inflation_multiplier(params.inflation_rate, year)
    caf = params.cost_adjustment_factor
    replacement = SingleReplacementModel(params.beginning_year)

    states: list[ComponentYearState] = []
    for i, comp in enumerate(components):
        total_cost = component_total_cost(comp, multiplier, caf)
        remaining = replacement.remaining_life(comp, year)
        ffb = full_funding_balance(total_cost, comp.typical_useful_life, remaining)

        current_reserve = reserve_distribution[i] if reserve_distribution is not None else 0.0
        funds_needed = total_cost - current_reserve

        replaced = replacement.is_replaced(comp, fiscal_year)

        states.append(ComponentYearState(
            component_id=comp.id,
            name=comp.name,
            category=comp.category,
            cost_per_unit=adjusted_unit_cost(comp, multiplier, caf),
            total_cost=total_cost,
            remaining_life=remaining,
            full_funding_balance=ffb,
            current_reserve_funds=current_reserve,
            funds_needed=funds_needed,
            annual_funding=annual_funding(funds_needed, remaining, comp.typical_useful_life),
            is_replaced=replaced,
            expenditure=total_cost if replaced else 0.0,
        ))

    totals = aggregate_by_category(states)
    overall = totals[OVERALL_KEY]

    # ── Reserve balance recurrence ────────────────────────────────────
    contributions = params.current_annual_contribution
    interest = beginning_balance * params.interest_rate
    expenditures = overall.expenditures
    ending_balance = beginning_balance + contributions + interest - expenditures
    percent_funded = (
        beginning_balance / overall.full_funding_balance
        if overall.full_funding_balance > 0 else 0.0
    )

    reserve_balance = ReserveBalance(
        beginning_balance=beginning_balance,
        contributions=contributions,
        interest=interest,
        expenditures=expenditures,
        ending_balance=ending_balance,
        percent_funded=percent_funded,
        replaced_components=[
            ReplacedComponent(name=s.name, cost=s.total_cost)
            for s in states if s.is_replaced
        ],
    )

    return YearEntry(
        year=year,
        fiscal_year=fiscal_year,
        components=states,
        totals=totals,
        reserve_balance=reserve_balance,
    )
