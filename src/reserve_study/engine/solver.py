"""Threshold / full-funding solver.

Answers: "What constant annual contribution keeps the reserve fund
solvent over the horizon?" and evaluates the threshold scenarios that
sit beside it.

Scenario modes (keyed by ``threshold_rate``):
  - ``None`` (full funding): bisect the contribution over
    [0, total replacement cost × upper_bound_fraction] for a fixed number
    of iterations.  A candidate is feasible when the minimum ending
    balance of the cyclic cash-flow simulation is ≥ 0.  The search keeps
    the feasible end of the interval, so it converges onto the boundary.
  - explicit rate r: contribution = current contribution × (1 + r).
    This is a flat multiplier, not a search for a balance floor.

After the contribution is resolved the simulation is run once more, and a
component-method requirement is derived per year from the *simulated*
beginning balance, so it reflects money actually available in that
scenario.
"""

from __future__ import annotations

import logging

from reserve_study.config.component import Component
from reserve_study.config.financial import FinancialParameters
from reserve_study.config.study import SolverConfig
from reserve_study.engine.cashflow import (
    iter_cycled_years,
    minimum_ending_balance,
    simulate_cash_flow,
)
from reserve_study.engine.component_model import component_total_cost
from reserve_study.models.results import CashFlowYear, ScenarioResult

logger = logging.getLogger(__name__)


def scenario_label(threshold_rate: float | None) -> str:
    if threshold_rate is None:
        return "Full Funding"
    if threshold_rate == 0:
        return "Baseline"
    return f"Threshold {threshold_rate * 100:g}%"


def total_replacement_cost(params: FinancialParameters, components: list[Component]) -> float:
    """Year-1 (uninflated, cost-adjusted) replacement cost of the whole inventory."""
    return sum(component_total_cost(c, 1.0, params.cost_adjustment_factor) for c in components)


def find_full_funding_contribution(
    params: FinancialParameters,
    components: list[Component],
    config: SolverConfig | None = None,
) -> tuple[float, int]:
    """Bisect for the smallest contribution that never drives the fund negative.

    Returns
    -------
    tuple[float, int]
        (contribution, iterations used).  If even the upper bound is
        infeasible, the upper bound is returned.
    """
    config = config or SolverConfig()
    lo = 0.0
    hi = total_replacement_cost(params, components) * config.upper_bound_fraction

    if minimum_ending_balance(simulate_cash_flow(hi, params, components)) < 0:
        logger.warning(
            "Full-funding search ceiling %.2f is not solvent; returning the ceiling", hi,
        )

    iterations = 0
    for _ in range(config.iterations):
        mid = (lo + hi) / 2
        iterations += 1
        if minimum_ending_balance(simulate_cash_flow(mid, params, components)) >= 0:
            hi = mid
        else:
            lo = mid

    logger.debug("Full-funding search converged to %.6f after %d iterations", hi, iterations)
    return hi, iterations


def required_annual_funding(
    params: FinancialParameters,
    components: list[Component],
    years: list[CashFlowYear],
) -> list[float]:
    """Component-method requirement per simulated year.

    For each year, the simulated beginning balance is split across
    components by their share of that year's FFB; each component then
    needs (cost − notional reserve) / remaining life, or the whole gap
    when it is due this year.
    """
    funding: list[float] = []
    for cash_year, (_, positions) in zip(years, iter_cycled_years(params, components)):
        balance = cash_year.beginning_balance
        total_ffb = sum(p.full_funding_balance for p in positions)

        required = 0.0
        for p in positions:
            share = p.full_funding_balance / total_ffb if total_ffb > 0 else 0.0
            gap = p.total_cost - balance * share
            remaining = p.state.remaining_life
            required += gap / remaining if remaining > 0 else gap
        funding.append(required)

    return funding


def solve_scenario(
    params: FinancialParameters,
    components: list[Component],
    threshold_rate: float | None,
    config: SolverConfig | None = None,
) -> ScenarioResult:
    """Resolve the contribution for one scenario and simulate it."""
    if threshold_rate is None:
        contribution, iterations = find_full_funding_contribution(params, components, config)
    else:
        contribution = params.current_annual_contribution * (1 + threshold_rate)
        iterations = 0

    years = simulate_cash_flow(contribution, params, components)
    label = scenario_label(threshold_rate)
    result = ScenarioResult(
        threshold_rate=threshold_rate,
        label=label,
        average_annual_contribution=contribution,
        years=years,
        total_contributions=sum(y.contributions for y in years),
        yearly_annual_funding=required_annual_funding(params, components, years),
        minimum_balance=minimum_ending_balance(years),
        search_iterations=iterations,
    )

    logger.info(
        "Scenario %s: contribution %.2f, minimum balance %.2f",
        label, contribution, result.minimum_balance,
    )
    return result


def run_scenarios(
    params: FinancialParameters,
    components: list[Component],
    config: SolverConfig | None = None,
) -> list[ScenarioResult]:
    """Solve every scenario in ``config.threshold_rates``, in order."""
    config = config or SolverConfig()
    return [
        solve_scenario(params, components, rate, config)
        for rate in config.threshold_rates
    ]
