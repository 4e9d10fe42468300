"""Split funds — reserve components and preventive maintenance kept apart.

When a study sets ``pm_required``, Preventive Maintenance components are
funded from their own account:
  reserve fund  → every non-PM component, reserve balance + contribution
  PM fund       → PM components only, PM balance + PM contribution

Each fund runs the same pipeline as a whole study (projection → summary →
schedules → full-funding search) on its own slice of the inventory.
"""

from __future__ import annotations

import logging

from reserve_study.config.component import Component, ComponentCategory
from reserve_study.config.financial import FinancialParameters
from reserve_study.config.study import SolverConfig
from reserve_study.engine.aggregator import build_summary
from reserve_study.engine.projection import (
    build_expenditure_schedule,
    build_replacement_schedule,
    run_projection,
)
from reserve_study.engine.solver import solve_scenario
from reserve_study.models.results import FundResult

logger = logging.getLogger(__name__)


RESERVE_FUND = "reserve"
PM_FUND = "pm"

FUND_CATEGORIES: dict[str, tuple[ComponentCategory, ...]] = {
    RESERVE_FUND: tuple(
        c for c in ComponentCategory if c is not ComponentCategory.PREVENTIVE_MAINTENANCE
    ),
    PM_FUND: (ComponentCategory.PREVENTIVE_MAINTENANCE,),
}
"""Categories reported for each fund."""


def split_components(components: list[Component]) -> tuple[list[Component], list[Component]]:
    """(reserve components, PM components), each in inventory order."""
    reserve = [c for c in components if not c.is_preventive_maintenance]
    pm = [c for c in components if c.is_preventive_maintenance]
    return reserve, pm


def fund_parameters(params: FinancialParameters, fund: str) -> FinancialParameters:
    """Financial parameters as seen by one fund.

    The PM fund swaps in the PM balance and contribution; rates, horizon
    and cost adjustment are shared.
    """
    if fund == PM_FUND:
        return params.model_copy(update={
            "beginning_reserve_balance": params.pm_beginning_balance,
            "current_annual_contribution": params.pm_annual_contribution,
        })
    return params


def run_fund(
    fund: str,
    params: FinancialParameters,
    components: list[Component],
    solver: SolverConfig | None = None,
) -> FundResult:
    """Project, summarise and solve one fund over its own components."""
    fund_params = fund_parameters(params, fund)
    categories = FUND_CATEGORIES[fund]

    years = run_projection(fund_params, components)
    full_funding = solve_scenario(fund_params, components, None, solver)

    logger.info(
        "Fund %s: %d components, full-funding contribution %.2f",
        fund, len(components), full_funding.average_annual_contribution,
    )
    return FundResult(
        fund=fund,
        component_ids=[c.id for c in components],
        summary=build_summary(years[0], categories),
        expenditure_schedule=build_expenditure_schedule(years, categories),
        replacement_schedule=build_replacement_schedule(fund_params, components),
        full_funding=full_funding,
    )


def run_split_funds(
    params: FinancialParameters,
    components: list[Component],
    solver: SolverConfig | None = None,
) -> tuple[FundResult, FundResult]:
    """(reserve fund, PM fund) for a study that keeps PM separate."""
    reserve, pm = split_components(components)
    return (
        run_fund(RESERVE_FUND, params, reserve, solver),
        run_fund(PM_FUND, params, pm, solver),
    )
