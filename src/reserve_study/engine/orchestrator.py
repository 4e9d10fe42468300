"""Study orchestrator — one call from inputs to every reserve study output.

Sequence:
  projection (status quo) → first-year summary → expenditure schedule
  → replacement schedule → one solved scenario per threshold rate
  → (pm_required only) separate reserve and PM fund results

Entry point: ``run_reserve_study(study)``.
"""

from __future__ import annotations

import logging

from reserve_study.config.study import ReserveStudyInput
from reserve_study.engine.aggregator import build_summary
from reserve_study.engine.funds import run_split_funds
from reserve_study.engine.projection import (
    build_expenditure_schedule,
    build_replacement_schedule,
    run_projection,
)
from reserve_study.engine.solver import run_scenarios
from reserve_study.models.results import ReserveStudyResult

logger = logging.getLogger(__name__)


def run_reserve_study(study: ReserveStudyInput) -> ReserveStudyResult:
    """Run the full reserve study for one site.

    Pure function of ``study``: the same input always yields the same result.
    """
    params = study.financial
    components = study.components

    years = run_projection(params, components)
    scenarios = run_scenarios(params, components, study.solver)

    reserve_fund = pm_fund = None
    if study.pm_required:
        reserve_fund, pm_fund = run_split_funds(params, components, study.solver)

    result = ReserveStudyResult(
        years=years,
        summary=build_summary(years[0]),
        expenditure_schedule=build_expenditure_schedule(years),
        replacement_schedule=build_replacement_schedule(params, components),
        scenarios=scenarios,
        reserve_fund=reserve_fund,
        pm_fund=pm_fund,
    )

    logger.info(
        "Reserve study complete: %d components, %d years, %d scenarios",
        len(components), len(years), len(scenarios),
    )
    return result
