"""Engine — reserve projection, cash-flow simulation and funding solver."""

from reserve_study.engine.aggregator import aggregate_by_category, build_summary
from reserve_study.engine.cashflow import simulate_cash_flow
from reserve_study.engine.evaluator import evaluate_year
from reserve_study.engine.funds import run_fund, run_split_funds, split_components
from reserve_study.engine.orchestrator import run_reserve_study
from reserve_study.engine.projection import (
    build_expenditure_schedule,
    build_replacement_schedule,
    run_projection,
)
from reserve_study.engine.replacement import (
    ComponentState,
    CyclicReplacementModel,
    SingleReplacementModel,
)
from reserve_study.engine.solver import (
    find_full_funding_contribution,
    run_scenarios,
    solve_scenario,
)

__all__ = [
    "aggregate_by_category",
    "build_summary",
    "evaluate_year",
    "run_projection",
    "build_expenditure_schedule",
    "build_replacement_schedule",
    "simulate_cash_flow",
    "SingleReplacementModel",
    "CyclicReplacementModel",
    "ComponentState",
    "find_full_funding_contribution",
    "solve_scenario",
    "run_scenarios",
    "run_reserve_study",
    "split_components",
    "run_fund",
    "run_split_funds",
]
