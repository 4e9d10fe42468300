"""Projection driver — the status-quo ("current contribution") trajectory.

Runs the single-year evaluator for years 1..projection_years + 1,
threading each year's ending balance into the next year's beginning
balance.  Also derives the expenditure and replacement schedules shown
alongside the projection.
"""

from __future__ import annotations

from collections.abc import Iterable

from reserve_study.config.component import Component, ComponentCategory
from reserve_study.config.financial import FinancialParameters
from reserve_study.engine.component_model import inflation_schedule
from reserve_study.engine.evaluator import evaluate_year, year_one_reserve_distribution
from reserve_study.engine.replacement import SingleReplacementModel
from reserve_study.models.results import (
    ExpenditureSchedule,
    ReplacementScheduleItem,
    YearEntry,
)


def run_projection(params: FinancialParameters, components: list[Component]) -> list[YearEntry]:
    """Project the reserve fund under the current annual contribution.

    Returns ``projection_years + 1`` ordered year entries.
    """
    multipliers = inflation_schedule(params.inflation_rate, params.total_years)
    distribution = year_one_reserve_distribution(params, components)

    years: list[YearEntry] = []
    balance = params.beginning_reserve_balance
    for year in range(1, params.total_years + 1):
        entry = evaluate_year(
            year,
            params,
            components,
            beginning_balance=balance,
            reserve_distribution=distribution if year == 1 else None,
            multiplier=multipliers[year - 1],
        )
        years.append(entry)
        balance = entry.reserve_balance.ending_balance

    return years


def build_expenditure_schedule(
    years: list[YearEntry],
    categories: Iterable[ComponentCategory] | None = None,
) -> ExpenditureSchedule:
    """Category → component name → fiscal year → expenditure matrix.

    Every requested category appears (possibly empty; None = all
    categories); every component gets an entry for every projected fiscal
    year.  Components sharing a name within a category have their
    expenditures summed.
    """
    if categories is None:
        categories = ComponentCategory
    schedule: ExpenditureSchedule = {c.value: {} for c in categories}
    for entry in years:
        for state in entry.components:
            if state.category.value not in schedule:
                continue
            row = schedule[state.category.value].setdefault(state.name, {})
            row[entry.fiscal_year] = row.get(entry.fiscal_year, 0.0) + state.expenditure
    return schedule


def build_replacement_schedule(
    params: FinancialParameters,
    components: list[Component],
) -> list[ReplacementScheduleItem]:
    """Next scheduled replacement of each component, sorted by year.

    The adjusted cost inflates the base cost to the replacement year:
    base × CAF × (1 + inflation) ** remaining_life, rounded to whole currency.
    """
    replacement = SingleReplacementModel(params.beginning_year)
    items: list[ReplacementScheduleItem] = []
    for comp in components:
        rul = comp.estimated_remaining_life
        adjusted = comp.base_cost * params.cost_adjustment_factor * (1.0 + params.inflation_rate) ** rul
        items.append(ReplacementScheduleItem(
            year=replacement.replacement_year(comp),
            component_id=comp.id,
            description=comp.name,
            category=comp.category,
            base_cost=comp.base_cost,
            adjusted_cost=float(round(adjusted)),
            is_preventive_maintenance=comp.is_preventive_maintenance,
        ))

    items.sort(key=lambda item: item.year)
    return items
