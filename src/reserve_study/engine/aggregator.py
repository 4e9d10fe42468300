"""Category aggregation — component states rolled up per category and overall.

Two-level reduction: each category sums its own members, then
``overall`` sums the category totals.  Because every component maps to
exactly one category (unknown labels go to ``Other``), ``overall`` equals
a direct sum over all components.
"""

from __future__ import annotations

from collections.abc import Iterable

from reserve_study.config.component import ComponentCategory
from reserve_study.models.results import (
    OVERALL_KEY,
    CategorySummary,
    CategoryTotals,
    ComponentYearState,
    StudySummary,
    YearEntry,
)


_SUMMED_FIELDS: tuple[tuple[str, str], ...] = (
    ("total_cost", "total_cost"),
    ("full_funding_balance", "full_funding_balance"),
    ("current_reserve_funds", "current_reserve_funds"),
    ("funds_needed", "funds_needed"),
    ("annual_funding", "annual_funding"),
    ("expenditures", "expenditure"),
)
"""(CategoryTotals field, ComponentYearState field) pairs."""


def _sum_states(states: list[ComponentYearState]) -> CategoryTotals:
    sums = {
        total_field: sum(getattr(s, state_field) for s in states)
        for total_field, state_field in _SUMMED_FIELDS
    }
    return CategoryTotals(count=len(states), **sums)


def _sum_totals(totals: list[CategoryTotals]) -> CategoryTotals:
    sums = {
        total_field: sum(getattr(t, total_field) for t in totals)
        for total_field, _ in _SUMMED_FIELDS
    }
    return CategoryTotals(count=sum(t.count for t in totals), **sums)


def aggregate_by_category(states: list[ComponentYearState]) -> dict[str, CategoryTotals]:
    """Per-category totals keyed by category value, plus ``"overall"``."""
    totals: dict[str, CategoryTotals] = {}
    for category in ComponentCategory:
        members = [s for s in states if s.category == category]
        totals[category.value] = _sum_states(members)

    totals[OVERALL_KEY] = _sum_totals(list(totals.values()))
    return totals


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def build_summary(
    year_one: YearEntry,
    categories: Iterable[ComponentCategory] | None = None,
) -> StudySummary:
    """Headline component schedule summary from the first projection year.

    ``categories`` limits the per-category rows (e.g. to one fund's
    categories); None keeps every category.
    """
    keep = None if categories is None else {c.value for c in categories}
    by_category = [
        CategorySummary(
            category=key,
            percent_funded=_ratio(totals.current_reserve_funds, totals.full_funding_balance),
            **totals.model_dump(),
        )
        for key, totals in year_one.totals.items()
        if key != OVERALL_KEY and (keep is None or key in keep)
    ]

    overall = year_one.overall
    return StudySummary(
        total_components=len(year_one.components),
        total_replacement_cost=overall.total_cost,
        current_reserve_funds=year_one.reserve_balance.beginning_balance,
        recommended_annual_funding=overall.annual_funding,
        percent_funded=year_one.reserve_balance.percent_funded,
        by_category=by_category,
    )
