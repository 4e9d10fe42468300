"""Result models — engine output contracts."""

from reserve_study.models.results import (
    OVERALL_KEY,
    CashFlowYear,
    CategorySummary,
    CategoryTotals,
    ComponentYearState,
    FundResult,
    ReplacedComponent,
    ReplacementScheduleItem,
    ReserveBalance,
    ReserveStudyResult,
    ScenarioResult,
    StudySummary,
    YearEntry,
)

__all__ = [
    "OVERALL_KEY",
    "CashFlowYear",
    "CategorySummary",
    "CategoryTotals",
    "ComponentYearState",
    "FundResult",
    "ReplacedComponent",
    "ReplacementScheduleItem",
    "ReserveBalance",
    "ReserveStudyResult",
    "ScenarioResult",
    "StudySummary",
    "YearEntry",
]
