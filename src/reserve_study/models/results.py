"""Result types — the contract between the engine and its consumers.

Everything here is derived: built fresh on each engine run and never
mutated afterwards.  Values are unrounded; presentation layers round.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from reserve_study.config.component import ComponentCategory


OVERALL_KEY = "overall"
"""Key of the all-category pseudo-bucket in ``YearEntry.totals``."""


# ═══════════════════════════════════════════════════════════════════════════
# Primary projection (status-quo contribution)
# ═══════════════════════════════════════════════════════════════════════════

class ComponentYearState(BaseModel):
    """One component in one projection year."""

    component_id: str
    name: str
    category: ComponentCategory

    cost_per_unit: float
    """Unit cost after cost adjustment and inflation."""

    total_cost: float
    """quantity × inflated cost per unit."""

    remaining_life: int
    """max(0, initial remaining life − (year − 1))."""

    full_funding_balance: float
    """total_cost × effective_age / useful_life."""

    current_reserve_funds: float
    """This component's share of the reserve (distributed in year 1 only)."""

    funds_needed: float
    """total_cost − current_reserve_funds."""

    annual_funding: float
    """Component-method contribution: funds_needed / remaining life."""

    is_replaced: bool
    expenditure: float


class CategoryTotals(BaseModel):
    """Pointwise sum of the member ``ComponentYearState`` records."""

    count: int = 0
    total_cost: float = 0.0
    full_funding_balance: float = 0.0
    current_reserve_funds: float = 0.0
    funds_needed: float = 0.0
    annual_funding: float = 0.0
    expenditures: float = 0.0


class ReplacedComponent(BaseModel):
    name: str
    cost: float


class ReserveBalance(BaseModel):
    """Reserve fund movement for one year."""

    beginning_balance: float
    contributions: float
    interest: float
    expenditures: float
    ending_balance: float
    percent_funded: float
    """beginning_balance / overall FFB (0 when FFB is 0)."""

    replaced_components: list[ReplacedComponent] = Field(default_factory=list)


class YearEntry(BaseModel):
    """One row of the primary projection."""

    year: int
    """1-based projection year."""

    fiscal_year: int
    components: list[ComponentYearState]
    totals: dict[str, CategoryTotals]
    """One entry per ``ComponentCategory`` value plus ``"overall"``."""

    reserve_balance: ReserveBalance

    @property
    def overall(self) -> CategoryTotals:
        return self.totals[OVERALL_KEY]


# ═══════════════════════════════════════════════════════════════════════════
# First-year summary
# ═══════════════════════════════════════════════════════════════════════════

class CategorySummary(CategoryTotals):
    """Category totals plus the category's own percent funded."""

    category: str
    percent_funded: float
    """current_reserve_funds / FFB (0 when FFB is 0)."""


class StudySummary(BaseModel):
    """Headline (year 1) component schedule summary."""

    total_components: int
    total_replacement_cost: float
    current_reserve_funds: float
    recommended_annual_funding: float
    percent_funded: float
    by_category: list[CategorySummary]


# ═══════════════════════════════════════════════════════════════════════════
# Scenario cash flow (cyclic replacement)
# ═══════════════════════════════════════════════════════════════════════════

class CashFlowYear(BaseModel):
    """One simulated year under a constant contribution."""

    year: int
    fiscal_year: int
    beginning_balance: float
    contributions: float
    interest: float
    expenditures: float
    ending_balance: float
    total_ffb: float
    total_cost: float


class ScenarioResult(BaseModel):
    """Resolved contribution and cash flow for one funding scenario."""

    threshold_rate: float | None
    """None = full funding; otherwise the multiplier applied to the current contribution."""

    label: str
    average_annual_contribution: float
    years: list[CashFlowYear]
    total_contributions: float
    yearly_annual_funding: list[float]
    """Component-method requirement per year, constrained to the simulated balance."""

    minimum_balance: float
    """Lowest ending balance across the simulated years."""

    search_iterations: int = 0
    """Bisection steps used (0 for flat-multiplier scenarios)."""


# ═══════════════════════════════════════════════════════════════════════════
# Schedules
# ═══════════════════════════════════════════════════════════════════════════

class ReplacementScheduleItem(BaseModel):
    """Next scheduled replacement of one component."""

    year: int
    component_id: str
    description: str
    category: ComponentCategory
    base_cost: float
    """quantity × cost per unit, unadjusted."""

    adjusted_cost: float
    """base × cost adjustment factor × inflation to the replacement year, whole currency."""

    is_preventive_maintenance: bool


ExpenditureSchedule = dict[str, dict[str, dict[int, float]]]
"""category → component name → fiscal year → expenditure."""


# ═══════════════════════════════════════════════════════════════════════════
# Split funds (reserve + preventive maintenance)
# ═══════════════════════════════════════════════════════════════════════════

class FundResult(BaseModel):
    """One fund of a split study, computed from its own components and balance."""

    fund: str
    """Either ``"reserve"`` or ``"pm"``."""

    component_ids: list[str]
    summary: StudySummary
    expenditure_schedule: ExpenditureSchedule
    replacement_schedule: list[ReplacementScheduleItem]
    full_funding: ScenarioResult
    """Minimum solvent contribution for this fund on its own."""


# ═══════════════════════════════════════════════════════════════════════════
# Full study
# ═══════════════════════════════════════════════════════════════════════════

class ReserveStudyResult(BaseModel):
    """Everything one reserve study run produces."""

    years: list[YearEntry]
    summary: StudySummary
    expenditure_schedule: ExpenditureSchedule
    replacement_schedule: list[ReplacementScheduleItem]
    scenarios: list[ScenarioResult]

    reserve_fund: FundResult | None = None
    """Non-PM components only; set when the study keeps PM separate."""

    pm_fund: FundResult | None = None
    """Preventive Maintenance components only; set with ``reserve_fund``."""

    def scenario(self, threshold_rate: float | None) -> ScenarioResult | None:
        """Look up the scenario solved for ``threshold_rate``."""
        for result in self.scenarios:
            if result.threshold_rate == threshold_rate:
                return result
        return None

    @property
    def contribution_multipliers(self) -> dict[str, float]:
        """Each scenario's contribution relative to the full-funding contribution."""
        full = self.scenario(None)
        if full is None or full.average_annual_contribution <= 0:
            return {s.label: 0.0 for s in self.scenarios}
        return {
            s.label: s.average_annual_contribution / full.average_annual_contribution
            for s in self.scenarios
        }
