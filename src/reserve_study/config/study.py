"""Top-level study input — bundles financial parameters, inventory and solver settings."""

from __future__ import annotations

from pydantic import BaseModel, Field

from reserve_study.config.component import Component
from reserve_study.config.financial import FinancialParameters


DEFAULT_THRESHOLD_RATES: list[float | None] = [None, 0.10, 0.05, 0.00]
"""Full funding, then the 10% / 5% / baseline threshold scenarios."""


class SolverConfig(BaseModel):
    """Funding-solver settings.

    The full-funding search bisects ``[0, total_replacement_cost × upper_bound_fraction]``
    for a fixed number of iterations; 100 halvings is far below a cent for
    any realistic replacement cost.
    """

    iterations: int = Field(default=100, ge=1, le=1_000, description="Bisection steps")
    upper_bound_fraction: float = Field(
        default=0.5, gt=0,
        description="Search ceiling as a fraction of total year-1 replacement cost.",
    )
    threshold_rates: list[float | None] = Field(
        default_factory=lambda: list(DEFAULT_THRESHOLD_RATES),
        description="Scenarios to evaluate. None = full funding; a number r = "
                    "current contribution × (1 + r).",
    )


class ReserveStudyInput(BaseModel):
    """Complete input bundle for one reserve study run."""

    financial: FinancialParameters = Field(default_factory=FinancialParameters)
    components: list[Component] = Field(default_factory=list)
    solver: SolverConfig = Field(default_factory=SolverConfig)
    pm_required: bool = Field(
        default=False,
        description="Keep Preventive Maintenance components in their own fund, "
                    "with its own balance, contribution and schedules.",
    )
