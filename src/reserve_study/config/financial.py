"""Financial parameters — fixed for one reserve study run."""

from pydantic import BaseModel, ConfigDict, Field


class FinancialParameters(BaseModel):
    """Site-level economic assumptions.

    Rates are annual fractions (0.03 = 3%).  The engine projects
    ``projection_years + 1`` years: the extra boundary year gives the
    funding solver one year of lookahead past the reported horizon.
    """

    model_config = ConfigDict(frozen=True)

    beginning_year: int = Field(default=2025, description="Fiscal year of projection year 1")
    projection_years: int = Field(
        default=30, ge=1,
        description="Reported horizon in years (one extra boundary year is computed).",
    )
    inflation_rate: float = Field(
        default=0.03, gt=-1.0,
        description="Annual cost inflation applied as (1 + rate) ** (year − 1).",
    )
    interest_rate: float = Field(
        default=0.01, gt=-1.0,
        description="Annual interest earned on the beginning-of-year reserve balance.",
    )
    beginning_reserve_balance: float = Field(
        default=0.0,
        description="Reserve fund balance at the start of year 1.",
    )
    current_annual_contribution: float = Field(
        default=0.0, ge=0,
        description="Status-quo contribution deposited every year.",
    )

    # --- Preventive-maintenance fund (used when the study keeps PM separate) ---
    pm_beginning_balance: float = Field(
        default=0.0,
        description="PM fund balance at the start of year 1.",
    )
    pm_annual_contribution: float = Field(
        default=0.0, ge=0,
        description="Status-quo contribution to the PM fund.",
    )

    # --- Cost adjustment ---
    cost_adjustment_factor: float = Field(
        default=1.0, ge=0,
        description="Regional / contractor multiplier applied to every unit cost "
                    "before inflation. 1.0 = costs as entered.",
    )

    @property
    def total_years(self) -> int:
        """Years actually computed (reported horizon + boundary year)."""
        return self.projection_years + 1

    def fiscal_year(self, year: int) -> int:
        """Fiscal year for a 1-based projection year index."""
        return self.beginning_year + year - 1
