"""Sensitivity / tornado analysis on the full-funding contribution.

One-at-a-time sweeps: vary a single financial assumption, re-solve the
full-funding contribution, and rank assumptions by the swing they cause.

Default sweep set:
  - inflation_rate ± 25%
  - interest_rate ± 25%
  - beginning_reserve_balance ± 20%
  - cost_adjustment_factor ± 10%
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from reserve_study.config.component import Component
from reserve_study.config.financial import FinancialParameters
from reserve_study.config.study import SolverConfig
from reserve_study.engine.solver import find_full_funding_contribution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TornadoBar:
    """One bar in the tornado chart."""

    param_name: str
    """Human-readable parameter name."""

    param_field: str
    """``FinancialParameters`` field that was swept."""

    base_value: float
    low_value: float
    high_value: float

    contribution_at_low: float
    """Full-funding contribution when the field = low_value."""

    contribution_at_high: float
    """Full-funding contribution when the field = high_value."""

    delta_contribution: float
    """abs(contribution_at_high − contribution_at_low) — total swing width."""


@dataclass
class SensitivityResult:
    """Complete sensitivity analysis output."""

    base_contribution: float
    bars: list[TornadoBar] = field(default_factory=list)
    """Sorted by delta_contribution, largest first."""


DEFAULT_SWEEPS: list[tuple[str, str, float, float]] = [
    ("Inflation rate", "inflation_rate", -0.25, 0.25),
    ("Interest rate", "interest_rate", -0.25, 0.25),
    ("Beginning reserve balance", "beginning_reserve_balance", -0.20, 0.20),
    ("Cost adjustment factor", "cost_adjustment_factor", -0.10, 0.10),
]


def _swept(params: FinancialParameters, field_name: str, value: float) -> FinancialParameters:
    """Copy of ``params`` with one field replaced.

    Int-typed fields (horizon, beginning year) are rounded so fractional
    sweeps never reach the year loops.
    """
    if FinancialParameters.model_fields[field_name].annotation is int:
        value = round(value)
    return params.model_copy(update={field_name: value})


def _solve(params: FinancialParameters, components: list[Component], config: SolverConfig) -> float:
    contribution, _ = find_full_funding_contribution(params, components, config)
    return contribution


def run_sensitivity(
    params: FinancialParameters,
    components: list[Component],
    sweeps: list[tuple[str, str, float, float]] | None = None,
    config: SolverConfig | None = None,
) -> SensitivityResult:
    """Run the tornado analysis.

    Parameters
    ----------
    params : FinancialParameters
        Base assumptions.
    components : list[Component]
        Inventory (unchanged across sweeps).
    sweeps : list[tuple[name, field, low_pct, high_pct]] | None
        Parameter sweeps. None = use DEFAULT_SWEEPS.  Unknown fields are skipped.
    config : SolverConfig | None
        Solver settings for every re-solve.

    Returns
    -------
    SensitivityResult
        Tornado bars sorted by contribution impact.
    """
    if sweeps is None:
        sweeps = DEFAULT_SWEEPS
    config = config or SolverConfig()

    base_contribution = _solve(params, components, config)
    bars: list[TornadoBar] = []

    for name, field_name, low_pct, high_pct in sweeps:
        if field_name not in FinancialParameters.model_fields:
            logger.warning("Skipping sweep %r: unknown parameter %r", name, field_name)
            continue

        base_val = float(getattr(params, field_name))
        low_val = base_val * (1 + low_pct)
        high_val = base_val * (1 + high_pct)

        low_params = _swept(params, field_name, low_val)
        high_params = _swept(params, field_name, high_val)
        low_val = float(getattr(low_params, field_name))
        high_val = float(getattr(high_params, field_name))
        at_low = _solve(low_params, components, config)
        at_high = _solve(high_params, components, config)

        bars.append(TornadoBar(
            param_name=name,
            param_field=field_name,
            base_value=round(base_val, 6),
            low_value=round(low_val, 6),
            high_value=round(high_val, 6),
            contribution_at_low=round(at_low, 2),
            contribution_at_high=round(at_high, 2),
            delta_contribution=round(abs(at_high - at_low), 2),
        ))

    bars.sort(key=lambda b: b.delta_contribution, reverse=True)
    return SensitivityResult(base_contribution=round(base_contribution, 2), bars=bars)
