"""Component funding math — inflated cost, FFB, and component-method funding.

Key formulas:
  inflation multiplier  = (1 + inflation) ^ (year − 1)
  total cost            = quantity × cost_per_unit × CAF × multiplier
  effective age         = useful life − remaining life
  fully funded balance  = total cost × effective age / useful life
  annual funding        = funds needed / remaining life
                          (funds needed / useful life when remaining life is 0)

Every division is guarded: a zero denominator yields 0 instead of raising.
"""

from __future__ import annotations

import numpy as np

from reserve_study.config.component import Component


def inflation_multiplier(inflation_rate: float, year: int) -> float:
    """(1 + inflation_rate) ** (year − 1) for a 1-based projection year."""
    return (1.0 + inflation_rate) ** (year - 1)


def inflation_schedule(inflation_rate: float, years: int) -> list[float]:
    """Multipliers for years 1..years, computed once per run.

    Index 0 holds year 1 (always exactly 1.0).
    """
    exponents = np.arange(years, dtype=np.float64)
    return [float(m) for m in np.power(1.0 + inflation_rate, exponents)]


def adjusted_unit_cost(component: Component, multiplier: float, cost_adjustment_factor: float = 1.0) -> float:
    return component.cost_per_unit * cost_adjustment_factor * multiplier


def component_total_cost(component: Component, multiplier: float, cost_adjustment_factor: float = 1.0) -> float:
    return component.quantity * adjusted_unit_cost(component, multiplier, cost_adjustment_factor)


def effective_age(useful_life: int, remaining_life: int) -> int:
    return useful_life - remaining_life


def full_funding_balance(total_cost: float, useful_life: int, remaining_life: int) -> float:
    """Share of ``total_cost`` corresponding to the life already consumed.

    Stays within [0, total_cost] whenever 0 ≤ remaining_life ≤ useful_life;
    inconsistent inventory data (remaining > useful) is passed through.
    """
    if useful_life <= 0:
        return 0.0
    return total_cost * (effective_age(useful_life, remaining_life) / useful_life)


def annual_funding(funds_needed: float, remaining_life: int, useful_life: int) -> float:
    """Component-method contribution for one year."""
    if remaining_life > 0:
        return funds_needed / remaining_life
    if useful_life > 0:
        return funds_needed / useful_life
    return 0.0


def distribute_reserve(balance: float, ffbs: list[float]) -> list[float]:
    """Split ``balance`` across components in proportion to their FFB.

    Returns zeros for every component unless the total FFB is positive.
    """
    total_ffb = sum(ffbs)
    if total_ffb <= 0:
        return [0.0 for _ in ffbs]
    return [balance * (ffb / total_ffb) for ffb in ffbs]
