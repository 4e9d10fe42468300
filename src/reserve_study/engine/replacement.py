"""Replacement models — when a component's replacement cost is spent.

Two deliberately separate strategies:

  SingleReplacementModel
      The primary schedule.  Each component is replaced exactly once, in
      the fiscal year ``beginning_year + estimated_remaining_life``; after
      that its remaining life stays at 0.

  CyclicReplacementModel
      The solvency simulation.  Each component is replaced every time its
      remaining life reaches 0, then starts a fresh lifecycle at its
      typical useful life.  State is an explicit ``ComponentState`` per
      component, advanced by value once per year.
"""

from __future__ import annotations

from dataclasses import dataclass

from reserve_study.config.component import Component


class SingleReplacementModel:
    """One scheduled replacement per component over the horizon."""

    def __init__(self, beginning_year: int) -> None:
        self.beginning_year = beginning_year

    def remaining_life(self, component: Component, year: int) -> int:
        """Remaining life in 1-based ``year``, floored at 0."""
        return max(0, component.estimated_remaining_life - (year - 1))

    def replacement_year(self, component: Component) -> int:
        return self.beginning_year + component.estimated_remaining_life

    def is_replaced(self, component: Component, fiscal_year: int) -> bool:
        return fiscal_year == self.replacement_year(component)


@dataclass(frozen=True)
class ComponentState:
    """Lifecycle position of one component within a cash-flow simulation."""

    component_id: str
    remaining_life: int
    useful_life: int

    @property
    def is_due(self) -> bool:
        """Replacement cost is spent in a year that starts at remaining life 0."""
        return self.remaining_life == 0

    def advance(self) -> ComponentState:
        """State for the next year: reset after replacement, else age one year."""
        if self.remaining_life <= 0:
            return ComponentState(self.component_id, self.useful_life, self.useful_life)
        return ComponentState(self.component_id, self.remaining_life - 1, self.useful_life)


class CyclicReplacementModel:
    """Perpetual replace-and-reset lifecycle used by the cash-flow simulator."""

    @staticmethod
    def initial_states(components: list[Component]) -> tuple[ComponentState, ...]:
        """One state per component, positionally aligned with ``components``."""
        return tuple(
            ComponentState(
                component_id=c.id,
                remaining_life=c.estimated_remaining_life,
                useful_life=c.typical_useful_life,
            )
            for c in components
        )

    @staticmethod
    def advance(states: tuple[ComponentState, ...]) -> tuple[ComponentState, ...]:
        return tuple(s.advance() for s in states)
