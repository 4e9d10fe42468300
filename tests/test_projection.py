"""Tests for engine/evaluator.py and engine/projection.py — the status-quo projection."""

from __future__ import annotations

import pytest

from reserve_study.config import Component, ComponentCategory, FinancialParameters
from reserve_study.engine.evaluator import evaluate_year, year_one_reserve_distribution
from reserve_study.engine.projection import (
    build_expenditure_schedule,
    build_replacement_schedule,
    run_projection,
)


# ═══════════════════════════════════════════════════════════════════════════
# Worked single-component example
# ═══════════════════════════════════════════════════════════════════════════

class TestSingleComponentExample:
    def test_year_one_component_state(self, params: FinancialParameters, paving: Component):
        years = run_projection(params, [paving])
        state = years[0].components[0]

        assert state.total_cost == pytest.approx(10_000)
        assert state.remaining_life == 5
        assert state.full_funding_balance == pytest.approx(5_000)
        assert state.current_reserve_funds == pytest.approx(2_000)
        assert state.funds_needed == pytest.approx(8_000)
        assert state.annual_funding == pytest.approx(1_600)
        assert state.is_replaced is False
        assert state.expenditure == 0.0

    def test_year_one_reserve_balance(self, params: FinancialParameters, paving: Component):
        rb = run_projection(params, [paving])[0].reserve_balance
        assert rb.beginning_balance == pytest.approx(2_000)
        assert rb.contributions == pytest.approx(500)
        assert rb.interest == 0.0
        assert rb.expenditures == 0.0
        assert rb.ending_balance == pytest.approx(2_500)
        assert rb.percent_funded == pytest.approx(0.4)

    def test_replaced_once_in_year_six(self, params: FinancialParameters, paving: Component):
        years = run_projection(params, [paving])
        year6 = years[5]

        assert year6.fiscal_year == 2030
        assert year6.components[0].remaining_life == 0
        assert year6.components[0].is_replaced is True
        assert year6.components[0].expenditure == pytest.approx(10_000)
        assert year6.reserve_balance.replaced_components[0].name == "Asphalt Paving"
        assert year6.reserve_balance.ending_balance == pytest.approx(4_500 + 500 - 10_000)

        replaced_years = [y.year for y in years if y.components[0].is_replaced]
        assert replaced_years == [6]

    def test_remaining_life_floors_at_zero(self, params: FinancialParameters, paving: Component):
        years = run_projection(params, [paving])
        assert [y.components[0].remaining_life for y in years[:8]] == [5, 4, 3, 2, 1, 0, 0, 0]

    def test_later_years_carry_no_component_reserve(self, params: FinancialParameters, paving: Component):
        year2 = run_projection(params, [paving])[1].components[0]
        assert year2.current_reserve_funds == 0.0
        assert year2.funds_needed == pytest.approx(10_000)
        assert year2.annual_funding == pytest.approx(10_000 / 4)


# ═══════════════════════════════════════════════════════════════════════════
# Projection driver
# ═══════════════════════════════════════════════════════════════════════════

class TestProjectionDriver:
    def test_computes_boundary_year(self, params: FinancialParameters, paving: Component):
        years = run_projection(params, [paving])
        assert len(years) == 31
        assert [y.year for y in years] == list(range(1, 32))
        assert years[-1].fiscal_year == 2055

    def test_balances_thread_between_years(self, inflated_params, inventory):
        years = run_projection(inflated_params, inventory)
        for prev, cur in zip(years, years[1:]):
            assert cur.reserve_balance.beginning_balance == prev.reserve_balance.ending_balance

    def test_interest_on_beginning_balance(self, inflated_params, inventory):
        years = run_projection(inflated_params, inventory)
        for y in years:
            rb = y.reserve_balance
            assert rb.interest == pytest.approx(rb.beginning_balance * 0.01)
            assert rb.ending_balance == pytest.approx(
                rb.beginning_balance + rb.contributions + rb.interest - rb.expenditures
            )

    def test_costs_inflate(self, inflated_params, inventory):
        years = run_projection(inflated_params, inventory)
        roof_y1 = years[0].components[0].total_cost
        roof_y5 = years[4].components[0].total_cost
        assert roof_y5 == pytest.approx(roof_y1 * 1.03 ** 4)

    def test_cost_adjustment_factor_scales_costs(self, params, paving):
        adjusted = params.model_copy(update={"cost_adjustment_factor": 1.25})
        state = run_projection(adjusted, [paving])[0].components[0]
        assert state.cost_per_unit == pytest.approx(12_500)
        assert state.total_cost == pytest.approx(12_500)

    def test_year_one_distribution_sums_to_balance(self, inflated_params, inventory):
        years = run_projection(inflated_params, inventory)
        total = sum(s.current_reserve_funds for s in years[0].components)
        assert total == pytest.approx(60_000, abs=1e-6)

    def test_zero_ffb_distributes_nothing(self, params):
        fresh = [
            Component(id="a", quantity=1, cost_per_unit=1_000, typical_useful_life=10, estimated_remaining_life=10),
            Component(id="b", quantity=2, cost_per_unit=500, typical_useful_life=5, estimated_remaining_life=5),
        ]
        assert year_one_reserve_distribution(params, fresh) == [0.0, 0.0]
        year1 = run_projection(params, fresh)[0]
        assert year1.reserve_balance.percent_funded == 0.0

    def test_inconsistent_lives_distribute_nothing(self, params):
        stale = [
            Component(id="a", quantity=1, cost_per_unit=10_000, typical_useful_life=10, estimated_remaining_life=5),
            Component(id="b", quantity=1, cost_per_unit=10_000, typical_useful_life=10, estimated_remaining_life=20),
        ]
        assert year_one_reserve_distribution(params, stale) == [0.0, 0.0]
        year1 = run_projection(params, stale)[0]
        assert year1.overall.full_funding_balance == pytest.approx(-5_000)
        assert year1.overall.current_reserve_funds == 0.0
        assert year1.reserve_balance.percent_funded == 0.0

    def test_degenerate_inventory_yields_zeros(self):
        params = FinancialParameters(
            beginning_year=2025, inflation_rate=0.03, interest_rate=0.0,
            beginning_reserve_balance=0, current_annual_contribution=0,
        )
        zero = [Component(id="z", quantity=0, cost_per_unit=0, typical_useful_life=0, estimated_remaining_life=0)]
        for y in run_projection(params, zero):
            assert y.overall.total_cost == 0.0
            assert y.overall.annual_funding == 0.0
            assert y.reserve_balance.ending_balance == 0.0

    def test_empty_inventory(self, params):
        years = run_projection(params, [])
        assert len(years) == 31
        assert years[0].overall.count == 0
        assert years[-1].reserve_balance.ending_balance == pytest.approx(2_000 + 500 * 31)

    def test_evaluate_year_without_multiplier(self, inflated_params, inventory):
        direct = evaluate_year(4, inflated_params, inventory, beginning_balance=1_000.0)
        projected = run_projection(inflated_params, inventory)[3]
        assert direct.overall.total_cost == pytest.approx(projected.overall.total_cost)

    def test_deterministic(self, inflated_params, inventory):
        first = [y.model_dump() for y in run_projection(inflated_params, inventory)]
        second = [y.model_dump() for y in run_projection(inflated_params, inventory)]
        assert first == second


# ═══════════════════════════════════════════════════════════════════════════
# Schedules
# ═══════════════════════════════════════════════════════════════════════════

class TestExpenditureSchedule:
    def test_matrix_shape(self, params, paving):
        years = run_projection(params, [paving])
        schedule = build_expenditure_schedule(years)

        assert set(schedule) == {c.value for c in ComponentCategory}
        row = schedule["Sitework"]["Asphalt Paving"]
        assert len(row) == 31
        assert row[2030] == pytest.approx(10_000)
        assert sum(row.values()) == pytest.approx(10_000)
        assert schedule["Building"] == {}

    def test_unknown_category_lands_in_other(self, inflated_params, inventory):
        schedule = build_expenditure_schedule(run_projection(inflated_params, inventory))
        assert "Sump Pumps" in schedule["Other"]
        assert "Gutters" in schedule["Exterior"]


class TestReplacementSchedule:
    def test_sorted_by_year(self, inflated_params, inventory):
        items = build_replacement_schedule(inflated_params, inventory)
        assert [i.year for i in items] == sorted(i.year for i in items)
        assert items[0].component_id == "pumps"
        assert items[0].year == 2025

    def test_adjusted_cost_inflates_to_replacement_year(self, inflated_params, inventory):
        items = {i.component_id: i for i in build_replacement_schedule(inflated_params, inventory)}
        roof = items["roof"]
        assert roof.year == 2035
        assert roof.base_cost == pytest.approx(144_000)
        assert roof.adjusted_cost == round(144_000 * 1.03 ** 10)

    def test_preventive_maintenance_flagged(self, inflated_params, inventory):
        items = {i.component_id: i for i in build_replacement_schedule(inflated_params, inventory)}
        assert items["paint"].is_preventive_maintenance is True
        assert items["roof"].is_preventive_maintenance is False
