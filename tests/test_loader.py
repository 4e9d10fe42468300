"""Tests for inputs/loader.py — CSV inventories and YAML studies."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from reserve_study.config import ComponentCategory
from reserve_study.inputs import load_components_csv, load_study_yaml, parse_number
from reserve_study.inputs.loader import parse_flag


SCENARIOS_DIR = Path(__file__).resolve().parent.parent / "scenarios"


class TestParseNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1200", 1200.0),
            ("$1,500", 1500.0),
            (" 4.50 ", 4.5),
            ("", 0.0),
            (None, 0.0),
            ("n/a", 0.0),
            ("nan", 0.0),
            (12, 12.0),
        ],
    )
    def test_lenient(self, raw, expected):
        assert parse_number(raw) == expected

    def test_flags(self):
        assert parse_flag("Yes")
        assert parse_flag("'y'")
        assert not parse_flag("No")
        assert not parse_flag(None)


class TestLoadComponentsCsv:
    CSV = (
        "Category,Description,Quantity,Unit,UnitCost,UsefulLife,RemainingLife,PM\n"
        "Sitework,Asphalt Paving,5000,SF,5.50,20,12,No\n"
        "Electrical,Pole Lights,18,Each,\"$1,500\",20,14,No\n"
        "Plumbing,Sump Pumps,2,Each,2500,12,5,\n"
        ",,,,,,,\n"
        "Mechanical,Exterior Paint,8500,SF,4.50,8,3,Yes\n"
        "Special,Pool Cover,1,LS,junk,,abc,No\n"
    )

    def _load(self):
        return load_components_csv(io.StringIO(self.CSV))

    def test_rows_in_file_order(self):
        components = self._load()
        assert [c.name for c in components] == [
            "Asphalt Paving", "Pole Lights", "Sump Pumps", "Exterior Paint", "Pool Cover",
        ]
        assert [c.id for c in components] == ["c1", "c2", "c3", "c4", "c5"]

    def test_numbers_parsed(self):
        paving, lights = self._load()[:2]
        assert paving.quantity == 5000
        assert paving.cost_per_unit == 5.5
        assert paving.typical_useful_life == 20
        assert paving.estimated_remaining_life == 12
        assert paving.measurement == "SF"
        assert lights.cost_per_unit == 1500

    def test_category_routing(self):
        components = self._load()
        assert components[0].category is ComponentCategory.SITEWORK
        assert components[2].category is ComponentCategory.OTHER
        assert components[3].category is ComponentCategory.PREVENTIVE_MAINTENANCE

    def test_junk_becomes_zero(self):
        cover = self._load()[-1]
        assert cover.cost_per_unit == 0.0
        assert cover.typical_useful_life == 0
        assert cover.estimated_remaining_life == 0

    def test_invalid_rows_skipped(self):
        csv_text = (
            "description,quantity,unitcost,usefullife,remaininglife\n"
            "Bad Row,-3,100,10,5\n"
            "Good Row,1,100,10,5\n"
        )
        components = load_components_csv(io.StringIO(csv_text))
        assert [c.name for c in components] == ["Good Row"]

    def test_reads_file(self):
        components = load_components_csv(SCENARIOS_DIR / "sample_components.csv")
        assert len(components) == 8
        assert components[4].cost_per_unit == 1500


class TestLoadStudyYaml:
    def test_sample_site(self):
        study = load_study_yaml(SCENARIOS_DIR / "sample_site.yaml")

        assert study.financial.beginning_reserve_balance == 150_000
        assert study.financial.current_annual_contribution == 45_000
        assert study.financial.pm_beginning_balance == 12_000
        assert study.pm_required is True
        assert study.solver.threshold_rates == [None, 0.10, 0.05, 0.0]
        assert len(study.components) == 10
        assert [c.id for c in study.components[:2]] == ["roof", "hvac"]
        assert study.components[-1].category is ComponentCategory.PREVENTIVE_MAINTENANCE

    def test_inline_only(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text(
            "financial:\n"
            "  beginning_year: 2030\n"
            "components:\n"
            "  - name: Fence\n"
            "    category: site work\n"
            "    quantity: 100\n"
            "    cost_per_unit: 20\n"
            "    typical_useful_life: 15\n"
            "    estimated_remaining_life: 6\n",
            encoding="utf-8",
        )
        study = load_study_yaml(path)
        assert study.financial.beginning_year == 2030
        assert study.financial.projection_years == 30
        assert study.components[0].category is ComponentCategory.SITEWORK

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        study = load_study_yaml(path)
        assert study.components == []
        assert study.financial.beginning_year == 2025
