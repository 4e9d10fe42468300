"""Input loading — component inventories from CSV, full studies from YAML.

The engine assumes clean numbers.  This layer is where missing or
unparseable numeric cells become 0:
  1. ``parse_number`` — strips ``$``, commas and whitespace; junk → 0
  2. ``load_components_csv`` — inventory CSV (header aliases accepted)
  3. ``load_study_yaml`` — complete ``ReserveStudyInput`` from YAML
"""

from __future__ import annotations

import csv
import io
import logging
import math
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from reserve_study.config.component import Component, ComponentCategory
from reserve_study.config.study import ReserveStudyInput

logger = logging.getLogger(__name__)


HEADER_ALIASES: dict[str, str] = {
    "id": "id",
    "category": "category",
    "description": "name",
    "name": "name",
    "quantity": "quantity",
    "unit": "measurement",
    "measurement": "measurement",
    "unitcost": "cost_per_unit",
    "unit cost": "cost_per_unit",
    "costperunit": "cost_per_unit",
    "usefullife": "typical_useful_life",
    "useful life": "typical_useful_life",
    "remaininglife": "estimated_remaining_life",
    "remaining life": "estimated_remaining_life",
    "remainingusefullife": "estimated_remaining_life",
    "pm": "pm",
    "preventivemaintenance": "pm",
    "preventive maintenance": "pm",
}
"""Normalized CSV header → component field."""

_NUMBER_JUNK = re.compile(r"[$,\s]")


def parse_number(value: object) -> float:
    """Lenient numeric parse: ``"$1,200.50"`` → 1200.5; empty or junk → 0."""
    if value is None:
        return 0.0
    cleaned = _NUMBER_JUNK.sub("", str(value))
    if not cleaned:
        return 0.0
    try:
        number = float(cleaned)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_flag(value: object) -> bool:
    return str(value or "").strip().strip("'\"").lower() in ("yes", "y", "true", "1")


def _normalize_header(header: str) -> str:
    return header.strip().strip("'\"").lower()


def _read_csv(source: str | Path | io.StringIO) -> list[dict[str, str]]:
    """Read CSV from file path or StringIO, returning list of dicts."""
    if isinstance(source, io.StringIO):
        source.seek(0)
        return list(csv.DictReader(source))
    path = Path(source)
    with path.open(newline="", encoding="utf-8-sig") as f:
        return list(csv.DictReader(f))


def load_components_csv(source: str | Path | io.StringIO) -> list[Component]:
    """Parse a component inventory CSV.

    Expected columns (header row required, case-insensitive):
      category, description, quantity, unit, unitcost, usefullife,
      remaininglife[, pm, id]

    Rows without a description are skipped.  Rows flagged ``pm`` go to the
    Preventive Maintenance category.  Components without an ``id`` get
    ``c1``, ``c2``, ... in file order.

    Parameters
    ----------
    source : str | Path | io.StringIO
        File path or in-memory StringIO with CSV content.

    Returns
    -------
    list[Component]
        Components in file order.  Rows that fail validation (e.g. negative
        costs) are logged and skipped.
    """
    components: list[Component] = []
    for line_no, raw in enumerate(_read_csv(source), start=2):
        row: dict[str, str] = {}
        for header, value in raw.items():
            if header is None:
                continue
            field = HEADER_ALIASES.get(_normalize_header(header))
            if field is not None:
                row[field] = (value or "").strip()

        if not row.get("name"):
            continue

        category = ComponentCategory.parse(row.get("category"))
        if parse_flag(row.get("pm")):
            category = ComponentCategory.PREVENTIVE_MAINTENANCE

        try:
            components.append(Component(
                id=row.get("id") or f"c{len(components) + 1}",
                name=row["name"],
                category=category,
                quantity=parse_number(row.get("quantity")),
                cost_per_unit=parse_number(row.get("cost_per_unit")),
                measurement=row.get("measurement", ""),
                typical_useful_life=int(parse_number(row.get("typical_useful_life"))),
                estimated_remaining_life=int(parse_number(row.get("estimated_remaining_life"))),
            ))
        except ValidationError as exc:
            logger.warning("Skipping component on line %d: %s", line_no, exc.errors()[0]["msg"])
            continue

    logger.info("Loaded %d components", len(components))
    return components


def load_study_yaml(path: str | Path) -> ReserveStudyInput:
    """Load a complete study (financial, components, solver) from YAML.

    An optional top-level ``components_csv`` key names an inventory CSV,
    resolved relative to the YAML file, whose rows are appended to any
    inline ``components``.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    csv_name = data.pop("components_csv", None)
    study = ReserveStudyInput(**data)
    if csv_name:
        extra = load_components_csv(path.parent / csv_name)
        study = study.model_copy(update={"components": [*study.components, *extra]})
    return study
