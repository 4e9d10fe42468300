"""Component inventory — one physical asset in the reserve study."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ComponentCategory(str, Enum):
    """Closed set of reserve categories.

    Unknown category strings are routed to ``OTHER`` rather than dropped,
    so every component lands in exactly one aggregation bucket.
    """

    SITEWORK = "Sitework"
    BUILDING = "Building"
    INTERIOR = "Interior"
    EXTERIOR = "Exterior"
    ELECTRICAL = "Electrical"
    SPECIAL = "Special"
    MECHANICAL = "Mechanical"
    PREVENTIVE_MAINTENANCE = "Preventive Maintenance"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: object) -> ComponentCategory:
        """Map a free-form label onto a category (case-insensitive)."""
        if isinstance(value, cls):
            return value
        label = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == label:
                return member
        return _CATEGORY_ALIASES.get(label, cls.OTHER)


_CATEGORY_ALIASES: dict[str, ComponentCategory] = {
    "building exterior": ComponentCategory.EXTERIOR,
    "building interior": ComponentCategory.INTERIOR,
    "site work": ComponentCategory.SITEWORK,
    "pm": ComponentCategory.PREVENTIVE_MAINTENANCE,
    "maintenance": ComponentCategory.PREVENTIVE_MAINTENANCE,
}


class Component(BaseModel):
    """One asset line item, immutable for the duration of a run.

    Lives are whole years.  ``estimated_remaining_life`` may exceed
    ``typical_useful_life`` when the inventory data is inconsistent; the
    engine does not reject that case.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Stable identifier from the inventory")
    name: str = Field(default="", description="Component description, e.g. 'Asphalt Paving'")
    category: ComponentCategory = Field(
        default=ComponentCategory.OTHER,
        description="Reserve category. Unknown labels map to 'Other'.",
    )
    quantity: float = Field(default=0.0, ge=0, description="Number of units")
    cost_per_unit: float = Field(
        default=0.0, ge=0,
        description="Current (pre-inflation) replacement cost per unit",
    )
    measurement: str = Field(default="", description="Unit label (SF, LF, Each, LS, ...)")
    typical_useful_life: int = Field(
        default=0, ge=0,
        description="Years between replacements. 0 is tolerated and yields zero funding.",
    )
    estimated_remaining_life: int = Field(
        default=0, ge=0,
        description="Years until the next scheduled replacement (0 = due now).",
    )

    @field_validator("category", mode="before")
    @classmethod
    def _route_category(cls, value: object) -> ComponentCategory:
        return ComponentCategory.parse(value)

    @property
    def base_cost(self) -> float:
        """Unadjusted, uninflated replacement cost: quantity × cost per unit."""
        return self.quantity * self.cost_per_unit

    @property
    def is_preventive_maintenance(self) -> bool:
        return self.category is ComponentCategory.PREVENTIVE_MAINTENANCE
