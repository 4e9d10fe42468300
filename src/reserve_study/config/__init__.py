"""Configuration models — every engine input type."""

from reserve_study.config.component import Component, ComponentCategory
from reserve_study.config.financial import FinancialParameters
from reserve_study.config.study import DEFAULT_THRESHOLD_RATES, ReserveStudyInput, SolverConfig

__all__ = [
    "Component",
    "ComponentCategory",
    "FinancialParameters",
    "SolverConfig",
    "ReserveStudyInput",
    "DEFAULT_THRESHOLD_RATES",
]
