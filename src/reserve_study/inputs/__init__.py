"""Input loaders — the data-loading layer in front of the engine."""

from reserve_study.inputs.loader import (
    load_components_csv,
    load_study_yaml,
    parse_flag,
    parse_number,
)

__all__ = [
    "load_components_csv",
    "load_study_yaml",
    "parse_flag",
    "parse_number",
]
