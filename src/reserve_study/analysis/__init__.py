"""Analysis overlays built on top of the engine."""

from reserve_study.analysis.sensitivity import SensitivityResult, TornadoBar, run_sensitivity

__all__ = ["SensitivityResult", "TornadoBar", "run_sensitivity"]
