"""FastAPI server — HTTP access to the reserve study engine.

Run with:
    uvicorn reserve_study.api.server:app --reload --port 8000

Or:
    python -m reserve_study.api.server

Endpoints:
    GET  /                  — welcome + pointers
    GET  /health            — liveness probe
    GET  /schema            — JSON Schema for ReserveStudyInput
    GET  /study/defaults    — default study as JSON
    POST /study/calculate   — full reserve study (projection, summary, schedules, scenarios)
    POST /study/projection  — status-quo year table + first-year summary
    POST /study/scenarios   — funding scenarios for the requested threshold rates
    POST /study/sensitivity — full-funding contribution tornado data
"""

from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from reserve_study.analysis.sensitivity import run_sensitivity
from reserve_study.config.study import ReserveStudyInput
from reserve_study.engine.aggregator import build_summary
from reserve_study.engine.orchestrator import run_reserve_study
from reserve_study.engine.projection import run_projection
from reserve_study.engine.solver import run_scenarios

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Reserve Study Engine API",
    version="1.0",
    description=(
        "Projects a replacement reserve fund over a multi-year horizon and "
        "solves for the minimum constant contribution that keeps it solvent. "
        "Send a partial study; missing fields use defaults."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Invalid study input built inside an endpoint → 422, like body validation."""
    logger.info("Rejected study input on %s: %d error(s)", request.url.path, exc.error_count())
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(include_url=False, include_context=False, include_input=False)},
    )


# ═══════════════════════════════════════════════════════════════════════════
# Request models
# ═══════════════════════════════════════════════════════════════════════════

class StudyRequest(BaseModel):
    """Request body for the study endpoints. All fields optional."""
    study: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full ReserveStudyInput JSON. Missing fields use defaults. "
                    "Example: {'financial': {'inflation_rate': 0.03}, 'components': [...]}",
    )


class ScenariosRequest(StudyRequest):
    """Request body for /study/scenarios."""
    threshold_rates: list[float | None] | None = Field(
        default=None,
        description="Scenarios to solve. null = full funding; r = current contribution × (1 + r). "
                    "Omit to use the study's solver.threshold_rates.",
    )


class SensitivityRequest(StudyRequest):
    """Request body for /study/sensitivity."""
    sweep_params: list[dict[str, Any]] | None = Field(
        default=None,
        description="Optional override of sweep parameters. "
                    "Format: [{'name': 'Inflation', 'field': 'inflation_rate', 'low_pct': -0.25, 'high_pct': 0.25}]",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def get_default_study() -> dict[str, Any]:
    """Default ReserveStudyInput as a JSON-compatible dict."""
    return ReserveStudyInput().model_dump(mode="json")


def _build_study(overrides: dict[str, Any]) -> ReserveStudyInput:
    """Build a ReserveStudyInput from partial overrides merged onto defaults."""
    defaults = get_default_study()
    _deep_merge(defaults, overrides)
    return ReserveStudyInput(**defaults)


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointers."""
    return {
        "name": "Reserve Study Engine API",
        "version": "1.0",
        "start_here": "GET /study/defaults",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/schema")
def get_schema():
    """Full JSON Schema for ReserveStudyInput — all inputs with types, defaults, constraints."""
    return ReserveStudyInput.model_json_schema()


@app.get("/study/defaults")
def get_defaults():
    return get_default_study()


@app.post("/study/calculate")
def calculate(req: StudyRequest):
    """Run the complete reserve study."""
    study = _build_study(req.study)
    result = run_reserve_study(study)
    return {
        **result.model_dump(mode="json"),
        "contribution_multipliers": result.contribution_multipliers,
    }


@app.post("/study/projection")
def projection(req: StudyRequest):
    """Status-quo projection and the first-year component schedule summary."""
    study = _build_study(req.study)
    years = run_projection(study.financial, study.components)
    return {
        "years": [y.model_dump(mode="json") for y in years],
        "summary": build_summary(years[0]).model_dump(mode="json"),
    }


@app.post("/study/scenarios")
def scenarios(req: ScenariosRequest):
    """Solve the requested funding scenarios."""
    study = _build_study(req.study)
    solver = study.solver
    if req.threshold_rates is not None:
        solver = solver.model_copy(update={"threshold_rates": req.threshold_rates})

    results = run_scenarios(study.financial, study.components, solver)
    return {"scenarios": [r.model_dump(mode="json") for r in results]}


@app.post("/study/sensitivity")
def sensitivity(req: SensitivityRequest):
    """One-at-a-time sweeps ranked by their effect on the full-funding contribution."""
    study = _build_study(req.study)

    sweeps = None
    if req.sweep_params:
        sweeps = [
            (sp.get("name", sp["field"]), sp["field"], sp.get("low_pct", -0.10), sp.get("high_pct", 0.10))
            for sp in req.sweep_params
        ]

    result = run_sensitivity(study.financial, study.components, sweeps, study.solver)
    return {
        "base_contribution": result.base_contribution,
        "tornado_bars": [
            {
                "param_name": bar.param_name,
                "param_field": bar.param_field,
                "base_value": bar.base_value,
                "low_value": bar.low_value,
                "high_value": bar.high_value,
                "contribution_at_low": bar.contribution_at_low,
                "contribution_at_high": bar.contribution_at_high,
                "delta_contribution": bar.delta_contribution,
            }
            for bar in result.bars
        ],
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    logging.basicConfig(
        level=os.getenv("RESERVE_STUDY_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "reserve_study.api.server:app",
        host=os.getenv("RESERVE_STUDY_HOST", "0.0.0.0"),
        port=int(os.getenv("RESERVE_STUDY_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
