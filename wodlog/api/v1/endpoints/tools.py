"""QoL tools: one-rep-max calculator (pure logic, no DB)."""

from fastapi import APIRouter, Query
from pydantic import BaseModel

from wodlog.services.one_rm import estimate_1rm, estimate_all_formulas, intensity_percent

router = APIRouter()

# Percentages of 1RM shown in the training-load table
LOAD_PERCENTAGES = (95, 90, 85, 80, 75, 70, 65, 60)


class TrainingLoad(BaseModel):
    percent: int
    weight: float


class OneRepMaxResponse(BaseModel):
    weight: float
    reps: int
    estimated_1rm: float
    formula: str
    intensity_percent: float  # the lifted weight as % of the estimate
    all_formulas: dict[str, float]
    training_loads: list[TrainingLoad]


@router.get("/one-rep-max", response_model=OneRepMaxResponse)
async def one_rep_max(
    weight: float = Query(..., gt=0),
    reps: int = Query(..., ge=1, le=100),
):
    """
    Estimate 1RM from a set: actual for 1 rep, Epley for 2-10, Wathan for 11+.
    Also returns every formula side by side and a table of working weights.
    """
    result = estimate_1rm(weight, reps)
    return OneRepMaxResponse(
        weight=weight,
        reps=reps,
        estimated_1rm=round(result.estimate, 2),
        formula=result.formula.value,
        intensity_percent=round(intensity_percent(weight, result.estimate), 1),
        all_formulas={name: round(v, 2) for name, v in estimate_all_formulas(weight, reps).items()},
        training_loads=[
            TrainingLoad(percent=p, weight=round(result.estimate * p / 100, 1)) for p in LOAD_PERCENTAGES
        ],
    )
