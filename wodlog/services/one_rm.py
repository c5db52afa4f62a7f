"""One-rep-max estimation.

Hybrid policy for the displayed estimate:
- 1 rep: the weight itself (actual 1RM)
- 2-10 reps: Epley, weight * (1 + reps / 30)
- 11+ reps: Wathan, 100 * weight / (48.8 + 53.8 * e^(-0.075 * reps))

Non-positive weight or reps is "not applicable", never an error: the estimate is 0
and the formula is Formula.NONE.

``estimate_all_formulas`` runs every named formula for comparison displays. The
formula table is an immutable mapping built by ``build_formula_table`` and passed
in, so callers can supply their own.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from wodlog.core.constants import BRZYCKI_REP_LIMIT, EPLEY_MAX_REPS
from wodlog.core.enums import Formula

FormulaFn = Callable[[float, int], float | None]


@dataclass(frozen=True)
class OneRepMax:
    estimate: float
    formula: Formula


def epley(weight: float, reps: int) -> float:
    return weight * (1 + reps / 30.0)


def wathan(weight: float, reps: int) -> float:
    return (100 * weight) / (48.8 + 53.8 * math.exp(-0.075 * reps))


def brzycki(weight: float, reps: int) -> float | None:
    """Undefined once 37 - reps is no longer positive."""
    if reps >= BRZYCKI_REP_LIMIT:
        return None
    return weight * (36.0 / (37.0 - reps))


def lombardi(weight: float, reps: int) -> float:
    return weight * math.pow(reps, 0.10)


def mayhew(weight: float, reps: int) -> float:
    return (100 * weight) / (52.2 + 41.9 * math.exp(-0.055 * reps))


def oconner(weight: float, reps: int) -> float:
    return weight * (1 + reps / 40.0)


def build_formula_table() -> Mapping[str, FormulaFn]:
    """Named formulas in display order. Returns a read-only mapping."""
    return MappingProxyType(
        {
            "Epley": epley,
            "Brzycki": brzycki,
            "Lombardi": lombardi,
            "Mayhew": mayhew,
            "Wathan": wathan,
            "O'Conner": oconner,
        }
    )


DEFAULT_FORMULAS: Mapping[str, FormulaFn] = build_formula_table()


def estimate_1rm(weight: float | None, reps: int | None) -> OneRepMax:
    """Estimate 1RM with the hybrid rep-range policy."""
    if weight is None or reps is None or weight <= 0 or reps <= 0:
        return OneRepMax(0.0, Formula.NONE)
    weight = float(weight)
    if reps == 1:
        return OneRepMax(weight, Formula.ACTUAL)
    if reps <= EPLEY_MAX_REPS:
        return OneRepMax(epley(weight, reps), Formula.EPLEY)
    return OneRepMax(wathan(weight, reps), Formula.WATHAN)


def estimate_all_formulas(
    weight: float,
    reps: int,
    formulas: Mapping[str, FormulaFn] = DEFAULT_FORMULAS,
) -> dict[str, float]:
    """Estimate under every formula in ``formulas`` (plus "Actual" for a single rep).

    Formulas that are undefined for the rep count (return None) are left out.
    """
    if weight <= 0 or reps <= 0:
        return {}
    results: dict[str, float] = {}
    if reps == 1:
        results["Actual"] = float(weight)
    for name, fn in formulas.items():
        value = fn(float(weight), reps)
        if value is not None:
            results[name] = value
    return results


def percent_improvement(current: float, baseline: float) -> float:
    """Percentage change of ``current`` over ``baseline``; 0 when baseline <= 0."""
    if baseline <= 0:
        return 0.0
    return (current - baseline) / baseline * 100


def intensity_percent(weight: float, one_rm: float) -> float:
    """Weight as a percentage of 1RM; 0 when one_rm <= 0."""
    if one_rm <= 0:
        return 0.0
    return weight / one_rm * 100
