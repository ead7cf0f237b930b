"""Projection engine: time-value primitives, solver and wealth simulator."""

from backend.core.models import (
    CalculationResults,
    CalculatorInputs,
    SolverBreakdown,
    YearlyWealth,
)
from backend.core.simulator import simulate
from backend.core.solver import derive_breakdown, solve

__all__ = [
    "CalculationResults",
    "CalculatorInputs",
    "SolverBreakdown",
    "YearlyWealth",
    "derive_breakdown",
    "simulate",
    "solve",
]
