"""Data contracts for the die-with-zero calculator endpoints."""

from __future__ import annotations

import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.core.models import (
    CalculationResults,
    CalculatorInputs,
    SolverBreakdown,
    YearlyWealth,
)


def _finite_or_none(value: float) -> Optional[float]:
    # strict JSON has no Infinity/NaN
    return value if math.isfinite(value) else None


class CalculatorRequest(BaseModel):
    """Calculator form values as posted by the frontend."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    currentAge: int = Field(..., ge=0, le=130, description="Whole years of age.")
    currentAgeMonths: int = Field(0, ge=0, le=11, description="Months past the last birthday.")
    currentSavings: float = Field(..., ge=0)
    retirementAge: float = Field(..., ge=0, le=130)
    lifeExpectancy: float = Field(..., ge=0, le=130)
    livingExpensePerMonth: float = Field(..., ge=0)
    roiRate: float = Field(
        ...,
        gt=-100,
        le=100,
        description="Annual return expressed as a percentage (e.g. 4 for 4%).",
    )
    incomePerMonthAfterRetirement: float = Field(0.0, ge=0)
    livingExpensePerMonthAfterRetirement: float = Field(..., ge=0)

    @model_validator(mode="after")
    def ensure_validity(self) -> "CalculatorRequest":
        if self.lifeExpectancy < self.retirementAge:
            raise ValueError("lifeExpectancy must be greater than or equal to retirementAge")
        return self

    def to_inputs(self) -> CalculatorInputs:
        return CalculatorInputs(**self.model_dump())


DEFAULT_REQUEST = CalculatorRequest(
    currentAge=25,
    currentAgeMonths=6,
    currentSavings=100000,
    retirementAge=50,
    lifeExpectancy=80,
    livingExpensePerMonth=3000,
    roiRate=4,
    incomePerMonthAfterRetirement=500,
    livingExpensePerMonthAfterRetirement=3000,
)


class WealthPoint(BaseModel):
    """Single row of the wealth chart."""

    age: int
    wealth: Optional[float] = Field(..., description="Balance at this age, never negative.")

    @classmethod
    def from_yearly(cls, point: YearlyWealth) -> "WealthPoint":
        return cls(age=point.age, wealth=_finite_or_none(point.wealth))


class BreakdownResponse(BaseModel):
    exactCurrentAge: float
    monthlyRate: Optional[float]
    monthsUntilRetirement: int
    monthsInRetirement: int
    netMonthlyRetirement: float
    wealthNeededAtRetirement: Optional[float]
    futureValueOfSavings: Optional[float]
    additionalWealthNeeded: Optional[float]
    monthlySavingsNeeded: Optional[float]

    @classmethod
    def from_breakdown(cls, breakdown: SolverBreakdown) -> "BreakdownResponse":
        return cls(
            **{
                key: _finite_or_none(value) if isinstance(value, float) else value
                for key, value in breakdown.model_dump().items()
            }
        )


class CalculationResponse(BaseModel):
    """
    Calculator results. Figures that are infinite (an immediate lump sum is
    required) or otherwise not finite are sent as null; check isAchievable
    and message before displaying them.
    """

    totalEarningsNeeded: Optional[float]
    yearlyEarningsNeeded: Optional[float]
    monthlyEarningsNeeded: Optional[float]
    wealthChart: List[WealthPoint]
    isAchievable: bool
    message: Optional[str] = None
    breakdown: BreakdownResponse

    @classmethod
    def from_results(
        cls, results: CalculationResults, breakdown: SolverBreakdown
    ) -> "CalculationResponse":
        return cls(
            totalEarningsNeeded=_finite_or_none(results.totalEarningsNeeded),
            yearlyEarningsNeeded=_finite_or_none(results.yearlyEarningsNeeded),
            monthlyEarningsNeeded=_finite_or_none(results.monthlyEarningsNeeded),
            wealthChart=[WealthPoint.from_yearly(point) for point in results.wealthChart],
            isAchievable=results.isAchievable,
            message=results.message,
            breakdown=BreakdownResponse.from_breakdown(breakdown),
        )


class WealthChartRequest(BaseModel):
    """Re-chart the plan under a savings rate chosen by the caller."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    inputs: CalculatorRequest
    monthlySavings: float = Field(
        ...,
        description="Net amount saved each working month; negative draws savings down.",
    )


class WealthChartResponse(BaseModel):
    wealthChart: List[WealthPoint]
