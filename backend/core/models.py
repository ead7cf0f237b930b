from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from backend.core.timevalue import exact_age, monthly_rate_from_annual_percent


class CalculatorInputs(BaseModel):
    """
    Everything the projection needs, supplied in full on every call.

    No range checks and no defaults here: the HTTP schemas validate, the
    core just runs the arithmetic on whatever numbers it is given.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    currentAge: int
    currentAgeMonths: int
    currentSavings: float
    retirementAge: float
    lifeExpectancy: float
    livingExpensePerMonth: float
    roiRate: float  # annual, percent (4 = 4%)
    incomePerMonthAfterRetirement: float
    livingExpensePerMonthAfterRetirement: float

    @property
    def exact_current_age(self) -> float:
        return exact_age(self.currentAge, self.currentAgeMonths)

    @property
    def monthly_rate(self) -> float:
        return monthly_rate_from_annual_percent(self.roiRate)

    @property
    def net_monthly_retirement(self) -> float:
        # shortfall savings must cover each retired month; negative = income surplus
        return self.livingExpensePerMonthAfterRetirement - self.incomePerMonthAfterRetirement


class YearlyWealth(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int
    wealth: float


class SolverBreakdown(BaseModel):
    """Intermediate values behind a CalculationResults."""

    model_config = ConfigDict(frozen=True)

    exactCurrentAge: float
    monthlyRate: float
    monthsUntilRetirement: int
    monthsInRetirement: int
    netMonthlyRetirement: float
    wealthNeededAtRetirement: float
    futureValueOfSavings: float
    # signed: negative means a surplus at retirement
    additionalWealthNeeded: float
    monthlySavingsNeeded: float = 0.0


class CalculationResults(BaseModel):
    model_config = ConfigDict(frozen=True)

    totalEarningsNeeded: float
    yearlyEarningsNeeded: float
    monthlyEarningsNeeded: float
    wealthChart: List[YearlyWealth]
    isAchievable: bool
    message: Optional[str] = None
