"""Month-by-month wealth walk, sampled once per integer age."""

from __future__ import annotations

import math
from typing import List

from loguru import logger

from backend.core.models import CalculatorInputs, YearlyWealth
from backend.core.timevalue import (
    MONTHS_PER_YEAR,
    RETIREMENT_BOUNDARY_EPSILON,
    round_half_up,
)


def simulate(
    inputs: CalculatorInputs,
    monthly_savings_needed: float,
    exact_current_age: float,
) -> List[YearlyWealth]:
    """
    Walk the balance forward one month at a time until life expectancy.

    Conventions (per month t = 0..totalMonths):
      1) Record the balance at t before anything happens that month.
      2) Working months add `monthly_savings_needed` (negative = drawing down);
         retired months withdraw the net retirement shortfall.
      3) Next balance = balance * (1 + monthly rate) + cash flow.

    The chart holds one point per integer age from floor(current age) to
    floor(life expectancy), each read from the month nearest that birthday
    and floored at zero. Negative balances are kept in the walk itself.
    """
    monthly_rate = inputs.monthly_rate
    net_monthly_retirement = inputs.net_monthly_retirement
    total_months = max(
        0, round_half_up((inputs.lifeExpectancy - exact_current_age) * MONTHS_PER_YEAR)
    )

    balances: List[float] = []
    balance = float(inputs.currentSavings)
    for t in range(total_months + 1):
        balances.append(balance)

        age_at_t = exact_current_age + t / MONTHS_PER_YEAR
        is_retired = age_at_t + RETIREMENT_BOUNDARY_EPSILON >= inputs.retirementAge
        cashflow = -net_monthly_retirement if is_retired else monthly_savings_needed

        balance = balance * (1 + monthly_rate) + cashflow

    start_year = math.floor(exact_current_age)
    # already past life expectancy: still report where we stand today
    end_year = max(start_year, math.floor(inputs.lifeExpectancy))

    chart: List[YearlyWealth] = []
    for year in range(start_year, end_year + 1):
        months_from_start = round_half_up((year - exact_current_age) * MONTHS_PER_YEAR)
        idx = max(0, min(total_months, months_from_start))
        chart.append(YearlyWealth(age=year, wealth=max(0.0, balances[idx])))

    logger.debug(
        f"Simulated {total_months} months, {len(chart)} chart points "
        f"(ages {start_year}-{end_year})"
    )
    return chart
