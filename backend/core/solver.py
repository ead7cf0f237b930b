"""Closed-form solver for the earnings that spend savings down to exactly zero."""

from __future__ import annotations

import math

from loguru import logger

from backend.core.models import CalculationResults, CalculatorInputs, SolverBreakdown
from backend.core.simulator import simulate
from backend.core.timevalue import (
    EPSILON,
    MONTHS_PER_YEAR,
    future_value,
    present_value_annuity,
    round_half_up,
    sinking_fund_payment,
)

# anything outside this band is reported as unrealistic
MIN_REALISTIC_MONTHLY_EARNINGS: float = -1e9
MAX_REALISTIC_MONTHLY_EARNINGS: float = 1e12


def derive_breakdown(inputs: CalculatorInputs) -> SolverBreakdown:
    """
    Work out the lump sum needed at retirement and how far current savings
    get toward it.

    - wealthNeededAtRetirement: PV, at the retirement date, of the net
      monthly shortfall over every retired month.
    - futureValueOfSavings: today's savings compounded to retirement.
    - additionalWealthNeeded: the difference, left signed.
    - monthlySavingsNeeded: level monthly deposit (or withdrawal when
      negative) that compounds to additionalWealthNeeded by retirement.
      Zero when there are no working months left.
    """
    exact_current_age = inputs.exact_current_age
    monthly_rate = inputs.monthly_rate

    months_until_retirement = max(
        0, round_half_up((inputs.retirementAge - exact_current_age) * MONTHS_PER_YEAR)
    )
    months_in_retirement = max(
        0, round_half_up((inputs.lifeExpectancy - inputs.retirementAge) * MONTHS_PER_YEAR)
    )

    net_monthly_retirement = inputs.net_monthly_retirement
    wealth_needed_at_retirement = present_value_annuity(
        net_monthly_retirement, monthly_rate, months_in_retirement
    )
    future_value_of_savings = future_value(
        inputs.currentSavings, monthly_rate, months_until_retirement
    )
    additional_wealth_needed = wealth_needed_at_retirement - future_value_of_savings

    monthly_savings_needed = 0.0
    if months_until_retirement > 0:
        monthly_savings_needed = sinking_fund_payment(
            additional_wealth_needed, monthly_rate, months_until_retirement
        )

    return SolverBreakdown(
        exactCurrentAge=exact_current_age,
        monthlyRate=monthly_rate,
        monthsUntilRetirement=months_until_retirement,
        monthsInRetirement=months_in_retirement,
        netMonthlyRetirement=net_monthly_retirement,
        wealthNeededAtRetirement=wealth_needed_at_retirement,
        futureValueOfSavings=future_value_of_savings,
        additionalWealthNeeded=additional_wealth_needed,
        monthlySavingsNeeded=monthly_savings_needed,
    )


def solve(inputs: CalculatorInputs) -> CalculationResults:
    """
    Required monthly/yearly/total earnings plus the wealth chart.

    Special cases never raise; they come back with isAchievable and a
    message describing what happened:
      - at or past retirement: exact match, immediate lump sum, or surplus
      - savings already cover the plan before retirement
      - required earnings non-finite or outside a sane band
    """
    breakdown = derive_breakdown(inputs)
    logger.debug(f"Solver breakdown: {breakdown.model_dump()}")

    additional = breakdown.additionalWealthNeeded

    # ---------- At or past retirement ----------
    if breakdown.monthsUntilRetirement == 0:
        chart = simulate(inputs, 0.0, breakdown.exactCurrentAge)

        if abs(additional) < EPSILON:
            logger.debug("At retirement with savings matching the plan exactly")
            return CalculationResults(
                totalEarningsNeeded=0.0,
                yearlyEarningsNeeded=0.0,
                monthlyEarningsNeeded=0.0,
                wealthChart=chart,
                isAchievable=True,
                message="You are at retirement now and your current savings exactly match the plan.",
            )

        if additional > 0:
            logger.debug(f"At retirement with a shortfall of {additional:.2f}")
            return CalculationResults(
                totalEarningsNeeded=additional,
                yearlyEarningsNeeded=additional,
                monthlyEarningsNeeded=math.inf,
                wealthChart=chart,
                isAchievable=False,
                message=f"You need an immediate lump sum of {additional:.2f} to fund the plan.",
            )

        logger.debug(f"At retirement with a surplus of {-additional:.2f}")
        return CalculationResults(
            totalEarningsNeeded=0.0,
            yearlyEarningsNeeded=0.0,
            monthlyEarningsNeeded=0.0,
            wealthChart=chart,
            isAchievable=False,
            message=(
                f"You currently have a surplus of {-additional:.2f} "
                "available to spend or gift immediately."
            ),
        )

    # ---------- Working months remain ----------
    monthly_savings = breakdown.monthlySavingsNeeded
    # the signed rate drives the chart, so a surplus is spent down to zero too
    chart = simulate(inputs, monthly_savings, breakdown.exactCurrentAge)

    if additional <= 0:
        logger.debug(f"Savings already cover the plan; surplus at retirement {-additional:.2f}")
        return CalculationResults(
            totalEarningsNeeded=0.0,
            yearlyEarningsNeeded=0.0,
            monthlyEarningsNeeded=0.0,
            wealthChart=chart,
            isAchievable=True,
            message=(
                "You already have enough savings and don't need to earn any additional money. "
                f"You could draw down {abs(monthly_savings):.2f} per month until retirement."
            ),
        )

    monthly_earnings = inputs.livingExpensePerMonth + monthly_savings
    yearly_earnings = monthly_earnings * MONTHS_PER_YEAR
    total_earnings = monthly_earnings * breakdown.monthsUntilRetirement

    is_realistic = (
        math.isfinite(monthly_earnings)
        and MIN_REALISTIC_MONTHLY_EARNINGS < monthly_earnings < MAX_REALISTIC_MONTHLY_EARNINGS
    )
    if not is_realistic:
        logger.debug(f"Required monthly earnings {monthly_earnings} are not realistic")

    return CalculationResults(
        totalEarningsNeeded=total_earnings,
        yearlyEarningsNeeded=yearly_earnings,
        monthlyEarningsNeeded=monthly_earnings,
        wealthChart=chart,
        isAchievable=is_realistic,
        message=None if is_realistic else "Required monthly income is not finite/realistic.",
    )
