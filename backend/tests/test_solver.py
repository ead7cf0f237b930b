from __future__ import annotations

import math
from math import isclose

from backend.core.models import CalculatorInputs
from backend.core.simulator import simulate
from backend.core.solver import derive_breakdown, solve
from backend.core.timevalue import future_value, sinking_fund_payment


def make_inputs(**overrides) -> CalculatorInputs:
    values = {
        "currentAge": 30,
        "currentAgeMonths": 0,
        "currentSavings": 200000.0,
        "retirementAge": 50,
        "lifeExpectancy": 80,
        "livingExpensePerMonth": 10000.0,
        "roiRate": 4.0,
        "incomePerMonthAfterRetirement": 2000.0,
        "livingExpensePerMonthAfterRetirement": 10000.0,
    }
    values.update(overrides)
    return CalculatorInputs(**values)


def test_working_years_scenario():
    inputs = make_inputs()
    breakdown = derive_breakdown(inputs)
    results = solve(inputs)

    assert breakdown.monthsUntilRetirement == 240
    assert breakdown.monthsInRetirement == 360
    assert breakdown.netMonthlyRetirement == 8000.0
    assert breakdown.additionalWealthNeeded > 0

    assert math.isfinite(results.monthlyEarningsNeeded)
    assert results.monthlyEarningsNeeded > 10000.0
    assert results.isAchievable is True
    assert results.message is None
    assert isclose(results.yearlyEarningsNeeded, results.monthlyEarningsNeeded * 12, rel_tol=1e-12)
    assert isclose(results.totalEarningsNeeded, results.monthlyEarningsNeeded * 240, rel_tol=1e-12)

    ages = [point.age for point in results.wealthChart]
    assert ages == list(range(30, 81))

    wealth = [point.wealth for point in results.wealthChart]
    peak_age = ages[wealth.index(max(wealth))]
    assert peak_age == 50
    assert isclose(wealth[ages.index(50)], breakdown.wealthNeededAtRetirement, rel_tol=1e-9)
    assert wealth[-1] < 0.01, "savings should be spent down by life expectancy"


def test_monthly_earnings_are_expenses_plus_sinking_fund_deposit():
    inputs = make_inputs()
    breakdown = derive_breakdown(inputs)
    expected_savings = sinking_fund_payment(
        breakdown.additionalWealthNeeded, breakdown.monthlyRate, 240
    )

    assert breakdown.monthlySavingsNeeded == expected_savings
    assert solve(inputs).monthlyEarningsNeeded == 10000.0 + expected_savings


def test_solve_is_deterministic():
    inputs = make_inputs(currentAgeMonths=7, roiRate=5.5)

    first = solve(inputs)
    second = solve(inputs)

    assert first == second
    assert first.model_dump() == second.model_dump()


def test_zero_rate_uses_straight_line_savings():
    inputs = make_inputs(
        currentSavings=0.0,
        retirementAge=40,
        lifeExpectancy=50,
        livingExpensePerMonth=2000.0,
        roiRate=0.0,
        incomePerMonthAfterRetirement=0.0,
        livingExpensePerMonthAfterRetirement=1000.0,
    )
    breakdown = derive_breakdown(inputs)
    results = solve(inputs)

    assert breakdown.monthlyRate == 0.0
    assert breakdown.wealthNeededAtRetirement == 120000.0
    assert breakdown.monthlySavingsNeeded == 1000.0
    assert results.monthlyEarningsNeeded == 3000.0
    assert results.yearlyEarningsNeeded == 36000.0
    assert results.totalEarningsNeeded == 360000.0

    by_age = {point.age: point.wealth for point in results.wealthChart}
    assert by_age[30] == 0.0
    assert by_age[40] == 120000.0
    assert by_age[45] == 60000.0
    assert by_age[50] == 0.0


def test_savings_already_sufficient_before_retirement():
    inputs = make_inputs(currentSavings=5_000_000.0)
    breakdown = derive_breakdown(inputs)
    results = solve(inputs)

    assert breakdown.futureValueOfSavings >= breakdown.wealthNeededAtRetirement
    assert breakdown.additionalWealthNeeded < 0
    # the surplus is not clamped: it becomes a planned drawdown
    assert breakdown.monthlySavingsNeeded < 0

    assert results.monthlyEarningsNeeded == 0.0
    assert results.yearlyEarningsNeeded == 0.0
    assert results.totalEarningsNeeded == 0.0
    assert results.isAchievable is True
    assert results.message and "already have enough" in results.message
    assert f"{abs(breakdown.monthlySavingsNeeded):.2f}" in results.message

    # the chart still spends everything by life expectancy
    assert results.wealthChart[-1].wealth < 0.01


def test_at_retirement_needs_immediate_lump_sum():
    inputs = make_inputs(
        currentAge=65,
        currentSavings=100000.0,
        retirementAge=65,
        lifeExpectancy=85,
        incomePerMonthAfterRetirement=1000.0,
        livingExpensePerMonthAfterRetirement=4000.0,
    )
    breakdown = derive_breakdown(inputs)
    results = solve(inputs)

    assert breakdown.monthsUntilRetirement == 0
    assert breakdown.monthlySavingsNeeded == 0.0
    assert breakdown.additionalWealthNeeded > 0
    assert results.isAchievable is False
    assert results.monthlyEarningsNeeded == math.inf
    assert results.totalEarningsNeeded == breakdown.additionalWealthNeeded
    assert results.yearlyEarningsNeeded == breakdown.additionalWealthNeeded
    assert results.message is not None
    assert "lump sum" in results.message
    assert f"{breakdown.additionalWealthNeeded:.2f}" in results.message

    assert results.wealthChart[0].age == 65
    assert results.wealthChart[0].wealth == 100000.0
    assert results.wealthChart[-1].age == 85


def test_at_retirement_with_surplus():
    inputs = make_inputs(
        currentAge=65,
        currentSavings=10_000_000.0,
        retirementAge=65,
        lifeExpectancy=85,
    )
    breakdown = derive_breakdown(inputs)
    results = solve(inputs)

    assert breakdown.monthsUntilRetirement == 0
    assert breakdown.additionalWealthNeeded < 0
    assert results.isAchievable is False
    assert results.monthlyEarningsNeeded == 0.0
    assert results.totalEarningsNeeded == 0.0
    assert results.message is not None
    assert "surplus" in results.message
    assert f"{-breakdown.additionalWealthNeeded:.2f}" in results.message


def test_at_retirement_exact_match():
    inputs = make_inputs(
        currentAge=65,
        currentSavings=0.0,
        retirementAge=65,
        lifeExpectancy=85,
        incomePerMonthAfterRetirement=3000.0,
        livingExpensePerMonthAfterRetirement=3000.0,
    )
    results = solve(inputs)

    assert results.isAchievable is True
    assert results.monthlyEarningsNeeded == 0.0
    assert results.message is not None and "exactly match" in results.message


def test_past_retirement_counts_as_at_retirement():
    inputs = make_inputs(currentAge=70, retirementAge=65, lifeExpectancy=90, currentSavings=1000.0)
    breakdown = derive_breakdown(inputs)

    assert breakdown.monthsUntilRetirement == 0
    assert solve(inputs).monthlyEarningsNeeded == math.inf


def test_retirement_at_life_expectancy_has_no_drawdown():
    inputs = make_inputs(retirementAge=80, lifeExpectancy=80)
    breakdown = derive_breakdown(inputs)

    assert breakdown.monthsInRetirement == 0
    assert breakdown.wealthNeededAtRetirement == 0.0
    assert breakdown.additionalWealthNeeded == -future_value(
        200000.0, breakdown.monthlyRate, breakdown.monthsUntilRetirement
    )
    assert breakdown.monthlySavingsNeeded < 0

    chart = solve(inputs).wealthChart
    assert chart[-1].age == 80
    assert chart[-1].wealth < 0.01


def test_months_round_half_up():
    inputs = make_inputs(currentAge=30, retirementAge=30.375, lifeExpectancy=30.75)
    breakdown = derive_breakdown(inputs)

    # 4.5 months each way
    assert breakdown.monthsUntilRetirement == 5
    assert breakdown.monthsInRetirement == 5


def test_unrealistic_income_is_flagged_not_suppressed():
    inputs = make_inputs(livingExpensePerMonth=2e12)
    results = solve(inputs)

    assert results.isAchievable is False
    assert results.message == "Required monthly income is not finite/realistic."
    assert results.monthlyEarningsNeeded > 2e12
    assert math.isfinite(results.totalEarningsNeeded)


def test_negative_required_income_below_bound_is_flagged():
    inputs = make_inputs(livingExpensePerMonth=-2e9)
    results = solve(inputs)

    assert results.monthlyEarningsNeeded < -1e9
    assert results.isAchievable is False
    assert results.message is not None


def test_solver_and_simulator_share_rate_and_shortfall():
    inputs = make_inputs(currentAgeMonths=4, roiRate=6.5)
    breakdown = derive_breakdown(inputs)

    assert breakdown.monthlyRate == inputs.monthly_rate
    assert breakdown.netMonthlyRetirement == inputs.net_monthly_retirement
    assert solve(inputs).wealthChart == simulate(
        inputs, breakdown.monthlySavingsNeeded, breakdown.exactCurrentAge
    )


def test_malformed_rate_does_not_raise():
    results = solve(make_inputs(roiRate=-250.0))

    assert results.isAchievable is False
    assert all(point.wealth >= 0 for point in results.wealthChart)
