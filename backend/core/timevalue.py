"""Time-value-of-money primitives shared by the solver and the simulator."""

from __future__ import annotations

import math

MONTHS_PER_YEAR: int = 12

# rate-near-zero and exact-match threshold
EPSILON: float = 1e-12
# keeps the retirement check stable when month offsets accumulate float error
RETIREMENT_BOUNDARY_EPSILON: float = 1e-9


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (not Python's banker's rounding)."""
    return math.floor(value + 0.5)


def exact_age(years: int, months: int) -> float:
    return years + months / MONTHS_PER_YEAR


def growth_factor(rate: float, periods: float) -> float:
    """
    (1 + rate) ** periods with IEEE results instead of exceptions.

    Float pow raises on overflow and on 0 ** negative; both come back as
    +inf, and a negative base with a fractional exponent comes back as nan.
    """
    base = 1 + rate
    if base < 0 and not float(periods).is_integer():
        return math.nan
    try:
        return base ** periods
    except (OverflowError, ZeroDivisionError):
        return math.inf


def monthly_rate_from_annual_percent(roi_rate: float) -> float:
    """
    Effective monthly rate for an annual percentage (4 -> 4%).

    Satisfies (1 + monthly)^12 == 1 + annual, so compounding twelve months
    reproduces the annual return exactly. Dividing the annual rate by 12
    overstates growth and is not used anywhere.
    """
    annual_rate = roi_rate / 100
    return growth_factor(annual_rate, 1 / MONTHS_PER_YEAR) - 1


def future_value(present_value: float, rate: float, periods: float) -> float:
    return present_value * growth_factor(rate, periods)


def present_value(future_amount: float, rate: float, periods: float) -> float:
    return future_amount / growth_factor(rate, periods)


def present_value_annuity(payment: float, rate: float, periods: int) -> float:
    """Present value of `periods` equal end-of-period payments."""
    if periods <= 0:
        return 0.0
    if abs(rate) < EPSILON:
        return payment * periods
    return payment * (1 - growth_factor(rate, -periods)) / rate


def future_value_annuity(payment: float, rate: float, periods: int) -> float:
    """Value after `periods` of equal end-of-period deposits."""
    if periods <= 0:
        return 0.0
    if abs(rate) < EPSILON:
        return payment * periods
    return payment * (growth_factor(rate, periods) - 1) / rate


def sinking_fund_payment(target: float, rate: float, periods: int) -> float:
    """
    Level deposit per period that compounds to `target` after `periods`.

    Inverse of future_value_annuity. The target may be negative, in which
    case the result is a withdrawal. Callers must pass periods > 0.
    """
    if abs(rate) < EPSILON:
        return target / periods
    return target * rate / (growth_factor(rate, periods) - 1)
