from __future__ import annotations

import datetime as dt
import math


def _monthly_rate(rate_percent: float) -> float:
    return rate_percent / 100 / 12


def _growth(base: float, exponent: float) -> float:
    # saturate instead of raising on horizons too long for a float
    try:
        return base ** exponent
    except OverflowError:
        return math.inf


def future_value_lumpsum(rate_percent: float, years: float, present_value: float) -> float:
    """Compound a single amount annually; ``years`` may be fractional."""
    if present_value == 0:
        return 0.0
    return present_value * _growth(1 + rate_percent / 100, years)


def future_value_periodic(
    rate_percent: float,
    months: int,
    payment: float,
    step_up_rate_percent: float = 0.0,
) -> float:
    """
    Future value of a monthly contribution credited at the start of each month.

    Without step-up this is the closed-form annuity-due. With step-up the
    payment grows by ``step_up_rate_percent`` after every 12 months, which is
    simulated month by month.
    """
    if months <= 0:
        return 0.0
    r = _monthly_rate(rate_percent)

    if step_up_rate_percent <= 0:
        if r == 0 or payment == 0:
            return payment * months
        return payment * (_growth(1 + r, months) - 1) / r * (1 + r)

    value = 0.0
    current = payment
    for period in range(1, months + 1):
        value = (value + current) * (1 + r)
        if period % 12 == 0:
            current *= 1 + step_up_rate_percent / 100
    return value


def required_periodic_contribution(target_value: float, rate_percent: float, months: int) -> float:
    """Monthly contribution (annuity-due, no step-up) that grows to ``target_value``."""
    if months <= 0:
        return 0.0
    r = _monthly_rate(rate_percent)
    if r == 0:
        return target_value / months
    factor = (_growth(1 + r, months) - 1) / r
    return target_value / (factor * (1 + r))


def inflation_adjust(nominal_amount: float, inflation_rate_percent: float, years: float) -> float:
    """Cost of ``nominal_amount`` (today's money) after ``years`` of inflation."""
    return future_value_lumpsum(inflation_rate_percent, years, nominal_amount)


def months_between(start_date: dt.date, target_date: dt.date) -> int:
    # Day of month is ignored on purpose.
    months = (target_date.year - start_date.year) * 12 + (target_date.month - start_date.month)
    return max(months, 0)
