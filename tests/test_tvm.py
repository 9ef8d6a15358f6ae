import datetime as dt
import math

import pytest

from goalplan_core.services import tvm


def test_lumpsum_zero_years_returns_present_value():
    assert tvm.future_value_lumpsum(12, 0, 5000) == 5000


@pytest.mark.parametrize(
    "rate, direction",
    [(8, 1), (0, 0), (-3, -1)],
)
def test_lumpsum_monotonic_in_years(rate, direction):
    values = [tvm.future_value_lumpsum(rate, years, 1000) for years in (0, 0.5, 1, 5, 10)]
    for earlier, later in zip(values, values[1:]):
        if direction > 0:
            assert later > earlier
        elif direction < 0:
            assert later < earlier
        else:
            assert later == earlier


def test_periodic_closed_form_annuity_due():
    r = 0.01
    expected = 10000 * ((1 + r) ** 120 - 1) / r * (1 + r)
    assert tvm.future_value_periodic(12, 120, 10000) == pytest.approx(expected)


def test_periodic_zero_rate_and_zero_months():
    assert tvm.future_value_periodic(0, 24, 500) == 12000
    assert tvm.future_value_periodic(10, 0, 500) == 0


def test_periodic_credits_payment_before_growth():
    # one month at 12%/yr: payment is grown by one monthly period
    assert tvm.future_value_periodic(12, 1, 100) == pytest.approx(101.0)


def test_step_up_raises_payment_after_each_year():
    assert tvm.future_value_periodic(0, 24, 100, step_up_rate_percent=10) == pytest.approx(2520.0)
    assert tvm.future_value_periodic(0, 12, 100, step_up_rate_percent=10) == pytest.approx(1200.0)


def test_step_up_iteration_matches_closed_form_within_first_year():
    assert tvm.future_value_periodic(9, 12, 250, step_up_rate_percent=5) == pytest.approx(
        tvm.future_value_periodic(9, 12, 250)
    )


@pytest.mark.parametrize("rate", [0, 4.5, 12, 18])
@pytest.mark.parametrize("months", [1, 7, 60, 360])
def test_required_contribution_round_trip(rate, months):
    target = 2_500_000
    payment = tvm.required_periodic_contribution(target, rate, months)
    assert tvm.future_value_periodic(rate, months, payment) == pytest.approx(target, rel=1e-6)


def test_required_contribution_without_horizon_is_zero():
    assert tvm.required_periodic_contribution(100000, 10, 0) == 0
    assert tvm.required_periodic_contribution(100000, 10, -5) == 0


def test_inflation_adjust_matches_lumpsum():
    assert tvm.inflation_adjust(1_000_000, 6, 10) == pytest.approx(1_790_847.7, abs=1)
    assert tvm.inflation_adjust(1000, 0, 10) == 1000


def test_months_between_ignores_day_of_month():
    assert tvm.months_between(dt.date(2024, 1, 31), dt.date(2024, 2, 1)) == 1
    assert tvm.months_between(dt.date(2024, 1, 1), dt.date(2034, 1, 1)) == 120
    assert tvm.months_between(dt.date(2024, 1, 15), dt.date(2024, 9, 1)) == 8


def test_months_between_clamps_to_zero():
    d = dt.date(2025, 6, 15)
    assert tvm.months_between(d, d) == 0
    assert tvm.months_between(d, dt.date(2020, 1, 1)) == 0


def test_extreme_horizon_saturates_instead_of_raising():
    assert tvm.future_value_lumpsum(11, 7975, 1000) == math.inf
    assert tvm.future_value_lumpsum(11, 7975, 0) == 0
    assert tvm.future_value_periodic(12, 10**6, 100) == math.inf
    assert tvm.future_value_periodic(12, 10**6, 0) == 0
    assert tvm.required_periodic_contribution(1_000_000, 12, 10**6) == 0
