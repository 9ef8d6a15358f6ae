from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from goalplan_core.domain.models import CurvePoint
from goalplan_core.services.tvm import future_value_lumpsum


def build_growth_curve(
    rate_percent: float,
    months: int,
    initial_corpus: float,
    monthly_payment: float,
    step_up_rate_percent: float = 0.0,
) -> List[CurvePoint]:
    """
    Year-by-year invested vs. projected value for charting.

    Contributions follow the same month-by-month accumulation as
    ``future_value_periodic``; the starting corpus compounds annually like
    ``future_value_lumpsum`` so the last point matches the projected corpus.
    A trailing partial year gets its own checkpoint.
    """
    r = rate_percent / 100 / 12
    months = max(int(months), 0)

    points = [CurvePoint(year=0, invested=initial_corpus, value=initial_corpus)]
    contributions = 0.0
    contributions_value = 0.0
    payment = monthly_payment

    for period in range(1, months + 1):
        contributions += payment
        contributions_value = (contributions_value + payment) * (1 + r)
        year_end = period % 12 == 0
        if year_end and step_up_rate_percent > 0:
            payment *= 1 + step_up_rate_percent / 100
        if year_end or period == months:
            years = period // 12 if year_end else period / 12
            points.append(
                CurvePoint(
                    year=years,
                    invested=initial_corpus + contributions,
                    value=future_value_lumpsum(rate_percent, period / 12, initial_corpus) + contributions_value,
                )
            )
    return points


def curve_to_frame(points: Sequence[CurvePoint]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{"year": p.year, "invested": p.invested, "value": p.value} for p in points],
        columns=["year", "invested", "value"],
    )
    df["gain"] = df["value"] - df["invested"]
    return df
