from __future__ import annotations

import logging
import math
from typing import Dict, Mapping, Optional, Protocol, Sequence

import pandas as pd

from goalplan_core.domain.models import Category

logger = logging.getLogger(__name__)

TRADING_DAYS_PER_YEAR = 250


class RateProvider(Protocol):
    def rate_for(self, category: Category) -> Optional[float]:
        """Annualized return percent for ``category`` or None when unavailable."""
        ...


class FixedRateProvider:
    def __init__(self, rates: Mapping[str, Optional[float]]):
        self._rates = dict(rates)

    def rate_for(self, category: Category) -> Optional[float]:
        return self._rates.get(category.id)


def cagr_percent(latest: float, oldest: float, years: float) -> Optional[float]:
    if oldest <= 0 or latest <= 0 or years <= 0:
        return None
    return (math.pow(latest / oldest, 1 / years) - 1) * 100


def _parse_nav_dates(dates: pd.Series) -> pd.Series:
    """ISO dates first, then the DD-MM-YYYY form used by NAV feeds."""
    for fmt in ("ISO8601", "%d-%m-%Y"):
        try:
            return pd.to_datetime(dates, format=fmt)
        except (ValueError, TypeError):
            continue
    raise ValueError("NAV history dates must be YYYY-MM-DD or DD-MM-YYYY")


class NavHistoryRateProvider:
    """
    Trailing CAGR from a local NAV table with columns scheme_code, date, nav.

    The look-back point is ``years * 250`` rows behind the newest NAV, which
    approximates trading days without a holiday calendar.
    """

    def __init__(self, history: pd.DataFrame, years: int = 3):
        missing = {"scheme_code", "date", "nav"} - set(history.columns)
        if missing:
            raise ValueError(f"Missing columns in NAV history: {missing}")
        df = history.copy()
        df["scheme_code"] = df["scheme_code"].astype(str)
        df["date"] = _parse_nav_dates(df["date"])
        df["nav"] = df["nav"].astype(float)
        self._history = df.sort_values(["scheme_code", "date"], ascending=[True, False])
        self.years = years

    def rate_for(self, category: Category) -> Optional[float]:
        if not category.scheme_code:
            return None
        navs = self._history.loc[self._history["scheme_code"] == str(category.scheme_code), "nav"]
        index = int(self.years * TRADING_DAYS_PER_YEAR)
        if navs.empty or index >= len(navs):
            logger.debug("Not enough NAV history for %s (%d rows)", category.id, len(navs))
            return None
        return cagr_percent(float(navs.iloc[0]), float(navs.iloc[index]), self.years)


def collect_market_rates(provider: Optional[RateProvider], catalog: Sequence[Category]) -> Dict[str, float]:
    """
    Ask ``provider`` for every category. Missing values and provider errors
    leave the category out of the mapping so the catalog midpoint applies.
    """
    rates: Dict[str, float] = {}
    if provider is None:
        return rates
    for category in catalog:
        try:
            rate = provider.rate_for(category)
        except Exception:  # noqa: BLE001
            logger.warning("Rate lookup failed for %s; using catalog midpoint", category.id, exc_info=True)
            continue
        if rate is None or math.isnan(rate):
            continue
        rates[category.id] = float(rate)
    return rates
