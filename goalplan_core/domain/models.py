from __future__ import annotations

import dataclasses
import datetime as dt
import enum
from typing import Optional, Tuple

ACHIEVABLE = "ACHIEVABLE"
NOT_ACHIEVABLE = "NOT_ACHIEVABLE"


class RiskLabel(enum.IntEnum):
    LOW = 1
    LOW_MODERATE = 2
    MODERATE = 3
    MODERATE_HIGH = 4
    HIGH = 5
    VERY_HIGH = 6

    @property
    def display(self) -> str:
        return self.name.replace("_", " ")

    @classmethod
    def parse(cls, raw: str) -> "RiskLabel":
        """Accepts "MODERATE_HIGH", "moderate-high" or "Moderate High"."""
        key = raw.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown risk label: {raw!r}") from None


@dataclasses.dataclass(frozen=True)
class Goal:
    id: str
    name: str
    start_date: dt.date
    target_date: dt.date
    amount_needed_today: float
    inflation_rate_percent: float = 0.0
    current_corpus: float = 0.0
    monthly_contribution: float = 0.0
    step_up_rate_percent: float = 0.0


@dataclasses.dataclass(frozen=True)
class Category:
    id: str
    name: str
    risk: RiskLabel
    min_return_percent: float
    max_return_percent: float
    scheme_code: Optional[str] = None  # sample instrument

    @property
    def midpoint_return_percent(self) -> float:
        return (self.min_return_percent + self.max_return_percent) / 2


@dataclasses.dataclass(frozen=True)
class Recommendation:
    category: Category
    rate_percent: float
    projected_corpus: float
    shortfall: float  # <= 0 means surplus
    required_additional_contribution: float
    confidence: float

    @property
    def is_achievable(self) -> bool:
        return self.shortfall <= 0

    @property
    def confidence_display(self) -> int:
        return int(round(self.confidence))


@dataclasses.dataclass(frozen=True)
class Scenario:
    label: str  # "conservative", "balanced" or "aggressive"
    recommendation: Recommendation


@dataclasses.dataclass(frozen=True)
class HorizonGuidance:
    asset_class: str
    risk_profile: str
    suggestion: str


@dataclasses.dataclass(frozen=True)
class Insight:
    goal_id: str
    months: int
    years: float
    inflation_adjusted_target: float
    achievable: bool
    status: str
    ranked: Tuple[Recommendation, ...]
    primary: Optional[Recommendation]
    alternatives: Tuple[Scenario, ...]
    warnings: Tuple[str, ...]
    guidance: HorizonGuidance
    action: str
    corpus_future_value: float

    def recommendation_for(self, category_id: str) -> Optional[Recommendation]:
        for rec in self.ranked:
            if rec.category.id == category_id:
                return rec
        return None


@dataclasses.dataclass(frozen=True)
class CurvePoint:
    year: float
    invested: float
    value: float
