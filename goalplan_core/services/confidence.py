from __future__ import annotations

from goalplan_core.domain.models import RiskLabel

_EQUITY_RISKS = (RiskLabel.HIGH, RiskLabel.VERY_HIGH)


def confidence_score(years: float, risk: RiskLabel, gap_fraction: float) -> float:
    """
    Heuristic 0-100 rating of a category projection.

    Penalties stack: high-risk categories on a horizon under three years lose
    40, anything riskier than LOW under one year loses 50, and a shortfall
    costs its percentage of the target, capped at 50.

    The result is left unrounded: ranking sorts on this value and only the
    display rounds it (``Recommendation.confidence_display``).
    """
    score = 100.0
    if years < 3 and risk in _EQUITY_RISKS:
        score -= 40
    if years < 1 and risk != RiskLabel.LOW:
        score -= 50
    if gap_fraction > 0:
        score -= min(gap_fraction * 100, 50)
    return max(0.0, min(100.0, score))
