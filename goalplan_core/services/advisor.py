from __future__ import annotations

import logging
import math
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from goalplan_core.domain.models import (
    ACHIEVABLE,
    NOT_ACHIEVABLE,
    Category,
    Goal,
    HorizonGuidance,
    Insight,
    Recommendation,
    Scenario,
)
from goalplan_core.services import tvm
from goalplan_core.services.catalog import DEFAULT_CATALOG, SCENARIO_CATEGORIES, midpoint_return
from goalplan_core.services.confidence import confidence_score
from goalplan_core.services.rates import RateProvider, collect_market_rates

logger = logging.getLogger(__name__)

SHORT_HORIZON_MONTHS = 12
SHORT_HORIZON_WARNING = "short duration, capital protection prioritized"
MAX_HORIZON_MONTHS = 1200
LONG_HORIZON_WARNING = "horizon capped at 100 years"
NOT_ACHIEVABLE_WARNING = (
    "Goal is not achievable in any category with the current corpus and contribution. "
    "Increase the monthly contribution or move the target date."
)


def effective_rate(category: Category, market_rates: Optional[Mapping[str, float]] = None) -> float:
    """Observed rate when available, else the band midpoint; never above the band ceiling."""
    observed = (market_rates or {}).get(category.id)
    rate = midpoint_return(category) if observed is None else observed
    return min(rate, category.max_return_percent)


def evaluate_category(
    goal: Goal,
    category: Category,
    months: int,
    target: float,
    market_rates: Optional[Mapping[str, float]] = None,
) -> Recommendation:
    years = months / 12
    rate = effective_rate(category, market_rates)
    projected = tvm.future_value_lumpsum(rate, years, goal.current_corpus) + tvm.future_value_periodic(
        rate, months, goal.monthly_contribution, goal.step_up_rate_percent
    )
    shortfall = target - projected
    gap_fraction = max(0.0, shortfall / target) if target > 0 else 0.0
    required = tvm.required_periodic_contribution(max(0.0, shortfall), rate, months)
    confidence = confidence_score(years, category.risk, gap_fraction)
    logger.debug(
        "goal=%s category=%s rate=%.2f projected=%.2f shortfall=%.2f confidence=%.1f",
        goal.id,
        category.id,
        rate,
        projected,
        shortfall,
        confidence,
    )
    return Recommendation(
        category=category,
        rate_percent=rate,
        projected_corpus=projected,
        shortfall=shortfall,
        required_additional_contribution=required,
        confidence=confidence,
    )


# Selection pipeline: rank -> fall back by shortfall -> override by horizon.


def rank_recommendations(recommendations: Iterable[Recommendation]) -> List[Recommendation]:
    # sorted() is stable, so equal scores keep catalog order
    return sorted(recommendations, key=lambda rec: -rec.confidence)


def select_primary(
    ranked: Sequence[Recommendation], by_catalog: Sequence[Recommendation]
) -> Optional[Recommendation]:
    """
    Highest ranked recommendation without a shortfall; when none exists the
    one closest to the target wins, whatever its confidence.
    """
    for rec in ranked:
        if rec.is_achievable:
            return rec
    if not by_catalog:
        return None
    return min(by_catalog, key=lambda rec: rec.shortfall)


def apply_horizon_override(
    primary: Optional[Recommendation],
    by_catalog: Sequence[Recommendation],
    months: int,
) -> Tuple[Optional[Recommendation], List[str]]:
    if months >= SHORT_HORIZON_MONTHS or not by_catalog:
        return primary, []
    safest = min(by_catalog, key=lambda rec: rec.category.risk)
    if primary is None or safest.category.id != primary.category.id:
        logger.info("Horizon of %d months: forcing %s", months, safest.category.id)
    return safest, [SHORT_HORIZON_WARNING]


def build_scenarios(by_catalog: Sequence[Recommendation]) -> Tuple[Scenario, ...]:
    index = {rec.category.id: rec for rec in by_catalog}
    return tuple(
        Scenario(label=label, recommendation=index[category_id])
        for label, category_id in SCENARIO_CATEGORIES
        if category_id in index
    )


def horizon_guidance(years: float) -> HorizonGuidance:
    if years < 3:
        return HorizonGuidance(
            "Debt / Liquid Funds",
            "Low",
            "Time is too short for equity. Stick to safer Debt instruments.",
        )
    if years < 5:
        return HorizonGuidance(
            "Hybrid / Balanced Advantage",
            "Moderate",
            "Market volatility can impact short-term goals. Hybrid funds offer balance.",
        )
    if years < 8:
        return HorizonGuidance(
            "Large Cap / Flexi Cap Equity",
            "High",
            "Good horizon for Equity. Stick to stable Large/Flexi cap funds.",
        )
    return HorizonGuidance(
        "Mid / Small Cap Equity",
        "Very High",
        "Long term allows you to ride out volatility. Maximize returns with Mid/Small caps.",
    )


def _action_line(primary: Optional[Recommendation], months: int) -> str:
    if primary is None:
        return "No investment categories available to evaluate."
    if primary.is_achievable:
        return "Your current investments should cover this goal."
    if months <= 0:
        return "The target date leaves no time for further contributions."
    amount = math.ceil(primary.required_additional_contribution)
    return f"Start an additional monthly contribution of {amount:,} in {primary.category.name}."


def evaluate_goal(
    goal: Goal,
    catalog: Sequence[Category] = DEFAULT_CATALOG,
    market_rates: Optional[Mapping[str, float]] = None,
    rate_provider: Optional[RateProvider] = None,
) -> Insight:
    """
    Project ``goal`` across every catalog category and pick a course of action.

    ``market_rates`` maps category id to an observed annual return percent.
    When it is omitted and ``rate_provider`` is given, the mapping is
    collected from the provider first.
    """
    if market_rates is None:
        market_rates = collect_market_rates(rate_provider, catalog)

    months = tvm.months_between(goal.start_date, goal.target_date)
    capped = months > MAX_HORIZON_MONTHS
    if capped:
        logger.warning("goal=%s horizon of %d months capped at %d", goal.id, months, MAX_HORIZON_MONTHS)
        months = MAX_HORIZON_MONTHS
    years = months / 12
    target = tvm.inflation_adjust(goal.amount_needed_today, goal.inflation_rate_percent, years)

    by_catalog = [evaluate_category(goal, category, months, target, market_rates) for category in catalog]
    achievable = any(rec.is_achievable for rec in by_catalog)

    ranked = rank_recommendations(by_catalog)
    primary = select_primary(ranked, by_catalog)
    primary, warnings = apply_horizon_override(primary, by_catalog, months)
    if capped:
        warnings.append(LONG_HORIZON_WARNING)

    status = ACHIEVABLE if achievable else NOT_ACHIEVABLE
    if not achievable:
        warnings.append(NOT_ACHIEVABLE_WARNING)

    corpus_rate = primary.rate_percent if primary is not None else 0.0
    if primary is not None:
        logger.info(
            "goal=%s months=%d status=%s primary=%s confidence=%.1f",
            goal.id,
            months,
            status,
            primary.category.id,
            primary.confidence,
        )

    return Insight(
        goal_id=goal.id,
        months=months,
        years=years,
        inflation_adjusted_target=target,
        achievable=achievable,
        status=status,
        ranked=tuple(ranked),
        primary=primary,
        alternatives=build_scenarios(by_catalog),
        warnings=tuple(warnings),
        guidance=horizon_guidance(years),
        action=_action_line(primary, months),
        corpus_future_value=tvm.future_value_lumpsum(corpus_rate, years, goal.current_corpus),
    )


def evaluate_goals(
    goals: Iterable[Goal],
    catalog: Sequence[Category] = DEFAULT_CATALOG,
    market_rates: Optional[Mapping[str, float]] = None,
    rate_provider: Optional[RateProvider] = None,
) -> List[Insight]:
    """Evaluate several goals against one shared market-rate snapshot."""
    if market_rates is None:
        market_rates = collect_market_rates(rate_provider, catalog)
    return [evaluate_goal(goal, catalog, market_rates) for goal in goals]
