from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from goalplan_core.domain.models import Category, RiskLabel

LIQUID = "liquid"
SHORT_DEBT = "short_debt"
CONSERVATIVE_HYBRID = "cons_hybrid"
AGGRESSIVE_HYBRID = "agg_hybrid"
LARGE_CAP = "large_cap"
FLEXI_CAP = "flexi_cap"

DEFAULT_CATALOG: Tuple[Category, ...] = (
    Category(LIQUID, "Liquid / Arbitrage Funds", RiskLabel.LOW, 5, 6, "119598"),
    Category(SHORT_DEBT, "Short-term Debt Funds", RiskLabel.LOW_MODERATE, 6, 7, "119800"),
    Category(CONSERVATIVE_HYBRID, "Conservative Hybrid Funds", RiskLabel.MODERATE, 7, 9, "102885"),
    Category(AGGRESSIVE_HYBRID, "Aggressive Hybrid Funds", RiskLabel.MODERATE_HIGH, 10, 12, "102861"),
    Category(LARGE_CAP, "Large Cap Equity Funds", RiskLabel.HIGH, 12, 14, "119770"),
    Category(FLEXI_CAP, "Flexi Cap / Index Funds", RiskLabel.VERY_HIGH, 14, 18, "125497"),
)

# label -> category id used for the named alternative scenarios
SCENARIO_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("conservative", LIQUID),
    ("balanced", CONSERVATIVE_HYBRID),
    ("aggressive", LARGE_CAP),
)


def midpoint_return(category: Category) -> float:
    return category.midpoint_return_percent


def find_category(category_id: str, catalog: Sequence[Category] = DEFAULT_CATALOG) -> Optional[Category]:
    for category in catalog:
        if category.id == category_id:
            return category
    return None


def build_catalog(categories: Iterable[Category]) -> Tuple[Category, ...]:
    """
    Freeze a custom catalog after checking ids are unique and every return
    band is well formed.
    """
    frozen = tuple(categories)
    seen = set()
    for category in frozen:
        if category.id in seen:
            raise ValueError(f"Duplicate category id: {category.id}")
        seen.add(category.id)
        if category.min_return_percent > category.max_return_percent:
            raise ValueError(
                f"Category {category.id}: min return {category.min_return_percent} "
                f"exceeds max return {category.max_return_percent}"
            )
    return frozen
