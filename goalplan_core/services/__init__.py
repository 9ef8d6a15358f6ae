from goalplan_core.services.advisor import evaluate_goal, evaluate_goals  # noqa: F401
from goalplan_core.services.catalog import DEFAULT_CATALOG, find_category  # noqa: F401
from goalplan_core.services.confidence import confidence_score  # noqa: F401
from goalplan_core.services.curve import build_growth_curve  # noqa: F401
from goalplan_core.services.rates import FixedRateProvider, NavHistoryRateProvider  # noqa: F401

__all__ = [
    "DEFAULT_CATALOG",
    "FixedRateProvider",
    "NavHistoryRateProvider",
    "build_growth_curve",
    "confidence_score",
    "evaluate_goal",
    "evaluate_goals",
    "find_category",
]
