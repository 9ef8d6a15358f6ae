from goalplan_core.io.goals import load_goals, load_nav_history  # noqa: F401
from goalplan_core.io.config import (  # noqa: F401
    load_catalog,
    load_goal,
    load_market_rates,
)

__all__ = ["load_goals", "load_nav_history", "load_catalog", "load_goal", "load_market_rates"]
