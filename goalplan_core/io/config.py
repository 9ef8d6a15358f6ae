from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from goalplan_core.domain.models import Category, Goal, RiskLabel
from goalplan_core.services.catalog import build_catalog

DEFAULT_INFLATION_PERCENT = 6.0


def parse_date(raw: Any) -> dt.date:
    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw
    return dt.date.fromisoformat(str(raw).strip())


def goal_from_dict(data: Dict[str, Any], fallback_id: Optional[str] = None) -> Goal:
    for key in ("name", "target_date", "amount_needed_today"):
        if data.get(key) in (None, ""):
            raise ValueError(f"Goal is missing required field: {key}")
    start = data.get("start_date")
    inflation = data.get("inflation_rate_percent")
    return Goal(
        id=str(data.get("id") or fallback_id or data["name"]),
        name=str(data["name"]),
        start_date=parse_date(start) if start else dt.date.today(),
        target_date=parse_date(data["target_date"]),
        amount_needed_today=float(data["amount_needed_today"]),
        inflation_rate_percent=float(DEFAULT_INFLATION_PERCENT if inflation is None else inflation),
        current_corpus=float(data.get("current_corpus", 0.0) or 0.0),
        monthly_contribution=float(data.get("monthly_contribution", 0.0) or 0.0),
        step_up_rate_percent=float(data.get("step_up_rate_percent", 0.0) or 0.0),
    )


def load_goal(path: str | Path) -> Goal:
    return goal_from_dict(_read_json(path), fallback_id=Path(path).stem)


def load_market_rates(path: str | Path) -> Dict[str, float]:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError("Market rates file must map category ids to percents")
    return {str(k): float(v) for k, v in data.items() if v is not None}


def load_catalog(path: str | Path) -> Tuple[Category, ...]:
    data = _read_json(path)
    if not isinstance(data, list):
        raise ValueError("Catalog file must contain a list of categories")
    categories: List[Category] = []
    for item in data:
        code = item.get("scheme_code")
        categories.append(
            Category(
                id=str(item["id"]),
                name=str(item.get("name", item["id"])),
                risk=RiskLabel.parse(str(item["risk"])),
                min_return_percent=float(item["min_return_percent"]),
                max_return_percent=float(item["max_return_percent"]),
                scheme_code=str(code) if code is not None else None,
            )
        )
    return build_catalog(categories)


def _read_json(path: str | Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
