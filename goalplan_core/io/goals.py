from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from goalplan_core.domain.models import Goal
from goalplan_core.io.config import goal_from_dict

REQUIRED_COLUMNS = {"name", "target_date", "amount_needed_today"}


def load_goals(csv_path: str | Path) -> List[Goal]:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path, dtype={"id": str})
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in goals CSV: {missing}")

    # blank optional cells fall back to the loader defaults
    df = df.astype(object).where(pd.notna(df), None)
    goals: List[Goal] = []
    for i, row in df.iterrows():
        data = {k: v for k, v in row.to_dict().items() if v is not None}
        goals.append(goal_from_dict(data, fallback_id=f"goal-{i + 1}"))
    return goals


def load_nav_history(csv_path: str | Path) -> pd.DataFrame:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)
    return pd.read_csv(path, dtype={"scheme_code": str})
