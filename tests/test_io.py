import datetime as dt
import json
from pathlib import Path

import pytest

from goalplan_core.domain.models import RiskLabel
from goalplan_core.io import config as config_io
from goalplan_core.io import goals as goals_io

DATA = Path(__file__).parent / "data"


def test_load_goal_json():
    goal = config_io.load_goal(DATA / "goal.json")
    assert goal.id == "house"
    assert goal.start_date == dt.date(2024, 1, 1)
    assert goal.target_date == dt.date(2034, 1, 1)
    assert goal.amount_needed_today == 1_000_000
    assert goal.monthly_contribution == 10_000


def test_goal_defaults(tmp_path: Path):
    path = tmp_path / "trip.json"
    path.write_text(json.dumps({"name": "Trip", "target_date": "2030-05-01", "amount_needed_today": 5000}))
    goal = config_io.load_goal(path)
    assert goal.id == "trip"
    assert goal.start_date == dt.date.today()
    assert goal.inflation_rate_percent == config_io.DEFAULT_INFLATION_PERCENT
    assert goal.current_corpus == 0
    assert goal.step_up_rate_percent == 0


def test_goal_missing_required_field(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"name": "Trip"}))
    with pytest.raises(ValueError):
        config_io.load_goal(path)


def test_load_goals_csv():
    goals = goals_io.load_goals(DATA / "goals.csv")
    assert [g.id for g in goals] == ["house", "goal-2"]
    vacation = goals[1]
    assert vacation.name == "Vacation"
    assert vacation.current_corpus == 50_000
    assert vacation.monthly_contribution == 0
    assert vacation.inflation_rate_percent == config_io.DEFAULT_INFLATION_PERCENT


def test_load_goals_csv_errors(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        goals_io.load_goals(tmp_path / "missing.csv")
    bad = tmp_path / "bad.csv"
    bad.write_text("name,amount_needed_today\nCar,100\n")
    with pytest.raises(ValueError):
        goals_io.load_goals(bad)


def test_load_market_rates_drops_nulls():
    rates = config_io.load_market_rates(DATA / "rates.json")
    assert rates == {"large_cap": 12.0, "flexi_cap": 25.0}


def test_load_catalog(tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            [
                {"id": "fd", "name": "Fixed Deposit", "risk": "LOW", "min_return_percent": 6, "max_return_percent": 7},
                {"id": "gold", "risk": "moderate-high", "min_return_percent": 8, "max_return_percent": 10},
            ]
        )
    )
    catalog = config_io.load_catalog(path)
    assert isinstance(catalog, tuple)
    assert [c.id for c in catalog] == ["fd", "gold"]
    assert catalog[1].risk is RiskLabel.MODERATE_HIGH
    assert catalog[1].name == "gold"


@pytest.mark.parametrize(
    "payload",
    [
        [
            {"id": "a", "risk": "LOW", "min_return_percent": 1, "max_return_percent": 2},
            {"id": "a", "risk": "LOW", "min_return_percent": 1, "max_return_percent": 2},
        ],
        [{"id": "a", "risk": "LOW", "min_return_percent": 5, "max_return_percent": 2}],
        [{"id": "a", "risk": "NONE", "min_return_percent": 1, "max_return_percent": 2}],
    ],
)
def test_load_catalog_rejects_invalid(tmp_path: Path, payload):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(payload))
    with pytest.raises(ValueError):
        config_io.load_catalog(path)


def test_goal_inflation_null_uses_default_and_zero_is_kept(tmp_path: Path):
    base = {"name": "Trip", "target_date": "2030-05-01", "amount_needed_today": 5000}
    path = tmp_path / "trip.json"

    path.write_text(json.dumps({**base, "inflation_rate_percent": None}))
    assert config_io.load_goal(path).inflation_rate_percent == config_io.DEFAULT_INFLATION_PERCENT

    path.write_text(json.dumps({**base, "inflation_rate_percent": 0}))
    assert config_io.load_goal(path).inflation_rate_percent == 0
