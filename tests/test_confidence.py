import pytest

from goalplan_core.domain.models import RiskLabel
from goalplan_core.services.confidence import confidence_score


@pytest.mark.parametrize(
    "years, risk, gap, expected",
    [
        (10, RiskLabel.LOW, 0, 100),
        (10, RiskLabel.VERY_HIGH, 0, 100),
        (2, RiskLabel.HIGH, 0, 60),
        (2, RiskLabel.MODERATE_HIGH, 0, 100),
        (0.5, RiskLabel.LOW, 0, 100),
        (0.5, RiskLabel.LOW_MODERATE, 0.2, 30),
        (0.5, RiskLabel.VERY_HIGH, 0, 10),
        (0.5, RiskLabel.VERY_HIGH, 0.3, 0),
        (5, RiskLabel.MODERATE, 0.25, 75),
        (5, RiskLabel.MODERATE, 0.9, 50),
        (5, RiskLabel.MODERATE, -0.4, 100),
    ],
)
def test_confidence_penalties(years, risk, gap, expected):
    assert confidence_score(years, risk, gap) == pytest.approx(expected)


def test_confidence_bounded_and_non_increasing_in_gap():
    gaps = [0, 0.01, 0.1, 0.3, 0.5, 0.8, 2.0]
    for years in (0, 0.5, 2, 4, 20):
        for risk in RiskLabel:
            scores = [confidence_score(years, risk, g) for g in gaps]
            assert all(0 <= s <= 100 for s in scores)
            assert all(b <= a for a, b in zip(scores, scores[1:]))


def test_risk_labels_are_ordered():
    assert RiskLabel.LOW < RiskLabel.LOW_MODERATE < RiskLabel.MODERATE
    assert RiskLabel.MODERATE < RiskLabel.MODERATE_HIGH < RiskLabel.HIGH < RiskLabel.VERY_HIGH
    assert RiskLabel.parse("moderate-high") is RiskLabel.MODERATE_HIGH
    assert RiskLabel.parse("VERY HIGH") is RiskLabel.VERY_HIGH
    with pytest.raises(ValueError):
        RiskLabel.parse("extreme")


def test_confidence_keeps_fractional_penalty():
    assert confidence_score(5, RiskLabel.MODERATE, 0.123) == pytest.approx(87.7)
