"""
Score Calculator
================
Turns one user's amenity answers into a 0-10 score.

Scoring system:
- Base score: the user's experience rating (0-10), 5 when not given
- Refills YES: +2.2, NO: -2.2
- Bread YES: +1, NO: -3
- Pay at table YES: +1.5, NO: -0.5
- Attendant YES: -3, NO: +0
- Result is clamped to [0, 10]
"""

from enum import Enum
from typing import Optional, Sequence

from refill.models import AmenityReport

MIN_SCORE = 0.0
MAX_SCORE = 10.0
DEFAULT_BASE_SCORE = 5.0

# (if true, if false) adjustments per report field
ADJUSTMENTS = {
    "free_refills": (2.2, -2.2),
    "bread_basket": (1.0, -3.0),
    "pay_at_table": (1.5, -0.5),
    "attendant": (-3.0, 0.0),
}


class ScoreColor(str, Enum):
    GREEN = "#10B981"
    AMBER = "#F59E0B"
    ORANGE = "#F97316"
    RED = "#EF4444"


def clamp_score(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def calculate_score(report: AmenityReport) -> float:
    """Score a single report: baseline plus amenity adjustments, clamped."""
    score = report.base_score if report.base_score is not None else DEFAULT_BASE_SCORE

    for field, (if_true, if_false) in ADJUSTMENTS.items():
        answer = getattr(report, field)
        if answer is True:
            score += if_true
        elif answer is False:
            score += if_false

    return clamp_score(score)


def calculate_average_score(scores: Sequence[float], weights: Optional[Sequence[float]] = None) -> float:
    """Mean of `scores`, weighted when `weights` has the same length. Empty input scores 0."""
    if not scores:
        return 0.0

    if weights is not None and len(weights) == len(scores):
        total_weight = sum(weights)
        if total_weight == 0:
            return 0.0
        return sum(s * w for s, w in zip(scores, weights)) / total_weight

    return sum(scores) / len(scores)


def get_score_color(score: float) -> ScoreColor:
    if score >= 8:
        return ScoreColor.GREEN
    if score >= 6:
        return ScoreColor.AMBER
    if score >= 4:
        return ScoreColor.ORANGE
    return ScoreColor.RED


def get_score_label(score: float) -> str:
    if score >= 9:
        return "Excellent"
    if score >= 7:
        return "Very Good"
    if score >= 5:
        return "Good"
    if score >= 3:
        return "Fair"
    return "Poor"
