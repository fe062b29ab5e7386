"""Score-to-colour classification for charts, score bars and averages.

A single pure, total, monotonic mapping from a score to a display tier.
Scores outside [0, 100] fall into the nearest tier; NaN and missing scores
fall into the lowest.
"""

import math
from enum import StrEnum

MEDIUM_SCORE_THRESHOLD = 50.0
HIGH_SCORE_THRESHOLD = 80.0


class ScoreTier(StrEnum):
    """Display tier, ordered worst to best."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


TIER_COLORS: dict[ScoreTier, str] = {
    ScoreTier.LOW: "#ef4444",
    ScoreTier.MEDIUM: "#f59e0b",
    ScoreTier.HIGH: "#22c55e",
}


def classify_score(score: float | None) -> ScoreTier:
    """Map a score to its tier."""
    if score is None or math.isnan(score):
        return ScoreTier.LOW
    if score >= HIGH_SCORE_THRESHOLD:
        return ScoreTier.HIGH
    if score >= MEDIUM_SCORE_THRESHOLD:
        return ScoreTier.MEDIUM
    return ScoreTier.LOW


def score_color(score: float | None) -> str:
    """Hex colour for a score."""
    return TIER_COLORS[classify_score(score)]
