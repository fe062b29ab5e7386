"""Shared types, enums, and base models used across Callboard domain models."""

import math
from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def coerce_score(value: Any) -> float | None:
    """Parse a stored or submitted score into a finite float.

    Empty strings, missing values, non-numeric text and NaN/inf all become
    ``None`` so an absent score renders as absent instead of failing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


# --- Reusable annotated types ---

UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]


# --- Shared enums ---


class ScoreCategory(StrEnum):
    """The six scored aspects of a sales call."""

    ENGAGEMENT = "engagement"
    OBJECTION_HANDLING = "objection_handling"
    INFORMATION_GATHERING = "information_gathering"
    PROGRAM_EXPLANATION = "program_explanation"
    CLOSING_SKILLS = "closing_skills"
    OVERALL_EFFECTIVENESS = "overall_effectiveness"


# Display order on the dashboard.
SCORE_CATEGORIES: tuple[ScoreCategory, ...] = tuple(ScoreCategory)

CATEGORY_LABELS: dict[ScoreCategory, str] = {
    ScoreCategory.ENGAGEMENT: "Engagement",
    ScoreCategory.OBJECTION_HANDLING: "Objection Handling",
    ScoreCategory.INFORMATION_GATHERING: "Information Gathering",
    ScoreCategory.PROGRAM_EXPLANATION: "Program Explanation",
    ScoreCategory.CLOSING_SKILLS: "Closing Skills",
    ScoreCategory.OVERALL_EFFECTIVENESS: "Overall Effectiveness",
}

CATEGORY_DESCRIPTIONS: dict[ScoreCategory, str] = {
    ScoreCategory.ENGAGEMENT: (
        "Measures how well the agent connects with the customer and keeps "
        "them interested throughout the call."
    ),
    ScoreCategory.OBJECTION_HANDLING: (
        "Evaluates the agent's ability to address and overcome customer "
        "concerns or objections."
    ),
    ScoreCategory.INFORMATION_GATHERING: (
        "Assesses how effectively the agent collects relevant information "
        "from the customer."
    ),
    ScoreCategory.PROGRAM_EXPLANATION: (
        "Rates the clarity and completeness of the agent's explanation of "
        "products or services."
    ),
    ScoreCategory.CLOSING_SKILLS: (
        "Measures the agent's ability to guide the conversation towards a "
        "successful conclusion or sale."
    ),
    ScoreCategory.OVERALL_EFFECTIVENESS: (
        "A comprehensive score reflecting the agent's overall performance "
        "during the call."
    ),
}


# --- Base model ---


class CallboardBase(BaseModel):
    """Base model with common configuration for all Callboard Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }
