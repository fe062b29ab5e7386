"""Call log models: persisted call evaluations and their write payloads.

``CallRecord`` is the read shape returned by the API and consumed by the
dashboard engine. It is frozen so a list of records can be held as an
immutable, hashable snapshot.

``CallFields`` is the write shape shared by insert and partial update. Scores,
feedback and descriptions are nested per category and flattened to
``<category>_score`` / ``_feedback`` / ``_description`` columns on write.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from callboard.models.common import (
    SCORE_CATEGORIES,
    CallboardBase,
    UTCTimestamp,
    coerce_score,
    ensure_utc,
)

# Free-text / metadata columns that map one-to-one onto model fields.
PLAIN_FIELDS: tuple[str, ...] = (
    "agent_name",
    "agent_picture_url",
    "user_name",
    "user_picture_url",
    "call_recording_url",
    "call_details",
    "call_duration",
    "call_transcript",
    "call_notes",
    "power_moment",
    "level_up_1",
    "level_up_2",
    "level_up_3",
    "strong_points",
    "areas_for_improvement",
)


class CategoryScores(CallboardBase):
    """Per-category scores plus the derived average and optional overall score."""

    model_config = {"frozen": True}

    engagement: float | None = None
    objection_handling: float | None = None
    information_gathering: float | None = None
    program_explanation: float | None = None
    closing_skills: float | None = None
    overall_effectiveness: float | None = None
    average_success: float | None = None
    overall_performance: float | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> float | None:
        return coerce_score(value)

    def category_mean(self) -> float | None:
        """Mean of the six category scores that are present."""
        present = [
            getattr(self, category.value)
            for category in SCORE_CATEGORIES
            if getattr(self, category.value) is not None
        ]
        if not present:
            return None
        return sum(present) / len(present)


class CategoryFeedback(CallboardBase):
    """Free-text coaching feedback, one string per category."""

    model_config = {"frozen": True}

    engagement: str | None = None
    objection_handling: str | None = None
    information_gathering: str | None = None
    program_explanation: str | None = None
    closing_skills: str | None = None
    overall_effectiveness: str | None = None


class CategoryDescriptions(CategoryFeedback):
    """Per-category descriptions shown when feedback is absent."""


class CallRecord(CallboardBase):
    """One persisted call evaluation as served by ``GET /api/dashboard``."""

    model_config = {"frozen": True}

    id: int
    member_id: str
    call_number: int
    call_date: UTCTimestamp

    agent_name: str | None = None
    agent_picture_url: str | None = None
    user_name: str | None = None
    user_picture_url: str | None = None

    call_recording_url: str | None = None
    call_details: str | None = None
    call_duration: float | None = None
    call_transcript: str | None = None
    call_notes: str | None = None

    power_moment: str | None = None
    level_up_1: str | None = None
    level_up_2: str | None = None
    level_up_3: str | None = None
    strong_points: str | None = None
    areas_for_improvement: str | None = None

    scores: CategoryScores = Field(default_factory=CategoryScores)
    feedback: CategoryFeedback = Field(default_factory=CategoryFeedback)
    descriptions: CategoryDescriptions = Field(default_factory=CategoryDescriptions)

    @field_validator("call_date", mode="after")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("call_duration", mode="before")
    @classmethod
    def _duration(cls, value: Any) -> float | None:
        return coerce_score(value)

    @classmethod
    def from_row(cls, row: Any) -> "CallRecord":
        """Build a record from a ``CallLogRow``, coercing scores to numbers."""
        return cls(
            id=row.id,
            member_id=row.member_id,
            call_number=row.call_number,
            call_date=row.call_date,
            **{name: getattr(row, name) for name in PLAIN_FIELDS},
            scores=CategoryScores(**{
                name: getattr(row, f"{name}_score")
                for name in CategoryScores.model_fields
            }),
            feedback=CategoryFeedback(**{
                category.value: getattr(row, f"{category.value}_feedback")
                for category in SCORE_CATEGORIES
            }),
            descriptions=CategoryDescriptions(**{
                category.value: getattr(row, f"{category.value}_description")
                for category in SCORE_CATEGORIES
            }),
        )


class CallFields(CallboardBase):
    """Writable call fields. Every field is optional.

    On insert, absent fields are stored as NULL. On update, absent or null
    fields keep the stored value.
    """

    model_config = {"extra": "ignore"}

    call_date: datetime | None = None

    agent_name: str | None = None
    agent_picture_url: str | None = None
    user_name: str | None = None
    user_picture_url: str | None = None

    call_recording_url: str | None = None
    call_details: str | None = None
    call_duration: float | None = None
    call_transcript: str | None = None
    call_notes: str | None = None

    power_moment: str | None = None
    level_up_1: str | None = None
    level_up_2: str | None = None
    level_up_3: str | None = None
    strong_points: str | None = None
    areas_for_improvement: str | None = None

    scores: CategoryScores | None = None
    feedback: CategoryFeedback | None = None
    descriptions: CategoryDescriptions | None = None

    @field_validator("call_duration", mode="before")
    @classmethod
    def _duration(cls, value: Any) -> float | None:
        return coerce_score(value)

    def to_columns(self, *, include_none: bool) -> dict[str, Any]:
        """Flatten to ``call_logs`` column names.

        With ``include_none=False`` only the fields that carry a value are
        returned, which is what a null-coalescing update needs.
        """
        values: dict[str, Any] = {"call_date": self.call_date}
        values.update({name: getattr(self, name) for name in PLAIN_FIELDS})
        if self.scores is not None:
            values.update({
                f"{name}_score": value for name, value in self.scores.model_dump().items()
            })
        if self.feedback is not None:
            values.update({
                f"{name}_feedback": value for name, value in self.feedback.model_dump().items()
            })
        if self.descriptions is not None:
            values.update({
                f"{name}_description": value
                for name, value in self.descriptions.model_dump().items()
            })
        if include_none:
            return values
        return {name: value for name, value in values.items() if value is not None}

    def derived_average(self) -> float | None:
        """``average_success`` to store on insert when the caller gave none."""
        if self.scores is None:
            return None
        if self.scores.average_success is not None:
            return self.scores.average_success
        return self.scores.category_mean()
