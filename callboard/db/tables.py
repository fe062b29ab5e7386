"""SQLAlchemy ORM table models for Callboard.

``call_logs`` holds one row per evaluated sales call. Scores, feedback and
descriptions are stored as flat per-category columns (``<category>_score``,
``<category>_feedback``, ``<category>_description``).

``member_call_counters`` remembers the highest call number issued per member.
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from callboard.db.session import Base


class CallLogRow(Base):
    """Persisted call evaluation.

    ``id`` is the only stable key for update/delete. ``call_number`` is
    sequential per member and is never reused or renumbered.
    """

    __tablename__ = "call_logs"
    __table_args__ = (
        UniqueConstraint("member_id", "call_number", name="uq_call_logs_member_call_number"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    call_number: Mapped[int] = mapped_column(Integer, nullable=False)
    call_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    # --- Participants ---
    agent_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    agent_picture_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_picture_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Call metadata ---
    call_recording_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    call_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    call_duration: Mapped[float | None] = mapped_column(Float, nullable=True)
    call_transcript: Mapped[str | None] = mapped_column(Text, nullable=True)
    call_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Coaching ---
    power_moment: Mapped[str | None] = mapped_column(Text, nullable=True)
    level_up_1: Mapped[str | None] = mapped_column(Text, nullable=True)
    level_up_2: Mapped[str | None] = mapped_column(Text, nullable=True)
    level_up_3: Mapped[str | None] = mapped_column(Text, nullable=True)
    strong_points: Mapped[str | None] = mapped_column(Text, nullable=True)
    areas_for_improvement: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Scores (0-100 by convention) ---
    engagement_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    objection_handling_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    information_gathering_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    program_explanation_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    closing_skills_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    overall_effectiveness_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    average_success_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    overall_performance_score: Mapped[float | None] = mapped_column(Float, nullable=True)

    # --- Feedback ---
    engagement_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    objection_handling_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    information_gathering_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    program_explanation_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    closing_skills_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    overall_effectiveness_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Descriptions (fallback when feedback is absent) ---
    engagement_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    objection_handling_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    information_gathering_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    program_explanation_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    closing_skills_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    overall_effectiveness_description: Mapped[str | None] = mapped_column(Text, nullable=True)


class MemberCallCounterRow(Base):
    """Highest ``call_number`` ever issued per member.

    Survives deletes so a deleted member's newest number is not handed out
    again.
    """

    __tablename__ = "member_call_counters"

    member_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    last_call_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
