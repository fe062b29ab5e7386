"""Seed script: load a demo member's call history into the Callboard database.

Creates 12 evaluated calls for member ``demo-member`` spread over the last
six weeks, with scores, feedback, coaching notes and short transcripts.

Idempotent: safe to run multiple times, skips if the demo member already
has calls.

Usage:
    python -m scripts.seed          # against DATABASE_URL from .env
    pytest tests/scripts/test_seed.py  # against aiosqlite in-memory
"""

import asyncio
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from callboard.models.call_log import CallFields, CategoryFeedback, CategoryScores
from callboard.models.common import utc_now
from callboard.repositories.call_logs import CallLogRepository

DEMO_MEMBER_ID = "demo-member"
DEMO_AGENT_NAME = "Ava"
DEMO_AGENT_PICTURE_URL = "https://example.com/avatars/ava.png"
DEMO_USER_NAME = "Jordan"
DEMO_CALL_COUNT = 12

# Per-call base scores: (engagement, objection, information, explanation, closing, overall).
# Trend upward so the charts show improvement.
DEMO_SCORES: list[tuple[float, float, float, float, float, float]] = [
    (42, 35, 50, 48, 30, 41),
    (45, 40, 52, 50, 35, 44),
    (51, 44, 55, 53, 38, 48),
    (55, 47, 58, 57, 42, 52),
    (58, 52, 60, 61, 47, 56),
    (61, 55, 63, 64, 50, 59),
    (64, 60, 66, 66, 55, 62),
    (68, 63, 70, 69, 58, 66),
    (72, 67, 73, 72, 63, 70),
    (76, 71, 77, 75, 68, 74),
    (81, 75, 80, 79, 73, 78),
    (85, 80, 84, 83, 79, 82),
]

DEMO_FEEDBACK = CategoryFeedback(
    engagement="Warm opener; keep the energy up after the pricing section.",
    objection_handling="Acknowledge the concern before answering it.",
    information_gathering="Good discovery questions on budget and timeline.",
    program_explanation="Tie each feature back to what the prospect said they need.",
    closing_skills="Ask for a concrete next step before ending the call.",
    overall_effectiveness="Solid call with a clear path to improvement.",
)

DEMO_TRANSCRIPT = (
    "role: bot message: Hi, this is Ava from the enrolment team. Is now a good time? "
    "role: user message: Sure, I have a few minutes. "
    "role: bot message: Great. What made you look into the program? "
    "role: user message: I want to switch careers but I'm worried about the cost."
)


def demo_call(index: int, now: datetime) -> CallFields:
    """Call ``index`` (0-based, oldest first) of the demo history."""
    engagement, objection, information, explanation, closing, overall = DEMO_SCORES[index]
    return CallFields(
        call_date=now - timedelta(days=3 * (DEMO_CALL_COUNT - index)),
        agent_name=DEMO_AGENT_NAME,
        agent_picture_url=DEMO_AGENT_PICTURE_URL,
        user_name=DEMO_USER_NAME,
        call_recording_url=f"https://example.com/recordings/demo-{index + 1}.mp3",
        call_details="Discovery call covering goals, budget and schedule.",
        call_duration=12 + index,
        call_transcript=DEMO_TRANSCRIPT,
        power_moment="Reframed the cost objection around long-term earnings.",
        level_up_1="Pause after asking about budget.",
        level_up_2="Summarise the prospect's goals before pitching.",
        level_up_3="Book the follow-up while still on the call." if index % 2 else None,
        strong_points="Rapport, discovery questions.",
        areas_for_improvement="Closing, objection handling.",
        scores=CategoryScores(
            engagement=engagement,
            objection_handling=objection,
            information_gathering=information,
            program_explanation=explanation,
            closing_skills=closing,
            overall_effectiveness=overall,
        ),
        feedback=DEMO_FEEDBACK,
    )


async def seed_demo(session: AsyncSession, now: datetime | None = None) -> dict:
    """Idempotent demo seed.

    Returns dict with keys: created (bool), member_id, call_count.
    If the demo member already has calls, returns created=False and skips.
    """
    repo = CallLogRepository(session)
    existing = await repo.list_by_member(DEMO_MEMBER_ID)
    if existing:
        return {"created": False, "member_id": DEMO_MEMBER_ID, "call_count": len(existing)}

    now = now or utc_now()
    for index in range(DEMO_CALL_COUNT):
        call = demo_call(index, now)
        columns = call.to_columns(include_none=True)
        columns["average_success_score"] = call.derived_average()
        await repo.create(member_id=DEMO_MEMBER_ID, call_date=call.call_date, columns=columns)

    return {"created": True, "member_id": DEMO_MEMBER_ID, "call_count": DEMO_CALL_COUNT}


# ---------------------------------------------------------------------------
# CLI entry point: python -m scripts.seed
# ---------------------------------------------------------------------------


async def _run_seed() -> None:
    """Run the seed against the configured database (idempotent)."""
    from callboard.db.session import async_session_factory, init_models

    await init_models()
    async with async_session_factory() as session:
        result = await seed_demo(session)

        if not result["created"]:
            print(f"Demo data already seeded ({result['call_count']} calls for "
                  f"{result['member_id']}). Skipping.")
            return

        await session.commit()

        print("Seed complete.")
        print(f"  Member:  {result['member_id']}")
        print(f"  Calls:   {result['call_count']}")
        print(f"  View:    /dashboard?memberId={result['member_id']}")


if __name__ == "__main__":
    asyncio.run(_run_seed())
