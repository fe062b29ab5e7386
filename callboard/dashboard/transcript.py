"""Transcript turn segmentation.

Transcripts arrive as one flat string of repeated ``role: <who> message:
<text>`` pairs. Turns keep source order. A ``bot`` turn is the agent; any
other role is the end user.
"""

from dataclasses import dataclass
from enum import StrEnum

ROLE_MARKER = "role:"
MESSAGE_MARKER = "message:"
AGENT_ROLE = "bot"
PLACEHOLDER_AVATAR_URL = "/placeholder.svg?height=24&width=24"


class Speaker(StrEnum):
    AGENT = "agent"
    USER = "user"


@dataclass(frozen=True)
class TranscriptSegment:
    role: str
    message: str


@dataclass(frozen=True)
class TranscriptTurn:
    role: str
    message: str
    speaker: Speaker
    name: str | None
    picture_url: str


def split_segments(transcript: str | None) -> list[TranscriptSegment]:
    """Split a flat transcript into (role, message) segments.

    Blank segments and segments without a ``message:`` marker are dropped.
    Extra ``message:`` markers belong to the message text.
    """
    if not transcript:
        return []
    segments = []
    for chunk in transcript.split(ROLE_MARKER):
        if not chunk.strip():
            continue
        role, *message_parts = chunk.split(MESSAGE_MARKER)
        if not message_parts:
            continue
        segments.append(TranscriptSegment(
            role=role.strip(),
            message=MESSAGE_MARKER.join(message_parts).strip(),
        ))
    return segments


def parse_transcript(
    transcript: str | None,
    *,
    agent_name: str | None = None,
    agent_picture_url: str | None = None,
    user_name: str | None = None,
    user_picture_url: str | None = None,
) -> list[TranscriptTurn]:
    """Segment a transcript and attribute each turn to the agent or the user."""
    turns = []
    for segment in split_segments(transcript):
        if segment.role == AGENT_ROLE:
            speaker, name, picture = Speaker.AGENT, agent_name, agent_picture_url
        else:
            speaker, name, picture = Speaker.USER, user_name, user_picture_url
        turns.append(TranscriptTurn(
            role=segment.role,
            message=segment.message,
            speaker=speaker,
            name=name,
            picture_url=picture or PLACEHOLDER_AVATAR_URL,
        ))
    return turns
