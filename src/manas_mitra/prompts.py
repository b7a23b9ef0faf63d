"""Prompt builders for the mood tracker and the guided check-in."""

from dataclasses import dataclass

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class Mood:
    value: str
    label: str
    emoji: str


MOODS = (
    Mood("happy", "Happy", "😊"),
    Mood("sad", "Sad", "😢"),
    Mood("anxious", "Anxious", "😟"),
    Mood("calm", "Calm", "😌"),
    Mood("angry", "Angry", "😠"),
)
MOODS_BY_VALUE = {mood.value: mood for mood in MOODS}

ENERGY_LEVELS = ("low", "medium", "high")

MOOD_FALLBACK = (
    "Thank you for sharing how you're feeling. Your emotions are valid, "
    "and it's important to acknowledge them with kindness."
)
CHECKIN_FALLBACK = (
    "Thank you for taking the time to check in with yourself. This practice "
    "of self-awareness is valuable, and every insight you gain is a step "
    "toward understanding yourself better."
)


def mood_prompt(label: str) -> str:
    return (
        f"A user has indicated they are feeling {label.lower()}. Provide a short, "
        "gentle, and validating prompt or reflection for them. Keep it to 2-3 sentences."
    )


def checkin_prompt(energy_level: str, thoughts: str) -> str:
    return (
        f"A user is doing a check-in. Their energy level is '{energy_level}' and "
        f"they are feeling: '{thoughts}'. Provide a gentle, non-judgmental, and "
        "insightful reflection based on this."
    )


async def _reflect(client, prompt: str, fallback: str, kind: str) -> str:
    try:
        return await client.complete(prompt)
    except Exception as e:
        logger.error("reflection_failed", kind=kind, error=str(e), exc_info=True)
        return fallback


async def mood_reflection(client, mood: Mood) -> str:
    """Ask the companion for a short reflection on the selected mood."""
    return await _reflect(client, mood_prompt(mood.label), MOOD_FALLBACK, "mood")


async def checkin_reflection(client, energy_level: str, thoughts: str) -> str:
    """Ask the companion for a reflection on a guided check-in."""
    return await _reflect(
        client, checkin_prompt(energy_level, thoughts), CHECKIN_FALLBACK, "checkin"
    )
