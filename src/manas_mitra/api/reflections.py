"""Mood tracker and guided check-in endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from manas_mitra.completion import ResilientCompletionClient
from manas_mitra.prompts import (
    ENERGY_LEVELS,
    MOODS,
    MOODS_BY_VALUE,
    checkin_reflection,
    mood_reflection,
)
from .deps import get_completion_client

router = APIRouter(tags=["reflections"])

MoodValue = Literal["happy", "sad", "anxious", "calm", "angry"]
EnergyLevel = Literal["low", "medium", "high"]


class MoodOption(BaseModel):
    value: str
    label: str
    emoji: str


class MoodReflectionRequest(BaseModel):
    mood: MoodValue


class MoodReflectionResponse(BaseModel):
    mood: str
    reflection: str


class CheckinRequest(BaseModel):
    energy_level: EnergyLevel
    thoughts: str = Field(min_length=1)

    @field_validator("thoughts")
    @classmethod
    def thoughts_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("thoughts cannot be blank")
        return v


class CheckinResponse(BaseModel):
    energy_level: str
    reflection: str


@router.get("/moods", response_model=list[MoodOption])
async def list_moods() -> list[MoodOption]:
    return [MoodOption(value=m.value, label=m.label, emoji=m.emoji) for m in MOODS]


@router.post("/moods/reflection", response_model=MoodReflectionResponse)
async def reflect_on_mood(
    data: MoodReflectionRequest,
    client: ResilientCompletionClient = Depends(get_completion_client),
) -> MoodReflectionResponse:
    """Get a short, validating reflection for the selected mood."""
    reflection = await mood_reflection(client, MOODS_BY_VALUE[data.mood])
    return MoodReflectionResponse(mood=data.mood, reflection=reflection)


@router.get("/checkin/energy-levels", response_model=list[str])
async def list_energy_levels() -> list[str]:
    return list(ENERGY_LEVELS)


@router.post("/checkin/reflection", response_model=CheckinResponse)
async def reflect_on_checkin(
    data: CheckinRequest,
    client: ResilientCompletionClient = Depends(get_completion_client),
) -> CheckinResponse:
    """Get a reflection on the user's energy level and thoughts."""
    reflection = await checkin_reflection(client, data.energy_level, data.thoughts)
    return CheckinResponse(energy_level=data.energy_level, reflection=reflection)
