"""Wire models for the generateContent endpoint."""

from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError


# --- Request ---


class Part(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = None


class Content(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parts: list[Part] = Field(default_factory=list)


class GenerateContentRequest(BaseModel):
    contents: list[Content]
    system_instruction: Content = Field(serialization_alias="systemInstruction")

    @classmethod
    def build(cls, prompt: str, system_instruction: str) -> "GenerateContentRequest":
        return cls(
            contents=[Content(parts=[Part(text=prompt)])],
            system_instruction=Content(parts=[Part(text=system_instruction)]),
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Response ---
# Each level is validated on its own so only the first candidate and its
# first part have to be well formed.


class Candidate(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    content: Any = None
    finish_reason: str | None = Field(default=None, alias="finishReason")


class CandidateContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parts: list[Any] = Field(default_factory=list)


class GenerateContentResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    candidates: list[Any] = Field(default_factory=list)


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class Refusal:
    reason: str


@dataclass(frozen=True)
class Malformed:
    detail: str


CompletionResult = Success | Refusal | Malformed

M = TypeVar("M", bound=BaseModel)


def _validate(model: type[M], value: Any) -> M | None:
    try:
        return model.model_validate(value)
    except ValidationError:
        return None


def _first_text(candidate: Candidate) -> str | None:
    content = _validate(CandidateContent, candidate.content)
    if content is None or not content.parts:
        return None
    part = _validate(Part, content.parts[0])
    return part.text if part else None


def decode_response(payload: Any) -> CompletionResult:
    """Decode a 2xx response body into Success, Refusal or Malformed.

    Only the first candidate and its first part are considered. Text wins
    over a finish reason; an empty text string counts as no text.
    """
    try:
        response = GenerateContentResponse.model_validate(payload)
    except ValidationError as e:
        return Malformed(detail=f"{e.error_count()} validation error(s)")

    if not response.candidates:
        return Malformed(detail="no candidates")

    candidate = _validate(Candidate, response.candidates[0])
    if candidate is None:
        return Malformed(detail="first candidate is not an object")

    text = _first_text(candidate)
    if text:
        return Success(text=text)

    if candidate.finish_reason:
        return Refusal(reason=candidate.finish_reason)

    return Malformed(detail="candidate has neither text nor finish reason")
