"""Chat domain models: mood labels, classification results and payloads.

ClassificationResult is derived once per request and is immutable.
ResponsePayload is built once, returned to the caller and discarded -
nothing here is persisted.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class Mood(Enum):
    """Discrete mood label derived from an integer sentiment score.

    The enum value is the exact string sent on the wire.
    """
    VERY_NEGATIVE = "very negative"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    POSITIVE = "positive"
    VERY_POSITIVE = "very positive"


@dataclass(frozen=True)
class ClassificationResult:
    """Local classification of a single user message.

    matched_phrases is kept for logging only and never serialized.
    """
    score: int
    mood: Mood
    urgent: bool
    matched_phrases: Tuple[str, ...] = ()

    def __post_init__(self):
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise ValueError(f"Score must be an int, got {self.score!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "mood": self.mood.value,
            "urgent": self.urgent,
        }


@dataclass
class ResponsePayload:
    """Final response for POST /api/chat."""
    parsed: Dict[str, Any]
    mood: Mood
    score: int
    urgent: bool
    raw_model_response: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Render the wire shape expected by the chat widget."""
        return {
            "parsed": self.parsed,
            "mood": self.mood.value,
            "score": self.score,
            "urgent": self.urgent,
            "rawModelResponse": self.raw_model_response,
        }
