"""Classifier Service configuration: mood thresholds and phrase sets.

Module-level sets are defaults only. Every component takes its phrase list,
negators and thresholds at construction time so tests and future locales
can swap them without touching the matching logic.
"""
from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class MoodThresholds:
    """Score boundaries for mood labels.

    score <= VERY_NEGATIVE_MAX   -> very negative   (default: <= -4)
    score < 0                    -> negative        (-3..-1)
    score == 0                   -> neutral
    score < VERY_POSITIVE_MIN    -> positive        (1..3)
    otherwise                    -> very positive   (>= 4)
    """
    VERY_NEGATIVE_MAX: int = -4
    VERY_POSITIVE_MIN: int = 4

    def __post_init__(self):
        if not self.VERY_NEGATIVE_MAX < 0 < self.VERY_POSITIVE_MIN:
            raise ValueError(
                "Thresholds must satisfy VERY_NEGATIVE_MAX < 0 < VERY_POSITIVE_MIN"
            )


# Crisis-indicative phrases. Matching is conservative on purpose:
# over-flagging is accepted, missing a crisis is not.
URGENT_PHRASES: FrozenSet[str] = frozenset({
    "suicide",
    "suicidal",
    "die by suicide",
    "kill myself",
    "want to die",
    "end my life",
    "hurt myself",
    "self-harm",
    "cutting",
    "i can't go on",
    "can't go on",
})

# Tokens that flip the polarity of the token right after them
NEGATORS: FrozenSet[str] = frozenset({
    "not",
    "no",
    "never",
    "neither",
    "nor",
    "without",
    "don't",
    "doesn't",
    "didn't",
    "isn't",
    "wasn't",
    "aren't",
    "weren't",
    "can't",
    "cannot",
    "couldn't",
    "won't",
    "wouldn't",
    "shouldn't",
    "haven't",
    "hasn't",
    "hadn't",
    "dont",
    "doesnt",
    "didnt",
    "isnt",
    "cant",
    "wont",
})


@dataclass(frozen=True)
class ClassifierConfig:
    """Configuration for message classification."""

    urgent_phrases: FrozenSet[str] = URGENT_PHRASES
    negators: FrozenSet[str] = NEGATORS
    thresholds: MoodThresholds = field(default_factory=MoodThresholds)

    # Also match urgency against TextNormalizer output (leetspeak, unicode)
    normalize_text: bool = True

    # Version tracking for log correlation
    pattern_version: str = "2025.10.19"
