"""Shared domain models for campuscalm."""
from .chat import (
    Mood,
    ClassificationResult,
    ResponsePayload,
)

__all__ = [
    "Mood",
    "ClassificationResult",
    "ResponsePayload",
]
