"""Urgency detection: flags crisis-risk language in a user message.

Conservative, high-recall phrase matching. False positives are accepted;
false negatives are not. Any replacement classifier must keep the boolean
contract and the bias toward over-flagging.
"""
import logging
import re
from typing import Iterable, List, Optional, Tuple

from .config import URGENT_PHRASES
from .text_normalizer import TextNormalizer

logger = logging.getLogger(__name__)


def phrase_to_pattern(phrase: str) -> "re.Pattern[str]":
    """Compile a phrase into a word-bounded, case-insensitive regex.

    - whitespace matches any whitespace run
    - a hyphen matches hyphen, space or nothing (self-harm, self harm, selfharm)
    - an apostrophe matches straight, curly or no apostrophe (can't, can’t, cant)

    Args:
        phrase: Plain lowercase phrase

    Returns:
        Compiled pattern
    """
    parts = []
    for char in phrase.strip().lower():
        if char.isspace():
            if parts and parts[-1] == r"\s+":
                continue
            parts.append(r"\s+")
        elif char == "-":
            parts.append(r"[-\s]?")
        elif char == "'":
            parts.append(r"['\u2019]?")
        else:
            parts.append(re.escape(char))
    return re.compile(rf"\b{''.join(parts)}\b", re.IGNORECASE)


class UrgencyDetector:
    """Binary crisis-language detector.

    Matches the lowercased text and, when enabled, the TextNormalizer
    output. A hit in either flags the message, so normalization can only
    add matches.
    """

    def __init__(
        self,
        phrases: Optional[Iterable[str]] = None,
        normalizer: Optional[TextNormalizer] = None,
        normalize_text: bool = True,
    ):
        """Initialize detector.

        Args:
            phrases: Crisis phrases (default: URGENT_PHRASES)
            normalizer: Normalizer for disguised text (created if None)
            normalize_text: Whether to also match normalized text
        """
        source = URGENT_PHRASES if phrases is None else phrases
        # Sorted for deterministic matched_phrases order
        self._patterns: List[Tuple[str, "re.Pattern[str]"]] = [
            (phrase, phrase_to_pattern(phrase))
            for phrase in sorted({p.strip().lower() for p in source if p and p.strip()})
        ]
        self._normalizer: Optional[TextNormalizer] = None
        if normalize_text:
            self._normalizer = normalizer or TextNormalizer()

        logger.info(
            "URGENCY_DETECTOR_INITIALIZED",
            extra={
                "phrase_count": len(self._patterns),
                "normalization_enabled": self._normalizer is not None,
            }
        )

    @property
    def phrases(self) -> Tuple[str, ...]:
        return tuple(phrase for phrase, _ in self._patterns)

    def matched_phrases(self, text: str) -> List[str]:
        """Return every configured phrase found in text.

        Args:
            text: Raw message text

        Returns:
            Matched phrases in sorted order (empty if none)
        """
        if not text:
            return []

        candidates = [text.lower()]
        if self._normalizer is not None:
            normalized = self._normalizer.normalize(text)
            if normalized and normalized != candidates[0]:
                candidates.append(normalized)

        return [
            phrase
            for phrase, pattern in self._patterns
            if any(pattern.search(candidate) for candidate in candidates)
        ]

    def is_urgent(self, text: str) -> bool:
        """True if text contains any crisis phrase."""
        return bool(self.matched_phrases(text))

    __call__ = is_urgent
