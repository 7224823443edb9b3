"""Message classification: sentiment + urgency in one pass.

Runs before any prompt is built. Produces the immutable
ClassificationResult that drives template selection and the safety floor.
"""
import logging
import time
from typing import Optional

from campuscalm.shared.models import ClassificationResult
from campuscalm.shared.utils import short_fingerprint
from .config import ClassifierConfig
from .sentiment_scorer import SentimentScorer
from .urgency_detector import UrgencyDetector

logger = logging.getLogger(__name__)


class MessageClassifier:
    """Classifies a user message into score, mood and urgency."""

    def __init__(
        self,
        config: Optional[ClassifierConfig] = None,
        scorer: Optional[SentimentScorer] = None,
        detector: Optional[UrgencyDetector] = None,
    ):
        """Initialize classifier.

        Args:
            config: Phrase sets, negators and thresholds
            scorer: Sentiment scorer (built from config if None)
            detector: Urgency detector (built from config if None)
        """
        self.config = config or ClassifierConfig()
        self.scorer = scorer or SentimentScorer(
            negators=self.config.negators,
            thresholds=self.config.thresholds,
        )
        self.detector = detector or UrgencyDetector(
            phrases=self.config.urgent_phrases,
            normalize_text=self.config.normalize_text,
        )

    def classify(self, text: str) -> ClassificationResult:
        """Classify a message.

        Args:
            text: Raw message text (validated non-empty by the caller)

        Returns:
            ClassificationResult

        Logs:
            - URGENT_LANGUAGE_DETECTED (critical) when a crisis phrase matches
            - MESSAGE_CLASSIFIED after every classification
        """
        start_time = time.perf_counter()

        score, mood = self.scorer.analyze(text)
        matched = self.detector.matched_phrases(text)
        urgent = bool(matched)

        latency_ms = (time.perf_counter() - start_time) * 1000
        text_fp = short_fingerprint(text)

        if urgent:
            logger.critical(
                "URGENT_LANGUAGE_DETECTED",
                extra={
                    "text_fp": text_fp,
                    "phrase_count": len(matched),
                    "pattern_version": self.config.pattern_version,
                }
            )

        logger.info(
            "MESSAGE_CLASSIFIED",
            extra={
                "text_fp": text_fp,
                "text_length": len(text),
                "score": score,
                "mood": mood.value,
                "urgent": urgent,
                "latency_ms": round(latency_ms, 2),
            }
        )

        return ClassificationResult(
            score=score,
            mood=mood,
            urgent=urgent,
            matched_phrases=tuple(matched),
        )
