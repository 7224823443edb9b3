"""Classifier Service: local heuristics that run before any model call.

Every message is scored for sentiment and checked for crisis language
BEFORE a prompt is built. The urgency flag selects the crisis template and
guarantees the safety floor on the way out.

Components:
- sentiment_scorer.py: SentimentScorer (lexicon sum -> score -> mood)
- urgency_detector.py: UrgencyDetector (conservative phrase match)
- text_normalizer.py: TextNormalizer (leetspeak/unicode folding)
- classifier.py: MessageClassifier (both in one pass)
- config.py: MoodThresholds, phrase sets, ClassifierConfig

Usage:
    from campuscalm.services.classifier_service import MessageClassifier
    result = MessageClassifier().classify("I feel okay today")
"""

from .classifier import MessageClassifier
from .config import ClassifierConfig, MoodThresholds, URGENT_PHRASES, NEGATORS
from .sentiment_scorer import SentimentScorer, mood_from_score, load_vader_lexicon
from .text_normalizer import TextNormalizer, normalize_text
from .urgency_detector import UrgencyDetector

__all__ = [
    "MessageClassifier",
    "ClassifierConfig",
    "MoodThresholds",
    "URGENT_PHRASES",
    "NEGATORS",
    "SentimentScorer",
    "mood_from_score",
    "load_vader_lexicon",
    "TextNormalizer",
    "normalize_text",
    "UrgencyDetector",
]
