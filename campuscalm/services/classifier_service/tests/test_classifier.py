"""Tests for MessageClassifier."""
import logging

import pytest

from campuscalm.shared.models import ClassificationResult, Mood
from campuscalm.services.classifier_service.classifier import MessageClassifier
from campuscalm.services.classifier_service.config import ClassifierConfig
from campuscalm.services.classifier_service.sentiment_scorer import SentimentScorer
from campuscalm.services.classifier_service.urgency_detector import UrgencyDetector


LEXICON = {"okay": 0.9, "happy": 2.7, "kill": -3.7, "hate": -2.7, "want": 0.3}


@pytest.fixture
def classifier():
    return MessageClassifier(scorer=SentimentScorer(lexicon=LEXICON))


class TestClassify:

    def test_neutral_message(self, classifier):
        result = classifier.classify("I feel okay today")
        assert result == ClassificationResult(score=0, mood=Mood.NEUTRAL, urgent=False)

    def test_urgent_message_regardless_of_score(self, classifier):
        result = classifier.classify("I want to kill myself")
        assert result.urgent is True
        assert result.score == -3
        assert result.mood == Mood.NEGATIVE
        assert result.matched_phrases == ("kill myself",)

    def test_urgent_with_positive_score(self, classifier):
        result = classifier.classify("happy happy, but I want to die")
        assert result.urgent is True
        assert result.mood == Mood.VERY_POSITIVE

    def test_result_is_immutable(self, classifier):
        result = classifier.classify("I feel okay today")
        with pytest.raises(Exception):
            result.urgent = True

    def test_to_dict_omits_matched_phrases(self, classifier):
        result = classifier.classify("I want to kill myself")
        assert result.to_dict() == {"score": -3, "mood": "negative", "urgent": True}


class TestConfiguration:

    def test_config_flows_into_detector(self):
        config = ClassifierConfig(urgent_phrases=frozenset({"panic attack"}))
        classifier = MessageClassifier(config=config, scorer=SentimentScorer(lexicon={}))
        assert classifier.classify("having a panic attack").urgent is True
        assert classifier.classify("I want to kill myself").urgent is False

    def test_injected_components_used(self):
        detector = UrgencyDetector(phrases=["exam"], normalize_text=False)
        classifier = MessageClassifier(scorer=SentimentScorer(lexicon={}), detector=detector)
        assert classifier.classify("exam tomorrow").urgent is True


class TestLogging:

    def test_urgent_logs_critical_without_text(self, classifier, caplog):
        with caplog.at_level(logging.INFO):
            classifier.classify("I want to kill myself")

        critical = [r for r in caplog.records if r.levelno == logging.CRITICAL]
        assert [r.getMessage() for r in critical] == ["URGENT_LANGUAGE_DETECTED"]
        for record in caplog.records:
            assert "kill myself" not in record.getMessage()
            assert "kill myself" not in str(getattr(record, "text_fp", ""))

    def test_classified_event_logged(self, classifier, caplog):
        with caplog.at_level(logging.INFO):
            classifier.classify("I feel okay today")

        events = [r for r in caplog.records if r.getMessage() == "MESSAGE_CLASSIFIED"]
        assert len(events) == 1
        assert events[0].mood == "neutral"
        assert events[0].urgent is False
