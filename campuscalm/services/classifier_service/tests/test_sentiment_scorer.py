"""Tests for SentimentScorer and the score -> mood mapping.

A small fixture lexicon is injected so no NLTK resource is needed.
"""
import pytest
from unittest.mock import patch, MagicMock

from campuscalm.shared.models import Mood
from campuscalm.services.classifier_service import sentiment_scorer as scorer_module
from campuscalm.services.classifier_service.config import MoodThresholds
from campuscalm.services.classifier_service.sentiment_scorer import (
    SentimentScorer,
    mood_from_score,
    load_vader_lexicon,
)


LEXICON = {
    "okay": 0.9,
    "good": 1.9,
    "great": 3.1,
    "happy": 2.7,
    "love": 3.2,
    "sad": -2.1,
    "terrible": -2.1,
    "hate": -2.7,
    "hopeless": -2.0,
    "kill": -3.7,
}


@pytest.fixture
def scorer():
    return SentimentScorer(lexicon=LEXICON)


class TestMoodFromScore:
    """Threshold table: <=-4, -3..-1, 0, 1..3, >=4."""

    @pytest.mark.parametrize("score,mood", [
        (-10, Mood.VERY_NEGATIVE),
        (-5, Mood.VERY_NEGATIVE),
        (-4, Mood.VERY_NEGATIVE),
        (-3, Mood.NEGATIVE),
        (-1, Mood.NEGATIVE),
        (0, Mood.NEUTRAL),
        (1, Mood.POSITIVE),
        (2, Mood.POSITIVE),
        (3, Mood.POSITIVE),
        (4, Mood.VERY_POSITIVE),
        (12, Mood.VERY_POSITIVE),
    ])
    def test_threshold_table(self, score, mood):
        assert mood_from_score(score) == mood

    def test_custom_thresholds(self):
        thresholds = MoodThresholds(VERY_NEGATIVE_MAX=-8, VERY_POSITIVE_MIN=7)
        assert mood_from_score(-5, thresholds) == Mood.NEGATIVE
        assert mood_from_score(-8, thresholds) == Mood.VERY_NEGATIVE
        assert mood_from_score(5, thresholds) == Mood.POSITIVE
        assert mood_from_score(7, thresholds) == Mood.VERY_POSITIVE

    def test_invalid_thresholds_raise(self):
        with pytest.raises(ValueError):
            MoodThresholds(VERY_NEGATIVE_MAX=0, VERY_POSITIVE_MIN=4)


class TestScore:
    """Lexicon summation."""

    def test_returns_int(self, scorer):
        assert isinstance(scorer.score("I am happy and sad"), int)

    def test_neutral_okay_message(self, scorer):
        """Weak single words truncate to zero."""
        score, mood = scorer.analyze("I feel okay today")
        assert score == 0
        assert mood == Mood.NEUTRAL

    def test_positive_message(self, scorer):
        score, mood = scorer.analyze("Today was good, I'm happy")
        # 1.9 + 2.7 = 4.6
        assert score == 4
        assert mood == Mood.VERY_POSITIVE

    def test_negative_message(self, scorer):
        score, mood = scorer.analyze("I feel sad")
        assert score == -2
        assert mood == Mood.NEGATIVE

    def test_very_negative_message(self, scorer):
        score, mood = scorer.analyze("I hate this, everything is terrible and hopeless")
        # -2.7 - 2.1 - 2.0 = -6.8
        assert score == -6
        assert mood == Mood.VERY_NEGATIVE

    def test_case_and_punctuation_ignored(self, scorer):
        assert scorer.score("GREAT!!!") == scorer.score("great")

    def test_repeated_words_accumulate(self, scorer):
        assert scorer.score("good good good") == 5

    def test_negation_inverts_next_token(self, scorer):
        assert scorer.score("I am not happy") == -2
        assert scorer.score("I don't love it") == -3

    def test_curly_apostrophe_negator(self, scorer):
        assert scorer.score("I don’t love it") == -3

    def test_negation_only_affects_adjacent_token(self, scorer):
        # "not" precedes "really", not "happy"
        assert scorer.score("not really happy") == 2

    def test_float_noise_does_not_drop_a_point(self):
        scorer = SentimentScorer(lexicon={"a1": 0.1, "b2": 0.2, "c3": 3.7})
        # 0.1 + 0.2 + 3.7 == 4.000000000000001 or 3.9999999999999996
        assert scorer.score("a1 b2 c3") == 4


class TestDegenerateInput:
    """No failure mode: degenerate input is neutral."""

    def test_empty_string(self, scorer):
        assert scorer.analyze("") == (0, Mood.NEUTRAL)

    def test_punctuation_only(self, scorer):
        assert scorer.analyze("?!... ---") == (0, Mood.NEUTRAL)

    def test_unknown_tokens(self, scorer):
        assert scorer.analyze("the quick brown fox") == (0, Mood.NEUTRAL)

    def test_deterministic(self, scorer):
        text = "I love my friends but exams are terrible"
        assert scorer.score(text) == scorer.score(text)

    def test_empty_input_does_not_load_default_lexicon(self):
        scorer = SentimentScorer()
        with patch.object(scorer_module, "load_vader_lexicon") as mock_load:
            assert scorer.score("") == 0
        mock_load.assert_not_called()


class TestTokenize:

    def test_splits_on_punctuation(self):
        assert SentimentScorer.tokenize("good,bad.ok") == ["good", "bad", "ok"]

    def test_keeps_inner_apostrophes(self):
        assert SentimentScorer.tokenize("I can't") == ["i", "can't"]

    def test_strips_quote_apostrophes(self):
        assert SentimentScorer.tokenize("'hello'") == ["hello"]


class TestDefaultLexicon:
    """VADER loading, with nltk mocked."""

    def test_loads_lazily_once(self):
        scorer = SentimentScorer()
        with patch.object(scorer_module, "load_vader_lexicon", return_value={"good": 2.0}) as mock_load:
            assert scorer.score("good") == 2
            assert scorer.score("good good") == 4
        mock_load.assert_called_once()

    def test_load_vader_lexicon_uses_installed_resource(self):
        analyzer = MagicMock()
        analyzer.lexicon = {"good": 1.9}
        with patch.object(scorer_module.nltk.data, "find") as mock_find, \
                patch.object(scorer_module.nltk, "download") as mock_download, \
                patch.object(scorer_module, "SentimentIntensityAnalyzer", return_value=analyzer):
            lexicon = load_vader_lexicon()

        mock_find.assert_called_once_with("sentiment/vader_lexicon.zip")
        mock_download.assert_not_called()
        assert lexicon == {"good": 1.9}

    def test_load_vader_lexicon_downloads_when_missing(self):
        analyzer = MagicMock()
        analyzer.lexicon = {"sad": -2.1}
        with patch.object(scorer_module.nltk.data, "find", side_effect=LookupError("missing")), \
                patch.object(scorer_module.nltk, "download") as mock_download, \
                patch.object(scorer_module, "SentimentIntensityAnalyzer", return_value=analyzer):
            lexicon = load_vader_lexicon()

        mock_download.assert_called_once_with("vader_lexicon", quiet=True)
        assert lexicon == {"sad": -2.1}
