"""Lexicon-based sentiment scoring.

Sums per-token polarity from a word lexicon and maps the integer total to
a Mood label. The lexicon is injected; by default the NLTK VADER lexicon
is loaded on first use.

Note: the default lexicon needs the NLTK ``vader_lexicon`` resource. It
is downloaded once if missing, so the first request after a cold start
may be slower. Pass an explicit lexicon to avoid the download entirely.
"""
import logging
import math
import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import nltk
from nltk.sentiment import SentimentIntensityAnalyzer

from campuscalm.shared.models import Mood
from .config import MoodThresholds, NEGATORS

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[a-z0-9']+")

VADER_RESOURCE = "sentiment/vader_lexicon.zip"


def load_vader_lexicon() -> Dict[str, float]:
    """Load the VADER word-valence lexicon, downloading it if absent.

    Returns:
        Mapping of lowercase token to valence (roughly -4.0 to 4.0)
    """
    try:
        nltk.data.find(VADER_RESOURCE)
    except LookupError:
        logger.warning("VADER_LEXICON_DOWNLOADING", extra={"resource": VADER_RESOURCE})
        nltk.download("vader_lexicon", quiet=True)
    lexicon = dict(SentimentIntensityAnalyzer().lexicon)
    logger.info("VADER_LEXICON_LOADED", extra={"entries": len(lexicon)})
    return lexicon


def mood_from_score(score: int, thresholds: Optional[MoodThresholds] = None) -> Mood:
    """Map an integer sentiment score to a Mood.

    Args:
        score: Integer sentiment score
        thresholds: Mood boundaries (default: MoodThresholds())

    Returns:
        Mood label
    """
    t = thresholds or MoodThresholds()
    if score <= t.VERY_NEGATIVE_MAX:
        return Mood.VERY_NEGATIVE
    if score < 0:
        return Mood.NEGATIVE
    if score == 0:
        return Mood.NEUTRAL
    if score < t.VERY_POSITIVE_MIN:
        return Mood.POSITIVE
    return Mood.VERY_POSITIVE


class SentimentScorer:
    """Integer sentiment score and mood label from raw text.

    Tokens found in the lexicon contribute their valence; a token right
    after a negator contributes the inverted valence. The float total is
    truncated toward zero, so weak single words ("okay") stay neutral.

    Holds no request state: the only mutable attribute is the lazily
    loaded default lexicon.
    """

    def __init__(
        self,
        lexicon: Optional[Mapping[str, float]] = None,
        negators: Optional[Iterable[str]] = None,
        thresholds: Optional[MoodThresholds] = None,
    ):
        """Initialize scorer.

        Args:
            lexicon: Token -> valence mapping (default: VADER, loaded lazily)
            negators: Tokens that invert the next token (default: NEGATORS)
            thresholds: Mood boundaries
        """
        self._lexicon: Optional[Dict[str, float]] = (
            {k.lower(): float(v) for k, v in lexicon.items()} if lexicon is not None else None
        )
        self.negators = frozenset(n.lower() for n in (NEGATORS if negators is None else negators))
        self.thresholds = thresholds or MoodThresholds()

    @property
    def lexicon(self) -> Dict[str, float]:
        if self._lexicon is None:
            self._lexicon = load_vader_lexicon()
        return self._lexicon

    @staticmethod
    def tokenize(text: str) -> List[str]:
        """Lowercase word tokens; punctuation other than apostrophes splits."""
        if not text:
            return []
        lowered = text.lower().replace("\u2019", "'")
        return [tok.strip("'") for tok in TOKEN_PATTERN.findall(lowered) if tok.strip("'")]

    def score(self, text: str) -> int:
        """Compute the integer sentiment score for text.

        Args:
            text: Raw message text

        Returns:
            Integer score (0 for empty or unknown-token input)
        """
        tokens = self.tokenize(text)
        if not tokens:
            return 0

        lexicon = self.lexicon
        total = 0.0
        previous: Optional[str] = None
        for token in tokens:
            valence = lexicon.get(token)
            if valence is not None:
                if previous is not None and previous in self.negators:
                    valence = -valence
                total += valence
            previous = token

        # round before truncating so 3.9999999 counts as 4
        return int(math.trunc(round(total, 6)))

    def analyze(self, text: str) -> Tuple[int, Mood]:
        """Score text and map the score to a mood."""
        score = self.score(text)
        return score, mood_from_score(score, self.thresholds)
