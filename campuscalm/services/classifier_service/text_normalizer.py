"""Text normalization for urgency matching.

Folds common disguises of crisis language back to plain lowercase ASCII
so a single phrase list can catch them: leetspeak, styled unicode letters,
typographic apostrophes, letters split by separators, and invisible
characters. Output is only ever used for matching, never shown to a user
or sent to the generative service.
"""
import logging
import re
import unicodedata
from typing import Dict, FrozenSet, Optional, Tuple

logger = logging.getLogger(__name__)


# Digits and symbols commonly standing in for letters
LEETSPEAK_MAP: Dict[str, str] = {
    "0": "o",
    "1": "i",
    "3": "e",
    "4": "a",
    "5": "s",
    "7": "t",
    "8": "b",
    "@": "a",
    "$": "s",
    "!": "i",
    "+": "t",
    "|": "l",
}

# Typographic punctuation folded to its ASCII form before matching
PUNCTUATION_MAP: Dict[str, str] = {
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote / curly apostrophe
    "\u02bc": "'",  # modifier letter apostrophe
    "\u2032": "'",  # prime
    "\u2010": "-",  # hyphen
    "\u2011": "-",  # non-breaking hyphen
    "\u2013": "-",  # en dash
    "\u2014": "-",  # em dash
}

# (first code point, last code point, ASCII base) for styled alphabets
STYLED_LETTER_RANGES: Tuple[Tuple[int, int, int], ...] = (
    (0x1D400, 0x1D419, ord("A")),  # mathematical bold
    (0x1D41A, 0x1D433, ord("a")),
    (0x1D434, 0x1D44D, ord("A")),  # mathematical italic
    (0x1D44E, 0x1D467, ord("a")),
    (0x1D538, 0x1D551, ord("A")),  # double-struck
    (0x1D552, 0x1D56B, ord("a")),
    (0x24B6, 0x24CF, ord("A")),    # circled
    (0x24D0, 0x24E9, ord("a")),
    (0xFF21, 0xFF3A, ord("A")),    # fullwidth
    (0xFF41, 0xFF5A, ord("a")),
)

INVISIBLE_CHARS: FrozenSet[str] = frozenset({
    "\u200b",  # zero-width space
    "\u200c",  # zero-width non-joiner
    "\u200d",  # zero-width joiner
    "\u2060",  # word joiner
    "\ufeff",  # byte order mark
    "\u00ad",  # soft hyphen
})


class TextNormalizer:
    """Normalizes text so disguised crisis phrases match the plain list.

    Handles:
    - Invisible characters (k\\u200bill -> kill)
    - Styled unicode (ⓚⓘⓛⓛ, 𝕜𝕚𝕝𝕝, Ｋｉｌｌ -> kill)
    - Curly apostrophes and dashes (can’t -> can't)
    - Leetspeak (SU1C1D3 -> suicide)
    - Separated letters (k.i.l.l, k-i-l-l, k\\ni\\nl\\nl -> kill)
    """

    def __init__(self, leetspeak: Optional[Dict[str, str]] = None):
        """Initialize the normalizer.

        Args:
            leetspeak: Character substitutions (default: LEETSPEAK_MAP)
        """
        self._leetspeak = dict(LEETSPEAK_MAP if leetspeak is None else leetspeak)
        self._table = self._build_translation_table(self._leetspeak)

        # Two or more single letters split by dots, dashes, underscores,
        # asterisks, spaces or newlines: k.i.l.l, k_i_l_l, k i l l, k\ni\nl\nl.
        # Lookarounds instead of \b, since "_" is a word character.
        self._letter_run = re.compile(
            r"(?<![a-z0-9])[a-z](?:(?:[.\-_*]+|[\r\n]+| +)[a-z](?![a-z0-9]))+"
        )

        logger.debug(
            "TEXT_NORMALIZER_INITIALIZED",
            extra={
                "leetspeak_mappings": len(self._leetspeak),
                "styled_ranges": len(STYLED_LETTER_RANGES),
            }
        )

    @staticmethod
    def _build_translation_table(leetspeak: Dict[str, str]) -> Dict[int, str]:
        table: Dict[int, str] = {ord(c): "" for c in INVISIBLE_CHARS}
        for start, end, base in STYLED_LETTER_RANGES:
            for code_point in range(start, end + 1):
                table[code_point] = chr(base + code_point - start)
        for src, dst in PUNCTUATION_MAP.items():
            table[ord(src)] = dst
        for src, dst in leetspeak.items():
            table[ord(src)] = dst
        return table

    def normalize(self, text: str) -> str:
        """Normalize text for phrase matching.

        Order matters: invisible characters and styled letters are folded
        before accents are stripped, and separators are collapsed last so
        that letters produced by the earlier steps can be joined.

        Args:
            text: Raw input text

        Returns:
            Lowercased, single-spaced ASCII-ish text
        """
        if not text:
            return ""

        result = text.translate(self._table)
        result = self._strip_accents(result)
        result = result.lower()
        result = self._collapse_separated_letters(result)
        # Line breaks and tabs become single spaces only after collapsing
        return " ".join(result.split())

    @staticmethod
    def _strip_accents(text: str) -> str:
        """Drop combining marks left by NFKD decomposition (é -> e)."""
        decomposed = unicodedata.normalize("NFKD", text)
        return "".join(c for c in decomposed if unicodedata.category(c) != "Mn")

    def _collapse_separated_letters(self, text: str) -> str:
        return self._letter_run.sub(
            lambda m: "".join(c for c in m.group() if c.isalpha()), text
        )


_default_normalizer: Optional[TextNormalizer] = None


def normalize_text(text: str) -> str:
    """Normalize text with a shared default TextNormalizer."""
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = TextNormalizer()
    return _default_normalizer.normalize(text)
