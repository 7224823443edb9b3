"""Tests for TextNormalizer - disguised crisis language folding."""
import pytest

from campuscalm.services.classifier_service.text_normalizer import (
    TextNormalizer,
    normalize_text,
    LEETSPEAK_MAP,
)


@pytest.fixture
def normalizer():
    return TextNormalizer()


class TestLeetspeak:

    def test_numbers_to_letters(self, normalizer):
        assert normalizer.normalize("K1LL") == "kill"
        assert normalizer.normalize("SU1C1D3") == "suicide"

    def test_symbols_to_letters(self, normalizer):
        assert normalizer.normalize("H@RM") == "harm"
        assert normalizer.normalize("$UICIDE") == "suicide"
        assert normalizer.normalize("K!LL") == "kill"

    def test_custom_map_replaces_default(self):
        normalizer = TextNormalizer(leetspeak={"#": "h"})
        assert normalizer.normalize("#urt") == "hurt"
        # "1" is no longer mapped
        assert normalizer.normalize("k1ll") == "k1ll"

    def test_default_map_exposed(self):
        assert LEETSPEAK_MAP["3"] == "e"


class TestUnicode:

    def test_circled_letters(self, normalizer):
        assert normalizer.normalize("ⓚⓘⓛⓛ") == "kill"

    def test_double_struck(self, normalizer):
        assert normalizer.normalize("𝕜𝕚𝕝𝕝") == "kill"

    def test_fullwidth(self, normalizer):
        assert normalizer.normalize("Ｋｉｌｌ") == "kill"

    def test_accents_stripped(self, normalizer):
        assert normalizer.normalize("suïcide") == "suicide"

    def test_curly_apostrophe_folded(self, normalizer):
        assert normalizer.normalize("I can’t go on") == "i can't go on"

    def test_dashes_folded(self, normalizer):
        assert normalizer.normalize("self\u2014harm") == "self-harm"

    def test_invisible_characters_removed(self, normalizer):
        assert normalizer.normalize("k\u200bi\u200dll") == "kill"
        assert normalizer.normalize("\ufeffhello") == "hello"


class TestSeparatedLetters:

    @pytest.mark.parametrize("text", [
        "k.i.l.l",
        "k-i-l-l",
        "k_i_l_l",
        "k*i*l*l",
        "k i l l",
        "k\ni\nl\nl",
        "k.i-l_l",
    ])
    def test_collapses_to_word(self, normalizer, text):
        assert normalizer.normalize(text) == "kill"

    def test_collapse_inside_sentence(self, normalizer):
        assert normalizer.normalize("I want to k.i.l.l myself") == "i want to kill myself"

    def test_normal_words_untouched(self, normalizer):
        assert normalizer.normalize("I had a good day") == "i had a good day"

    def test_hyphenated_words_untouched(self, normalizer):
        assert normalizer.normalize("well-being check-in") == "well-being check-in"

    def test_underscore_separated_inside_sentence(self, normalizer):
        assert normalizer.normalize("i want to s_u_i_c_i_d_e") == "i want to suicide"

    def test_snake_case_words_untouched(self, normalizer):
        assert normalizer.normalize("my_notes and file_v2") == "my_notes and file_v2"


class TestWhitespaceAndCase:

    def test_lowercases(self, normalizer):
        assert normalizer.normalize("KiLl") == "kill"

    def test_collapses_whitespace(self, normalizer):
        assert normalizer.normalize("  kill    myself\t\n") == "kill myself"

    def test_newline_separated_words(self, normalizer):
        assert normalizer.normalize("I\nwant\nto\ndie") == "i want to die"

    def test_empty(self, normalizer):
        assert normalizer.normalize("") == ""


class TestConvenienceFunction:

    def test_normalize_text(self):
        assert normalize_text("K1LL") == "kill"
        assert normalize_text("s.u.i.c.i.d.e") == "suicide"
