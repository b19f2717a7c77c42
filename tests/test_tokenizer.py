"""
Tests for the lossless delimiter tokenizer.
"""

import pytest

from belaccent.accent_service.tokenizer import detokenize, is_delimiter, tokenize


class TestTokenize:

    def test_sentence(self):
        tokens = tokenize("Стары замак, гары.")

        assert [t.text for t in tokens] == ["Стары", " ", "замак", ",", " ", "гары", "."]
        assert [t.is_word for t in tokens] == [True, False, True, False, False, True, False]

    def test_offsets(self):
        tokens = tokenize("Я іду дамоў.")

        assert [(t.text, t.start) for t in tokens if t.is_word] == [("Я", 0), ("іду", 2), ("дамоў", 6)]
        assert tokens[-1].end == len("Я іду дамоў.")

    def test_whitespace_run_is_one_token(self):
        tokens = tokenize("замак \t\n гара")
        assert [t.text for t in tokens] == ["замак", " \t\n ", "гара"]

    def test_quotes_and_dashes(self):
        tokens = tokenize("«Замак» — гара-замак")
        words = [t.text for t in tokens if t.is_word]
        assert words == ["Замак", "гара", "замак"]

    def test_empty(self):
        assert tokenize("") == []

    def test_only_delimiters(self):
        tokens = tokenize(" ...  ")
        assert not any(t.is_word for t in tokens)

    @pytest.mark.parametrize("text", [
        "",
        "Стары замак стаяў на гары.",
        "  Я іду дамоў!!  ",
        "«Магілёў» (горад) — так; не: можа?",
        "сям'я",
        "123 abc\n\nновы радок",
        "\t",
    ])
    def test_round_trip(self, text):
        assert detokenize(tokenize(text)) == text


class TestIsDelimiter:

    @pytest.mark.parametrize("text,expected", [
        (" ", True),
        (",", True),
        ("—", True),
        ("замак", False),
        ("123", False),
    ])
    def test_is_delimiter(self, text, expected):
        assert is_delimiter(text) == expected
