"""
Belarusian text normalization helpers.

Lookup keys in the lexicon are built from three steps:

1. apostrophe variants folded to one character (U+02BC),
2. stress marks removed,
3. lowercase.

Belarusian writes the apostrophe as U+0027 or U+2019 depending on the
typesetter; GrammarDB and generated text do not agree, so both sides of a
lookup fold to U+02BC.

Stress marks are the combining accents in U+0300-U+036F. The breve (U+0306)
and diaeresis (U+0308) are NOT stress marks: after NFD they carry the letters
й, ў, ё and ї, so stripping them would turn "ўсё" into "усе".
"""

import unicodedata

CANONICAL_APOSTROPHE = "\u02BC"  # U+02BC modifier letter apostrophe
APOSTROPHE_VARIANTS = {
    "\u2019",  # U+2019 right single quotation mark
    "\u0027",  # U+0027 ASCII apostrophe
    "\u02BB",  # U+02BB modifier letter turned comma
    "\u0060",  # U+0060 grave accent
}

COMBINING_ACUTE = "\u0301"
STRESS_MARKER = "+"

# Combining marks that are part of Cyrillic letters rather than accents
LETTER_FORMING_MARKS = {
    "\u0306",  # breve: й ў
    "\u0308",  # diaeresis: ё ї
}


def normalize_apostrophe(text: str) -> str:
    """
    Fold every apostrophe variant to U+02BC.

    Example:
        >>> normalize_apostrophe("сям’я")
        'сямʼя'
    """
    if not text:
        return text

    result = text
    for variant in APOSTROPHE_VARIANTS:
        result = result.replace(variant, CANONICAL_APOSTROPHE)
    return result


def is_stress_mark(char: str) -> bool:
    """True for combining accents in U+0300-U+036F that do not form a letter."""
    return "\u0300" <= char <= "\u036F" and char not in LETTER_FORMING_MARKS


def strip_marks(text: str) -> str:
    """
    Remove combining accent marks from text.

    The text is decomposed (NFD), accent marks are dropped and the result is
    recomposed (NFC), so letters such as й and ў survive intact.

    Example:
        >>> strip_marks("Стары за\u0301мак")
        'Стары замак'
    """
    if not text:
        return text

    decomposed = unicodedata.normalize('NFD', text)
    stripped = ''.join(char for char in decomposed if not is_stress_mark(char))
    return unicodedata.normalize('NFC', stripped)


def has_stress_mark(text: str) -> bool:
    """Check whether text already carries an accent mark."""
    return any(is_stress_mark(char) for char in unicodedata.normalize('NFD', text))


def strip_stress_marker(marked: str) -> str:
    """Drop GrammarDB's internal '+' markers."""
    return marked.replace(STRESS_MARKER, '')


def normalize_word(word: str) -> str:
    """
    Build the lexicon key for a word.

    Example:
        >>> normalize_word("За\u0301мак")
        'замак'
    """
    return strip_marks(normalize_apostrophe(strip_stress_marker(word))).lower()
