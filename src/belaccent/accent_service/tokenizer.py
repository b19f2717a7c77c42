"""
Lossless tokenizer for accent annotation.

Splits text on runs of whitespace and single punctuation characters and keeps
the delimiters, so "".join(token.text for token in tokenize(text)) == text
for every input.

Example:
    >>> [t.text for t in tokenize("Стары замак, гары.")]
    ['Стары', ' ', 'замак', ',', ' ', 'гары', '.']
"""

import re
from typing import List

from .types import Token

# Whitespace runs, or one of: . , ! ? ; : « » " ' ( ) — -
PUNCTUATION = ".,!?;:«»\"'()—-"
DELIMITER_PATTERN = re.compile(r"(\s+|[" + re.escape(PUNCTUATION) + r"])")
DELIMITER_ONLY = re.compile(r"^(?:\s|[" + re.escape(PUNCTUATION) + r"])+$")


def is_delimiter(text: str) -> bool:
    """True when text consists only of whitespace and punctuation."""
    return bool(DELIMITER_ONLY.match(text))


def tokenize(text: str) -> List[Token]:
    """
    Split text into word and delimiter tokens with their offsets.

    Args:
        text: Input text (may be empty)

    Returns:
        Tokens in input order; empty pieces between adjacent delimiters are dropped
    """
    tokens = []
    position = 0

    for piece in DELIMITER_PATTERN.split(text):
        if not piece:
            continue
        tokens.append(Token(text=piece, start=position, is_word=not is_delimiter(piece)))
        position += len(piece)

    return tokens


def detokenize(tokens: List[Token]) -> str:
    """Join tokens back into text."""
    return "".join(token.text for token in tokens)
