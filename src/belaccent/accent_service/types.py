"""
Type definitions for the accent service.

Pydantic models for annotation results. Field names are snake_case in Python
and camelCase in JSON (accentedText, accentedWords, accentedForm), the shape
the dataset writers store next to each generated sentence.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AccentReason(str, Enum):
    """Why a word received a stress mark."""
    UNCOMMON = "uncommon"    # rare/technical vocabulary
    HOMOGRAPH = "homograph"  # spelling shared by differently stressed words
    FOREIGN = "foreign"      # looks like a loanword
    COMPLEX = "complex"      # long word, verb or proper noun


class Token(BaseModel):
    """
    One piece of tokenized text.

    Delimiters (whitespace and punctuation) are kept as tokens so that joining
    all token texts reproduces the input exactly.
    """
    text: str = Field(..., description="Token text exactly as in the input")
    start: int = Field(..., ge=0, description="Character offset in the input text")
    is_word: bool = Field(..., description="False for whitespace and punctuation runs")

    model_config = ConfigDict(frozen=True)

    @property
    def end(self) -> int:
        return self.start + len(self.text)


class AccentedWord(BaseModel):
    """
    A word that received a stress mark.

    Example:
        {
            "word": "Замак",
            "accentedForm": "За\u0301мак",
            "position": 6,
            "reason": "homograph"
        }
    """
    word: str = Field(..., description="Original token, original case")
    accented_form: str = Field(..., description="Token with U+0301 after the stressed vowel")
    position: int = Field(..., ge=0, description="Character offset of word in the input text")
    reason: AccentReason = Field(..., description="Why the mark was added")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnnotationResult(BaseModel):
    """Accented sentence plus the list of changed words."""
    accented_text: str = Field(..., description="Input text with stress marks inserted")
    accented_words: List[AccentedWord] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Serialize with camelCase keys and plain string reasons."""
        return self.model_dump(mode="json", by_alias=True)
