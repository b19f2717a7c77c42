"""
Accent Service Package

Marks stress in Belarusian sentences using the GrammarDB lexicon.

Usage:
    from belaccent.accent_service import BelarusianAccentService

    with BelarusianAccentService() as service:
        result = service.annotate("Стары замак стаяў на гары.")
        print(result.accented_text)
        for word in result.accented_words:
            print(word.word, word.accented_form, word.reason)
"""

from .types import AccentReason, AccentedWord, AnnotationResult, Token
from .tokenizer import tokenize, detokenize
from .policy import AccentPolicy, count_syllables, looks_foreign
from .accent_service import BelarusianAccentService, apply_stress, preserve_case

__all__ = [
    "BelarusianAccentService",
    "AccentPolicy",
    "AccentReason",
    "AccentedWord",
    "AnnotationResult",
    "Token",
    "tokenize",
    "detokenize",
    "count_syllables",
    "looks_foreign",
    "apply_stress",
    "preserve_case",
]
