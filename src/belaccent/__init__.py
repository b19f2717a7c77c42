"""
belaccent - stress marks for Belarusian text.

Builds a stress lexicon from GrammarDB and uses it to add combining acute
accents to the words of a sentence that readers are likely to stress wrongly.
"""

from .config import LexiconConfig
from .errors import AccentError, SourceParseError, StorageError
from .accent_service import BelarusianAccentService, AccentedWord, AnnotationResult, AccentReason
from .utils import strip_marks

__all__ = [
    "LexiconConfig",
    "AccentError",
    "SourceParseError",
    "StorageError",
    "BelarusianAccentService",
    "AccentedWord",
    "AnnotationResult",
    "AccentReason",
    "strip_marks",
]

__version__ = "0.1.0"
