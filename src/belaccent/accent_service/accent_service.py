#!/usr/bin/env python3
"""
Belarusian Accent Service

Adds stress marks (combining acute accent U+0301) to Belarusian sentences
using the GrammarDB lexicon.

Features:
- Lossless: whitespace, punctuation and word order are never touched
- Lemma lookup first, then inflected-form lookup
- Form-specific stress when the word matched an inflected form
- Original case preserved (замак / Замак / ЗАМАК)
- Lazy, thread-safe load-or-build of the lexicon
"""

import threading
import unicodedata
from logging import getLogger
from typing import List, Optional

from belaccent.config import LexiconConfig
from belaccent.lexicon.builder import LexiconBuilder
from belaccent.lexicon.lmdb_store import LexiconStore
from belaccent.lexicon.types import LexiconMatch
from belaccent.utils.normalize import (
    COMBINING_ACUTE,
    LETTER_FORMING_MARKS,
    has_stress_mark,
    normalize_word,
    strip_marks,
)
from .policy import BELARUSIAN_VOWELS, AccentPolicy
from .tokenizer import tokenize
from .types import AccentedWord, AnnotationResult

logger = getLogger(__name__)


def find_stressed_vowel(word: str, offset: int) -> Optional[int]:
    """
    Find the vowel the stress offset points to.

    Scans forward from offset; if no vowel follows, scans backwards from it.

    Returns:
        Index of the vowel in word, or None when word has no vowel
    """
    if offset < 0:
        return None

    for i in range(offset, len(word)):
        if word[i].lower() in BELARUSIAN_VOWELS:
            return i

    for i in range(min(offset, len(word)) - 1, -1, -1):
        if word[i].lower() in BELARUSIAN_VOWELS:
            return i

    return None


def surface_offset(word: str, offset: int) -> int:
    """
    Map a character offset in the NFC form of word onto word itself.

    Only differs for decomposed input, where ё is е + U+0308 and ў is у + U+0306.
    """
    if offset <= 0 or unicodedata.is_normalized("NFC", word):
        return offset

    bases = 0
    for i, char in enumerate(word):
        if not unicodedata.combining(char):
            if bases == offset:
                return i
            bases += 1
    return len(word)


def apply_stress(word: str, offset: int) -> str:
    """
    Insert U+0301 right after the stressed vowel.

    offset counts NFC characters. On decomposed input the mark goes after the
    vowel's own U+0306/U+0308, so е + U+0308 stays ё.

    Example:
        >>> apply_stress("замак", 1)
        'за\u0301мак'

    Returns the word unchanged when no vowel can be resolved.
    """
    index = find_stressed_vowel(word, surface_offset(word, offset))
    if index is None:
        return word

    end = index + 1
    while end < len(word) and word[end] in LETTER_FORMING_MARKS:
        end += 1
    return word[:end] + COMBINING_ACUTE + word[end:]


def preserve_case(original: str, accented: str) -> str:
    """
    Give the accented form the letter case of the original token.

    Combining marks are copied as they are and do not consume a position of
    the original.
    """
    if original == original.lower():
        return accented
    if original == original.upper():
        return accented.upper()

    result = []
    i = 0
    for char in accented:
        if char == COMBINING_ACUTE:
            result.append(char)
            continue
        if i < len(original):
            result.append(char.upper() if original[i].isupper() else char.lower())
        else:
            result.append(char)
        i += 1
    return "".join(result)


class BelarusianAccentService:
    """
    Service for marking stress in Belarusian sentences.

    Usage:
        service = BelarusianAccentService(LexiconConfig(db_path="data/grammardb.lmdb"))
        result = service.annotate("Стары замак стаяў на гары.")
        print(result.accented_text)
        service.close()

    Or with an existing store handle:
        with LexiconStore(path) as store:
            service = BelarusianAccentService(store=store)
            service.annotate("...")
    """

    def __init__(
        self,
        config: Optional[LexiconConfig] = None,
        store: Optional[LexiconStore] = None,
        policy: Optional[AccentPolicy] = None,
    ):
        """
        Initialize accent service.

        Args:
            config: Lexicon configuration (paths, dictionaries)
            store: Already opened lexicon; the service does not close it
            policy: Marking policy (default built from config)
        """
        self.config = config or LexiconConfig()
        self.policy = policy or AccentPolicy(general_dictionaries=self.config.general_dictionaries)
        self.store = store
        self._owns_store = store is None
        self._initialized = False
        self._init_lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """
        Open the lexicon and build it from GrammarDB if it is empty.

        Safe to call repeatedly and from several threads; only the first caller
        does the work, the others wait for it.

        Raises:
            StorageError: The lexicon store cannot be opened or written
        """
        if self._initialized:
            return

        with self._init_lock:
            if self._initialized:
                return

            logger.info("Initializing accent service with GrammarDB lexicon...")
            if self.store is None:
                self.store = LexiconStore(self.config.db_path, map_size=self.config.map_size)

            # Skips the import when the store is already populated
            LexiconBuilder(self.store, self.config).import_documents()

            entries = self.store.count_entries()
            if entries == 0:
                logger.warning("Lexicon is empty; sentences will pass through unmarked")
            else:
                logger.info(f"Accent service ready: {entries:,} lemmas")
            self._initialized = True

    def lookup(self, word: str) -> Optional[LexiconMatch]:
        """
        Resolve a surface word to its lexicon entry.

        Args:
            word: Word in any case, with or without marks

        Returns:
            LexiconMatch, or None if unknown
        """
        if not self._initialized:
            self.initialize()
        return self._resolve(normalize_word(word))

    def _resolve(self, key: str) -> Optional[LexiconMatch]:
        if not key:
            return None
        return self.store.resolve(key)

    def stress_offset(self, word: str, match: LexiconMatch) -> int:
        """
        Character offset of the stressed vowel inside the surface word.

        A matched inflected form carries its own marker (stress can move
        between forms); otherwise the lemma's position is used.
        """
        form = match.form
        length = len(unicodedata.normalize("NFC", word))
        if form is not None and form.stress_position is not None and len(form.form) == length:
            return form.stress_position
        return match.entry.stress_position

    def accent_word(self, word: str, position: int = 0) -> Optional[AccentedWord]:
        """
        Decide and apply the stress mark for one word token.

        Args:
            word: Surface token
            position: Offset of the token in the sentence

        Returns:
            AccentedWord, or None when the word stays unmarked
        """
        if has_stress_mark(word):
            return None

        if not self._initialized:
            self.initialize()

        key = normalize_word(word)
        match = self._resolve(key)
        if match is None:
            return None

        reason = self.policy.decide(key, match)
        if reason is None:
            return None

        accented = apply_stress(word, self.stress_offset(word, match))
        if accented == word:
            logger.debug(f"No vowel to stress in '{word}'")
            return None

        return AccentedWord(
            word=word,
            accented_form=preserve_case(word, accented),
            position=position,
            reason=reason,
        )

    def annotate(self, text: str) -> AnnotationResult:
        """
        Add stress marks to a sentence.

        Args:
            text: Sentence text

        Returns:
            AnnotationResult with the accented text and the changed words

        Raises:
            StorageError: Only from the first call's lazy initialization or
                          a failing store, never for odd input
        """
        if not self._initialized:
            self.initialize()

        parts: List[str] = []
        accented_words: List[AccentedWord] = []

        for token in tokenize(text):
            if not token.is_word:
                parts.append(token.text)
                continue

            accented = self.accent_word(token.text, token.start)
            if accented is None:
                parts.append(token.text)
                continue

            accented_words.append(accented)
            parts.append(accented.accented_form)

        return AnnotationResult(accented_text="".join(parts), accented_words=accented_words)

    @staticmethod
    def strip_marks(text: str) -> str:
        """Remove all stress marks from text."""
        return strip_marks(text)

    def get_stats(self) -> dict:
        """Lexicon statistics (see LexiconStore.get_stats)."""
        if not self._initialized:
            self.initialize()
        return self.store.get_stats()

    def close(self):
        """Close the lexicon if this service opened it."""
        if self._owns_store and self.store is not None:
            self.store.close()
            self.store = None
            self._initialized = False
            logger.info("Accent service closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

