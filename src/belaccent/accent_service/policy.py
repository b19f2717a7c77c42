#!/usr/bin/env python3
"""
Accent marking policy.

Decides whether a word found in the lexicon gets a stress mark and labels why.

Decision rules (first match wins):
    1. <= 1 vowel                      -> skip (a single syllable is never ambiguous)
    2. technical entry                 -> mark, uncommon
    3. >= 4 vowels                     -> mark, complex
    4. verb or proper noun tag         -> mark, complex
    5. no general-use source           -> mark, uncommon
       otherwise                       -> skip

Refinement (only relabels a word that rules 2-5 already marked):
    - homograph: known ambiguous lemma, or the lexicon records several
      stressed spellings of the same form ("з+амак" / "зам+ак")
    - foreign:   a "complex" word with loanword letter patterns
"""

import re
from logging import getLogger
from typing import FrozenSet, Iterable, Optional

from belaccent.config import GENERAL_DICTIONARIES
from belaccent.lexicon.types import LexiconMatch
from .types import AccentReason

logger = getLogger(__name__)

BELARUSIAN_VOWELS = frozenset("аеёіоуыэюя")

# Spellings shared by words with different stress (castle/lock, flour/torment, ...)
KNOWN_HOMOGRAPHS: FrozenSet[str] = frozenset({
    "замак", "мука", "варта", "атлас", "вугал", "замкі",
})

FOREIGN_PATTERN = re.compile(r"[тц].*[ыі]|[кг].*[еэ]")
FOREIGN_MIN_LENGTH = 7


def count_syllables(word: str) -> int:
    """Count vowel letters (one per syllable in Belarusian)."""
    return sum(1 for char in word.lower() if char in BELARUSIAN_VOWELS)


def looks_foreign(word: str) -> bool:
    """
    Rough loanword test.

    Native Belarusian words almost never contain ф; longer words with
    т/ц before ы/і or к/г before е/э tend to be borrowings (тэлефон, тэлевізар).
    """
    word = word.lower()
    if "ф" in word:
        return True
    return len(word) >= FOREIGN_MIN_LENGTH and bool(FOREIGN_PATTERN.search(word))


class AccentPolicy:
    """
    Marking policy over lexicon matches.

    Usage:
        policy = AccentPolicy()
        reason = policy.decide("замак", match)
        if reason is not None:
            ...  # mark the word
    """

    def __init__(
        self,
        general_dictionaries: Iterable[str] = GENERAL_DICTIONARIES,
        known_homographs: Iterable[str] = KNOWN_HOMOGRAPHS,
    ):
        self.general_dictionaries = tuple(general_dictionaries)
        self.known_homographs = frozenset(known_homographs)

    def base_reason(self, word: str, match: LexiconMatch) -> Optional[AccentReason]:
        """
        Apply decision rules 1-5.

        Args:
            word: Normalized word (lowercase, no marks)
            match: Lexicon entry the word resolved to

        Returns:
            UNCOMMON or COMPLEX when the word should be marked, else None
        """
        syllables = count_syllables(word)
        if syllables <= 1:
            return None

        entry = match.entry
        if entry.is_technical:
            return AccentReason.UNCOMMON

        if syllables >= 4:
            return AccentReason.COMPLEX

        if entry.is_verb or entry.is_proper_noun:
            return AccentReason.COMPLEX

        if entry.general_source_count(self.general_dictionaries) == 0:
            return AccentReason.UNCOMMON

        return None

    def refine(self, word: str, match: LexiconMatch, reason: AccentReason) -> AccentReason:
        """Relabel an already-marked word as homograph or foreign."""
        if (
            word in self.known_homographs
            or match.entry.lemma in self.known_homographs
            or match.is_heteronym
        ):
            return AccentReason.HOMOGRAPH

        if reason == AccentReason.COMPLEX and looks_foreign(word):
            return AccentReason.FOREIGN

        return reason

    def decide(self, word: str, match: LexiconMatch) -> Optional[AccentReason]:
        """
        Full decision for one word.

        Returns:
            The reason to mark the word, or None to leave it unmarked
        """
        reason = self.base_reason(word, match)
        if reason is None:
            return None

        refined = self.refine(word, match, reason)
        if refined != reason:
            logger.debug(f"'{word}': {reason.value} relabelled as {refined.value}")
        return refined
