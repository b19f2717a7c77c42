"""
Lexicon Package

Builds and queries the Belarusian stress lexicon derived from GrammarDB.

Usage:
    from belaccent.lexicon import LexiconStore, LexiconBuilder

    with LexiconStore("data/grammardb.lmdb") as store:
        LexiconBuilder(store).import_documents("data/grammardb")
        match = store.resolve("замка")
        print(match.entry.lemma, match.form.form_with_stress)
"""

from .types import LexiconEntry, WordFormEntry, LexiconMatch
from .lmdb_store import LexiconStore, LexiconWriter
from .builder import LexiconBuilder, ImportReport, build_lexicon

__all__ = [
    "LexiconEntry",
    "WordFormEntry",
    "LexiconMatch",
    "LexiconStore",
    "LexiconWriter",
    "LexiconBuilder",
    "ImportReport",
    "build_lexicon",
]
