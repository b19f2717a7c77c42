#!/usr/bin/env python3
"""
LMDB store for the Belarusian stress lexicon.

Two named databases live in one LMDB environment:

- lemmas: lemma -> MsgPack(LexiconEntry)
- forms:  form  -> MsgPack([WordFormEntry, ...])

One write transaction per source document; readers use their own read
transactions and may run from several threads.
"""

from contextlib import contextmanager
from logging import getLogger
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import lmdb
import msgpack

from belaccent.config import DEFAULT_MAP_SIZE
from belaccent.errors import StorageError
from belaccent.lexicon.types import LexiconEntry, LexiconMatch, WordFormEntry

logger = getLogger(__name__)

# LMDB default compile-time key limit
MAX_KEY_BYTES = 511


def _pack(value) -> bytes:
    return msgpack.packb(value, use_bin_type=True)


def _unpack(value):
    return msgpack.unpackb(value, raw=False)


# Raised by msgpack on bad bytes and by from_dict on records of the wrong shape
DECODE_ERRORS = (msgpack.exceptions.UnpackException, ValueError, KeyError, TypeError, AttributeError)


def _decode_entry(value, db_path: Optional[Path] = None) -> LexiconEntry:
    try:
        return LexiconEntry.from_dict(_unpack(value))
    except DECODE_ERRORS as e:
        raise StorageError(f"Corrupted lemma record: {e!r}", db_path) from e


def _decode_forms(value, db_path: Optional[Path] = None) -> List[WordFormEntry]:
    try:
        return [WordFormEntry.from_dict(item) for item in _unpack(value)]
    except DECODE_ERRORS as e:
        raise StorageError(f"Corrupted form record: {e!r}", db_path) from e


class LexiconWriter:
    """
    Upserts into an open write transaction.

    Obtained from LexiconStore.write(); everything written through one writer
    is committed or discarded together.
    """

    def __init__(self, txn: lmdb.Transaction, lemmas_db, forms_db):
        self._txn = txn
        self._lemmas = lemmas_db
        self._forms = forms_db
        self.entries_written = 0
        self.forms_written = 0

    def upsert_entry(self, entry: LexiconEntry) -> None:
        """Insert or replace the entry keyed by its lemma."""
        key = entry.lemma.encode("utf-8")
        if len(key) > MAX_KEY_BYTES:
            logger.warning(f"Skipping lemma longer than {MAX_KEY_BYTES} bytes: {entry.lemma[:40]}...")
            return
        self._txn.put(key, _pack(entry.to_dict()), db=self._lemmas)
        self.entries_written += 1

    def upsert_form(self, form: WordFormEntry) -> None:
        """
        Insert a form record, replacing an identical slot (see WordFormEntry.same_slot).

        Insertion order is kept, so the first record stays the first match.
        """
        key = form.form.encode("utf-8")
        if len(key) > MAX_KEY_BYTES:
            logger.warning(f"Skipping form longer than {MAX_KEY_BYTES} bytes: {form.form[:40]}...")
            return
        raw = self._txn.get(key, db=self._forms)
        records = _decode_forms(raw) if raw else []

        for i, existing in enumerate(records):
            if existing.same_slot(form):
                records[i] = form
                break
        else:
            records.append(form)

        self._txn.put(key, _pack([record.to_dict() for record in records]), db=self._forms)
        self.forms_written += 1


class LexiconStore:
    """
    Persisted lemma/word-form stress index.

    Usage:
        with LexiconStore("data/grammardb.lmdb") as store:
            with store.write() as writer:
                writer.upsert_entry(entry)
            match = store.resolve("замка")
    """

    LEMMAS_DB = b"lemmas"
    FORMS_DB = b"forms"

    def __init__(self, db_path: Path, map_size: int = DEFAULT_MAP_SIZE, readonly: bool = False):
        """
        Open (and for writable stores, create) the LMDB environment.

        Args:
            db_path: Path to LMDB environment directory
            map_size: Maximum size of the memory map in bytes
            readonly: Open an existing database for lookups only

        Raises:
            StorageError: The environment cannot be opened
        """
        self.db_path = Path(db_path)
        self.map_size = map_size
        self.readonly = readonly
        self.env = None
        self._open()

    def _open(self):
        """Open LMDB environment with both named databases"""
        if self.readonly and not self.db_path.exists():
            raise StorageError("Lexicon database not found", self.db_path)

        try:
            if not self.readonly:
                self.db_path.mkdir(parents=True, exist_ok=True)

            self.env = lmdb.open(
                str(self.db_path),
                map_size=self.map_size,
                max_dbs=2,
                readonly=self.readonly,
                readahead=True,
            )
            # Named databases must be created by a write transaction
            create = not self.readonly
            self._lemmas = self.env.open_db(self.LEMMAS_DB, create=create)
            self._forms = self.env.open_db(self.FORMS_DB, create=create)
        except lmdb.Error as e:
            if self.env is not None:
                self.env.close()
                self.env = None
            raise StorageError(f"Cannot open lexicon database: {e}", self.db_path) from e

        logger.debug(f"Opened LMDB lexicon at {self.db_path} (readonly={self.readonly})")

    def _require_open(self):
        if not self.env:
            raise StorageError("Database not open", self.db_path)

    def _key(self, word: str) -> Optional[bytes]:
        """Encode a lookup key; None when LMDB could never store it."""
        try:
            key = word.encode("utf-8")
        except UnicodeEncodeError:
            # Lone surrogates are valid str content but not UTF-8
            return None
        if not key or len(key) > self.env.max_key_size():
            return None
        return key

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @contextmanager
    def write(self) -> Iterator[LexiconWriter]:
        """
        Open one all-or-nothing write transaction.

        Any exception inside the block aborts the transaction. LMDB errors are
        re-raised as StorageError; MapFullError is kept as is so the caller can
        grow the map and retry.
        """
        self._require_open()
        if self.readonly:
            raise StorageError("Lexicon database opened read-only", self.db_path)

        try:
            with self.env.begin(write=True) as txn:
                yield LexiconWriter(txn, self._lemmas, self._forms)
        except lmdb.MapFullError:
            raise
        except lmdb.Error as e:
            raise StorageError(f"Write transaction failed: {e}", self.db_path) from e

    def upsert_entry(self, entry: LexiconEntry) -> None:
        """Upsert a single entry in its own transaction."""
        with self.write() as writer:
            writer.upsert_entry(entry)

    def upsert_form(self, form: WordFormEntry) -> None:
        """Upsert a single form record in its own transaction."""
        with self.write() as writer:
            writer.upsert_form(form)

    def grow(self, factor: int = 2) -> int:
        """
        Enlarge the memory map (no transaction may be active).

        Returns:
            The new map size in bytes
        """
        self._require_open()
        new_size = self.map_size * factor
        try:
            self.env.set_mapsize(new_size)
        except lmdb.Error as e:
            raise StorageError(f"Cannot grow map to {new_size:,} bytes: {e}", self.db_path) from e
        self.map_size = new_size
        logger.info(f"LMDB map grown to {new_size / (1024 * 1024):.0f} MB")
        return new_size

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_entry(self, lemma: str) -> Optional[LexiconEntry]:
        """
        Look up a lemma.

        Args:
            lemma: Normalized lemma (lowercase, no marks)

        Returns:
            LexiconEntry, or None if not found
        """
        self._require_open()
        key = self._key(lemma)
        if key is None:
            return None
        try:
            with self.env.begin(buffers=True) as txn:
                value = txn.get(key, db=self._lemmas)
                if value is None:
                    return None
                return _decode_entry(value, self.db_path)
        except lmdb.Error as e:
            raise StorageError(f"Lookup failed for '{lemma}': {e}", self.db_path) from e

    def get_forms(self, form: str) -> List[WordFormEntry]:
        """All form records for a surface form, in insertion order."""
        self._require_open()
        key = self._key(form)
        if key is None:
            return []
        try:
            with self.env.begin(buffers=True) as txn:
                value = txn.get(key, db=self._forms)
                if value is None:
                    return []
                return _decode_forms(value, self.db_path)
        except lmdb.Error as e:
            raise StorageError(f"Lookup failed for '{form}': {e}", self.db_path) from e

    def get_entry_by_form(self, form: str) -> Optional[LexiconMatch]:
        """
        Resolve an inflected form to its lemma entry.

        Form -> lemma is many-to-one; the first record whose lemma exists wins.
        """
        records = self.get_forms(form)
        for record in records:
            entry = self.get_entry(record.lemma)
            if entry is not None:
                return LexiconMatch(
                    entry=entry,
                    form=record,
                    spellings=[r.form_with_stress for r in records],
                )
        return None

    def resolve(self, word: str) -> Optional[LexiconMatch]:
        """
        Find the entry for a normalized word: as a lemma first, then as a form.

        Returns:
            LexiconMatch, or None when the word is unknown
        """
        entry = self.get_entry(word)
        if entry is not None:
            spellings = [r.form_with_stress for r in self.get_forms(word)]
            return LexiconMatch(entry=entry, spellings=spellings)

        match = self.get_entry_by_form(word)
        if match is None:
            logger.debug(f"Word not found: {word}")
        return match

    def count_entries(self) -> int:
        """Number of lemma entries (0 for a fresh database)."""
        self._require_open()
        try:
            with self.env.begin() as txn:
                return txn.stat(self._lemmas)["entries"]
        except lmdb.Error as e:
            raise StorageError(f"Cannot count entries: {e}", self.db_path) from e

    def count_forms(self) -> int:
        """Number of distinct surface forms."""
        self._require_open()
        try:
            with self.env.begin() as txn:
                return txn.stat(self._forms)["entries"]
        except lmdb.Error as e:
            raise StorageError(f"Cannot count forms: {e}", self.db_path) from e

    def iter_technical(self, limit: Optional[int] = None) -> List[LexiconEntry]:
        """Technical (rare/specialized) entries in key order, at most limit of them."""
        self._require_open()
        technical: List[LexiconEntry] = []
        if limit is not None and limit <= 0:
            return technical

        try:
            with self.env.begin() as txn:
                for _, value in txn.cursor(db=self._lemmas):
                    entry = _decode_entry(value, self.db_path)
                    if entry.is_technical:
                        technical.append(entry)
                        if limit is not None and len(technical) >= limit:
                            break
        except lmdb.Error as e:
            raise StorageError(f"Cannot list technical entries: {e}", self.db_path) from e
        return technical

    def get_stats(self) -> Dict:
        """
        Get database statistics.

        Returns:
            Dict with total_lemmas, technical_lemmas, distinct_forms,
            form_records and size_bytes
        """
        self._require_open()
        technical = 0
        form_records = 0
        try:
            with self.env.begin() as txn:
                for _, value in txn.cursor(db=self._lemmas):
                    if _decode_entry(value, self.db_path).is_technical:
                        technical += 1
                for _, value in txn.cursor(db=self._forms):
                    form_records += len(_decode_forms(value, self.db_path))

                lemma_stat = txn.stat(self._lemmas)
                form_stat = txn.stat(self._forms)
        except lmdb.Error as e:
            raise StorageError(f"Cannot read statistics: {e}", self.db_path) from e

        pages = sum(
            stat["leaf_pages"] + stat["branch_pages"] + stat["overflow_pages"]
            for stat in (lemma_stat, form_stat)
        )
        return {
            "total_lemmas": lemma_stat["entries"],
            "technical_lemmas": technical,
            "distinct_forms": form_stat["entries"],
            "form_records": form_records,
            "size_bytes": pages * lemma_stat["psize"],
        }

    def close(self):
        """Close database connection"""
        if getattr(self, "env", None):
            self.env.close()
            self.env = None
            logger.debug("Closed LMDB lexicon")

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()

    def __del__(self):
        """Destructor - ensure cleanup"""
        self.close()
