#!/usr/bin/env python3
"""
Lexicon Builder - GrammarDB → LMDB

Imports GrammarDB XML documents into the LMDB stress lexicon.

Pipeline per document: Parse (optionally in a worker process) → Convert → Upsert

Guarantees:
    - Each document is written in one transaction: it lands completely or not at all.
    - A malformed document is logged and skipped; the rest of the build continues.
    - A store that already has entries is left alone unless force=True.
    - Re-importing never duplicates entries (upserts keyed by lemma / form slot).

Data Attribution:
    GrammarDB - https://github.com/Belarus/GrammarDB
    License: CC BY-SA 4.0
"""

import multiprocessing
import time
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import lmdb
from tqdm import tqdm

from belaccent.config import LexiconConfig
from belaccent.errors import SourceParseError, StorageError
from belaccent.lexicon.grammardb_parser import Paradigm, paradigm_to_records, parse_document
from belaccent.lexicon.lmdb_store import LexiconStore

logger = getLogger(__name__)

MAX_GROW_ATTEMPTS = 4


@dataclass
class ImportReport:
    """Outcome of one import run."""
    skipped_existing: bool = False
    documents_imported: List[str] = field(default_factory=list)
    documents_failed: Dict[str, str] = field(default_factory=dict)
    documents_missing: List[str] = field(default_factory=list)
    paradigms_seen: int = 0
    paradigms_skipped: int = 0
    entries_written: int = 0
    forms_written: int = 0
    elapsed: float = 0.0

    def to_dict(self) -> Dict:
        """Export to dictionary format"""
        return {
            "skipped_existing": self.skipped_existing,
            "documents_imported": list(self.documents_imported),
            "documents_failed": dict(self.documents_failed),
            "documents_missing": list(self.documents_missing),
            "paradigms_seen": self.paradigms_seen,
            "paradigms_skipped": self.paradigms_skipped,
            "entries_written": self.entries_written,
            "forms_written": self.forms_written,
            "elapsed": self.elapsed,
        }


# ============================================================================
# Multiprocessing Worker
# ============================================================================

def parse_document_worker(path: Path) -> Tuple[Path, Optional[List[Paradigm]], Optional[str]]:
    """
    Parse one document in a worker process.

    Errors travel back as strings because SourceParseError does not pickle
    with its two-argument constructor.
    """
    try:
        return path, parse_document(path), None
    except SourceParseError as e:
        return path, None, e.reason


# ============================================================================
# Builder
# ============================================================================

class LexiconBuilder:
    """
    Import GrammarDB documents into a LexiconStore.

    Usage:
        with LexiconStore(config.db_path, map_size=config.map_size) as store:
            report = LexiconBuilder(store, config).import_documents()
    """

    def __init__(self, store: LexiconStore, config: Optional[LexiconConfig] = None):
        self.store = store
        self.config = config or LexiconConfig()

    def find_documents(self, source_dir: Path) -> Tuple[List[Path], List[str]]:
        """
        Resolve configured document names inside source_dir.

        Returns:
            (existing paths in configured order, names of missing documents)
        """
        found, missing = [], []
        for name in self.config.document_names:
            path = source_dir / name
            if path.is_file():
                found.append(path)
            else:
                missing.append(name)
        return found, missing

    def import_documents(self, source_dir: Optional[Path] = None, force: bool = False) -> ImportReport:
        """
        Import every available document from source_dir.

        Args:
            source_dir: Directory with GrammarDB XML files (default: config.source_dir)
            force: Import even when the store already has entries

        Returns:
            ImportReport

        Raises:
            StorageError: The LMDB store failed
        """
        start = time.time()
        report = ImportReport()
        source_dir = Path(source_dir or self.config.source_dir)

        existing = self.store.count_entries()
        if existing > 0 and not force:
            logger.info(f"Lexicon already contains {existing:,} entries, skipping import")
            report.skipped_existing = True
            return report

        if not source_dir.is_dir():
            logger.warning(f"GrammarDB directory not found: {source_dir} (lexicon stays empty)")
            report.documents_missing = list(self.config.document_names)
            return report

        paths, report.documents_missing = self.find_documents(source_dir)
        if not paths:
            logger.warning(f"No GrammarDB documents in {source_dir} (lexicon stays empty)")
            return report

        logger.info(f"Importing {len(paths)} GrammarDB documents from {source_dir}")

        progress = tqdm(
            total=len(paths),
            desc="GrammarDB",
            unit="doc",
            disable=not self.config.show_progress,
        )
        try:
            for path, paradigms, error in self._parse_all(paths):
                progress.set_postfix_str(path.name)
                if error is not None:
                    logger.error(f"Skipping {path.name}: {error}")
                    report.documents_failed[path.name] = error
                else:
                    self._import_parsed(path, paradigms, report)
                progress.update(1)
        finally:
            progress.close()

        report.elapsed = time.time() - start
        logger.info(
            f"Imported {report.paradigms_seen:,} paradigms from "
            f"{len(report.documents_imported)} documents in {report.elapsed:.1f}s; "
            f"lexicon now holds {self.store.count_entries():,} lemmas"
        )
        return report

    def _parse_all(self, paths: Sequence[Path]) -> Iterator[Tuple[Path, Optional[List[Paradigm]], Optional[str]]]:
        """Parse documents in order, in worker processes when configured."""
        workers = min(self.config.workers, len(paths))
        if workers <= 1:
            for path in paths:
                yield parse_document_worker(path)
            return

        logger.info(f"Parsing with {workers} worker processes")
        with multiprocessing.Pool(processes=workers) as pool:
            # imap keeps document order, so writes stay deterministic
            yield from pool.imap(parse_document_worker, paths)

    def _import_parsed(self, path: Path, paradigms: List[Paradigm], report: ImportReport) -> None:
        """Write one parsed document, growing the map when LMDB runs out of room."""
        for attempt in range(MAX_GROW_ATTEMPTS + 1):
            try:
                seen, skipped, entries, forms = self.write_document(paradigms)
                break
            except lmdb.MapFullError as e:
                if attempt == MAX_GROW_ATTEMPTS:
                    raise StorageError(f"LMDB map full while importing {path.name}: {e}", self.store.db_path) from e
                logger.warning(f"LMDB map full while importing {path.name}, growing and retrying")
                self.store.grow()

        report.documents_imported.append(path.name)
        report.paradigms_seen += seen
        report.paradigms_skipped += skipped
        report.entries_written += entries
        report.forms_written += forms
        logger.info(f"  {path.name}: {entries:,} lemmas, {forms:,} forms ({skipped:,} paradigms without stress)")

    def write_document(self, paradigms: List[Paradigm]) -> Tuple[int, int, int, int]:
        """
        Upsert all paradigms of one document in a single transaction.

        Returns:
            (paradigms seen, paradigms skipped, entries written, forms written)
        """
        skipped = 0
        with self.store.write() as writer:
            for paradigm in paradigms:
                records = paradigm_to_records(paradigm, self.config.general_dictionaries)
                if records is None:
                    skipped += 1
                    continue

                entry, forms = records
                for form in forms:
                    writer.upsert_form(form)
                writer.upsert_entry(entry)

        return len(paradigms), skipped, writer.entries_written, writer.forms_written


def build_lexicon(config: Optional[LexiconConfig] = None, force: bool = False) -> ImportReport:
    """
    Open the configured store and import GrammarDB into it.

    Raises:
        StorageError: The LMDB store failed
    """
    config = config or LexiconConfig()
    with LexiconStore(config.db_path, map_size=config.map_size) as store:
        return LexiconBuilder(store, config).import_documents(force=force)
