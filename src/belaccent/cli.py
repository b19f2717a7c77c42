#!/usr/bin/env python3
"""
Command line entry point.

Usage:
    belaccent build --source-dir data/grammardb --db-path data/grammardb.lmdb
    belaccent build --force --workers 4
    belaccent annotate "Стары замак стаяў на гары."
    belaccent annotate --json < sentences.txt
    belaccent stats --technical 20
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from belaccent.accent_service import BelarusianAccentService
from belaccent.config import DEFAULT_MAP_SIZE, LexiconConfig
from belaccent.errors import AccentError
from belaccent.lexicon.builder import build_lexicon
from belaccent.lexicon.lmdb_store import LexiconStore

logger = logging.getLogger("belaccent")


def _config_from_args(args: argparse.Namespace) -> LexiconConfig:
    return LexiconConfig(
        source_dir=args.source_dir,
        db_path=args.db_path,
        map_size=args.map_size,
        workers=getattr(args, "workers", 1),
        show_progress=not args.quiet,
    )


def cmd_build(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    logger.info("Building lexicon")
    logger.info(f"  Source: {config.source_dir}")
    logger.info(f"  Target: {config.db_path}")

    report = build_lexicon(config, force=args.force)
    if report.skipped_existing:
        logger.info("Lexicon already built; use --force to re-import")
        return 0

    for name, reason in report.documents_failed.items():
        logger.warning(f"  ✗ {name}: {reason}")

    with LexiconStore(config.db_path, map_size=config.map_size) as store:
        stats = store.get_stats()

    print(f"\n📊 Database Statistics:")
    print(f"   Total lemmas:     {stats['total_lemmas']:>10,}")
    print(f"   Technical words:  {stats['technical_lemmas']:>10,}")
    print(f"   Total word forms: {stats['form_records']:>10,}")
    print(f"   Documents:        {len(report.documents_imported):>10} imported, "
          f"{len(report.documents_failed)} failed")
    print(f"   Time:             {report.elapsed:>10.1f}s")
    return 1 if report.documents_failed and not report.documents_imported else 0


def cmd_annotate(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    sentences: List[str] = args.text or [line.rstrip("\n") for line in sys.stdin]

    with BelarusianAccentService(config) as service:
        for sentence in sentences:
            result = service.annotate(sentence)
            if args.json:
                print(json.dumps({"text": sentence, **result.to_json_dict()}, ensure_ascii=False))
                continue

            print(result.accented_text)
            for word in result.accented_words:
                print(f"  {word.position:>4}  {word.word} → {word.accented_form} ({word.reason.value})")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    with LexiconStore(args.db_path, readonly=True) as store:
        stats = store.get_stats()
        print(f"📂 {args.db_path}")
        print(f"   Total lemmas:     {stats['total_lemmas']:>10,}")
        print(f"   Technical words:  {stats['technical_lemmas']:>10,}")
        print(f"   Distinct forms:   {stats['distinct_forms']:>10,}")
        print(f"   Form records:     {stats['form_records']:>10,}")
        print(f"   Size:             {stats['size_bytes'] / (1024 * 1024):>10.2f} MB")

        if args.technical:
            print(f"\nTechnical words (first {args.technical}):")
            for entry in store.iter_technical(limit=args.technical):
                print(f"  • {entry.lemma_with_stress or entry.lemma}  [{', '.join(entry.sources) or '-'}]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="belaccent",
        description="Build the GrammarDB stress lexicon and mark stress in Belarusian text",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="No progress bars, warnings only")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--db-path",
        type=Path,
        default=LexiconConfig().db_path,
        help="LMDB lexicon directory (default: data/grammardb.lmdb)",
    )
    common.add_argument(
        "--source-dir",
        type=Path,
        default=LexiconConfig().source_dir,
        help="GrammarDB XML directory (default: data/grammardb)",
    )
    common.add_argument(
        "--map-size",
        type=int,
        default=DEFAULT_MAP_SIZE,
        help="Initial LMDB map size in bytes",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", parents=[common], help="Import GrammarDB into the lexicon")
    build.add_argument("--force", action="store_true", help="Re-import even if the lexicon has entries")
    build.add_argument("--workers", type=int, default=1, help="Parallel document parsers")
    build.set_defaults(func=cmd_build)

    annotate = subparsers.add_parser("annotate", parents=[common], help="Add stress marks to sentences")
    annotate.add_argument("text", nargs="*", help="Sentences (default: one per line from stdin)")
    annotate.add_argument("--json", action="store_true", help="Print one JSON object per sentence")
    annotate.set_defaults(func=cmd_annotate)

    stats = subparsers.add_parser("stats", parents=[common], help="Show lexicon statistics")
    stats.add_argument("--technical", type=int, default=0, metavar="N", help="List N technical words")
    stats.set_defaults(func=cmd_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        return args.func(args)
    except AccentError as e:
        logger.error(f"✗ {e}", exc_info=args.verbose)
        return 1
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            logger.error(f"✗ Invalid --{field.replace('_', '-')}: {error['msg']}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
