"""
Configuration for building and querying the Belarusian stress lexicon.
"""

from pathlib import Path
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

# GrammarDB ships one document per part-of-speech group
DEFAULT_DOCUMENT_NAMES: Tuple[str, ...] = (
    "A1.xml", "A2.xml", "C.xml", "E.xml", "I.xml", "K.xml",
    "M.xml", "N1.xml", "N2.xml", "N3.xml", "P.xml", "R.xml",
    "S.xml", "V.xml", "W.xml", "Y.xml", "Z.xml",
)

# Reference dictionaries of common vocabulary
GENERAL_DICTIONARIES: Tuple[str, ...] = ("tsbm1984", "sbm2012", "tsblm1996", "biryla1987")

DEFAULT_MAP_SIZE = 1024 * 1024 * 1024  # 1 GiB, sparse on disk


class LexiconConfig(BaseModel):
    """Configuration for the lexicon build and the accent service."""

    source_dir: Path = Field(
        default=Path("data/grammardb"),
        description="Directory holding GrammarDB XML documents",
    )
    db_path: Path = Field(
        default=Path("data/grammardb.lmdb"),
        description="LMDB environment directory for the built lexicon",
    )
    document_names: Tuple[str, ...] = Field(
        default=DEFAULT_DOCUMENT_NAMES,
        description="Document file names to import, in order; missing files are skipped",
    )
    general_dictionaries: Tuple[str, ...] = Field(
        default=GENERAL_DICTIONARIES,
        description="Source identifiers that mark a lemma as general-use vocabulary",
    )
    map_size: int = Field(
        default=DEFAULT_MAP_SIZE,
        ge=1024 * 1024,
        description="Initial LMDB map size in bytes (grown automatically when full)",
    )
    workers: int = Field(default=1, ge=1, le=64, description="Parallel document parsers")
    show_progress: bool = Field(default=True, description="Show a tqdm bar during the build")

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)
