#!/usr/bin/env python3
"""
GrammarDB Parser

Parses Belarusian GrammarDB XML documents into paradigm records and converts
them into lexicon entries.

Input Format:
    <Wordlist>
      <Paradigm pdgId="1" lemma="з+амак" tag="NCIINM2">
        <Variant id="a" slouniki="krapiva1988,sbm2012">
          <Form tag="NS">з+амак</Form>
          <Form tag="GS">з+амка</Form>
        </Variant>
      </Paradigm>
    </Wordlist>

The "+" marker sits immediately before the stressed vowel.

Output:
    LexiconEntry(lemma="замак", stress_position=1, sources=[...], ...)
    [WordFormEntry(form="замак", form_tag="NS", form_with_stress="з+амак"), ...]

Data Attribution:
    GrammarDB - https://github.com/Belarus/GrammarDB
    License: CC BY-SA 4.0
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from belaccent.config import GENERAL_DICTIONARIES
from belaccent.errors import SourceParseError
from belaccent.lexicon.types import LexiconEntry, WordFormEntry, is_general_use, marker_position
from belaccent.utils.normalize import normalize_word

logger = getLogger(__name__)


@dataclass
class Variant:
    """One <Variant> group of a paradigm."""
    sources: Optional[List[str]] = None  # None when the slouniki attribute is absent
    forms: List[Tuple[str, str]] = field(default_factory=list)  # (tag, marked text)


@dataclass
class Paradigm:
    """One <Paradigm> record as written in the document."""
    lemma: str
    tag: str = ""
    variants: List[Variant] = field(default_factory=list)


def _parse_variant(element: ET.Element) -> Variant:
    slouniki = element.get("slouniki")
    sources = None
    if slouniki:
        sources = [source.strip() for source in slouniki.split(",") if source.strip()]

    forms = []
    for form in element.iter("Form"):
        tag = form.get("tag")
        text = (form.text or "").strip()
        if tag and text:
            forms.append((tag, text))

    return Variant(sources=sources, forms=forms)


def _parse_paradigm(element: ET.Element) -> Paradigm:
    return Paradigm(
        lemma=(element.get("lemma") or "").strip(),
        tag=element.get("tag") or "",
        variants=[_parse_variant(variant) for variant in element.iter("Variant")],
    )


def iter_paradigms(path: Path) -> Iterator[Paradigm]:
    """
    Stream paradigms from a GrammarDB document.

    Elements are cleared after use so large documents do not stay in memory.

    Raises:
        SourceParseError: The document is unreadable or not well-formed XML
    """
    path = Path(path)
    try:
        for _, element in ET.iterparse(str(path), events=("end",)):
            if element.tag != "Paradigm":
                continue
            yield _parse_paradigm(element)
            element.clear()
    except ET.ParseError as e:
        raise SourceParseError(path, f"malformed XML: {e}") from e
    except OSError as e:
        raise SourceParseError(path, str(e)) from e


def parse_document(path: Path) -> List[Paradigm]:
    """
    Parse a whole GrammarDB document.

    Parsing completes before anything is written, so a malformed document
    never leaves half of its paradigms in the index.
    """
    paradigms = list(iter_paradigms(path))
    logger.debug(f"Parsed {len(paradigms):,} paradigms from {Path(path).name}")
    return paradigms


def paradigm_to_records(
    paradigm: Paradigm,
    general_dictionaries: Iterable[str] = GENERAL_DICTIONARIES,
) -> Optional[Tuple[LexiconEntry, List[WordFormEntry]]]:
    """
    Convert a paradigm into a lexicon entry and its word forms.

    Returns None when the lemma has no stress marker (no stress information).

    Sources follow last-seen-wins: when several variants carry a slouniki
    attribute, the last one decides sources and is_technical.
    """
    if not paradigm.lemma:
        return None

    lemma = normalize_word(paradigm.lemma)
    stress_position = marker_position(paradigm.lemma)
    if stress_position is None or stress_position >= len(lemma):
        return None

    general_dictionaries = tuple(general_dictionaries)
    sources: List[str] = []
    forms: List[WordFormEntry] = []

    for variant in paradigm.variants:
        if variant.sources is not None:
            sources = variant.sources

        for form_tag, marked in variant.forms:
            form = normalize_word(marked)
            if not form:
                continue
            forms.append(WordFormEntry(
                form=form,
                lemma=lemma,
                form_tag=form_tag,
                form_with_stress=marked,
            ))

    entry = LexiconEntry(
        lemma=lemma,
        stress_position=stress_position,
        lemma_with_stress=paradigm.lemma,
        tag=paradigm.tag,
        sources=sources,
        is_technical=not is_general_use(sources, general_dictionaries),
    )
    return entry, forms
