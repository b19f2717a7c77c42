"""
Shared fixtures: a tiny GrammarDB corpus, a lexicon built from it and an
accent service on top of that lexicon.
"""

import sys
from pathlib import Path

import pytest

from belaccent.accent_service import BelarusianAccentService
from belaccent.config import LexiconConfig
from belaccent.lexicon import LexiconBuilder, LexiconStore

# Cyrillic in assertion messages on Windows consoles
if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")


NOUNS_1 = """<?xml version="1.0" encoding="UTF-8"?>
<Wordlist>
  <Paradigm pdgId="1" lemma="з+амак" tag="NCIINM2">
    <Variant id="a" slouniki="krapiva1988">
      <Form tag="NS">з+амак</Form>
      <Form tag="GS">з+амка</Form>
    </Variant>
  </Paradigm>
  <Paradigm pdgId="2" lemma="зам+ак" tag="NCIINM2">
    <Variant id="a" slouniki="krapiva1988">
      <Form tag="NS">зам+ак</Form>
      <Form tag="GS">замк+а</Form>
    </Variant>
  </Paradigm>
  <Paradigm pdgId="3" lemma="гар+а" tag="NCIIFN1">
    <Variant id="a" slouniki="tsbm1984,sbm2012">
      <Form tag="NS">гар+а</Form>
      <Form tag="GS">гар+ы</Form>
      <Form tag="NP">г+оры</Form>
    </Variant>
  </Paradigm>
</Wordlist>
"""

NOUNS_2 = """<?xml version="1.0" encoding="UTF-8"?>
<Wordlist>
  <Paradigm pdgId="10" lemma="бібліят+эка" tag="NCIIFN1">
    <Variant id="a" slouniki="tsbm1984">
      <Form tag="NS">бібліят+эка</Form>
    </Variant>
  </Paradigm>
  <Paradigm pdgId="11" lemma="тэлев+ізар" tag="NCIIMN1">
    <Variant id="a" slouniki="tsbm1984">
      <Form tag="NS">тэлев+ізар</Form>
    </Variant>
  </Paradigm>
  <Paradigm pdgId="12" lemma="дрыгв+а" tag="NCIIFN1">
    <Variant id="a">
      <Form tag="NS">дрыгв+а</Form>
    </Variant>
  </Paradigm>
  <Paradigm pdgId="13" lemma="сабака" tag="NCAIFN1">
    <Variant id="a" slouniki="tsbm1984">
      <Form tag="NS">сабака</Form>
    </Variant>
  </Paradigm>
  <Paradigm pdgId="14" lemma="кот+" tag="NCAIMN1">
    <Variant id="a" slouniki="tsbm1984">
      <Form tag="NS">кот+</Form>
    </Variant>
  </Paradigm>
</Wordlist>
"""

NOUNS_3 = """<?xml version="1.0" encoding="UTF-8"?>
<Wordlist>
  <Paradigm pdgId="20" lemma="Магіл+ёў" tag="NPIIMN2">
    <Variant id="a" slouniki="tsbm1984">
      <Form tag="NS">Магіл+ёў</Form>
      <Form tag="GS">Магіл+ёва</Form>
    </Variant>
  </Paradigm>
</Wordlist>
"""

ADVERBS = """<?xml version="1.0" encoding="UTF-8"?>
<Wordlist>
  <Paradigm pdgId="30" lemma="дам+оў" tag="R">
    <Variant id="a" slouniki="krapiva1988">
      <Form tag="R">дам+оў</Form>
    </Variant>
  </Paradigm>
</Wordlist>
"""

VERBS = """<?xml version="1.0" encoding="UTF-8"?>
<Wordlist>
  <Paradigm pdgId="40" lemma="чыт+аць" tag="VTNIR">
    <Variant id="a" slouniki="tsbm1984,sbm2012">
      <Form tag="0">чыт+аць</Form>
      <Form tag="R1S">чыт+аю</Form>
      <Form tag="R3S">чыт+ае</Form>
    </Variant>
  </Paradigm>
  <Paradigm pdgId="41" lemma="піс+аць" tag="VTNIR">
    <Variant id="a" slouniki="tsbm1984">
      <Form tag="0">піс+аць</Form>
      <Form tag="R1S">піш+у</Form>
      <Form tag="R3S">п+іша</Form>
    </Variant>
  </Paradigm>
</Wordlist>
"""

MALFORMED = """<?xml version="1.0" encoding="UTF-8"?>
<Wordlist>
  <Paradigm pdgId="50" lemma="в+ада" tag="NCIIFN1">
    <Variant id="a" slouniki="tsbm1984">
      <Form tag="NS">в+ада
"""

CORPUS = {
    "N1.xml": NOUNS_1,
    "N2.xml": NOUNS_2,
    "N3.xml": NOUNS_3,
    "R.xml": ADVERBS,
    "V.xml": VERBS,
    "Z.xml": MALFORMED,
}

# Facts about CORPUS that tests assert against
CORPUS_LEMMAS = 9
CORPUS_TECHNICAL = 3
CORPUS_DISTINCT_FORMS = 17
CORPUS_FORM_RECORDS = 19
CORPUS_PARADIGMS = 12
CORPUS_PARADIGMS_SKIPPED = 2


@pytest.fixture
def grammardb_dir(tmp_path) -> Path:
    """GrammarDB directory with five good documents and one malformed one."""
    source_dir = tmp_path / "grammardb"
    source_dir.mkdir()
    for name, content in CORPUS.items():
        (source_dir / name).write_text(content, encoding="utf-8")
    return source_dir


@pytest.fixture
def lexicon_config(tmp_path, grammardb_dir) -> LexiconConfig:
    return LexiconConfig(
        source_dir=grammardb_dir,
        db_path=tmp_path / "lexicon.lmdb",
        map_size=10 * 1024 * 1024,
        show_progress=False,
    )


@pytest.fixture
def empty_store(lexicon_config):
    store = LexiconStore(lexicon_config.db_path, map_size=lexicon_config.map_size)
    yield store
    store.close()


@pytest.fixture
def store(empty_store, lexicon_config):
    """Lexicon built from the corpus."""
    LexiconBuilder(empty_store, lexicon_config).import_documents()
    return empty_store


@pytest.fixture
def service(store, tmp_path):
    """Accent service over the built lexicon; no import happens on initialize."""
    config = LexiconConfig(
        source_dir=tmp_path / "missing",
        db_path=store.db_path,
        show_progress=False,
    )
    service = BelarusianAccentService(config=config, store=store)
    yield service
    service.close()
