"""
Tests for the accent marking policy.
"""

import pytest

from belaccent.accent_service.policy import AccentPolicy, count_syllables, looks_foreign
from belaccent.accent_service.types import AccentReason
from belaccent.lexicon.types import LexiconEntry, LexiconMatch


def match_for(lemma, tag="NCIIFN1", sources=("tsbm1984",), is_technical=False, spellings=()):
    entry = LexiconEntry(
        lemma=lemma,
        stress_position=0,
        tag=tag,
        sources=list(sources),
        is_technical=is_technical,
    )
    return LexiconMatch(entry=entry, spellings=list(spellings))


@pytest.fixture
def policy():
    return AccentPolicy()


@pytest.mark.parametrize("word,expected", [
    ("замак", 2),
    ("бібліятэка", 5),
    ("Я", 1),
    ("ўск", 0),
    ("ДАМОЎ", 2),
])
def test_count_syllables(word, expected):
    assert count_syllables(word) == expected


@pytest.mark.parametrize("word,expected", [
    ("фара", True),
    ("тэлевізар", True),
    ("кампутар", False),
    ("тэст", False),
    ("замак", False),
    ("бібліятэка", False),
])
def test_looks_foreign(word, expected):
    assert looks_foreign(word) == expected


class TestBaseRules:
    """Decision rules before refinement"""

    def test_single_syllable_never_marked(self, policy):
        assert policy.decide("дом", match_for("дом", is_technical=True, sources=())) is None

    def test_technical_is_uncommon(self, policy):
        match = match_for("дрыгва", sources=(), is_technical=True)
        assert policy.decide("дрыгва", match) == AccentReason.UNCOMMON

    def test_four_syllables_is_complex(self, policy):
        assert policy.decide("бібліятэка", match_for("бібліятэка")) == AccentReason.COMPLEX

    @pytest.mark.parametrize("tag", ["VTNIR", "NPIIMN2"])
    def test_verbs_and_proper_nouns_are_complex(self, policy, tag):
        assert policy.decide("чытаць", match_for("чытаць", tag=tag)) == AccentReason.COMPLEX

    def test_technical_beats_complex(self, policy):
        match = match_for("бібліятэка", sources=(), is_technical=True)
        assert policy.decide("бібліятэка", match) == AccentReason.UNCOMMON

    def test_no_general_source_is_uncommon(self):
        policy = AccentPolicy(general_dictionaries=("tsbm1984",))
        match = match_for("гара", sources=("sbm2012",), is_technical=False)
        assert policy.decide("гара", match) == AccentReason.UNCOMMON

    def test_common_short_word_is_skipped(self, policy):
        assert policy.decide("гара", match_for("гара")) is None


class TestRefinement:
    """Homograph and loanword relabelling"""

    def test_known_homograph(self, policy):
        match = match_for("атлас", sources=("krapiva1988",), is_technical=True)
        assert policy.decide("атлас", match) == AccentReason.HOMOGRAPH

    def test_homograph_by_lemma(self, policy):
        match = match_for("замак", sources=("krapiva1988",), is_technical=True)
        assert policy.decide("замку", match) == AccentReason.HOMOGRAPH

    def test_homograph_from_recorded_spellings(self, policy):
        match = match_for("кружка", is_technical=True, sources=(), spellings=("кр+ужка", "круж+ка"))
        assert policy.decide("кружка", match) == AccentReason.HOMOGRAPH

    def test_known_homograph_not_marked_when_common(self, policy):
        assert policy.decide("мука", match_for("мука")) is None

    def test_complex_loanword_is_foreign(self, policy):
        assert policy.decide("тэлевізар", match_for("тэлевізар")) == AccentReason.FOREIGN

    def test_uncommon_loanword_stays_uncommon(self, policy):
        match = match_for("фара", sources=(), is_technical=True)
        assert policy.decide("фара", match) == AccentReason.UNCOMMON

    def test_custom_homographs(self):
        policy = AccentPolicy(known_homographs={"дрыгва"})
        match = match_for("дрыгва", sources=(), is_technical=True)
        assert policy.decide("дрыгва", match) == AccentReason.HOMOGRAPH
