"""
Record types stored in the lexicon index.

Both records are plain dataclasses serialized with MsgPack as dicts:

    lemmas: "замак" -> {"lemma": "замак", "lemma_with_stress": "з+амак",
                        "stress_position": 1, "tag": "NCIINM2",
                        "sources": ["krapiva1988"], "is_technical": True}

    forms:  "замка" -> [{"form": "замка", "lemma": "замак",
                         "form_tag": "GS", "form_with_stress": "з+амка"}]

A form key maps to a list because several paradigms can share a surface form.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from belaccent.utils.normalize import STRESS_MARKER


def marker_position(marked: str) -> Optional[int]:
    """Index of the first stress marker, i.e. the stressed vowel's offset once markers are removed."""
    position = marked.find(STRESS_MARKER)
    return position if position >= 0 else None


def is_general_use(sources: Iterable[str], general_dictionaries: Iterable[str]) -> bool:
    """True if any source identifier belongs to a general-use dictionary."""
    general = tuple(general_dictionaries)
    return any(
        dictionary in source
        for source in sources
        for dictionary in general
    )


@dataclass
class LexiconEntry:
    """
    One base word (lemma) with its stress position.

    Attributes:
        lemma: Normalized lemma (lowercase, no marks)
        stress_position: Character offset of the stressed vowel in lemma
        lemma_with_stress: Lemma as written in GrammarDB, marker included
        tag: Opaque GrammarDB paradigm tag
        sources: Identifiers of dictionaries attesting this lemma
        is_technical: True unless a general-use dictionary attests the lemma
    """
    lemma: str
    stress_position: int
    lemma_with_stress: str = ""
    tag: str = ""
    sources: List[str] = field(default_factory=list)
    is_technical: bool = False

    @property
    def is_verb(self) -> bool:
        return self.tag.startswith("V")

    @property
    def is_proper_noun(self) -> bool:
        return self.tag.startswith("NP")

    def general_source_count(self, general_dictionaries: Iterable[str]) -> int:
        general = tuple(general_dictionaries)
        return sum(
            1 for source in self.sources
            if any(dictionary in source for dictionary in general)
        )

    def to_dict(self) -> Dict:
        """Export to dictionary format"""
        return {
            "lemma": self.lemma,
            "lemma_with_stress": self.lemma_with_stress,
            "stress_position": self.stress_position,
            "tag": self.tag,
            "sources": list(self.sources),
            "is_technical": self.is_technical,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "LexiconEntry":
        return cls(
            lemma=data["lemma"],
            stress_position=data["stress_position"],
            lemma_with_stress=data.get("lemma_with_stress", ""),
            tag=data.get("tag", ""),
            sources=list(data.get("sources", [])),
            is_technical=bool(data.get("is_technical", False)),
        )


@dataclass
class WordFormEntry:
    """
    One inflected form of a lemma.

    The lemma field is a lookup key only; the form may be stored before or
    without its lemma entry.
    """
    form: str
    lemma: str
    form_tag: str = ""
    form_with_stress: str = ""

    @property
    def stress_position(self) -> Optional[int]:
        """Stress offset specific to this form (stress moves between inflections)."""
        return marker_position(self.form_with_stress)

    def same_slot(self, other: "WordFormEntry") -> bool:
        """
        Two records describe the same stressed inflection of the same lemma.

        Homograph paradigms share lemma and tag but differ in stress
        ("з+амак" / "зам+ак"), so the marked spelling is part of the slot.
        """
        return (
            self.form == other.form
            and self.lemma == other.lemma
            and self.form_tag == other.form_tag
            and self.form_with_stress == other.form_with_stress
        )

    def to_dict(self) -> Dict:
        """Export to dictionary format"""
        return {
            "form": self.form,
            "lemma": self.lemma,
            "form_tag": self.form_tag,
            "form_with_stress": self.form_with_stress,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "WordFormEntry":
        return cls(
            form=data["form"],
            lemma=data["lemma"],
            form_tag=data.get("form_tag", ""),
            form_with_stress=data.get("form_with_stress", ""),
        )


@dataclass
class LexiconMatch:
    """
    Result of resolving a surface word against the lexicon.

    form is set only when the word was found through the forms table.
    """
    entry: LexiconEntry
    form: Optional[WordFormEntry] = None
    spellings: List[str] = field(default_factory=list)

    @property
    def is_heteronym(self) -> bool:
        """The lexicon records more than one stressed spelling for this word."""
        return len(set(self.spellings)) > 1
