"""Domain model dataclasses and enums for wordnet-grinder."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from wordnet_grinder.exceptions import ConsistencyError, UnknownIdentifierError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Category(str, Enum):
    """Part-of-speech categories of synsets and senses."""

    NOUN = "n"
    VERB = "v"
    ADJECTIVE = "a"
    ADJECTIVE_SATELLITE = "s"
    ADVERB = "r"

    @property
    def pos(self) -> Category:
        """Category of the output files (satellites live with adjectives)."""
        if self is Category.ADJECTIVE_SATELLITE:
            return Category.ADJECTIVE
        return self

    @property
    def ordinal(self) -> int:
        return _CATEGORY_ORDINALS[self]


_CATEGORY_ORDINALS = {category: i for i, category in enumerate(Category)}

# Categories owning a data.* / index.* file, in grinding order
POS_CATEGORIES: tuple[Category, ...] = (
    Category.NOUN,
    Category.VERB,
    Category.ADJECTIVE,
    Category.ADVERB,
)

POS_FILE_NAMES: dict[Category, str] = {
    Category.NOUN: "noun",
    Category.VERB: "verb",
    Category.ADJECTIVE: "adj",
    Category.ADVERB: "adv",
}


class AdjPosition(str, Enum):
    """Syntactic position of an adjective relative to a noun."""

    ATTRIBUTIVE = "a"
    IMMEDIATE_POSTNOMINAL = "ip"
    PREDICATIVE = "p"


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------

LEX_ID_COMPAT = 0x1
POINTER_COMPAT = 0x2
VERB_FRAME_COMPAT = 0x4
NO_REINDEX = 0x10000000


@dataclass(frozen=True, slots=True)
class Flags:
    """Independent legacy-compatibility switches."""

    lex_id_compat: bool = False
    pointer_compat: bool = False
    verb_frame_compat: bool = False
    no_reindex: bool = False

    @classmethod
    def from_bits(cls, bits: int) -> Flags:
        return cls(
            lex_id_compat=bool(bits & LEX_ID_COMPAT),
            pointer_compat=bool(bits & POINTER_COMPAT),
            verb_frame_compat=bool(bits & VERB_FRAME_COMPAT),
            no_reindex=bool(bits & NO_REINDEX),
        )

    @classmethod
    def legacy(cls) -> Flags:
        """All three compat restrictions, sense renumbering kept."""
        return cls(lex_id_compat=True, pointer_compat=True, verb_frame_compat=True)

    def to_bits(self) -> int:
        bits = 0
        if self.lex_id_compat:
            bits |= LEX_ID_COMPAT
        if self.pointer_compat:
            bits |= POINTER_COMPAT
        if self.verb_frame_compat:
            bits |= VERB_FRAME_COMPAT
        if self.no_reindex:
            bits |= NO_REINDEX
        return bits


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LexicalUnit:
    """A lemma in one category, with its inflected surface forms."""

    lemma: str
    category: Category
    forms: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Sense:
    """One lemma's membership in one synset."""

    sense_key: str
    lex: LexicalUnit
    category: Category
    lex_index: int
    synset_id: str
    tag_count: int | None = None
    adj_position: AdjPosition | None = None
    relations: dict[str, tuple[str, ...]] | None = None
    verb_frames: tuple[str, ...] | None = None
    verb_templates: tuple[int, ...] | None = None

    @property
    def lemma(self) -> str:
        return self.lex.lemma

    @property
    def lex_id(self) -> int:
        """Lex id, third field of the sense key's lex sense part."""
        _, sep, lex_sense = self.sense_key.partition("%")
        fields = lex_sense.split(":")
        if not sep or len(fields) < 3:
            raise UnknownIdentifierError("sense key", self.sense_key)
        try:
            return int(fields[2])
        except ValueError:
            raise UnknownIdentifierError("sense key", self.sense_key) from None

    @property
    def int_tag_count(self) -> int:
        return self.tag_count or 0


@dataclass(frozen=True, slots=True)
class Synset:
    """A set of synonymous lemmas sharing one concept."""

    id: str
    category: Category
    members: tuple[str, ...]
    lexfile: str
    definitions: tuple[str, ...]
    examples: tuple[str, ...] = ()
    relations: dict[str, tuple[str, ...]] | None = None

    def member_index(self, lemma: str) -> int:
        """0-based position of ``lemma`` among the members."""
        try:
            return self.members.index(lemma)
        except ValueError:
            raise UnknownIdentifierError(
                "member", f"{lemma} in {self.id}"
            ) from None


@dataclass(frozen=True, slots=True)
class Member:
    """A synset member as written in a data record.

    Plain when ``position`` is None, adjectival otherwise.
    """

    lemma: str
    lex_id: int
    position: str | None = None

    def to_wndb(self) -> str:
        if self.position is not None:
            return f"{self.lemma}({self.position}) {self.lex_id:X}"
        return f"{self.lemma} {self.lex_id:X}"


@dataclass(frozen=True, slots=True)
class VerbTemplate:
    """A verb sentence template (sents.vrb)."""

    id: int
    template: str


@dataclass(frozen=True, slots=True)
class VerbFrame:
    """A named syntactic frame and its canned text."""

    id: str
    frame: str


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

class Model:
    """Read-only snapshot of a lexical database."""

    def __init__(
        self,
        synsets_by_id: Mapping[str, Synset],
        senses_by_id: Mapping[str, Sense],
        lexes_by_lemma: Mapping[str, Iterable[LexicalUnit]] | None = None,
        verb_templates_by_id: Mapping[int, VerbTemplate] | None = None,
        verb_frames: Iterable[VerbFrame] = (),
        source: str | None = None,
    ) -> None:
        self.synsets_by_id: dict[str, Synset] = dict(synsets_by_id)
        self.senses_by_id: dict[str, Sense] = dict(senses_by_id)
        if lexes_by_lemma is None:
            lexes_by_lemma = _lexes_of(self.senses_by_id.values())
        self.lexes_by_lemma: dict[str, tuple[LexicalUnit, ...]] = {
            lemma: tuple(lexes) for lemma, lexes in lexes_by_lemma.items()
        }
        self.verb_templates_by_id: dict[int, VerbTemplate] = dict(
            verb_templates_by_id or {}
        )
        self.verb_frames: tuple[VerbFrame, ...] = tuple(verb_frames)
        self.source = source
        self._senses_by_member = {
            (sense.synset_id, sense.lemma): sense
            for sense in self.senses_by_id.values()
        }

    @classmethod
    def from_entities(
        cls,
        synsets: Iterable[Synset],
        senses: Iterable[Sense],
        *,
        lexes: Iterable[LexicalUnit] | None = None,
        verb_templates: Iterable[VerbTemplate] = (),
        verb_frames: Iterable[VerbFrame] = (),
        source: str | None = None,
    ) -> Model:
        """Build a model from flat entity collections."""
        senses = list(senses)
        lexes_by_lemma = None
        if lexes is not None:
            lexes_by_lemma = _lexes_of((), extra=lexes)
        return cls(
            {synset.id: synset for synset in synsets},
            {sense.sense_key: sense for sense in senses},
            lexes_by_lemma,
            {t.id: t for t in verb_templates},
            verb_frames,
            source,
        )

    @property
    def senses(self) -> list[Sense]:
        return list(self.senses_by_id.values())

    def synsets_of(self, pos: Category) -> list[Synset]:
        """Synsets written to the ``pos`` file, in stable (id) order."""
        pos = Category(pos).pos
        return [
            self.synsets_by_id[synset_id]
            for synset_id in sorted(self.synsets_by_id)
            if self.synsets_by_id[synset_id].category.pos is pos
        ]

    def synset(self, synset_id: str) -> Synset:
        try:
            return self.synsets_by_id[synset_id]
        except KeyError:
            raise UnknownIdentifierError("synset", synset_id) from None

    def sense(self, sense_key: str) -> Sense:
        try:
            return self.senses_by_id[sense_key]
        except KeyError:
            raise UnknownIdentifierError("sense", sense_key) from None

    def sense_of(self, synset: Synset, lemma: str) -> Sense:
        """The sense through which ``lemma`` is a member of ``synset``."""
        sense = self._senses_by_member.get((synset.id, lemma))
        if sense is None:
            raise ConsistencyError(
                f"Find sense of {lemma!r} in synset {synset.id}"
            )
        return sense

    def senses_of(self, synset: Synset) -> list[Sense]:
        """Senses targeting ``synset``, in member order."""
        return [self.sense_of(synset, lemma) for lemma in synset.members]

    def member_number(self, sense: Sense) -> int:
        """1-based index of the sense's lemma in its target synset."""
        return self.synset(sense.synset_id).member_index(sense.lemma) + 1


def _lexes_of(
    senses: Iterable[Sense],
    extra: Iterable[LexicalUnit] = (),
) -> dict[str, list[LexicalUnit]]:
    """Group lexical units by lemma, first appearance order, no repeats."""
    grouped: dict[str, list[LexicalUnit]] = {}
    units = [sense.lex for sense in senses]
    units.extend(extra)
    for lex in units:
        bucket = grouped.setdefault(lex.lemma, [])
        if lex not in bucket:
            bucket.append(lex)
    return grouped
