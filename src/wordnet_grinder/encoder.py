"""Synset record encoding for the data.{noun,verb,adj,adv} files.

A record reads::

    offset lexfile category members relations [frames] | glosses  \\n

where every numeric field has a fixed width, so a record's length does not
depend on the offsets written into it.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from wordnet_grinder.codes import code_frame_id, code_lexfile
from wordnet_grinder.exceptions import (
    CompatibilityError,
    ConsistencyError,
    UnknownIdentifierError,
    UnsupportedRelationError,
)
from wordnet_grinder.formatter import (
    escape,
    join_and_quote,
    join_with_count,
    offset_format,
)
from wordnet_grinder.models import Category, Flags, Member, Model, Sense, Synset
from wordnet_grinder.relations import code_relation

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class RelationPolicy(str, Enum):
    """What to do with a relation or frame outside the closed vocabulary."""

    # Log with synset id and offset, then re-raise
    STRICT = "strict"
    # Log and drop
    BEST_EFFORT = "best_effort"


@dataclass(frozen=True, slots=True)
class RelationData:
    """Identity of an outgoing relation, used to drop duplicates.

    ``source`` is the source sense key of a sense relation, None for a
    synset relation.
    """

    source: str | None
    relation_type: str
    target: str


@dataclass(frozen=True, slots=True)
class Pointer:
    """A coded relation as written in a data record."""

    symbol: str
    target_offset: int
    target_category: Category
    source_number: int
    target_number: int

    def to_wndb(self) -> str:
        return (
            f"{self.symbol} {offset_format(self.target_offset)} "
            f"{self.target_category.value} "
            f"{self.source_number:02x}{self.target_number:02x}"
        )


@dataclass(frozen=True, slots=True)
class Frame:
    """A verb frame applied to one member (0 = all members)."""

    number: int
    member_number: int

    def to_wndb(self) -> str:
        return f"+ {self.number:02d} {self.member_number:02x}"


def unique(
    items: Iterable[_T],
    on_duplicate: Callable[[_T], None] | None = None,
) -> list[_T]:
    """Drop repeated items, keeping first-appearance order."""
    seen: set[_T] = set()
    result: list[_T] = []
    for item in items:
        if item in seen:
            if on_duplicate is not None:
                on_duplicate(item)
            continue
        seen.add(item)
        result.append(item)
    return result


def group_frames(
    occurrences: Iterable[tuple[int, int]],
    member_count: int,
) -> list[Frame]:
    """Group (frame number, member number) occurrences by frame number.

    A frame occurring as many times as the synset has members collapses
    to a single entry for member 0.
    """
    groups: dict[int, list[int]] = {}
    for number, member_number in occurrences:
        groups.setdefault(number, []).append(member_number)

    frames: list[Frame] = []
    for number in sorted(groups):
        member_numbers = groups[number]
        if len(member_numbers) == member_count:
            frames.append(Frame(number, 0))
        else:
            frames.extend(Frame(number, m) for m in member_numbers)
    return frames


class SynsetEncoder:
    """Produces the data record of a synset."""

    def __init__(
        self,
        model: Model,
        offset_of: Callable[[str], int],
        flags: Flags = Flags(),
        *,
        policy: RelationPolicy | str = RelationPolicy.STRICT,
        logger: logging.Logger = logger,
        quiet: bool = False,
        log_duplicates: bool = False,
    ) -> None:
        self.model = model
        self.offset_of = offset_of
        self.flags = flags
        self.policy = RelationPolicy(policy)
        self.logger = logger
        self.quiet = quiet
        self.log_duplicates = log_duplicates
        self.incompatibilities: Counter[str] = Counter()

    def encode(self, synset: Synset, offset: int) -> str:
        """Get the newline-terminated record of ``synset`` at ``offset``.

        Raises:
            ConsistencyError: if the synset has no members
        """
        if not synset.members:
            raise ConsistencyError(f"Synset {synset.id} has no members")
        senses = self.model.senses_of(synset)
        members = self.members(synset, senses)
        lexfile_number = code_lexfile(synset.lexfile)
        pointers = self.pointers(synset, offset, senses)

        members_data = join_with_count(members, "02x", Member.to_wndb)
        pointers_data = join_with_count(pointers, "03d", Pointer.to_wndb)
        frames_data = ""
        if synset.category is Category.VERB:
            frames = self.frames(synset, offset, senses)
            frames_data = " " + join_with_count(frames, "02d", Frame.to_wndb)
        definitions_data = "; ".join(synset.definitions)
        examples_data = ""
        if synset.examples:
            examples_data = "; " + join_and_quote(synset.examples, " ")

        return (
            f"{offset_format(offset)} {lexfile_number:02d} "
            f"{synset.category.value} {members_data} {pointers_data}"
            f"{frames_data} | {definitions_data}{examples_data}  \n"
        )

    def members(
        self,
        synset: Synset,
        senses: list[Sense] | None = None,
    ) -> list[Member]:
        """Members in synset order, lex ids clamped in lex-id compat mode."""
        if senses is None:
            senses = self.model.senses_of(synset)
        members = []
        for sense in senses:
            lex_id = sense.lex_id
            if self.flags.lex_id_compat:
                tweaked = lex_id % 16
                if lex_id > 16 and not self.quiet:
                    self.logger.warning(
                        "Out of range lexid %s: %d tweaked to %d",
                        sense.lemma, lex_id, tweaked,
                    )
                lex_id = tweaked
            position = sense.adj_position.value if sense.adj_position else None
            members.append(Member(escape(sense.lemma), lex_id, position))
        return members

    def pointers(
        self,
        synset: Synset,
        offset: int,
        senses: list[Sense] | None = None,
    ) -> list[Pointer]:
        """Coded synset relations followed by coded sense relations."""
        if senses is None:
            senses = self.model.senses_of(synset)

        candidates: list[RelationData] = []
        for relation_type, targets in (synset.relations or {}).items():
            candidates.extend(
                RelationData(None, relation_type, target) for target in targets
            )
        for sense in senses:
            for relation_type, targets in (sense.relations or {}).items():
                candidates.extend(
                    RelationData(sense.sense_key, relation_type, target)
                    for target in targets
                )

        def on_duplicate(relation: RelationData) -> None:
            if self.log_duplicates and not self.quiet:
                self.logger.warning(
                    "Synset %s has duplicate %s", synset.id, relation
                )

        pointers = []
        for relation in unique(candidates, on_duplicate):
            try:
                pointers.append(self._pointer(synset, relation))
            except CompatibilityError as e:
                self.incompatibilities[e.cause] += 1
            except (UnsupportedRelationError, UnknownIdentifierError) as e:
                self._discard(
                    e, "relation '%s' synset=%s offset=%d",
                    relation.relation_type, synset.id, offset,
                )
        return pointers

    def frames(
        self,
        synset: Synset,
        offset: int,
        senses: list[Sense] | None = None,
    ) -> list[Frame]:
        """Verb frames of the synset's senses, grouped by frame number."""
        if senses is None:
            senses = self.model.senses_of(synset)

        occurrences = []
        for sense in senses:
            for frame_id in sense.verb_frames or ():
                try:
                    number = code_frame_id(frame_id, self.flags.verb_frame_compat)
                except CompatibilityError as e:
                    self.incompatibilities[e.cause] += 1
                    continue
                except UnknownIdentifierError as e:
                    self._discard(
                        e, "verb frame '%s' synset=%s offset=%d",
                        frame_id, synset.id, offset,
                    )
                    continue
                occurrences.append((number, self.model.member_number(sense)))
        return group_frames(occurrences, len(synset.members))

    def report(self) -> Counter[str]:
        """Log incompatibility counts by cause, then reset them."""
        counts = Counter(self.incompatibilities)
        for cause, count in sorted(counts.items()):
            self.logger.warning("Incompatibilities '%s': %d", cause, count)
        self.incompatibilities.clear()
        return counts

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _pointer(self, synset: Synset, relation: RelationData) -> Pointer:
        symbol = code_relation(
            relation.relation_type, synset.category, self.flags.pointer_compat
        )
        if relation.source is None:
            target = self.model.synset(relation.target)
            return Pointer(symbol, self.offset_of(target.id), target.category, 0, 0)

        source = self.model.sense(relation.source)
        target_sense = self.model.sense(relation.target)
        target = self.model.synset(target_sense.synset_id)
        return Pointer(
            symbol,
            self.offset_of(target.id),
            target.category,
            self.model.member_number(source),
            self.model.member_number(target_sense),
        )

    def _discard(self, error: Exception, what: str, *args: object) -> None:
        if self.policy is RelationPolicy.STRICT:
            self.logger.error("Failed " + what + ": %s", *args, error)
            raise error
        if not self.quiet:
            self.logger.warning("Discarded " + what + ": %s", *args, error)
