"""index.{noun,verb,adj,adv} production."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TextIO

from wordnet_grinder.encoder import RelationPolicy
from wordnet_grinder.exceptions import (
    CompatibilityError,
    UnknownIdentifierError,
    UnsupportedRelationError,
)
from wordnet_grinder.formatter import (
    OEWN_HEADER,
    escape,
    join_with_count,
    offset_format,
)
from wordnet_grinder.models import Category, Flags, Model, Sense
from wordnet_grinder.ordering import SenseOrder
from wordnet_grinder.relations import code_relation

logger = logging.getLogger(__name__)


def lemma_key(lemma: str) -> str:
    """Index key of a lemma: lower-cased, spaces as underscores."""
    return escape(lemma.lower())


def group_senses(senses: Iterable[Sense]) -> dict[tuple[str, Category], list[Sense]]:
    """Group senses by (index key, output category)."""
    groups: dict[tuple[str, Category], list[Sense]] = {}
    for sense in senses:
        key = (lemma_key(sense.lemma), sense.category.pos)
        groups.setdefault(key, []).append(sense)
    return groups


@dataclass(slots=True)
class WordIndexEntry:
    """What one index line is made of."""

    key: str
    category: Category
    synset_ids: list[str] = field(default_factory=list)
    pointers: set[str] = field(default_factory=set)
    tagged_count: int = 0


class WordIndexBuilder:
    """Builds index entries from sense groups."""

    def __init__(
        self,
        model: Model,
        offsets: Mapping[str, int],
        flags: Flags = Flags(),
        *,
        order: SenseOrder | None = None,
        policy: RelationPolicy | str = RelationPolicy.STRICT,
        header: str = OEWN_HEADER,
        logger: logging.Logger = logger,
    ) -> None:
        self.model = model
        self.offsets = offsets
        self.flags = flags
        self.order = order if order is not None else SenseOrder()
        self.policy = RelationPolicy(policy)
        self.header = header
        self.logger = logger
        self.incompatibilities: Counter[str] = Counter()

    def entries(self, category: Category | str) -> list[WordIndexEntry]:
        """Entries of one index file, sorted by key."""
        pos = Category(category).pos
        groups = group_senses(self.model.senses)
        entries = []
        for key, group_pos in sorted(k for k in groups if k[1] is pos):
            senses = self.order.sort(groups[key, group_pos])
            entry = WordIndexEntry(key, pos)
            for sense in senses:
                if sense.synset_id not in entry.synset_ids:
                    entry.synset_ids.append(sense.synset_id)
                if sense.int_tag_count > 0:
                    entry.tagged_count += 1
            for sense in senses:
                synset = self.model.synset(sense.synset_id)
                self._collect(entry, synset.relations)
            for sense in senses:
                self._collect(entry, sense.relations)
            entries.append(entry)
        return entries

    def format_entry(self, entry: WordIndexEntry) -> str:
        """``lemma pos n p_cnt [ptrs] n tagged offsets  `` (no newline)."""
        count = len(entry.synset_ids)
        pointers = join_with_count(sorted(entry.pointers), "d")
        offsets = " ".join(
            offset_format(self.offsets[synset_id])
            for synset_id in entry.synset_ids
        )
        return (
            f"{entry.key} {entry.category.value} {count} {pointers} "
            f"{count} {entry.tagged_count} {offsets}  "
        )

    def write(self, stream: TextIO, category: Category | str) -> int:
        """Write the header and the index lines; return the entry count.

        Incompatibilities stay counted until :meth:`report`.
        """
        entries = self.entries(category)
        stream.write(self.header)
        for entry in entries:
            stream.write(self.format_entry(entry) + "\n")
        return len(entries)

    def report(self) -> Counter[str]:
        """Log incompatibility counts by cause, then reset them."""
        counts = Counter(self.incompatibilities)
        for cause, count in sorted(counts.items()):
            self.logger.warning("Incompatibilities '%s': %d", cause, count)
        self.incompatibilities.clear()
        return counts

    def _collect(
        self,
        entry: WordIndexEntry,
        relations: Mapping[str, object] | None,
    ) -> None:
        for relation_type in relations or {}:
            try:
                symbol = code_relation(
                    relation_type, entry.category, self.flags.pointer_compat
                )
            except CompatibilityError as e:
                self.incompatibilities[e.cause] += 1
                continue
            except (UnsupportedRelationError, UnknownIdentifierError) as e:
                if self.policy is RelationPolicy.STRICT:
                    self.logger.error(
                        "Failed relation '%s' index=%s: %s",
                        relation_type, entry.key, e,
                    )
                    raise
                self.logger.warning(
                    "Discarded relation '%s' index=%s", relation_type, entry.key
                )
                continue
            entry.pointers.add(symbol)
