"""index.sense production."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TextIO

from wordnet_grinder.formatter import offset_format
from wordnet_grinder.models import Flags, Model, Sense
from wordnet_grinder.ordering import SenseOrder
from wordnet_grinder.word_index import group_senses, lemma_key

logger = logging.getLogger(__name__)


class SenseIndexBuilder:
    """Builds ``sensekey offset sensenum tagcount`` lines."""

    def __init__(
        self,
        model: Model,
        offsets: Mapping[str, int],
        flags: Flags = Flags(),
        *,
        order: SenseOrder | None = None,
        logger: logging.Logger = logger,
    ) -> None:
        self.model = model
        self.offsets = offsets
        self.flags = flags
        self.order = order if order is not None else SenseOrder()
        self.logger = logger
        self._groups = group_senses(model.senses)
        self._ranked: dict[tuple, list[str]] = {}

    def sense_number(self, sense: Sense) -> int:
        """1-based sense number of ``sense`` within its lemma group.

        Senses of a group that share a target synset get the same number.
        """
        if self.flags.no_reindex:
            return sense.lex_index + 1
        key = (lemma_key(sense.lemma), sense.category.pos)
        synset_ids = self._ranked.get(key)
        if synset_ids is None:
            synset_ids = []
            for other in self.order.sort(self._groups[key]):
                if other.synset_id not in synset_ids:
                    synset_ids.append(other.synset_id)
            self._ranked[key] = synset_ids
        return synset_ids.index(sense.synset_id) + 1

    def lines(self) -> list[str]:
        """Index lines sorted by sense key, without newlines."""
        lines = []
        for sense in sorted(self.model.senses, key=lambda s: s.sense_key):
            offset = self.offsets[sense.synset_id]
            lines.append(
                f"{sense.sense_key} {offset_format(offset)} "
                f"{self.sense_number(sense)} {sense.int_tag_count}"
            )
        return lines

    def write(self, stream: TextIO) -> int:
        """Write the index lines (no header); return the line count."""
        lines = self.lines()
        for line in lines:
            stream.write(line + "\n")
        self.logger.info("Senses: %d", len(lines))
        return len(lines)
