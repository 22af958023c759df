"""Pass 1: byte offsets of synset records, and offset side files.

Offsets are computed by encoding every record of a category with a
resolver that answers 0 for all targets. Every numeric field of a record
is fixed width, so record lengths are already final and the running byte
count gives each synset's offset.
"""

from __future__ import annotations

import logging
import pickle
from collections import Counter
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import BinaryIO, TextIO

from wordnet_grinder.encoder import RelationPolicy, SynsetEncoder
from wordnet_grinder.formatter import OEWN_HEADER, byte_length
from wordnet_grinder.models import POS_CATEGORIES, Category, Flags, Model

logger = logging.getLogger(__name__)


def zero_offset(synset_id: str) -> int:
    return 0


class OffsetResolver:
    """Computes synset id to offset maps, one category at a time."""

    def __init__(
        self,
        model: Model,
        flags: Flags = Flags(),
        *,
        header: str = OEWN_HEADER,
        policy: RelationPolicy | str = RelationPolicy.STRICT,
        logger: logging.Logger = logger,
    ) -> None:
        self.model = model
        self.flags = flags
        self.header = header
        self.policy = RelationPolicy(policy)
        self.logger = logger
        self.incompatibilities: Counter[str] = Counter()

    def resolve(self, category: Category | str) -> dict[str, int]:
        """Offsets of the synsets of one data file.

        The first record starts right after the header.
        """
        offsets, counts = self._resolve(Category(category).pos)
        self.incompatibilities += counts
        return offsets

    def resolve_all(self, parallel: bool = False) -> dict[str, int]:
        """Offsets of all synsets, optionally one worker per category."""
        categories = list(POS_CATEGORIES)
        if parallel:
            with ThreadPoolExecutor(max_workers=len(categories)) as executor:
                results = list(executor.map(self._resolve, categories))
        else:
            results = [self._resolve(category) for category in categories]

        offsets: dict[str, int] = {}
        for category_offsets, counts in results:
            offsets.update(category_offsets)
            self.incompatibilities += counts
        self.logger.info("Computed %d offsets", len(offsets))
        return offsets

    def _resolve(self, pos: Category) -> tuple[dict[str, int], Counter[str]]:
        # Private encoder per task; quiet since pass 2 logs the same issues
        encoder = SynsetEncoder(
            self.model,
            zero_offset,
            self.flags,
            policy=self.policy,
            logger=self.logger,
            quiet=True,
        )
        offsets: dict[str, int] = {}
        position = byte_length(self.header)
        for synset in self.model.synsets_of(pos):
            offsets[synset.id] = position
            position += byte_length(encoder.encode(synset, position))
        return offsets, Counter(encoder.incompatibilities)


# ---------------------------------------------------------------------------
# Side files
# ---------------------------------------------------------------------------

def write_offsets(offsets: Mapping[str, int], stream: TextIO) -> int:
    """Write ``id offset`` lines sorted by synset id."""
    for synset_id in sorted(offsets):
        stream.write(f"{synset_id} {offsets[synset_id]}\n")
    return len(offsets)


def read_offsets(
    path: str | Path,
    *,
    logger: logging.Logger = logger,
) -> dict[str, int]:
    """Read a file written by :func:`write_offsets`."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    offsets: dict[str, int] = {}
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, 1):
            fields = line.split()
            if not fields:
                continue
            try:
                synset_id, offset = fields
                offsets[synset_id] = int(offset)
            except ValueError:
                logger.error(
                    "Reading offsets at line %d: %r",
                    line_number, line.rstrip("\n"),
                )
    return offsets


def serialize_offsets(offsets: Mapping[str, int], stream: BinaryIO) -> None:
    """Write offsets in opaque binary form."""
    pickle.dump(dict(offsets), stream)


def deserialize_offsets(stream: BinaryIO) -> dict[str, int]:
    """Read offsets written by :func:`serialize_offsets`."""
    offsets = pickle.load(stream)
    if not isinstance(offsets, dict):
        raise TypeError(f"Expected an offset map, got {type(offsets).__name__}")
    return offsets
