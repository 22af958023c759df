"""Canonical sense order used for legacy-compatible sense numbering.

Senses are ordered by a chain of criteria:

1. decreasing tag count (senses without a count rank as 0);
2. rank in a historical sense index (the baseline), when available;
3. a structural tail: category, lex index, case-sensitive lemma
   (upper case first), then sense key.

Two distinct senses that are still tied after the tail indicate duplicate
model data and raise :class:`OrderingError`.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from wordnet_grinder.exceptions import OrderingError
from wordnet_grinder.models import Sense

logger = logging.getLogger(__name__)


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class BaselineMode(str, Enum):
    """How the baseline criterion treats senses missing from the table."""

    # Either sense missing: equal, defer to the tail
    LEGACY = "legacy"
    # Ranked senses before unranked ones
    STRICT = "strict"


class BaselineIndex:
    """Historical sense key to sense number table."""

    def __init__(self, ranks: Mapping[str, int] | None = None) -> None:
        self._ranks: dict[str, int] = dict(ranks or {})

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        logger: logging.Logger = logger,
    ) -> BaselineIndex:
        """Read ``sensekey rank [tagcount]`` lines.

        Malformed lines are logged and skipped.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        ranks: dict[str, int] = {}
        with open(path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, 1):
                fields = line.split()
                if not fields:
                    continue
                try:
                    ranks[fields[0]] = int(fields[1])
                except (IndexError, ValueError):
                    logger.error(
                        "Reading baseline index at line %d: %r",
                        line_number, line.rstrip("\n"),
                    )
        logger.info("Baseline index: %d sense keys from %s", len(ranks), path)
        return cls(ranks)

    def rank(self, sense_key: str) -> int | None:
        return self._ranks.get(sense_key)

    def __contains__(self, sense_key: object) -> bool:
        return sense_key in self._ranks

    def __len__(self) -> int:
        return len(self._ranks)


def compare_by_tag_count(s1: Sense, s2: Sense) -> int:
    """Decreasing tag count."""
    return _cmp(s2.int_tag_count, s1.int_tag_count)


def compare_tail(s1: Sense, s2: Sense) -> int:
    """Structural tie-break, total over distinct senses."""
    if s1 == s2:
        return 0
    c = _cmp(s1.category.ordinal, s2.category.ordinal)
    if c:
        return c
    c = _cmp(s1.lex_index, s2.lex_index)
    if c:
        return c
    # code point order puts upper case first
    c = _cmp(s1.lemma, s2.lemma)
    if c:
        return c
    c = _cmp(s1.sense_key, s2.sense_key)
    if c:
        return c
    raise OrderingError(f"Senses tie under the full order: {s1!r} - {s2!r}")


class SenseOrder:
    """Chained comparator over senses."""

    def __init__(
        self,
        baseline: BaselineIndex | None = None,
        mode: BaselineMode | str = BaselineMode.LEGACY,
    ) -> None:
        self.baseline = baseline if baseline is not None else BaselineIndex()
        self.mode = BaselineMode(mode)

    def compare_by_baseline(self, s1: Sense, s2: Sense) -> int:
        """Baseline rank; not a total order on its own."""
        r1 = self.baseline.rank(s1.sense_key)
        r2 = self.baseline.rank(s2.sense_key)
        if r1 is None or r2 is None:
            if self.mode is BaselineMode.LEGACY or (r1 is None and r2 is None):
                return 0
            return -1 if r2 is None else 1
        return _cmp(r1, r2)

    def compare(self, s1: Sense, s2: Sense) -> int:
        return (
            compare_by_tag_count(s1, s2)
            or self.compare_by_baseline(s1, s2)
            or compare_tail(s1, s2)
        )

    @property
    def key(self) -> Callable[[Sense], Any]:
        return functools.cmp_to_key(self.compare)

    def sort(self, senses: Iterable[Sense]) -> list[Sense]:
        return sorted(senses, key=self.key)
