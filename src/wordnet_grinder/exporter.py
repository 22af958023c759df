"""Export pipeline for wordnet-grinder: model to a WNDB directory."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from wordnet_grinder.encoder import RelationPolicy, SynsetEncoder
from wordnet_grinder.exceptions import OffsetMismatchError
from wordnet_grinder.formatter import OEWN_HEADER, byte_length
from wordnet_grinder.models import POS_CATEGORIES, POS_FILE_NAMES, Category, Flags, Model
from wordnet_grinder.offsets import (
    OffsetResolver,
    serialize_offsets,
    write_offsets,
    zero_offset,
)
from wordnet_grinder.ordering import BaselineIndex, SenseOrder
from wordnet_grinder.sense_index import SenseIndexBuilder
from wordnet_grinder.word_index import WordIndexBuilder
from wordnet_grinder import writers

logger = logging.getLogger(__name__)

OFFSETS_FILE = "offsets.map"
SERIALIZED_OFFSETS_FILE = "offsets.ser"

# Output groups selectable through ``outputs``
OUTPUTS: tuple[str, ...] = (
    "data",
    "index",
    "sense",
    "morphs",
    "templates",
    "tagcounts",
    "lexnames",
    "frames",
)


@dataclass
class ExportSummary:
    """What an export wrote."""

    destination: Path
    synsets: dict[str, int] = field(default_factory=dict)
    indexes: dict[str, int] = field(default_factory=dict)
    senses: int = 0
    files: list[str] = field(default_factory=list)
    incompatibilities: Counter[str] = field(default_factory=Counter)

    @property
    def synset_count(self) -> int:
        return sum(self.synsets.values())

    @property
    def index_count(self) -> int:
        return sum(self.indexes.values())


def compute_offsets(
    model: Model,
    flags: Flags = Flags(),
    *,
    header: str = OEWN_HEADER,
    policy: RelationPolicy | str = RelationPolicy.STRICT,
    parallel: bool = False,
    logger: logging.Logger = logger,
) -> dict[str, int]:
    """Synset id to data file offset, for all four data files."""
    resolver = OffsetResolver(
        model, flags, header=header, policy=policy, logger=logger
    )
    return resolver.resolve_all(parallel=parallel)


def write_data(
    stream: TextIO,
    model: Model,
    category: Category | str,
    offsets: Mapping[str, int],
    encoder: SynsetEncoder,
    *,
    header: str = OEWN_HEADER,
) -> int:
    """Write one data file, checking every record lands at its offset.

    Raises:
        OffsetMismatchError: if a resolved offset differs from the byte
            position the record is written at
    """
    stream.write(header)
    position = byte_length(header)
    previous = None
    n = 0
    for synset in model.synsets_of(Category(category)):
        expected = offsets[synset.id]
        if expected != position:
            then = now = None
            if previous is not None:
                # Pass 1 rendition against the pass 2 one
                then = SynsetEncoder(
                    model, zero_offset, encoder.flags,
                    policy=encoder.policy, logger=encoder.logger, quiet=True,
                ).encode(previous, 0)
                now = encoder.encode(previous, 0)
            raise OffsetMismatchError(synset.id, expected, position, then, now)
        line = encoder.encode(synset, position)
        stream.write(line)
        position += byte_length(line)
        previous = synset
        n += 1
    return n


def export_wndb(
    model: Model,
    destination: str | Path,
    *,
    flags: Flags = Flags(),
    header: str = OEWN_HEADER,
    baseline: BaselineIndex | SenseOrder | None = None,
    policy: RelationPolicy | str = RelationPolicy.STRICT,
    parallel: bool = False,
    outputs: Collection[str] | None = None,
    logger: logging.Logger = logger,
) -> ExportSummary:
    """Grind a model into a WNDB directory.

    Args:
        model: the lexical database snapshot.
        destination: output directory, created if missing.
        flags: legacy-compatibility switches.
        header: legal header heading data.* and index.* files.
        baseline: historical sense index, or a ready sense order, used
            for index ordering and sense numbers.
        policy: treatment of relations and frames outside the vocabulary.
        parallel: compute offsets with one worker per category.
        outputs: subset of :data:`OUTPUTS` to write (default all).
        logger: diagnostic sink.

    Returns:
        An :class:`ExportSummary`.
    """
    selected = set(OUTPUTS if outputs is None else outputs)
    unknown = selected - set(OUTPUTS)
    if unknown:
        raise ValueError(f"Unknown outputs: {', '.join(sorted(unknown))}")

    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)
    if isinstance(baseline, SenseOrder):
        order = baseline
    else:
        order = SenseOrder(baseline)
    policy = RelationPolicy(policy)
    summary = ExportSummary(destination)
    logger.info(
        "Model %s to %s (flags 0x%x)", model.source, destination, flags.to_bits()
    )

    offsets = compute_offsets(
        model, flags, header=header, policy=policy, parallel=parallel,
        logger=logger,
    )

    def emit(name: str, write: Callable[[TextIO], int]) -> int:
        with open(destination / name, "w", encoding="utf-8", newline="\n") as f:
            n = write(f)
        summary.files.append(name)
        return n

    if "data" in selected:
        encoder = SynsetEncoder(
            model, offsets.__getitem__, flags, policy=policy, logger=logger
        )
        for category in POS_CATEGORIES:
            name = POS_FILE_NAMES[category]
            summary.synsets[name] = emit(
                f"data.{name}",
                lambda f, c=category: write_data(
                    f, model, c, offsets, encoder, header=header
                ),
            )
            summary.incompatibilities += encoder.report()
        logger.info(
            "Synsets: %d [%s]", summary.synset_count,
            " ".join(f"{k}:{v}" for k, v in summary.synsets.items()),
        )

    if "index" in selected:
        indexer = WordIndexBuilder(
            model, offsets, flags, order=order, policy=policy, header=header,
            logger=logger,
        )
        for category in POS_CATEGORIES:
            name = POS_FILE_NAMES[category]
            summary.indexes[name] = emit(
                f"index.{name}", lambda f, c=category: indexer.write(f, c)
            )
            summary.incompatibilities += indexer.report()
        logger.info(
            "Indexes: %d [%s]", summary.index_count,
            " ".join(f"{k}:{v}" for k, v in summary.indexes.items()),
        )

    if "sense" in selected:
        sense_indexer = SenseIndexBuilder(
            model, offsets, flags, order=order, logger=logger
        )
        summary.senses = emit("index.sense", sense_indexer.write)

    if "morphs" in selected:
        for category in POS_CATEGORIES:
            emit(
                f"{POS_FILE_NAMES[category]}.exc",
                lambda f, c=category: writers.write_morphs(f, model, c, logger=logger),
            )

    if "templates" in selected:
        emit("sents.vrb", lambda f: writers.write_verb_templates(f, model, logger=logger))
        emit("sentidx.vrb", lambda f: writers.write_template_index(f, model, logger=logger))

    if "tagcounts" in selected:
        emit("cntlist", lambda f: writers.write_tag_counts(f, model, logger=logger))
        emit("cntlist.rev", lambda f: writers.write_tag_counts_rev(f, model, logger=logger))

    if "lexnames" in selected:
        emit("lexnames", lambda f: writers.write_lexnames(f, logger=logger))

    if "frames" in selected:
        emit("verb.Framestext", lambda f: writers.write_verb_frames(f, model, logger=logger))

    return summary


def export_offsets(
    model: Model,
    destination: str | Path,
    *,
    flags: Flags = Flags(),
    header: str = OEWN_HEADER,
    policy: RelationPolicy | str = RelationPolicy.STRICT,
    serialized: bool = False,
    logger: logging.Logger = logger,
) -> Path:
    """Write the offset map of a model to a side file.

    ``destination`` is a directory (the file gets its default name) or a
    file path. Returns the path written.
    """
    offsets = compute_offsets(
        model, flags, header=header, policy=policy, logger=logger
    )
    path = Path(destination)
    if path.is_dir():
        path = path / (SERIALIZED_OFFSETS_FILE if serialized else OFFSETS_FILE)
    path.parent.mkdir(parents=True, exist_ok=True)
    if serialized:
        with open(path, "wb") as f:
            serialize_offsets(offsets, f)
    else:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            write_offsets(offsets, f)
    logger.info("Offsets: %d to %s", len(offsets), path)
    return path


def produce_line(
    model: Model,
    synset_id: str,
    flags: Flags = Flags(),
    *,
    header: str = OEWN_HEADER,
    policy: RelationPolicy | str = RelationPolicy.STRICT,
    logger: logging.Logger = logger,
) -> str:
    """The data record of one synset at its resolved offset."""
    synset = model.synset(synset_id)
    offsets = compute_offsets(
        model, flags, header=header, policy=policy, logger=logger
    )
    encoder = SynsetEncoder(
        model, offsets.__getitem__, flags, policy=policy, logger=logger
    )
    return encoder.encode(synset, offsets[synset.id])
