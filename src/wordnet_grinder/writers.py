"""Supplementary WNDB files.

Each writer takes an open text stream and returns the number of lines
written. Files:

- ``noun.exc`` ... ``adv.exc``: ``form lemma`` morphological exceptions
- ``sents.vrb``: ``id template`` verb sentence templates
- ``sentidx.vrb``: ``sensekey id,id`` template references
- ``cntlist``: ``count sensekey lexindex``, decreasing count
- ``cntlist.rev``: ``sensekey lexindex count``
- ``lexnames``: ``NN<TAB>name<TAB>pos`` lexicographer files
- ``verb.Framestext``: ``number frame`` verb frame texts
"""

from __future__ import annotations

import logging
from typing import TextIO

from wordnet_grinder.codes import LEXFILE_NUMBERS, lexfile_pos_number, verb_frame_number
from wordnet_grinder.models import Category, Model

logger = logging.getLogger(__name__)


def write_morphs(
    stream: TextIO,
    model: Model,
    category: Category | str,
    *,
    logger: logging.Logger = logger,
) -> int:
    """Write sorted unique ``form lemma`` lines for one category."""
    pos = Category(category).pos
    lines = set()
    for lemma, lexes in model.lexes_by_lemma.items():
        for lex in lexes:
            if lex.category.pos is not pos:
                continue
            lines.update(f"{form} {lemma}" for form in lex.forms)
    for line in sorted(lines):
        stream.write(line + "\n")
    logger.debug("Morphs %s: %d", pos.value, len(lines))
    return len(lines)


def write_verb_templates(
    stream: TextIO,
    model: Model,
    *,
    logger: logging.Logger = logger,
) -> int:
    templates = model.verb_templates_by_id
    for template_id in sorted(templates):
        stream.write(f"{template_id} {templates[template_id].template}\n")
    logger.info("Verb templates: %d", len(templates))
    return len(templates)


def write_template_index(
    stream: TextIO,
    model: Model,
    *,
    logger: logging.Logger = logger,
) -> int:
    n = 0
    for sense in sorted(model.senses, key=lambda s: s.sense_key):
        if not sense.verb_templates:
            continue
        ids = ",".join(str(i) for i in sense.verb_templates)
        stream.write(f"{sense.sense_key} {ids}\n")
        n += 1
    logger.info("Verb template references: %d senses", n)
    return n


def write_tag_counts(
    stream: TextIO,
    model: Model,
    *,
    logger: logging.Logger = logger,
) -> int:
    """Write ``count sensekey lexindex`` by decreasing count."""
    counted = [s for s in model.senses if s.tag_count is not None]
    counted.sort(key=lambda s: (-s.tag_count, s.sense_key))
    for sense in counted:
        stream.write(f"{sense.tag_count} {sense.sense_key} {sense.lex_index}\n")
    logger.info("Tag counts: %d", len(counted))
    return len(counted)


def write_tag_counts_rev(
    stream: TextIO,
    model: Model,
    *,
    logger: logging.Logger = logger,
) -> int:
    """Write ``sensekey lexindex count`` by sense key."""
    counted = sorted(
        (s for s in model.senses if s.tag_count is not None),
        key=lambda s: s.sense_key,
    )
    for sense in counted:
        stream.write(f"{sense.sense_key} {sense.lex_index} {sense.tag_count}\n")
    logger.info("Tag counts reverse: %d", len(counted))
    return len(counted)


def write_lexnames(stream: TextIO, *, logger: logging.Logger = logger) -> int:
    for name, number in sorted(LEXFILE_NUMBERS.items(), key=lambda kv: kv[1]):
        stream.write(f"{number:02d}\t{name}\t{lexfile_pos_number(name)}\n")
    logger.info("Lexfiles: %d", len(LEXFILE_NUMBERS))
    return len(LEXFILE_NUMBERS)


def write_verb_frames(
    stream: TextIO,
    model: Model,
    *,
    logger: logging.Logger = logger,
) -> int:
    """Write frame texts by number; unnumbered frames get 100 + position."""
    numbered = sorted(
        [
            (verb_frame_number(frame.id, i), frame)
            for i, frame in enumerate(model.verb_frames, 1)
        ],
        key=lambda item: item[0],
    )
    for number, frame in numbered:
        stream.write(f"{number} {frame.frame}\n")
    logger.info("Verb frames: %d", len(numbered))
    return len(numbered)
