"""Model loading from WN-LMF resources."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from wordnet_grinder.codes import frame_id_for_text
from wordnet_grinder.exceptions import DataImportError
from wordnet_grinder.models import (
    AdjPosition,
    Category,
    LexicalUnit,
    Model,
    Sense,
    Synset,
    VerbFrame,
    VerbTemplate,
)

logger = logging.getLogger(__name__)

# Escapes used in sense ids for characters not allowed in XML ids
_ID_ESCAPES = (
    ("-ap-", "'"),
    ("-ex-", "!"),
    ("-cm-", ","),
    ("-cn-", ":"),
    ("-pl-", "+"),
    ("-sl-", "/"),
    ("-lb-", "("),
    ("-rb-", ")"),
    ("-sp-", " "),
)


def load_lmf(
    source: str | Path,
    *,
    lexicon_ids: Iterable[str] | None = None,
    verb_templates: Iterable[VerbTemplate] = (),
    logger: logging.Logger = logger,
) -> Model:
    """Build a model from a WN-LMF XML file."""
    import wn.lmf

    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"File not found: {source}")

    try:
        resource = wn.lmf.load(str(source))
    except Exception as e:
        raise DataImportError(f"Failed to parse XML: {e}") from e

    return model_from_resource(
        resource,  # type: ignore[arg-type]
        lexicon_ids=lexicon_ids,
        verb_templates=verb_templates,
        source=str(source),
        logger=logger,
    )


def unmap_sense_id(sense_id: str, lexicon_id: str = "") -> str:
    """Recover a sense key from an escaped WN-LMF sense id.

    ``oewn-python__1.05.00..`` becomes ``python%1:05:00::``.
    """
    key = sense_id
    prefix = f"{lexicon_id}-"
    if lexicon_id and key.startswith(prefix):
        key = key[len(prefix):]
    lemma, sep, lex_sense = key.rpartition("__")
    if not sep:
        raise DataImportError(f"Cannot derive a sense key from {sense_id!r}")
    for escaped, char in _ID_ESCAPES:
        lemma = lemma.replace(escaped, char)
    return f"{lemma}%{lex_sense.replace('.', ':')}"


def model_from_resource(
    resource: dict[str, Any],
    lexicon_ids: Iterable[str] | None = None,
    *,
    verb_templates: Iterable[VerbTemplate] = (),
    source: str | None = None,
    logger: logging.Logger = logger,
) -> Model:
    """Build a model from a LexicalResource dict (as from ``wn.lmf.load``)."""
    wanted = set(lexicon_ids) if lexicon_ids is not None else None
    builder = _ModelBuilder(logger)
    for lexicon in resource.get("lexicons", []):
        if wanted is not None and lexicon["id"] not in wanted:
            continue
        builder.add_lexicon(lexicon)
    model = builder.build(verb_templates, source)
    logger.info(
        "Loaded %d synsets, %d senses from %s",
        len(model.synsets_by_id), len(model.senses_by_id), source or "resource",
    )
    return model


class _ModelBuilder:
    """Accumulates entities of one or more lexicons."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger
        self.synsets: list[Synset] = []
        self.senses: list[Sense] = []
        self.lexes: list[LexicalUnit] = []
        self.frames: dict[str, VerbFrame] = {}

    def add_lexicon(self, lexicon: dict[str, Any]) -> None:
        lexicon_id = lexicon.get("id", "")
        entries = lexicon.get("entries", [])

        # Sense id to key, and sense or entry id to lemma, for target and
        # member lookups
        keys: dict[str, str] = {}
        lemmas: dict[str, str] = {}
        for entry in entries:
            lemma = entry["lemma"]["writtenForm"]
            lemmas[entry["id"]] = lemma
            for sense in entry.get("senses", []):
                keys[sense["id"]] = _sense_key(sense, lexicon_id)
                lemmas[sense["id"]] = lemma

        frames_by_sense: dict[str, list[str]] = {}
        for frame, sense_ids in _syntactic_behaviours(lexicon):
            text = frame["subcategorizationFrame"]
            frame_id = frame.get("id") or frame_id_for_text(text) or text
            self.frames.setdefault(frame_id, VerbFrame(frame_id, text))
            for sense_id in sense_ids:
                frames_by_sense.setdefault(sense_id, []).append(frame_id)

        members_by_synset: dict[str, list[str]] = {}
        for entry in entries:
            self._add_entry(entry, keys, frames_by_sense, members_by_synset)

        for synset in lexicon.get("synsets", []):
            members = synset.get("members") or []
            if members:
                lemma_list = [_member_lemma(m, lemmas, synset["id"]) for m in members]
            else:
                lemma_list = members_by_synset.get(synset["id"], [])
            if not lemma_list:
                raise DataImportError(f"Synset {synset['id']} has no members")
            self.synsets.append(Synset(
                id=synset["id"],
                category=_category(synset.get("partOfSpeech"), synset["id"]),
                members=tuple(lemma_list),
                lexfile=synset.get("lexfile", ""),
                definitions=tuple(d["text"] for d in synset.get("definitions", [])),
                examples=tuple(e["text"] for e in synset.get("examples", [])),
                relations=_group_relations(synset.get("relations", [])),
            ))

    def _add_entry(
        self,
        entry: dict[str, Any],
        keys: dict[str, str],
        frames_by_sense: dict[str, list[str]],
        members_by_synset: dict[str, list[str]],
    ) -> None:
        lemma = entry["lemma"]["writtenForm"]
        category = _category(entry["lemma"].get("partOfSpeech"), entry.get("id", ""))
        forms = tuple(f["writtenForm"] for f in entry.get("forms", []))
        lex = LexicalUnit(lemma, category, forms)
        self.lexes.append(lex)

        for lex_index, sense in enumerate(entry.get("senses", [])):
            relations: dict[str, list[str]] = {}
            for relation in sense.get("relations", []):
                target = keys.get(relation["target"])
                if target is None:
                    # Sense to synset relations have no WNDB pointer
                    self.logger.debug(
                        "Skipped relation %s %s -> %s",
                        relation["relType"], sense["id"], relation["target"],
                    )
                    continue
                relations.setdefault(relation["relType"], []).append(target)

            frames = list(sense.get("subcat", []))
            frames.extend(
                f for f in frames_by_sense.get(sense["id"], []) if f not in frames
            )
            counts = sense.get("counts", [])
            tag_count = sum(c.get("value", 0) for c in counts) if counts else None

            self.senses.append(Sense(
                sense_key=keys[sense["id"]],
                lex=lex,
                category=category,
                lex_index=lex_index,
                synset_id=sense["synset"],
                tag_count=tag_count,
                adj_position=_adj_position(sense),
                relations={k: tuple(v) for k, v in relations.items()} or None,
                verb_frames=tuple(frames) or None,
            ))
            members_by_synset.setdefault(sense["synset"], []).append(lemma)

    def build(
        self,
        verb_templates: Iterable[VerbTemplate],
        source: str | None,
    ) -> Model:
        try:
            return Model.from_entities(
                self.synsets,
                self.senses,
                lexes=self.lexes,
                verb_templates=verb_templates,
                verb_frames=self.frames.values(),
                source=source,
            )
        except (KeyError, ValueError) as e:
            raise DataImportError(f"Inconsistent resource: {e}") from e


def _sense_key(sense: dict[str, Any], lexicon_id: str) -> str:
    meta = sense.get("meta") or {}
    identifier = meta.get("identifier")
    if identifier and "%" in identifier:
        return identifier
    return unmap_sense_id(sense["id"], lexicon_id)


def _category(pos: str | None, entity_id: str) -> Category:
    try:
        return Category(pos or entity_id.rsplit("-", 1)[-1])
    except ValueError:
        raise DataImportError(
            f"Unknown part of speech {pos!r} for {entity_id}"
        ) from None


def _group_relations(relations: list[dict[str, Any]]) -> dict[str, tuple[str, ...]] | None:
    grouped: dict[str, list[str]] = {}
    for relation in relations:
        grouped.setdefault(relation["relType"], []).append(relation["target"])
    return {k: tuple(v) for k, v in grouped.items()} or None


def _member_lemma(member_id: str, lemmas: dict[str, str], synset_id: str) -> str:
    # Members are sense ids or entry ids
    try:
        return lemmas[member_id]
    except KeyError:
        raise DataImportError(
            f"Unknown member {member_id!r} of synset {synset_id}"
        ) from None


def _adj_position(sense: dict[str, Any]) -> AdjPosition | None:
    value = sense.get("adjposition")
    if not value:
        return None
    try:
        return AdjPosition(value)
    except ValueError:
        raise DataImportError(
            f"Unknown adjposition {value!r} for {sense['id']}"
        ) from None


def _syntactic_behaviours(
    lexicon: dict[str, Any],
) -> list[tuple[dict[str, Any], list[str]]]:
    """Frames with the sense ids they apply to.

    An entry-level frame without a sense list applies to every sense of
    its entry.
    """
    behaviours = [(f, list(f.get("senses") or [])) for f in lexicon.get("frames", [])]
    for entry in lexicon.get("entries", []):
        entry_senses = [s["id"] for s in entry.get("senses", [])]
        for frame in entry.get("frames", []):
            behaviours.append((frame, list(frame.get("senses") or entry_senses)))
    return behaviours
