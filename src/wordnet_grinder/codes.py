"""Verb frame and lexicographer file numbering for wordnet-grinder."""

from __future__ import annotations

from wordnet_grinder.exceptions import CompatibilityError, UnknownIdentifierError

# Last frame number of the Princeton release
LAST_LEGACY_VERB_FRAME = 35

VERB_FRAME_NUMBERS: dict[str, int] = {
    "vii": 1,
    "via": 2,
    "nonreferential": 3,
    "vii-pp": 4,
    "vtii-adj": 5,
    "vii-adj": 6,
    "via-adj": 7,
    "vtai": 8,
    "vtaa": 9,
    "vtia": 10,
    "vtii": 11,
    "vii-to": 12,
    "via-on-inanim": 13,
    "ditransitive": 14,
    "vtai-to": 15,
    "vtai-from": 16,
    "vtaa-with": 17,
    "vtaa-of": 18,
    "vtai-on": 19,
    "vtaa-pp": 20,
    "vtai-pp": 21,
    "via-pp": 22,
    "vibody": 23,
    "vtaa-to-inf": 24,
    "vtaa-inf": 25,
    "via-that": 26,
    "via-to": 27,
    "via-to-inf": 28,
    "via-whether-inf": 29,
    "vtaa-into-ger": 30,
    "vtai-with": 31,
    "via-inf": 32,
    "via-ger": 33,
    "nonreferential-sent": 34,
    "vii-inf": 35,
    "via-at": 36,
    "via-for": 37,
    "via-on-anim": 38,
    "via-out-of": 39,
}

# Canned frame texts, as written in verb.Framestext
VERB_FRAME_TEXTS: dict[str, str] = {
    "vii": "Something ----s",
    "via": "Somebody ----s",
    "nonreferential": "It is ----ing",
    "vii-pp": "Something is ----ing PP",
    "vtii-adj": "Something ----s something Adjective/Noun",
    "vii-adj": "Something ----s Adjective/Noun",
    "via-adj": "Somebody ----s Adjective",
    "vtai": "Somebody ----s something",
    "vtaa": "Somebody ----s somebody",
    "vtia": "Something ----s somebody",
    "vtii": "Something ----s something",
    "vii-to": "Something ----s to somebody",
    "via-on-inanim": "Somebody ----s on something",
    "ditransitive": "Somebody ----s somebody something",
    "vtai-to": "Somebody ----s something to somebody",
    "vtai-from": "Somebody ----s something from somebody",
    "vtaa-with": "Somebody ----s somebody with something",
    "vtaa-of": "Somebody ----s somebody of something",
    "vtai-on": "Somebody ----s something on somebody",
    "vtaa-pp": "Somebody ----s somebody PP",
    "vtai-pp": "Somebody ----s something PP",
    "via-pp": "Somebody ----s PP",
    "vibody": "Somebody's (body part) ----s",
    "vtaa-to-inf": "Somebody ----s somebody to INFINITIVE",
    "vtaa-inf": "Somebody ----s somebody INFINITIVE",
    "via-that": "Somebody ----s that CLAUSE",
    "via-to": "Somebody ----s to somebody",
    "via-to-inf": "Somebody ----s to INFINITIVE",
    "via-whether-inf": "Somebody ----s whether INFINITIVE",
    "vtaa-into-ger": "Somebody ----s somebody into V-ing something",
    "vtai-with": "Somebody ----s something with something",
    "via-inf": "Somebody ----s INFINITIVE",
    "via-ger": "Somebody ----s VERB-ing",
    "nonreferential-sent": "It ----s that CLAUSE",
    "vii-inf": "Something ----s INFINITIVE",
    "via-at": "Somebody ----s at something",
    "via-for": "Somebody ----s for something",
    "via-on-anim": "Somebody ----s on somebody",
    "via-out-of": "Somebody ----s out of somebody",
}

_FRAME_IDS_BY_TEXT = {text: frame_id for frame_id, text in VERB_FRAME_TEXTS.items()}

LEXFILE_NUMBERS: dict[str, int] = {
    "adj.all": 0,
    "adj.pert": 1,
    "adv.all": 2,
    "noun.Tops": 3,
    "noun.act": 4,
    "noun.animal": 5,
    "noun.artifact": 6,
    "noun.attribute": 7,
    "noun.body": 8,
    "noun.cognition": 9,
    "noun.communication": 10,
    "noun.event": 11,
    "noun.feeling": 12,
    "noun.food": 13,
    "noun.group": 14,
    "noun.location": 15,
    "noun.motive": 16,
    "noun.object": 17,
    "noun.person": 18,
    "noun.phenomenon": 19,
    "noun.plant": 20,
    "noun.possession": 21,
    "noun.process": 22,
    "noun.quantity": 23,
    "noun.relation": 24,
    "noun.shape": 25,
    "noun.state": 26,
    "noun.substance": 27,
    "noun.time": 28,
    "verb.body": 29,
    "verb.change": 30,
    "verb.cognition": 31,
    "verb.communication": 32,
    "verb.competition": 33,
    "verb.consumption": 34,
    "verb.contact": 35,
    "verb.creation": 36,
    "verb.emotion": 37,
    "verb.motion": 38,
    "verb.perception": 39,
    "verb.possession": 40,
    "verb.social": 41,
    "verb.stative": 42,
    "verb.weather": 43,
    "adj.ppl": 44,
}

_POS_NAME_NUMBERS = {"noun": 1, "verb": 2, "adj": 3, "adv": 4}


def code_frame_id(frame_id: str, verb_frame_compat: bool = False) -> int:
    """Get the number of a named verb frame.

    Raises:
        CompatibilityError: if the frame postdates the Princeton release
            and ``verb_frame_compat`` is set
        UnknownIdentifierError: if the frame id is not known
    """
    number = VERB_FRAME_NUMBERS.get(frame_id.strip())
    if number is None:
        raise UnknownIdentifierError("verb frame", frame_id)
    if verb_frame_compat and number > LAST_LEGACY_VERB_FRAME:
        raise CompatibilityError(frame_id)
    return number


def code_lexfile(name: str) -> int:
    """Get the number of a lexicographer file."""
    try:
        return LEXFILE_NUMBERS[name]
    except KeyError:
        raise UnknownIdentifierError("lexfile", name) from None


def lexfile_pos_number(name: str) -> int:
    """Numeric part of speech of a lexfile name (lexnames column 3)."""
    return _POS_NAME_NUMBERS.get(name.split(".")[0], 0)


def verb_frame_number(frame_id: str, index: int) -> int:
    """Frame number, or ``100 + index`` for frames outside the table."""
    return VERB_FRAME_NUMBERS.get(frame_id.strip(), 100 + index)


def frame_id_for_text(text: str) -> str | None:
    """Id of a canned frame text, for frames given without an id."""
    return _FRAME_IDS_BY_TEXT.get(" ".join(text.split()))
