"""Relation type to WNDB pointer symbol coding for wordnet-grinder."""

from __future__ import annotations

from wordnet_grinder.exceptions import CompatibilityError, UnsupportedRelationError
from wordnet_grinder.models import Category

# Pointer symbols per part of speech, after wndb(5WN).
# Entries marked "ext" are not defined in the Princeton release.

NOUN_POINTERS: dict[str, str] = {
    "antonym": "!",
    "hypernym": "@",
    "instance_hypernym": "@i",
    "hyponym": "~",
    "instance_hyponym": "~i",
    "holo_member": "#m",
    "holo_substance": "#s",
    "holo_part": "#p",
    "mero_member": "%m",
    "mero_substance": "%s",
    "mero_part": "%p",
    "attribute": "=",
    "pertainym": "\\",  # ext
    "also": "^",  # ext
    "derivation": "+",
    "domain_topic": ";c",
    "has_domain_topic": "-c",
    "domain_region": ";r",
    "has_domain_region": "-r",
    "exemplifies": ";u",
    "is_exemplified_by": "-u",
}

VERB_POINTERS: dict[str, str] = {
    "antonym": "!",
    "hypernym": "@",
    "hyponym": "~",
    "entails": "*",
    "is_entailed_by": "*^",  # ext
    "causes": ">",
    "is_caused_by": ">^",  # ext
    "also": "^",
    "verb_group": "$",
    "similar": "$",
    "derivation": "+",
    "domain_topic": ";c",
    "domain_region": ";r",
    "exemplifies": ";u",
}

ADJECTIVE_POINTERS: dict[str, str] = {
    "antonym": "!",
    "similar": "&",
    "participle": "<",
    "pertainym": "\\",
    "attribute": "=",
    "also": "^",  # ext
    "derivation": "+",  # ext
    "domain_topic": ";c",
    "domain_region": ";r",
    "exemplifies": ";u",
    "has_domain_topic": "-c",
    "has_domain_region": "-r",
    "is_exemplified_by": "-u",
}

ADVERB_POINTERS: dict[str, str] = {
    "antonym": "!",
    "pertainym": "\\",
    "also": "^",
    "derivation": "+",
    "domain_topic": ";c",
    "domain_region": ";r",
    "exemplifies": ";u",
    "has_domain_topic": "-c",
    "has_domain_region": "-r",
    "is_exemplified_by": "-u",
}

POINTERS: dict[Category, dict[str, str]] = {
    Category.NOUN: NOUN_POINTERS,
    Category.VERB: VERB_POINTERS,
    Category.ADJECTIVE: ADJECTIVE_POINTERS,
    Category.ADJECTIVE_SATELLITE: ADJECTIVE_POINTERS,
    Category.ADVERB: ADVERB_POINTERS,
}

# (category, relation type) pairs rejected in pointer-compat mode
LEGACY_EXCLUDED: frozenset[tuple[Category, str]] = frozenset({
    (Category.VERB, "is_entailed_by"),
    (Category.VERB, "is_caused_by"),
})


def code_relation(
    relation_type: str,
    category: Category | str,
    pointer_compat: bool = False,
) -> str:
    """Get the pointer symbol of a relation type in a category.

    Raises:
        CompatibilityError: if the pair is excluded in pointer-compat mode
        UnsupportedRelationError: if the pair is not defined at all
    """
    try:
        category = Category(category)
    except ValueError:
        raise UnsupportedRelationError(relation_type, str(category)) from None
    symbol = POINTERS[category].get(relation_type)
    if symbol is None:
        raise UnsupportedRelationError(relation_type, category.value)
    if pointer_compat and (category, relation_type) in LEGACY_EXCLUDED:
        raise CompatibilityError(relation_type)
    return symbol


def is_supported(relation_type: str, category: Category | str) -> bool:
    """Check if a relation type has a pointer symbol in a category."""
    try:
        return relation_type in POINTERS[Category(category)]
    except ValueError:
        return False
