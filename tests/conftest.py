"""Shared test fixtures for wordnet-grinder."""

import pytest

# wn.util.ProgressBar binds sys.stderr as a default argument when wn is first
# imported; import it here, before any per-test capture (capsys) replaces and
# later closes sys.stderr.
import wn.lmf  # noqa: F401

from wordnet_grinder import (
    AdjPosition,
    Category,
    LexicalUnit,
    Model,
    Sense,
    Synset,
    VerbFrame,
    VerbTemplate,
)

N = Category.NOUN
V = Category.VERB
A = Category.ADJECTIVE
S = Category.ADJECTIVE_SATELLITE
R = Category.ADVERB


def make_sense(key, lemma, category, synset_id, *, lex_index=0, lex=None, **kwargs):
    """Build a sense, with a fresh lexical unit unless one is given."""
    if lex is None:
        lex = LexicalUnit(lemma, category)
    return Sense(key, lex, category, lex_index, synset_id, **kwargs)


@pytest.fixture
def model():
    """Small model with every category, sense relations and verb frames."""
    python_lex = LexicalUnit("python", N, ("pythons",))
    breathe_lex = LexicalUnit("breathe", V, ("breathed", "breathing"))

    synsets = [
        Synset(
            "01746246-n", N, ("python",), "noun.animal",
            ("large Old World boas",),
            relations={"hypernym": ("01749244-n",)},
        ),
        Synset(
            "01749244-n", N, ("boa",), "noun.animal",
            ("any of several chiefly tropical constrictors",),
            relations={"hyponym": ("01746246-n",)},
        ),
        Synset(
            "00001740-v", V, ("breathe", "respire", "suspire"), "verb.body",
            ("draw air into, and expel out of, the lungs",),
            examples=("I can breathe better when the air is clean",),
            relations={"entails": ("00002000-v",)},
        ),
        Synset(
            "00002000-v", V, ("exhale",), "verb.body",
            ("expel air",),
            relations={"is_entailed_by": ("00001740-v",)},
        ),
        Synset("00001740-a", A, ("able",), "adj.all", ("having the necessary means",)),
        Synset("00002098-a", A, ("unable",), "adj.all", ("not able",)),
        Synset(
            "00002312-s", S, ("galore",), "adj.all", ("in great numbers",),
            relations={"similar": ("00001740-a",)},
        ),
        Synset("00001740-r", R, ("quickly",), "adv.all", ("with speed",)),
    ]
    senses = [
        make_sense(
            "python%1:05:00::", "python", N, "01746246-n",
            lex=python_lex, tag_count=3,
        ),
        make_sense("boa%1:05:00::", "boa", N, "01749244-n"),
        make_sense(
            "breathe%2:29:00::", "breathe", V, "00001740-v",
            lex=breathe_lex, tag_count=5,
            verb_frames=("via", "vtai"), verb_templates=(2, 8),
        ),
        make_sense(
            "respire%2:29:00::", "respire", V, "00001740-v",
            verb_frames=("via",),
        ),
        make_sense(
            "suspire%2:29:00::", "suspire", V, "00001740-v",
            verb_frames=("via",),
        ),
        make_sense(
            "exhale%2:29:00::", "exhale", V, "00002000-v",
            verb_frames=("via", "via-at"),
        ),
        make_sense(
            "able%3:00:00::", "able", A, "00001740-a",
            relations={"antonym": ("unable%3:00:00::",)},
        ),
        make_sense(
            "unable%3:00:00::", "unable", A, "00002098-a",
            relations={"antonym": ("able%3:00:00::",)},
        ),
        make_sense(
            "galore%5:00:00:abundant:00", "galore", S, "00002312-s",
            adj_position=AdjPosition.IMMEDIATE_POSTNOMINAL,
        ),
        make_sense("quickly%4:02:00::", "quickly", R, "00001740-r", tag_count=0),
    ]
    return Model.from_entities(
        synsets,
        senses,
        verb_templates=[
            VerbTemplate(8, "They %s the cars"),
            VerbTemplate(2, "Sam cannot %s Sue"),
        ],
        verb_frames=[
            VerbFrame("via", "Somebody ----s"),
            VerbFrame("vtai", "Somebody ----s something"),
            VerbFrame("via-sideways", "Somebody ----s sideways"),
        ],
        source="fixture",
    )


@pytest.fixture
def python_senses():
    """Four senses of python/Python, numbered as in historical releases."""
    python = LexicalUnit("python", N)
    capital = LexicalUnit("Python", N)
    return {
        "boa": make_sense(
            "python%1:05:00::", "python", N, "01746246-n",
            lex=python, lex_index=0, tag_count=3,
        ),
        "soothsayer": make_sense(
            "python%1:18:01::", "python", N, "10516512-n",
            lex=python, lex_index=1,
        ),
        "dragon": make_sense(
            "python%1:18:00::", "Python", N, "09524330-n",
            lex=capital, lex_index=0,
        ),
        "language": make_sense(
            "python%1:10:01::", "Python", N, "83541804-n",
            lex=capital, lex_index=1,
        ),
    }


@pytest.fixture
def python_model(python_senses):
    """Model holding the four python senses and their synsets."""
    glosses = {
        "boa": "large Old World boas",
        "soothsayer": "a soothsaying spirit",
        "dragon": "a monster killed by Apollo",
        "language": "a programming language",
    }
    synsets = [
        Synset(
            sense.synset_id, N, (sense.lemma,), "noun.animal", (glosses[name],)
        )
        for name, sense in python_senses.items()
    ]
    return Model.from_entities(synsets, python_senses.values())
