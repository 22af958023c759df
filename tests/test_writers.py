"""Tests for the supplementary WNDB files."""

import io

import pytest

from wordnet_grinder import Category
from wordnet_grinder.writers import (
    write_lexnames,
    write_morphs,
    write_tag_counts,
    write_tag_counts_rev,
    write_template_index,
    write_verb_frames,
    write_verb_templates,
)


def written(writer, *args):
    stream = io.StringIO()
    count = writer(stream, *args)
    lines = stream.getvalue().splitlines()
    assert count == len(lines)
    return lines


class TestMorphs:
    def test_noun_exceptions(self, model):
        assert written(write_morphs, model, Category.NOUN) == ["pythons python"]

    def test_verb_exceptions_sorted(self, model):
        assert written(write_morphs, model, "v") == [
            "breathed breathe",
            "breathing breathe",
        ]

    @pytest.mark.parametrize("category", ["a", "s", "r"])
    def test_categories_without_forms(self, model, category):
        assert written(write_morphs, model, category) == []


class TestVerbTemplates:
    def test_templates_by_id(self, model):
        assert written(write_verb_templates, model) == [
            "2 Sam cannot %s Sue",
            "8 They %s the cars",
        ]

    def test_template_index(self, model):
        assert written(write_template_index, model) == ["breathe%2:29:00:: 2,8"]


class TestTagCounts:
    def test_by_decreasing_count(self, model):
        assert written(write_tag_counts, model) == [
            "5 breathe%2:29:00:: 0",
            "3 python%1:05:00:: 0",
            "0 quickly%4:02:00:: 0",
        ]

    def test_reverse_by_sense_key(self, model):
        assert written(write_tag_counts_rev, model) == [
            "breathe%2:29:00:: 0 5",
            "python%1:05:00:: 0 3",
            "quickly%4:02:00:: 0 0",
        ]


def test_lexnames():
    lines = written(write_lexnames)
    assert len(lines) == 45
    assert lines[0] == "00\tadj.all\t3"
    assert lines[3] == "03\tnoun.Tops\t1"
    assert lines[-1] == "44\tadj.ppl\t3"


def test_verb_frames(model):
    assert written(write_verb_frames, model) == [
        "2 Somebody ----s",
        "8 Somebody ----s something",
        "103 Somebody ----s sideways",
    ]
