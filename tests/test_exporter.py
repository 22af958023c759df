"""Tests for the grinding pipeline."""

import io
import logging

import pytest

from wordnet_grinder import (
    Category,
    Flags,
    Model,
    OEWN_HEADER,
    OffsetMismatchError,
    Synset,
    SynsetEncoder,
    UnknownIdentifierError,
    UnsupportedRelationError,
    compute_offsets,
    deserialize_offsets,
    export_offsets,
    export_wndb,
    produce_line,
    read_offsets,
)
from wordnet_grinder.exporter import OFFSETS_FILE, SERIALIZED_OFFSETS_FILE, write_data

from conftest import N, make_sense

PYTHON_RECORD = (
    "00001740 05 n 01 python 0 001 @ 00001813 n 0000 | large Old World boas  \n"
)
BOA_RECORD = (
    "00001813 05 n 01 boa 0 001 ~ 00001740 n 0000 "
    "| any of several chiefly tropical constrictors  \n"
)

ALL_FILES = {
    "data.noun", "data.verb", "data.adj", "data.adv",
    "index.noun", "index.verb", "index.adj", "index.adv",
    "index.sense",
    "noun.exc", "verb.exc", "adj.exc", "adv.exc",
    "sents.vrb", "sentidx.vrb",
    "cntlist", "cntlist.rev",
    "lexnames",
    "verb.Framestext",
}


def read(path):
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


class TestExportWndb:
    def test_writes_every_file(self, model, tmp_path):
        summary = export_wndb(model, tmp_path / "out")
        assert set(summary.files) == ALL_FILES
        assert {p.name for p in (tmp_path / "out").iterdir()} == ALL_FILES

    def test_summary_counts(self, model, tmp_path):
        summary = export_wndb(model, tmp_path)
        assert summary.synsets == {"noun": 2, "verb": 2, "adj": 3, "adv": 1}
        assert summary.synset_count == 8
        assert summary.indexes == {"noun": 2, "verb": 4, "adj": 3, "adv": 1}
        assert summary.senses == 10
        assert not summary.incompatibilities

    def test_data_file_contents(self, model, tmp_path):
        export_wndb(model, tmp_path)
        assert read(tmp_path / "data.noun") == OEWN_HEADER + PYTHON_RECORD + BOA_RECORD

    def test_index_file_contents(self, model, tmp_path):
        export_wndb(model, tmp_path)
        assert read(tmp_path / "index.noun") == (
            OEWN_HEADER
            + "boa n 1 1 ~ 1 0 00001813  \n"
            + "python n 1 1 @ 1 1 00001740  \n"
        )

    def test_records_start_at_their_offsets(self, model, tmp_path):
        export_wndb(model, tmp_path)
        raw = (tmp_path / "data.verb").read_bytes()
        offsets = compute_offsets(model)
        for synset_id in ("00001740-v", "00002000-v"):
            offset = offsets[synset_id]
            assert raw[offset:offset + 8] == f"{offset:08d}".encode()

    def test_legacy_flags_counted(self, model, tmp_path):
        summary = export_wndb(model, tmp_path, flags=Flags.legacy())
        # is_entailed_by is dropped from data.verb and from index.verb
        assert summary.incompatibilities == {"is_entailed_by": 2, "via-at": 1}

    def test_injected_logger(self, model, tmp_path, caplog):
        grind_logger = logging.getLogger("grind.run")
        with caplog.at_level(logging.WARNING, logger="grind.run"):
            export_wndb(model, tmp_path, flags=Flags.legacy(), logger=grind_logger)
        names = {r.name for r in caplog.records if "Incompatibilities" in r.message}
        assert names == {"grind.run"}
        assert caplog.text.count("Incompatibilities 'is_entailed_by': 1") == 2

    def test_outputs_subset(self, model, tmp_path):
        summary = export_wndb(model, tmp_path, outputs=["lexnames", "frames"])
        assert summary.files == ["lexnames", "verb.Framestext"]
        assert not (tmp_path / "data.noun").exists()

    def test_unknown_output(self, model, tmp_path):
        with pytest.raises(ValueError, match="Unknown outputs: glosses"):
            export_wndb(model, tmp_path, outputs=["data", "glosses"])

    def test_parallel_output_identical(self, model, tmp_path):
        export_wndb(model, tmp_path / "seq")
        export_wndb(model, tmp_path / "par", parallel=True)
        for name in ALL_FILES:
            assert read(tmp_path / "seq" / name) == read(tmp_path / "par" / name)

    def test_strict_failure_propagates(self, tmp_path, caplog):
        synset = Synset(
            "1-n", N, ("x",), "noun.animal", ("gloss",),
            relations={"entails": ("1-n",)},
        )
        m = Model.from_entities([synset], [make_sense("x%1:05:00::", "x", N, "1-n")])
        with caplog.at_level(logging.ERROR):
            with pytest.raises(UnsupportedRelationError):
                export_wndb(m, tmp_path)
        assert "Failed relation 'entails'" in caplog.text

    def test_best_effort_completes(self, tmp_path):
        synset = Synset(
            "1-n", N, ("x",), "noun.animal", ("gloss",),
            relations={"entails": ("1-n",)},
        )
        m = Model.from_entities([synset], [make_sense("x%1:05:00::", "x", N, "1-n")])
        export_wndb(m, tmp_path, policy="best_effort")
        assert read(tmp_path / "data.noun").endswith(
            "00001740 05 n 01 x 0 000 | gloss  \n"
        )


class TestWriteData:
    def test_mismatch_detected(self, model):
        offsets = dict(compute_offsets(model))
        offsets["01749244-n"] += 1
        encoder = SynsetEncoder(model, offsets.__getitem__)
        with pytest.raises(OffsetMismatchError) as info:
            write_data(io.StringIO(), model, Category.NOUN, offsets, encoder)
        error = info.value
        assert error.synset_id == "01749244-n"
        assert error.expected == 1814
        assert error.actual == 1813
        assert error.previous_then.startswith("00000000 05 n 01 python ")
        assert " @ 00001814 n " in error.previous_now

    def test_mismatch_on_first_record(self, model):
        offsets = dict(compute_offsets(model))
        offsets["01746246-n"] = 0
        encoder = SynsetEncoder(model, offsets.__getitem__)
        with pytest.raises(OffsetMismatchError) as info:
            write_data(io.StringIO(), model, "n", offsets, encoder)
        assert info.value.previous_then is None


class TestSideProducts:
    def test_export_offsets_text(self, model, tmp_path):
        path = export_offsets(model, tmp_path)
        assert path == tmp_path / OFFSETS_FILE
        assert read_offsets(path) == compute_offsets(model)

    def test_export_offsets_serialized(self, model, tmp_path):
        path = export_offsets(model, tmp_path / "map.ser", serialized=True)
        assert path.name == "map.ser"
        with open(path, "rb") as f:
            assert deserialize_offsets(f) == compute_offsets(model)

    def test_serialized_default_name(self, model, tmp_path):
        path = export_offsets(model, tmp_path, serialized=True)
        assert path == tmp_path / SERIALIZED_OFFSETS_FILE

    def test_produce_line(self, model):
        assert produce_line(model, "01746246-n") == PYTHON_RECORD

    def test_produce_line_unknown_synset(self, model):
        with pytest.raises(UnknownIdentifierError):
            produce_line(model, "99999999-n")
