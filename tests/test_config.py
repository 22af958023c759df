"""
Tests for YAML grind configuration.
"""
from pathlib import Path

import pytest

from wordnet_grinder import (
    BaselineMode,
    Flags,
    GrindConfig,
    ParseError,
    RelationPolicy,
    load_config,
)


class TestLoad:
    """Tests for configuration sources."""

    def test_load_from_file(self, tmp_path):
        yaml_file = tmp_path / "grind.yaml"
        yaml_file.write_text(
            "output: wndb/\n"
            "header: princeton\n"
            "baseline: sensenums.txt\n"
            "policy: best_effort\n",
            encoding="utf-8",
        )
        config = load_config(yaml_file)
        assert config.output == Path("wndb")
        assert config.header == "princeton"
        assert config.baseline == Path("sensenums.txt")
        assert config.policy is RelationPolicy.BEST_EFFORT
        assert config.source_file == yaml_file

    def test_load_from_string(self):
        config = load_config("output: out/wndb\nparallel: true\n")
        assert config.output == Path("out/wndb")
        assert config.parallel is True
        assert config.source_file is None

    def test_load_from_dict(self):
        config = load_config({"outputs": ["data", "index"], "lexicons": "oewn"})
        assert config.outputs == ("data", "index")
        assert config.lexicons == ("oewn",)

    def test_defaults(self):
        config = load_config({})
        assert config == GrindConfig()
        assert config.flags == Flags()
        assert config.baseline_mode is BaselineMode.LEGACY
        assert config.policy is RelationPolicy.STRICT

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")


class TestFlags:
    """Tests for compatibility flags."""

    def test_compat_shorthand(self):
        assert load_config({"compat": True}).flags == Flags.legacy()

    def test_individual_flags_override_compat(self):
        config = load_config(
            "compat: true\n"
            "flags:\n"
            "  pointer_compat: false\n"
            "  no_reindex: true\n"
        )
        assert config.flags == Flags(
            lex_id_compat=True, verb_frame_compat=True, no_reindex=True
        )

    def test_flag_aliases(self):
        config = load_config({"flags": {"lexid_compat": True, "verbframe_compat": True}})
        assert config.flags == Flags(lex_id_compat=True, verb_frame_compat=True)

    def test_bitmask(self):
        assert load_config({"flags": 0x10000000}).flags == Flags(no_reindex=True)
        assert load_config("flags: 0x10000007\n").flags == Flags(
            lex_id_compat=True,
            pointer_compat=True,
            verb_frame_compat=True,
            no_reindex=True,
        )

    def test_bitmask_with_compat(self):
        config = load_config({"compat": True, "flags": 0x10000000})
        assert config.flags == Flags(
            lex_id_compat=True,
            pointer_compat=True,
            verb_frame_compat=True,
            no_reindex=True,
        )

    def test_flags_must_be_mapping_or_bitmask(self):
        with pytest.raises(ParseError, match="bitmask"):
            load_config({"flags": "pointer_compat"})

    def test_unknown_flag(self):
        with pytest.raises(ParseError, match="Unknown flag"):
            load_config({"flags": {"sloppy": True}})

    def test_flag_must_be_boolean(self):
        with pytest.raises(ParseError, match="must be a boolean"):
            load_config({"flags": {"no_reindex": "yes please"}})


class TestErrors:
    """Tests for invalid configurations."""

    def test_invalid_yaml_reports_line(self):
        with pytest.raises(ParseError) as info:
            load_config("output: wndb\nflags: [unclosed\n")
        assert info.value.line is not None

    def test_empty(self):
        with pytest.raises(ParseError, match="Empty configuration"):
            load_config("")

    def test_root_must_be_mapping(self):
        with pytest.raises(ParseError, match="mapping"):
            load_config("- data\n- index\n")

    def test_unknown_field(self):
        with pytest.raises(ParseError, match="Unknown field"):
            load_config({"ouput": "wndb"})

    def test_unknown_header(self):
        with pytest.raises(ParseError, match="header"):
            load_config({"header": "wn30"})

    def test_unknown_policy(self):
        with pytest.raises(ParseError):
            load_config({"policy": "lenient"})

    def test_outputs_must_be_strings(self):
        with pytest.raises(ParseError, match="list of strings"):
            load_config({"outputs": [1, 2]})
