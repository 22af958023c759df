"""Tests for record formatting helpers and legal headers."""

import pytest

from wordnet_grinder import OEWN_HEADER, PRINCETON_HEADER, UnknownIdentifierError
from wordnet_grinder.formatter import (
    byte_length,
    escape,
    header_named,
    join_and_quote,
    join_with_count,
    offset_format,
)


class TestHeaders:
    def test_header_byte_lengths(self):
        """Both headers are 1740 bytes, the offset of every first record."""
        assert byte_length(OEWN_HEADER) == 1740
        assert byte_length(PRINCETON_HEADER) == 1740

    def test_header_lines_are_numbered(self):
        lines = OEWN_HEADER.splitlines()
        assert len(lines) == 29
        for number, line in enumerate(lines, 1):
            assert line.startswith(f"  {number} ")

    def test_header_named(self):
        assert header_named("oewn") is OEWN_HEADER
        assert header_named("Princeton") is PRINCETON_HEADER

    def test_header_named_unknown(self):
        with pytest.raises(UnknownIdentifierError):
            header_named("wn16")


class TestFields:
    def test_offset_format(self):
        assert offset_format(1740) == "00001740"
        assert offset_format(0) == "00000000"

    def test_escape(self):
        assert escape("take a breather") == "take_a_breather"

    def test_byte_length_counts_utf8(self):
        assert byte_length("café") == 5
        assert len("café") == 4

    def test_join_with_count_hex(self):
        items = [str(i) for i in range(17)]
        assert join_with_count(items, "02x").startswith("11 0 1 2")

    def test_join_with_count_empty(self):
        assert join_with_count([], "03d") == "000"

    def test_join_with_count_render(self):
        assert join_with_count([1, 2], "d", lambda i: f"<{i}>") == "2 <1> <2>"

    def test_join_and_quote(self):
        assert join_and_quote(["a b", '"c"']) == '"a b" "c"'
