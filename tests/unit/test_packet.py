"""Tests for the packet dialect."""

import pytest

from mermaid_peg import TransformError, parse
from mermaid_peg.models.packet import BITS_PER_ROW, PacketDiagram

SOURCE = """packet-beta
title TCP header
0-15: "Source Port"
16-31: "Destination Port"
+32: "Sequence Number"
64: "URG"
+7: "Reserved"
"""


def test_fields():
    packet = parse(SOURCE)
    assert isinstance(packet, PacketDiagram)
    assert [(f.start, f.end, f.label) for f in packet.fields] == [
        (0, 15, "Source Port"),
        (16, 31, "Destination Port"),
        (32, 63, "Sequence Number"),
        (64, 64, "URG"),
        (65, 71, "Reserved"),
    ]
    assert packet.title == "TCP header"
    assert packet.is_valid()


def test_rows():
    packet = parse(SOURCE)
    assert packet.bits_per_row == BITS_PER_ROW
    assert packet.total_bits() == 72
    assert packet.row_count() == 3
    assert [f.label for f in packet.fields_in_row(2)] == ["URG", "Reserved"]


def test_field_spanning_rows():
    packet = parse('packet-beta\n0-39: "Wide"\n')
    assert [f.label for f in packet.fields_in_row(1)] == ["Wide"]
    assert packet.find_field("Wide").bits == 40


def test_unquoted_label_and_short_header():
    packet = parse("packet\n0-7: flags\n")
    assert packet.fields[0].label == "flags"


def test_gaps_allowed():
    packet = parse('packet-beta\n0-7: "a"\n16-23: "b"\n')
    assert packet.gaps() == [(8, 15)]
    assert packet.is_valid()


def test_reversed_range():
    with pytest.raises(TransformError, match="ends at bit 3 before it starts at bit 8"):
        parse('packet-beta\n8-3: "x"\n')


def test_zero_bit_count():
    with pytest.raises(TransformError, match="must span at least one bit"):
        parse('packet-beta\n+0: "x"\n')


def test_overlap():
    with pytest.raises(TransformError, match="overlaps 'a'"):
        parse('packet-beta\n0-15: "a"\n8-23: "b"\n')
