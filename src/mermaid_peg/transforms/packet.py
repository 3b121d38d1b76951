"""Packet diagram transform."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.grammars.packet import PacketBitsTree, PacketRangeTree, PacketTree
from mermaid_peg.models.packet import PacketDiagram, PacketField
from mermaid_peg.syntax.common import strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Setting, SharedRules, apply_setting
from mermaid_peg.types import DiagramKind


@dataclass
class BitCount:
    bits: int
    label: str


class PacketTransform(SharedRules):
    kind = DiagramKind.Packet

    @pattern(PacketRangeTree)
    def bit_range(self, node: PacketRangeTree) -> PacketField:
        start = int(node["start"])
        end = int(node["end"]) if node["end"] is not None else start
        label = strip_quotes(node["field_label"])
        if end < start:
            raise self.fail(f"field '{label}' ends at bit {end} before it starts at bit {start}")
        return PacketField(start, end, label)

    @pattern(PacketBitsTree)
    def bit_count(self, node: PacketBitsTree) -> BitCount:
        bits = int(node["bits"])
        label = strip_quotes(node["field_label"])
        if bits < 1:
            raise self.fail(f"field '{label}' must span at least one bit")
        return BitCount(bits, label)

    @pattern(PacketTree)
    def diagram(self, node: PacketTree) -> PacketDiagram:
        packet = PacketDiagram()
        for stmt in node["statements"]:
            if isinstance(stmt, BitCount):
                start = packet.fields[-1].end + 1 if packet.fields else 0
                stmt = PacketField(start, start + stmt.bits - 1, stmt.label)
            if isinstance(stmt, PacketField):
                for existing in packet.fields:
                    if existing.overlaps(stmt):
                        raise self.fail(
                            f"field '{stmt.label}' ({stmt.start}-{stmt.end}) overlaps "
                            f"'{existing.label}' ({existing.start}-{existing.end})"
                        )
                packet.fields.append(stmt)
            elif isinstance(stmt, Setting):
                apply_setting(packet, stmt)
        return packet
