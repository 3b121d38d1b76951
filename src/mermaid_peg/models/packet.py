"""Packet diagram model."""

from __future__ import annotations

from dataclasses import dataclass, field

from mermaid_peg.types import DiagramKind

BITS_PER_ROW = 32


@dataclass
class PacketField:
    start: int
    end: int
    label: str

    def is_valid(self) -> bool:
        return 0 <= self.start <= self.end

    @property
    def bits(self) -> int:
        return self.end - self.start + 1

    def overlaps(self, other: PacketField) -> bool:
        return self.start <= other.end and other.start <= self.end


@dataclass
class PacketDiagram:
    fields: list[PacketField] = field(default_factory=list)
    bits_per_row: int = BITS_PER_ROW
    title: str | None = None
    acc_title: str | None = None
    acc_description: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Packet

    def is_valid(self) -> bool:
        if not self.fields or not all(f.is_valid() for f in self.fields):
            return False
        ordered = sorted(self.fields, key=lambda f: f.start)
        return all(not a.overlaps(b) for a, b in zip(ordered, ordered[1:]))

    def total_bits(self) -> int:
        return max((f.end for f in self.fields), default=-1) + 1

    def row_count(self) -> int:
        return -(-self.total_bits() // self.bits_per_row)

    def fields_in_row(self, row: int) -> list[PacketField]:
        low, high = row * self.bits_per_row, (row + 1) * self.bits_per_row - 1
        return [f for f in self.fields if f.start <= high and f.end >= low]

    def find_field(self, label: str) -> PacketField | None:
        return next((f for f in self.fields if f.label == label), None)

    def gaps(self) -> list[tuple[int, int]]:
        """Unlabelled bit ranges between fields."""
        result: list[tuple[int, int]] = []
        cursor = 0
        for item in sorted(self.fields, key=lambda f: f.start):
            if item.start > cursor:
                result.append((cursor, item.start - 1))
            cursor = max(cursor, item.end + 1)
        return result
