"""Kanban board model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mermaid_peg.models.base import unique
from mermaid_peg.types import DiagramKind


class Priority(Enum):
    VeryHigh = "Very High"
    High = "High"
    Low = "Low"
    VeryLow = "Very Low"

    @classmethod
    def from_text(cls, text: str) -> Priority:
        key = " ".join(text.split()).lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ValueError(f"unknown priority '{text}'")


@dataclass
class KanbanCard:
    id: str
    text: str
    assigned: str | None = None
    ticket: str | None = None
    icon: str | None = None
    label: str | None = None
    priority: Priority | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    def is_valid(self) -> bool:
        return bool(self.id)


@dataclass
class KanbanColumn:
    id: str
    title: str
    cards: list[KanbanCard] = field(default_factory=list)

    def is_valid(self) -> bool:
        return bool(self.id) and all(card.is_valid() for card in self.cards)


@dataclass
class Kanban:
    columns: list[KanbanColumn] = field(default_factory=list)
    title: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Kanban

    def is_valid(self) -> bool:
        if not self.columns or not all(c.is_valid() for c in self.columns):
            return False
        return unique([c.id for c in self.columns] + [card.id for card in self.all_cards()])

    def all_cards(self) -> list[KanbanCard]:
        return [card for column in self.columns for card in column.cards]

    def find_column(self, column_id: str) -> KanbanColumn | None:
        return next((c for c in self.columns if c.id == column_id), None)

    def find_card(self, card_id: str) -> KanbanCard | None:
        return next((c for c in self.all_cards() if c.id == card_id), None)

    def column_of(self, card_id: str) -> KanbanColumn | None:
        return next((col for col in self.columns if any(c.id == card_id for c in col.cards)), None)

    def cards_by_assigned(self, user: str) -> list[KanbanCard]:
        return [c for c in self.all_cards() if c.assigned == user]

    def cards_by_priority(self, priority: Priority) -> list[KanbanCard]:
        return [c for c in self.all_cards() if c.priority is priority]

    def cards_by_ticket(self, ticket: str) -> list[KanbanCard]:
        return [c for c in self.all_cards() if c.ticket == ticket]
