"""Kanban transform.

Items at the smallest indentation are columns; every deeper item is a card
of the column above it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mermaid_peg.grammars.kanban import KanbanItemTree, KanbanTree
from mermaid_peg.models.kanban import Kanban, KanbanCard, KanbanColumn, Priority
from mermaid_peg.syntax.common import strip_quotes
from mermaid_peg.transforms.base import pattern
from mermaid_peg.transforms.shared import Option, SharedRules, indent_width
from mermaid_peg.types import DiagramKind

_CARD_FIELDS = ("assigned", "ticket", "icon", "label")


@dataclass
class Item:
    indent: int
    id: str
    text: str
    metadata: dict[str, str] = field(default_factory=dict)


class KanbanTransform(SharedRules):
    kind = DiagramKind.Kanban

    @pattern(KanbanItemTree)
    def item(self, node: KanbanItemTree) -> Item:
        metadata: dict[str, str] = {}
        for option in node["metadata"] or []:
            if not isinstance(option, Option):
                continue
            metadata[option.key] = option.value
        text = strip_quotes(node["text"]) if node["text"] is not None else node["item"]
        return Item(indent_width(node["indent"]), node["item"], text, metadata)

    @pattern(KanbanTree)
    def diagram(self, node: KanbanTree) -> Kanban:
        board = Kanban()
        items: list[Item] = node["lines"]
        if not items:
            return board
        column_indent = min(item.indent for item in items)
        for item in items:
            if item.indent == column_indent:
                board.columns.append(KanbanColumn(id=item.id, title=item.text))
            elif not board.columns:
                raise self.fail(f"card '{item.id}' appears before any column")
            else:
                board.columns[-1].cards.append(self._card(item))
        return board

    def _card(self, item: Item) -> KanbanCard:
        card = KanbanCard(id=item.id, text=item.text)
        for key, value in item.metadata.items():
            if key in _CARD_FIELDS:
                setattr(card, key, value)
            elif key == "priority":
                try:
                    card.priority = Priority.from_text(value)
                except ValueError as exc:
                    raise self.fail(f"card '{item.id}': {exc}") from None
            else:
                card.metadata[key] = value
        return card
