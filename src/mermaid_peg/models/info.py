"""Info and error diagram models."""

from __future__ import annotations

from dataclasses import dataclass

from mermaid_peg.types import DiagramKind

DEFAULT_ERROR_MESSAGE = "Syntax error in text"


@dataclass
class InfoDiagram:
    show_info: bool = False
    title: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Info

    def is_valid(self) -> bool:
        return True


@dataclass
class ErrorDiagram:
    message: str = DEFAULT_ERROR_MESSAGE
    title: str | None = None

    def diagram_type(self) -> DiagramKind:
        return DiagramKind.Error

    def is_valid(self) -> bool:
        return True
