"""Info and error transforms."""

from __future__ import annotations

from mermaid_peg.grammars.error import ErrorTree
from mermaid_peg.grammars.info import InfoTree
from mermaid_peg.models.info import DEFAULT_ERROR_MESSAGE, ErrorDiagram, InfoDiagram
from mermaid_peg.syntax.common import clean
from mermaid_peg.transforms.base import TreeTransform, pattern
from mermaid_peg.types import DiagramKind


class InfoTransform(TreeTransform):
    kind = DiagramKind.Info

    @pattern(InfoTree)
    def diagram(self, node: InfoTree) -> InfoDiagram:
        return InfoDiagram(show_info=node["show_info"] is not None or bool(node["body"].strip()))


class ErrorTransform(TreeTransform):
    kind = DiagramKind.Error

    @pattern(ErrorTree)
    def diagram(self, node: ErrorTree) -> ErrorDiagram:
        return ErrorDiagram(message=clean(node["message"]) or DEFAULT_ERROR_MESSAGE)
