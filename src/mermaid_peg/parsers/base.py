"""Handler bundle the registry stores for each diagram kind."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from mermaid_peg.syntax.engine import Grammar
from mermaid_peg.transforms.base import TreeTransform
from mermaid_peg.types import DiagramKind


class TransformFactory(Protocol):
    """Anything that builds a transform, usually a TreeTransform subclass."""

    def __call__(self, strict: bool = True) -> TreeTransform: ...


@dataclass(frozen=True)
class Handlers:
    """The grammar and transform factories for one diagram kind."""

    kind: DiagramKind
    grammar: Callable[[], Grammar]
    transform: TransformFactory
