"""Pattern-driven tree reduction shared by every dialect transform.

A transform declares actions with ``@pattern(Schema)``, where ``Schema`` is
one of the TypedDicts its grammar module publishes. A mapping in the parse
tree matches an action when its key set contains every required key of the
schema and nothing outside the schema. The tree is reduced bottom up: the
children of a mapping are reduced before the mapping itself is offered to
the actions, most specific (most keys) first. Mappings no action matches
reach their parent unchanged. The root must reduce to a diagram model.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, ClassVar, TypeVar

from mermaid_peg.errors import GrammarContractError, TransformError
from mermaid_peg.models.base import Diagram
from mermaid_peg.types import DiagramKind

F = TypeVar("F", bound=Callable[..., Any])


def pattern(schema: type) -> Callable[[F], F]:
    """Bind a transform method to the tree shape described by ``schema``."""

    def decorate(fn: F) -> F:
        fn._tree_schema = schema  # type: ignore[attr-defined]
        return fn

    return decorate


def schema_keys(schema: type) -> tuple[frozenset[str], frozenset[str]]:
    """Required and optional keys of a TypedDict schema."""
    return frozenset(schema.__required_keys__), frozenset(schema.__optional_keys__)  # type: ignore[attr-defined]


class TreeTransform:
    """Base class for dialect transforms."""

    kind: ClassVar[DiagramKind]
    _rules: ClassVar[list[tuple[frozenset[str], frozenset[str], str]]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        rules: dict[tuple[frozenset[str], frozenset[str]], str] = {}
        for klass in reversed(cls.__mro__):
            for attr, member in vars(klass).items():
                schema = getattr(member, "_tree_schema", None)
                if schema is None:
                    continue
                signature = schema_keys(schema)
                owner = rules.get(signature)
                if owner is not None and owner != attr and klass is cls:
                    raise TypeError(f"{cls.__name__}.{attr} repeats the tree pattern of {owner}")
                rules[signature] = attr
        ordered = sorted(rules.items(), key=lambda item: -(len(item[0][0]) + len(item[0][1])))
        cls._rules = [(required, optional, attr) for (required, optional), attr in ordered]

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict

    @classmethod
    def schemas(cls) -> list[type]:
        """Every schema this transform has an action for."""
        return [getattr(cls, attr)._tree_schema for _, _, attr in cls._rules]

    def apply(self, tree: Any) -> Diagram:
        result = self.reduce(tree)
        if not isinstance(result, Diagram):
            raise GrammarContractError(
                f"{type(self).__name__} reduced the tree to {type(result).__name__}, not a diagram model"
            )
        return result

    def reduce(self, node: Any) -> Any:
        if isinstance(node, list):
            return [self.reduce(item) for item in node]
        if isinstance(node, dict):
            reduced = {key: self.reduce(value) for key, value in node.items()}
            keys = frozenset(reduced)
            for required, optional, attr in self._rules:
                if required <= keys and keys - required <= optional:
                    return getattr(self, attr)(reduced)
            return reduced
        return node

    # ─── Validation helpers ──────────────────────────────────────────────

    def fail(self, message: str) -> TransformError:
        return TransformError(message, dialect=self.kind.value)

    def require(self, ref: str, known: Iterable[str], what: str) -> None:
        """Raise for a dangling reference when the transform is strict."""
        if self.strict and ref not in set(known):
            raise self.fail(f"unknown {what} '{ref}'")
