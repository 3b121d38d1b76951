"""Parser orchestrator: detect the dialect, run its grammar, then its transform."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mermaid_peg.config import ParseConfig
from mermaid_peg.errors import DiagramError, ParseError, RegistryError, TransformError, UnknownDiagramTypeError
from mermaid_peg.models.base import Diagram
from mermaid_peg.parsers.base import Handlers
from mermaid_peg.parsers.detect import detect_type, split_front_matter
from mermaid_peg.parsers.registry import DiagramRegistry, default_registry
from mermaid_peg.syntax.engine import Failure
from mermaid_peg.types import DiagramKind

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Outcome of one parse: a model or the error that stopped it."""

    kind: DiagramKind | None = None
    model: Diagram | None = None
    error: DiagramError | None = None
    front_matter: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Diagram:
        """Return the model or raise the carried error."""
        if self.error is not None:
            raise self.error
        assert self.model is not None
        return self.model


def _handlers_for(kind: DiagramKind, registry: DiagramRegistry) -> Handlers:
    handlers = registry.lookup(kind)
    if handlers is None:
        raise RegistryError(f"no handlers registered for diagram type '{kind.value}'")
    return handlers


def try_parse(
    source: str,
    dialect: DiagramKind | str | None = None,
    config: ParseConfig | None = None,
    registry: DiagramRegistry | None = None,
) -> ParseResult:
    """Parse ``source`` without raising for bad input.

    Detection, syntax and semantic failures come back in ``ParseResult.error``.
    A detected kind with no registered handlers raises RegistryError.
    """
    config = config or ParseConfig()
    registry = registry or default_registry
    result = ParseResult()

    if isinstance(dialect, DiagramKind):
        kind = dialect
    elif dialect is not None:
        try:
            kind = DiagramKind.from_name(dialect)
        except ValueError as e:
            result.error = UnknownDiagramTypeError(str(e))
            return result
    else:
        try:
            kind = detect_type(source)
        except UnknownDiagramTypeError as e:
            result.error = e
            return result
    result.kind = kind
    handlers = _handlers_for(kind, registry)

    result.front_matter, base = split_front_matter(source)
    text = source[base:]
    if config.trim_source:
        stripped = text.lstrip()
        base += len(text) - len(stripped)
        text = stripped.rstrip()

    logger.debug("parsing %d characters as %s", len(text), kind.value)
    outcome = handlers.grammar().match(text)
    if isinstance(outcome, Failure):
        offset = base + outcome.offset
        result.error = ParseError.at(kind.value, source, offset, outcome.describe(config.max_expected))
        logger.debug("grammar %s failed at offset %d", kind.value, offset)
        return result

    try:
        model = handlers.transform(strict=config.strict_references).apply(outcome.tree)
    except TransformError as e:
        if e.dialect is None:
            e.dialect = kind.value
        result.error = e
        logger.debug("transform %s failed: %s", kind.value, e.message)
        return result

    title = result.front_matter.get("title")
    if title and getattr(model, "title", "") is None:
        model.title = title  # type: ignore[attr-defined]
    result.model = model
    return result


def parse(
    source: str,
    dialect: DiagramKind | str | None = None,
    config: ParseConfig | None = None,
    registry: DiagramRegistry | None = None,
) -> Diagram:
    """Parse ``source`` into a diagram model, raising DiagramError on failure."""
    return try_parse(source, dialect, config, registry).unwrap()


__all__ = [
    "DiagramRegistry",
    "Handlers",
    "ParseResult",
    "default_registry",
    "detect_type",
    "parse",
    "try_parse",
]
