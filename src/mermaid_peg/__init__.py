"""mermaid-peg: Mermaid diagram text to typed, validated diagram models."""

from mermaid_peg.config import GraphConfig, ParseConfig
from mermaid_peg.errors import (
    DiagramError,
    GrammarContractError,
    ParseError,
    RegistryError,
    TransformError,
    UnknownDiagramTypeError,
)
from mermaid_peg.ir.graph import GraphIR
from mermaid_peg.models import DiagramModel
from mermaid_peg.parsers import ParseResult, detect_type, parse, try_parse
from mermaid_peg.parsers.registry import DiagramRegistry, default_registry
from mermaid_peg.types import DiagramKind, Direction

__all__ = [
    "DiagramError",
    "DiagramKind",
    "DiagramModel",
    "DiagramRegistry",
    "Direction",
    "GrammarContractError",
    "GraphConfig",
    "GraphIR",
    "ParseConfig",
    "ParseError",
    "ParseResult",
    "RegistryError",
    "TransformError",
    "UnknownDiagramTypeError",
    "default_registry",
    "detect_type",
    "parse",
    "try_parse",
]
