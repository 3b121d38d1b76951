"""Centralized configuration for mermaid-peg."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ParseConfig:
    """Configuration for the parse pipeline."""

    trim_source: bool = True
    max_expected: int = 6
    strict_references: bool = True


@dataclass
class GraphConfig:
    """Configuration for building a graph description from a model."""

    algorithm: str = "layered"
    direction_override: str | None = None
    node_spacing: int = 50
    rank_spacing: int = 50
    char_width: int = 8
    line_height: int = 20
    padding: int = 10
