"""Diagram type detection from the first significant source line."""

from __future__ import annotations

import logging
import re

import yaml

from mermaid_peg.errors import UnknownDiagramTypeError
from mermaid_peg.types import DiagramKind

logger = logging.getLogger(__name__)

_BOUNDARY = r"(?![\w-])"

# Checked in order; the first match wins.
SIGNATURES: list[tuple[DiagramKind, re.Pattern[str]]] = [
    (DiagramKind.Flowchart, re.compile(rf"(?:flowchart|graph){_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Sequence, re.compile(rf"sequenceDiagram{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.ClassDiagram, re.compile(rf"classDiagram(?:-v2)?{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.StateDiagram, re.compile(rf"stateDiagram(?:-v2)?{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.ErDiagram, re.compile(rf"erDiagram{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.UserJourney, re.compile(rf"journey{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Gantt, re.compile(rf"gantt{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Pie, re.compile(rf"pie{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Timeline, re.compile(rf"timeline{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Quadrant, re.compile(rf"quadrantChart{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.GitGraph, re.compile(rf"gitGraph{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Mindmap, re.compile(rf"mindmap{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Kanban, re.compile(rf"kanban{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Radar, re.compile(rf"radar-beta{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Block, re.compile(rf"block-beta{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Requirement, re.compile(rf"requirementDiagram{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.XYChart, re.compile(rf"xychart-beta{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Architecture, re.compile(rf"architecture-beta{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Sankey, re.compile(rf"sankey(?:-beta)?{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Packet, re.compile(rf"packet(?:-beta)?{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Treemap, re.compile(rf"treemap(?:-beta)?{_BOUNDARY}", re.IGNORECASE)),
    (
        DiagramKind.C4,
        re.compile(rf"(?:C4Context|C4Container|C4Component|C4Dynamic|C4Deployment){_BOUNDARY}", re.IGNORECASE),
    ),
    (DiagramKind.Info, re.compile(rf"info{_BOUNDARY}", re.IGNORECASE)),
    (DiagramKind.Error, re.compile(rf"error{_BOUNDARY}", re.IGNORECASE)),
]

_FRONT_MATTER_FENCE = "---"


def split_front_matter(source: str) -> tuple[dict[str, str], int]:
    """Return the top-level front-matter scalars and the offset of the body.

    Front matter is a YAML block fenced by ``---`` lines before any other
    content. Nested mappings and lists are dropped. A block that is not
    valid YAML still ends where its closing fence does but yields no values.
    An unterminated block is not front matter.
    """
    lines = source.splitlines(keepends=True)
    index = 0
    while index < len(lines) and not lines[index].strip():
        index += 1
    if index == len(lines) or lines[index].strip() != _FRONT_MATTER_FENCE:
        return {}, 0
    start = index + 1
    for end in range(start, len(lines)):
        if lines[end].strip() == _FRONT_MATTER_FENCE:
            break
    else:
        return {}, 0
    offset = sum(len(line) for line in lines[: end + 1])
    try:
        data = yaml.safe_load("".join(lines[start:end]))
    except yaml.YAMLError as exc:
        logger.warning("ignoring front matter that is not valid YAML: %s", exc)
        return {}, offset
    if not isinstance(data, dict):
        return {}, offset
    values = {
        str(key): str(value)
        for key, value in data.items()
        if value is not None and not isinstance(value, (dict, list))
    }
    return values, offset


def first_significant_line(source: str) -> str | None:
    """The first line that is not blank, a ``%%`` comment or front matter."""
    _, body_start = split_front_matter(source)
    for line in source[body_start:].splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("%%"):
            return stripped
    return None


def detect_type(source: str) -> DiagramKind:
    """Detect the diagram kind of ``source``.

    Raises UnknownDiagramTypeError when no signature matches, including for
    empty or whitespace-only input.
    """
    line = first_significant_line(source)
    if line is None:
        raise UnknownDiagramTypeError("cannot detect the diagram type of empty input")
    for kind, signature in SIGNATURES:
        if signature.match(line):
            logger.debug("detected %s from %r", kind.value, line)
            return kind
    raise UnknownDiagramTypeError(f"unknown diagram type in line: {line!r}", first_line=line)
