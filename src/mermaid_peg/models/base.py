"""Capabilities shared by every diagram model."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from mermaid_peg.types import DiagramKind


@runtime_checkable
class Diagram(Protocol):
    """Protocol that all diagram models implement."""

    def diagram_type(self) -> DiagramKind:
        """The dialect this model was parsed from."""
        ...

    def is_valid(self) -> bool:
        """True when the model has content and every reference resolves."""
        ...


def references_resolve(known: Iterable[str], refs: Iterable[str | None]) -> bool:
    """True when every non-empty reference names a known id."""
    ids = set(known)
    return all(ref in ids for ref in refs if ref)


def unique(ids: Iterable[str]) -> bool:
    seen: set[str] = set()
    for item in ids:
        if item in seen:
            return False
        seen.add(item)
    return True
