"""Error types for mermaid-peg.

User-facing failures derive from DiagramError (a ValueError, so callers that
only know "bad input" can catch that). Programmer errors such as a grammar
that violates its own tree contract derive from RuntimeError instead.
"""

from __future__ import annotations

END_OF_INPUT = "(end of input)"


class DiagramError(ValueError):
    """Base class for every error caused by the diagram source."""


class UnknownDiagramTypeError(DiagramError):
    """No dialect signature matched the first significant line."""

    def __init__(self, message: str, first_line: str | None = None) -> None:
        super().__init__(message)
        self.first_line = first_line


class ParseError(DiagramError):
    """The dialect grammar rejected the source.

    Carries the absolute offset, the 1-based line and column derived from it,
    the offending line's text and the grammar's furthest-failure expectation.
    """

    def __init__(
        self,
        dialect: str,
        offset: int,
        line: int,
        column: int,
        line_text: str,
        expected: str,
    ) -> None:
        self.dialect = dialect
        self.offset = offset
        self.line = line
        self.column = column
        self.line_text = line_text
        self.expected = expected
        super().__init__(self.render())

    @property
    def caret(self) -> str:
        return " " * (self.column - 1) + "^"

    @classmethod
    def at(cls, dialect: str, source: str, offset: int, expected: str) -> ParseError:
        """Build a ParseError for ``offset`` into ``source``."""
        line, column, line_text = locate(source, offset)
        return cls(dialect, offset, line, column, line_text, expected)

    def render(self) -> str:
        return (
            f"Parse error in {self.dialect} at line {self.line}, column {self.column}:\n"
            f"{self.line_text}\n"
            f"{self.caret}\n"
            f"Expected: {self.expected}"
        )


class TransformError(DiagramError):
    """The source parsed but violates a semantic rule of its dialect."""

    def __init__(self, message: str, dialect: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.dialect = dialect

    def __str__(self) -> str:
        if self.dialect:
            return f"{self.dialect}: {self.message}"
        return self.message


class RegistryError(RuntimeError):
    """A diagram kind is detected but has no usable handlers."""


class GrammarContractError(RuntimeError):
    """A grammar or transform broke the tree contract between them."""


def locate(source: str, offset: int) -> tuple[int, int, str]:
    """Return (line, column, line_text) for an absolute offset.

    Line and column are 1-based. Offsets past the last line report
    ``(end of input)`` as the line text.
    """
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    column = offset - line_start + 1
    if offset >= len(source) and (not source or source.endswith("\n")):
        return line, column, END_OF_INPUT
    line_stop = source.find("\n", line_start)
    if line_stop == -1:
        line_stop = len(source)
    return line, column, source[line_start:line_stop].rstrip("\r")
