"""Parsing-expression grammar combinators.

Rules are immutable once a grammar is built and hold no parse state, so one
grammar instance can serve any number of parses. ``Grammar.match`` creates a
private ``_Context`` per call; the context remembers the furthest offset at
which a terminal failed and what was expected there.

Tree values:

- uncaptured text yields the matched slice;
- ``capture(rule, name)`` yields ``{name: value}``;
- a sequence merges the mappings of its parts in order;
- a repetition of a capturing rule yields a list of mappings;
- an optional capturing rule that does not match yields its fields as None.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from mermaid_peg.errors import GrammarContractError

Tree = dict[str, Any]

# ─── Results ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Match:
    """A successful parse of the whole input."""

    tree: Any
    end: int


@dataclass(frozen=True)
class Failure:
    """The furthest point any rule reached before the parse failed."""

    offset: int
    expected: tuple[str, ...]

    def describe(self, limit: int = 6) -> str:
        if not self.expected:
            return "valid input"
        shown = list(self.expected[:limit])
        if len(self.expected) > limit:
            shown.append("...")
        return " or ".join(shown)


class _Context:
    """Per-parse mutable state: the input and the furthest failure."""

    __slots__ = ("text", "furthest", "expected", "silent")

    def __init__(self, text: str) -> None:
        self.text = text
        self.furthest = -1
        self.expected: list[str] = []
        self.silent = 0

    def fail(self, pos: int, description: str) -> None:
        if self.silent:
            return
        if pos > self.furthest:
            self.furthest = pos
            self.expected = [description]
        elif pos == self.furthest and description not in self.expected:
            self.expected.append(description)


# ─── Rules ───────────────────────────────────────────────────────────────────


class Rule:
    """Base class of every parsing expression."""

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        raise NotImplementedError

    def describe(self) -> str:
        return type(self).__name__.lower()

    # Static shape of the value this rule yields. ``seen`` guards recursion
    # through Forward rules.
    def fields(self, seen: frozenset[int] = frozenset()) -> frozenset[str]:
        return frozenset()

    def structured(self, seen: frozenset[int] = frozenset()) -> bool:
        return False

    def children(self) -> tuple[Rule, ...]:
        return ()

    def prepare(self) -> None:
        """Cache the static shape this rule needs while parsing."""

    # ─── Builders ────────────────────────────────────────────────────────

    def __add__(self, other: Rule | str) -> Sequence:
        return sequence(self, other)

    def __radd__(self, other: str) -> Sequence:
        return sequence(other, self)

    def __or__(self, other: Rule | str) -> Choice:
        return choice(self, other)

    def __ror__(self, other: str) -> Choice:
        return choice(other, self)

    def __invert__(self) -> LookaheadNot:
        return LookaheadNot(self)

    def repeat(self, min: int = 0, max: int | None = None) -> Repeat:
        return Repeat(self, min, max)

    def maybe(self) -> Optional:
        return Optional(self)

    def capture(self, name: str) -> Capture:
        return Capture(self, name)

    def label(self, description: str) -> Label:
        return Label(self, description)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


class Literal(Rule):
    def __init__(self, text: str, ignore_case: bool = False) -> None:
        if not text:
            raise GrammarContractError("literal text must not be empty")
        self.text = text
        self.ignore_case = ignore_case
        self._folded = text.lower()

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        end = pos + len(self.text)
        if self.ignore_case:
            chunk = ctx.text[pos:end]
            if chunk.lower() == self._folded:
                return end, chunk
        elif ctx.text.startswith(self.text, pos):
            return end, self.text
        ctx.fail(pos, self.describe())
        return None

    def describe(self) -> str:
        return repr(self.text)


class CharClass(Rule):
    """One character from a regex-style class such as ``a-z_`` or ``^\\n]``."""

    def __init__(self, spec: str) -> None:
        self.spec = spec
        self._re = re.compile(f"[{spec}]")

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        if self._re.match(ctx.text, pos):
            return pos + 1, ctx.text[pos]
        ctx.fail(pos, self.describe())
        return None

    def describe(self) -> str:
        return f"[{self.spec}]".replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")


class AnyChar(Rule):
    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        if pos < len(ctx.text):
            return pos + 1, ctx.text[pos]
        ctx.fail(pos, self.describe())
        return None

    def describe(self) -> str:
        return "any character"


class Pattern(Rule):
    """A regular-expression token. Must not match the empty string."""

    def __init__(self, regex: str, description: str, flags: int = 0) -> None:
        self._re = re.compile(regex, flags)
        self.description = description

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        m = self._re.match(ctx.text, pos)
        if m and m.end() > pos:
            return m.end(), m.group(0)
        ctx.fail(pos, self.description)
        return None

    def describe(self) -> str:
        return self.description


class Sequence(Rule):
    def __init__(self, *rules: Rule) -> None:
        self.rules = rules

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        start = pos
        values = []
        for rule in self.rules:
            result = rule.parse_at(ctx, pos)
            if result is None:
                return None
            pos, value = result
            values.append(value)
        return pos, self._fold(ctx.text, start, pos, values)

    def _fold(self, text: str, start: int, end: int, values: list[Any]) -> Any:
        tree: Tree | None = None
        items: list[Any] | None = None
        for value in values:
            if isinstance(value, dict):
                if tree is None:
                    tree = dict(value)
                else:
                    tree.update(value)
            elif isinstance(value, list):
                items = value if items is None else items + value
        if tree is not None:
            if items:
                raise GrammarContractError(
                    f"{self!r} mixes captured fields with an uncaptured repetition; capture the repetition"
                )
            return tree
        if items is not None:
            return items
        return text[start:end]

    def describe(self) -> str:
        return " ".join(rule.describe() for rule in self.rules)

    def fields(self, seen: frozenset[int] = frozenset()) -> frozenset[str]:
        return frozenset().union(*(rule.fields(seen) for rule in self.rules))

    def structured(self, seen: frozenset[int] = frozenset()) -> bool:
        return any(rule.structured(seen) for rule in self.rules)

    def children(self) -> tuple[Rule, ...]:
        return self.rules


class Choice(Rule):
    """Ordered choice: the first alternative that matches wins."""

    def __init__(self, *rules: Rule) -> None:
        self.rules = rules

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        for rule in self.rules:
            result = rule.parse_at(ctx, pos)
            if result is not None:
                return result
        return None

    def describe(self) -> str:
        return " or ".join(rule.describe() for rule in self.rules)

    def fields(self, seen: frozenset[int] = frozenset()) -> frozenset[str]:
        return frozenset().union(*(rule.fields(seen) for rule in self.rules))

    def structured(self, seen: frozenset[int] = frozenset()) -> bool:
        return any(rule.structured(seen) for rule in self.rules)

    def children(self) -> tuple[Rule, ...]:
        return self.rules


class Repeat(Rule):
    """Greedy repetition between ``min`` and ``max`` times.

    An iteration that succeeds without consuming input ends the loop and
    adds no item, so a zero-width body cannot spin forever or leave an empty
    trailing entry.
    """

    def __init__(self, rule: Rule, min: int = 0, max: int | None = None) -> None:
        if min < 0 or (max is not None and max < min):
            raise GrammarContractError(f"bad repetition bounds {min}..{max}")
        self.rule = rule
        self.min = min
        self.max = max
        self._structured = False

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        start = pos
        count = 0
        items: list[Any] = []
        while self.max is None or count < self.max:
            result = self.rule.parse_at(ctx, pos)
            if result is None:
                break
            end, value = result
            count += 1
            if end == pos:
                break
            if isinstance(value, dict):
                items.append(value)
            elif isinstance(value, list):
                items.extend(value)
            pos = end
        if count < self.min:
            return None
        if self._structured:
            return pos, items
        return pos, ctx.text[start:pos]

    def describe(self) -> str:
        return f"{self.rule.describe()}{{{self.min},{'' if self.max is None else self.max}}}"

    def prepare(self) -> None:
        self._structured = self.rule.structured()

    def structured(self, seen: frozenset[int] = frozenset()) -> bool:
        return self.rule.structured(seen)

    def children(self) -> tuple[Rule, ...]:
        return (self.rule,)


class Optional(Rule):
    def __init__(self, rule: Rule) -> None:
        self.rule = rule
        self._absent: frozenset[str] = frozenset()

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        result = self.rule.parse_at(ctx, pos)
        if result is not None:
            return result
        if self._absent:
            return pos, dict.fromkeys(self._absent)
        return pos, None

    def describe(self) -> str:
        return f"{self.rule.describe()}?"

    def prepare(self) -> None:
        self._absent = self.rule.fields()

    def fields(self, seen: frozenset[int] = frozenset()) -> frozenset[str]:
        return self.rule.fields(seen)

    def structured(self, seen: frozenset[int] = frozenset()) -> bool:
        return self.rule.structured(seen)

    def children(self) -> tuple[Rule, ...]:
        return (self.rule,)


class Lookahead(Rule):
    """Succeeds, consuming nothing, when the inner rule matches."""

    def __init__(self, rule: Rule) -> None:
        self.rule = rule

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        if self.rule.parse_at(ctx, pos) is None:
            return None
        return pos, None

    def describe(self) -> str:
        return self.rule.describe()

    def children(self) -> tuple[Rule, ...]:
        return (self.rule,)


class LookaheadNot(Rule):
    """Succeeds, consuming nothing, when the inner rule fails."""

    def __init__(self, rule: Rule) -> None:
        self.rule = rule

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        ctx.silent += 1
        try:
            result = self.rule.parse_at(ctx, pos)
        finally:
            ctx.silent -= 1
        if result is None:
            return pos, None
        ctx.fail(pos, self.describe())
        return None

    def describe(self) -> str:
        return f"not {self.rule.describe()}"

    def children(self) -> tuple[Rule, ...]:
        return (self.rule,)


class Capture(Rule):
    def __init__(self, rule: Rule, name: str) -> None:
        self.rule = rule
        self.name = name

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        result = self.rule.parse_at(ctx, pos)
        if result is None:
            return None
        end, value = result
        return end, {self.name: value}

    def describe(self) -> str:
        return self.rule.describe()

    def fields(self, seen: frozenset[int] = frozenset()) -> frozenset[str]:
        return frozenset((self.name,))

    def structured(self, seen: frozenset[int] = frozenset()) -> bool:
        return True

    def children(self) -> tuple[Rule, ...]:
        return (self.rule,)


class Label(Rule):
    """Names a rule for diagnostics.

    When the inner rule fails without getting past its start, the failures
    it recorded there are replaced by this label.
    """

    def __init__(self, rule: Rule, description: str) -> None:
        self.rule = rule
        self.description = description

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        before = ctx.furthest
        kept = len(ctx.expected) if before == pos else 0
        result = self.rule.parse_at(ctx, pos)
        if result is not None or ctx.silent:
            return result
        if ctx.furthest > pos:
            return None
        if ctx.furthest == pos:
            del ctx.expected[kept:]
        ctx.fail(pos, self.description)
        return None

    def describe(self) -> str:
        return self.description

    def fields(self, seen: frozenset[int] = frozenset()) -> frozenset[str]:
        return self.rule.fields(seen)

    def structured(self, seen: frozenset[int] = frozenset()) -> bool:
        return self.rule.structured(seen)

    def children(self) -> tuple[Rule, ...]:
        return (self.rule,)


class Forward(Rule):
    """A named placeholder for recursive rules, bound once with ``define``."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._rule: Rule | None = None

    def define(self, rule: Rule | str) -> Forward:
        if self._rule is not None:
            raise GrammarContractError(f"forward rule '{self.name}' is already defined")
        self._rule = _coerce(rule)
        return self

    def _target(self) -> Rule:
        if self._rule is None:
            raise GrammarContractError(f"forward rule '{self.name}' was never defined")
        return self._rule

    def parse_at(self, ctx: _Context, pos: int) -> tuple[int, Any] | None:
        return self._target().parse_at(ctx, pos)

    def describe(self) -> str:
        return self.name

    def fields(self, seen: frozenset[int] = frozenset()) -> frozenset[str]:
        if id(self) in seen:
            return frozenset()
        return self._target().fields(seen | {id(self)})

    def structured(self, seen: frozenset[int] = frozenset()) -> bool:
        if id(self) in seen:
            return False
        return self._target().structured(seen | {id(self)})

    def children(self) -> tuple[Rule, ...]:
        return (self._target(),)


# ─── Constructors ────────────────────────────────────────────────────────────


def _coerce(rule: Rule | str) -> Rule:
    if isinstance(rule, Rule):
        return rule
    if isinstance(rule, str):
        return Literal(rule)
    raise GrammarContractError(f"cannot build a rule from {rule!r}")


def literal(text: str, ignore_case: bool = False) -> Literal:
    return Literal(text, ignore_case)


def char_class(spec: str) -> CharClass:
    return CharClass(spec)


def any_char() -> AnyChar:
    return AnyChar()


def pattern(regex: str, description: str, flags: int = 0) -> Pattern:
    return Pattern(regex, description, flags)


def sequence(*rules: Rule | str) -> Sequence:
    parts: list[Rule] = []
    for rule in map(_coerce, rules):
        if type(rule) is Sequence:
            parts.extend(rule.rules)
        else:
            parts.append(rule)
    return Sequence(*parts)


def choice(*rules: Rule | str) -> Choice:
    parts: list[Rule] = []
    for rule in map(_coerce, rules):
        if type(rule) is Choice:
            parts.extend(rule.rules)
        else:
            parts.append(rule)
    return Choice(*parts)


def repeat(rule: Rule | str, min: int = 0, max: int | None = None) -> Repeat:
    return Repeat(_coerce(rule), min, max)


def optional(rule: Rule | str) -> Optional:
    return Optional(_coerce(rule))


def lookahead(rule: Rule | str) -> Lookahead:
    return Lookahead(_coerce(rule))


def lookahead_not(rule: Rule | str) -> LookaheadNot:
    return LookaheadNot(_coerce(rule))


def capture(rule: Rule | str, name: str) -> Capture:
    return Capture(_coerce(rule), name)


# ─── Grammar ─────────────────────────────────────────────────────────────────


def _prepare(root: Rule) -> None:
    """Cache the shape of every rule reachable from ``root`` before any parse.

    Raises GrammarContractError when a reachable Forward was never defined.
    """
    seen: set[int] = set()
    pending = [root]
    while pending:
        rule = pending.pop()
        if id(rule) in seen:
            continue
        seen.add(id(rule))
        rule.prepare()
        pending.extend(rule.children())


class Grammar:
    """A named dialect grammar with one root rule."""

    def __init__(self, name: str, root: Rule) -> None:
        self.name = name
        self.root = root
        _prepare(root)

    def match(self, text: str) -> Match | Failure:
        """Match the whole of ``text``; never raises for bad input."""
        ctx = _Context(text)
        result = self.root.parse_at(ctx, 0)
        if result is not None:
            end, tree = result
            if end == len(text):
                return Match(tree=tree, end=end)
            ctx.fail(end, "end of input")
        return Failure(offset=max(ctx.furthest, 0), expected=tuple(ctx.expected))

    def __repr__(self) -> str:
        return f"<Grammar {self.name}>"
